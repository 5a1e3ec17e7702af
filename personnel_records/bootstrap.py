"""
Create the first admin account.

Registration is admin-only, so a fresh database needs one admin
created out of band. Credentials come from ADMIN_USERNAME,
ADMIN_EMAIL and ADMIN_PASSWORD.

    records-create-admin
"""

import logging
import sys

from sqlalchemy.orm import Session

from personnel_records.config import get_settings
from personnel_records.exceptions import ConflictError, ValidationFailed
from personnel_records.logging_config import configure_logging
from personnel_records.models.base import SessionLocal
from personnel_records.models.user import User
from personnel_records.services.auth_service import AuthService

logger = logging.getLogger(__name__)

MIN_ADMIN_PASSWORD_LENGTH = 6


def create_admin(db: Session, username: str, email: str, password: str) -> User:
    """Insert an admin user. The caller commits."""
    if not password or len(password) < MIN_ADMIN_PASSWORD_LENGTH:
        raise ValidationFailed(
            "ADMIN_PASSWORD must be set and at least 6 characters"
        )
    return AuthService(db).register(username, email, password, is_admin=True)


def main() -> int:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    db = SessionLocal()
    try:
        user = create_admin(
            db,
            settings.ADMIN_USERNAME,
            settings.ADMIN_EMAIL,
            settings.ADMIN_PASSWORD,
        )
        db.commit()
    except (ValidationFailed, ConflictError) as e:
        db.rollback()
        logger.error("Failed to create admin: %s", e)
        return 1
    finally:
        db.close()

    logger.info("Admin user created: %s <%s>", user.username, user.email)
    logger.info("Rotate ADMIN_PASSWORD now that the account exists.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
