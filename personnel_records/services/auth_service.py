"""
Auth service: password hashing, login and account registration.
"""

import logging

import bcrypt
from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from personnel_records.exceptions import ConflictError, InvalidCredentialsError
from personnel_records.models.user import User

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(
            password.encode("utf-8"), password_hash.encode("utf-8")
        )
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


class AuthService:

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def authenticate(self, email: str, password: str) -> User:
        """
        Return the user owning these credentials.

        The same error is raised for an unknown email and a wrong
        password so callers cannot discover which accounts exist.
        """
        user = self.db.execute(
            select(User).where(User.email == email)
        ).scalar_one_or_none()

        if user is None or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt")
            raise InvalidCredentialsError("Invalid credentials")
        return user

    def _ensure_unused(self, username: str, email: str) -> None:
        existing = self.db.execute(
            select(User.id).where(
                or_(User.email == email, User.username == username)
            )
        ).first()
        if existing:
            raise ConflictError("User already exists")

    def register(
        self,
        username: str,
        email: str,
        password: str,
        is_admin: bool = False,
    ) -> User:
        """Create a staff account. Username and email must be unused."""
        self._ensure_unused(username, email)

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            is_admin=is_admin,
        )
        self.db.add(user)
        try:
            self.db.flush()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration
            self.db.rollback()
            raise ConflictError("User already exists") from exc

        logger.info("Registered user %s (admin=%s)", user.username, is_admin)
        return user
