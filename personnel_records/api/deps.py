"""
Shared API dependencies: service providers and access gates.

Two gates protect routes:

- get_current_user: a valid bearer token for an existing user
- require_admin: the same, plus the admin flag

The user row is loaded on every request rather than trusted
from the token, so a deleted or demoted account loses access
immediately.
"""

import logging

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from personnel_records.config import get_settings
from personnel_records.exceptions import InvalidTokenError
from personnel_records.models.base import get_db
from personnel_records.models.user import User
from personnel_records.services.storage import UploadStorage
from personnel_records.services.token_service import TokenService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service() -> TokenService:
    return TokenService.from_settings(get_settings())


def get_upload_storage() -> UploadStorage:
    return UploadStorage(get_settings().UPLOAD_DIR)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
    db: Session = Depends(get_db),
) -> User:
    """User gate: resolve the bearer token to a stored user."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=401, detail="Access denied. No token provided."
        )

    try:
        user_id = tokens.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.info("Rejected bearer token: %s", e)
        raise HTTPException(status_code=401, detail="Invalid token")

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Token is not valid")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Admin gate: the user gate plus the admin flag."""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=403, detail="Access denied. Admin privileges required."
        )
    return current_user
