"""
User service: admin account management and self-service profile.
"""

from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from personnel_records.exceptions import (
    ConflictError,
    NotFoundError,
    ValidationFailed,
)
from personnel_records.models.user import User


class UserService:

    def __init__(self, db: Session):
        self.db = db

    def _get_or_404(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def _ensure_unique(self, username: str, email: str, exclude_id: int) -> None:
        """Reject a username/email already used by another account."""
        clash = self.db.execute(
            select(User.id).where(
                or_(User.username == username, User.email == email),
                User.id != exclude_id,
            )
        ).first()
        if clash:
            raise ConflictError("Username or email already exists")

    def _flush_unique(self) -> None:
        try:
            self.db.flush()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError("Username or email already exists") from exc

    def list_users(self) -> list[User]:
        """All accounts, newest first."""
        users = self.db.execute(
            select(User).order_by(User.created_at.desc(), User.id.desc())
        ).scalars().all()
        return list(users)

    def delete_user(self, actor: User, user_id: int) -> None:
        """Hard-delete an account. Admins cannot delete themselves."""
        if user_id == actor.id:
            raise ValidationFailed("Cannot delete your own account")

        user = self._get_or_404(user_id)
        self.db.delete(user)
        self.db.flush()

    def update_user(
        self, user_id: int, username: str, email: str, is_admin: bool
    ) -> User:
        """Change an account's username, email and admin flag."""
        self._ensure_unique(username, email, exclude_id=user_id)
        user = self._get_or_404(user_id)

        user.username = username
        user.email = email
        user.is_admin = is_admin
        self._flush_unique()
        return user

    def update_profile(
        self,
        user: User,
        first_name: str | None,
        last_name: str | None,
        username: str,
        email: str,
        avatar_url: str | None = None,
    ) -> tuple[dict, dict]:
        """
        Update the caller's own profile.

        The avatar only changes when a new one is supplied.
        Returns (before, after) snapshots for the audit trail.
        """
        current = self._get_or_404(user.id)
        before = current.snapshot()

        self._ensure_unique(username, email, exclude_id=current.id)

        current.first_name = first_name
        current.last_name = last_name
        current.username = username
        current.email = email
        if avatar_url is not None:
            current.avatar_url = avatar_url
        self._flush_unique()

        return before, current.snapshot()
