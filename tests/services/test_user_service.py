"""
Tests for account login, registration, admin user management
and self-service profile updates.
"""

import pytest
from sqlalchemy import select, func

from personnel_records.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationFailed,
)
from personnel_records.models.user import User
from personnel_records.services.auth_service import (
    AuthService,
    hash_password,
    verify_password,
)
from personnel_records.services.user_service import UserService


def count_users(db_session, username):
    return db_session.execute(
        select(func.count(User.id)).where(User.username == username)
    ).scalar_one()


# --- Passwords / Login ---

class TestPasswords:

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("secret123")
        assert hashed != "secret123"
        assert hashed.startswith("$2")

    def test_verify(self):
        hashed = hash_password("secret123")
        assert verify_password("secret123", hashed) is True
        assert verify_password("wrong", hashed) is False

    def test_non_bcrypt_hash_does_not_verify(self):
        assert verify_password("secret123", "plain-text") is False


class TestAuthenticate:

    def test_correct_credentials(self, db_session, staff_user):
        user = AuthService(db_session).authenticate("clerk@test.com", "secret123")
        assert user.id == staff_user.id

    def test_wrong_password(self, db_session, staff_user):
        with pytest.raises(InvalidCredentialsError, match="Invalid credentials"):
            AuthService(db_session).authenticate("clerk@test.com", "nope")

    def test_unknown_email_same_error(self, db_session):
        with pytest.raises(InvalidCredentialsError, match="Invalid credentials"):
            AuthService(db_session).authenticate("ghost@test.com", "secret123")


class TestRegister:

    def test_register_stores_hash(self, db_session):
        user = AuthService(db_session).register("newbie", "newbie@test.com", "secret123")
        db_session.commit()

        assert user.id is not None
        assert user.is_admin is False
        assert user.password_hash != "secret123"

    def test_duplicate_email_rejected(self, db_session, staff_user):
        with pytest.raises(ConflictError, match="User already exists"):
            AuthService(db_session).register("other", "clerk@test.com", "secret123")

    def test_duplicate_username_rejected(self, db_session, staff_user):
        with pytest.raises(ConflictError):
            AuthService(db_session).register("clerk", "other@test.com", "secret123")

    def test_unique_constraint_catches_concurrent_duplicate(
        self, db_session, staff_user, monkeypatch
    ):
        """A duplicate that slips past the lookup is still refused."""
        monkeypatch.setattr(
            AuthService, "_ensure_unused", lambda self, username, email: None
        )

        with pytest.raises(ConflictError, match="User already exists"):
            AuthService(db_session).register("clerk", "other@test.com", "secret123")

        assert count_users(db_session, username="clerk") == 1


# --- Admin user management ---

class TestUserManagement:

    def test_list_newest_first(self, db_session, admin_user, staff_user):
        users = UserService(db_session).list_users()
        assert [u.id for u in users] == [staff_user.id, admin_user.id]

    def test_admin_cannot_delete_self(self, db_session, admin_user):
        with pytest.raises(ValidationFailed, match="Cannot delete your own account"):
            UserService(db_session).delete_user(admin_user, admin_user.id)

    def test_delete_other_user(self, db_session, admin_user, staff_user):
        staff_id = staff_user.id
        UserService(db_session).delete_user(admin_user, staff_id)
        db_session.commit()
        assert db_session.get(User, staff_id) is None

    def test_delete_missing_user(self, db_session, admin_user):
        with pytest.raises(NotFoundError, match="User not found"):
            UserService(db_session).delete_user(admin_user, 9999)

    def test_update_user(self, db_session, staff_user):
        user = UserService(db_session).update_user(
            staff_user.id, "senior", "senior@test.com", is_admin=True
        )
        db_session.commit()
        assert user.username == "senior"
        assert user.is_admin is True

    def test_update_user_clashing_email(self, db_session, admin_user, staff_user):
        with pytest.raises(ConflictError, match="Username or email already exists"):
            UserService(db_session).update_user(
                staff_user.id, "clerk", "admin@test.com", is_admin=False
            )

    def test_update_user_unique_constraint_conflict(
        self, db_session, admin_user, staff_user, monkeypatch
    ):
        monkeypatch.setattr(
            UserService, "_ensure_unique", lambda self, *args, **kwargs: None
        )

        with pytest.raises(ConflictError, match="Username or email already exists"):
            UserService(db_session).update_user(
                staff_user.id, "admin", "clerk@test.com", is_admin=False
            )

        assert count_users(db_session, username="admin") == 1

    def test_update_user_keeping_own_email(self, db_session, staff_user):
        user = UserService(db_session).update_user(
            staff_user.id, "clerk", "clerk@test.com", is_admin=False
        )
        assert user.email == "clerk@test.com"


# --- Profile ---

class TestProfile:

    def test_returns_before_and_after(self, db_session, staff_user):
        before, after = UserService(db_session).update_profile(
            staff_user,
            first_name="Faadumo",
            last_name="Warsame",
            username="clerk",
            email="clerk@test.com",
        )
        db_session.commit()

        assert before["first_name"] is None
        assert after["first_name"] == "Faadumo"
        assert after["last_name"] == "Warsame"
        assert before["id"] == after["id"] == staff_user.id

    def test_avatar_kept_when_not_supplied(self, db_session, staff_user):
        service = UserService(db_session)
        service.update_profile(
            staff_user, None, None, "clerk", "clerk@test.com",
            avatar_url="/uploads/avatars/a.png",
        )
        _, after = service.update_profile(
            staff_user, "F", "W", "clerk", "clerk@test.com"
        )
        assert after["avatar_url"] == "/uploads/avatars/a.png"

    def test_username_taken_by_other(self, db_session, admin_user, staff_user):
        with pytest.raises(ConflictError):
            UserService(db_session).update_profile(
                staff_user, None, None, "admin", "clerk@test.com"
            )
