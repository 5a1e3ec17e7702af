"""
Tests for bearer token issue and verification.
"""

import importlib
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from personnel_records import config
from personnel_records.config import Settings, check_settings
from personnel_records.exceptions import InvalidTokenError
from personnel_records.services.token_service import TokenService

SECRET = "unit-test-secret-that-is-long-enough-for-hs256"


def make_service(secret=SECRET, hours=24):
    return TokenService(secret=secret, ttl=timedelta(hours=hours))


class TestIssueAndVerify:

    def test_fresh_token_resolves_to_same_user(self):
        service = make_service()
        for user_id in (1, 42, 99999):
            assert service.verify(service.issue(user_id)) == user_id

    def test_token_expires_after_24_hours(self):
        service = make_service()
        issued = datetime.now(timezone.utc) - timedelta(hours=24, minutes=1)
        token = service.issue(7, now=issued)

        with pytest.raises(InvalidTokenError, match="expired"):
            service.verify(token)

    def test_token_still_valid_just_before_expiry(self):
        service = make_service()
        issued = datetime.now(timezone.utc) - timedelta(hours=23, minutes=59)
        assert service.verify(service.issue(7, now=issued)) == 7

    def test_expiry_claim_is_24_hours_after_issue(self):
        service = make_service()
        issued = datetime(2026, 1, 1, tzinfo=timezone.utc)
        token = service.issue(3, now=issued)
        claims = jwt.decode(token, options={"verify_signature": False})
        assert claims["exp"] - claims["iat"] == 24 * 3600


class TestRejection:

    def test_wrong_secret_rejected(self):
        token = make_service().issue(1)
        other = make_service(secret="a-completely-different-signing-secret-value")
        with pytest.raises(InvalidTokenError):
            other.verify(token)

    def test_malformed_token_rejected(self):
        with pytest.raises(InvalidTokenError):
            make_service().verify("not-a-jwt")

    def test_missing_user_claim_rejected(self):
        token = jwt.encode(
            {"exp": int(datetime.now(timezone.utc).timestamp()) + 60},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError, match="payload"):
            make_service().verify(token)

    def test_non_integer_user_claim_rejected(self):
        token = jwt.encode(
            {
                "userId": "1",
                "exp": int(datetime.now(timezone.utc).timestamp()) + 60,
            },
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            make_service().verify(token)

    def test_empty_secret_refused(self):
        with pytest.raises(ValueError):
            make_service(secret="")


class TestSigningSecret:

    def test_secret_has_no_builtin_default(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)
        try:
            reloaded = importlib.reload(config)
            assert reloaded.Settings().JWT_SECRET == ""
        finally:
            monkeypatch.undo()
            importlib.reload(config)

    def test_unset_secret_refused(self):
        settings = Settings()
        settings.JWT_SECRET = ""

        with pytest.raises(RuntimeError, match="JWT_SECRET must be set"):
            check_settings(settings)
        with pytest.raises(ValueError):
            TokenService.from_settings(settings)

    def test_configured_secret_accepted(self):
        settings = Settings()
        settings.JWT_SECRET = SECRET

        check_settings(settings)
        service = TokenService.from_settings(settings)
        assert service.verify(service.issue(5)) == 5
