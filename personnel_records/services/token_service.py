"""
Token service: issue and verify bearer tokens.

Tokens are HS256 JWTs carrying the user id and an expiry.
There is no refresh and no revocation list: a token stays
valid until it expires. The access gate re-reads the user row
on every request, so a deleted account loses access at once.
"""

from datetime import datetime, timedelta, timezone

import jwt

from personnel_records.config import Settings
from personnel_records.exceptions import InvalidTokenError


class TokenService:

    def __init__(self, secret: str, ttl: timedelta, algorithm: str = "HS256"):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self.secret = secret
        self.ttl = ttl
        self.algorithm = algorithm

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET,
            ttl=timedelta(hours=settings.JWT_EXPIRES_HOURS),
            algorithm=settings.JWT_ALGORITHM,
        )

    def issue(self, user_id: int, now: datetime | None = None) -> str:
        """Sign a token for user_id that expires after the configured ttl."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "userId": user_id,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ttl).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """
        Return the user id embedded in a token.

        Raises InvalidTokenError when the signature does not
        match, the token is malformed or expired, or the user id
        claim is missing.
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError("Invalid token") from exc

        user_id = payload.get("userId")
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise InvalidTokenError("Invalid token payload")
        return user_id
