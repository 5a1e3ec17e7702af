"""
Application errors.

Services raise these; the API layer maps them to HTTP status
codes. Most subclass ValueError so a router can still treat
them as ordinary business-rule violations.
"""


class RecordsError(Exception):
    """Base class for all application errors."""


class NotFoundError(RecordsError, ValueError):
    """The requested row does not exist."""


class ConflictError(RecordsError, ValueError):
    """A username or email is already taken."""


class InvalidCredentialsError(RecordsError, ValueError):
    """Login email/password pair did not match."""


class ValidationFailed(RecordsError, ValueError):
    """
    Field-level validation failed.

    Carries every human-readable message so the client can show
    them all at once.
    """

    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class InvalidTokenError(RecordsError):
    """Bearer token is malformed, has a bad signature or has expired."""
