"""Domain exceptions shared by services and the HTTP layer.

Every exception carries the HTTP status it maps to so the application can
translate it with a single handler.
"""

from __future__ import annotations


class InkwellError(RuntimeError):
    """Base exception for expected, client-facing failures."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailedError(InkwellError):
    """Raised when submitted fields violate their constraints.

    All violations of one request are collected into a single message.
    """

    status_code = 400

    def __init__(self, errors: list[str]) -> None:
        super().__init__(", ".join(errors))
        self.errors = list(errors)


class DuplicateUserError(InkwellError):
    """Raised when a username or email is already registered."""

    status_code = 400


class AuthenticationError(InkwellError):
    """Raised when a request cannot be tied to a valid identity."""

    status_code = 401


class MissingCredentialError(AuthenticationError):
    """Raised when no bearer credential accompanies a protected request."""

    def __init__(self, message: str = "Access token is required") -> None:
        super().__init__(message)


class TokenExpiredError(AuthenticationError):
    """Raised when a bearer token is past its expiry."""

    def __init__(self, message: str = "Token expired") -> None:
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer token is malformed, forged or orphaned."""

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


class AuthorizationError(InkwellError):
    """Raised when an authenticated identity lacks the required role."""

    status_code = 403


class NotFoundError(InkwellError):
    """Raised when an entity is missing or not visible to the caller."""

    status_code = 404


class ConflictingStateError(InkwellError):
    """Raised when an operation is not legal from the entity's current status."""

    status_code = 400

    def __init__(
        self,
        message: str,
        *,
        current: str | None = None,
        required: str | None = None,
    ) -> None:
        super().__init__(message)
        self.current = current
        self.required = required

    @classmethod
    def for_transition(cls, action: str, current: str, required: str) -> ConflictingStateError:
        """Build the error for an illegal lifecycle transition."""
        done = _PAST_TENSE.get(action, f"{action}ed")
        return cls(
            f"Cannot {action} blog with status: {current}. "
            f"Only {required} blogs can be {done}.",
            current=current,
            required=required,
        )


_PAST_TENSE = {"approve": "approved", "reject": "rejected", "hide": "hidden"}
