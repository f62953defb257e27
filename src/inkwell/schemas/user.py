"""User-related Pydantic schemas."""

from pydantic import Field

from .common import CamelModel


class RegisterRequest(CamelModel):
    """Registration payload.

    Fields are optional at the schema level so that every missing or invalid
    field can be reported together by the registration service.
    """

    username: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = Field(None, description="Requested role: user or admin")


class LoginRequest(CamelModel):
    """Credentials submitted to obtain a bearer token."""

    email: str | None = None
    password: str | None = None


class UserResponse(CamelModel):
    """Public account information."""

    id: int
    username: str
    email: str
    role: str


class AuthResponse(CamelModel):
    """Token issued after registration or login."""

    message: str
    token: str
    user: UserResponse


class CurrentUserResponse(CamelModel):
    """Envelope for the authenticated account."""

    user: UserResponse
