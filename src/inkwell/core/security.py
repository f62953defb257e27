"""Password hashing and bearer token helpers."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from inkwell.core.errors import InvalidTokenError, TokenExpiredError
from inkwell.core.settings import settings

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Return a bcrypt hash of `password`."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check `plain_password` against a stored hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    subject: int | str,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed JWT embedding the user identifier and an expiry."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    to_encode: dict[str, object] = {
        "sub": str(subject),
        "exp": datetime.now(UTC) + expires_delta,
    }
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> int:
    """Validate `token` and return the user identifier it embeds.

    Raises:
        TokenExpiredError: If the token signature is valid but it has expired.
        InvalidTokenError: If the token is malformed, forged, or carries no
            usable subject.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except ExpiredSignatureError as err:
        raise TokenExpiredError() from err
    except JWTError as err:
        raise InvalidTokenError() from err

    subject = payload.get("sub")
    if subject is None:
        raise InvalidTokenError()
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise InvalidTokenError() from err
