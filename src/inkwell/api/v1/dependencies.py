"""Shared API dependencies for authentication and common functionality."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from inkwell.core.errors import (
    AuthenticationError,
    AuthorizationError,
    InvalidTokenError,
    MissingCredentialError,
)
from inkwell.core.security import decode_access_token
from inkwell.db.session import get_db
from inkwell.models import User
from inkwell.models.user import ROLE_ADMIN

logger = logging.getLogger(__name__)

# Missing credentials are reported by the dependencies themselves.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def resolve_identity(db: Session, token: str) -> User:
    """Turn a bearer token into the user it names.

    Raises:
        TokenExpiredError: If the token has expired.
        InvalidTokenError: If the token is invalid or its user no longer exists.
    """
    user_id = decode_access_token(token)
    user = db.get(User, user_id)
    if user is None:
        raise InvalidTokenError("Invalid token - user not found")
    return user


def get_current_user(credentials: CredentialsDep, db: SessionDep) -> User:
    """Get the authenticated user, rejecting the request otherwise.

    Raises:
        MissingCredentialError: If no bearer token was sent.
        TokenExpiredError: If the token has expired.
        InvalidTokenError: If the token is invalid or orphaned.
    """
    if credentials is None or not credentials.credentials:
        raise MissingCredentialError()
    try:
        return resolve_identity(db, credentials.credentials)
    except AuthenticationError as err:
        logger.debug("Rejected bearer token: %s", err.message)
        raise


def get_optional_user(credentials: CredentialsDep, db: SessionDep) -> User | None:
    """Get the authenticated user when a valid token is present, else None."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return resolve_identity(db, credentials.credentials)
    except AuthenticationError:
        return None


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]


def require_role(role: str) -> Callable[[User], User]:
    """Build a dependency admitting only users holding `role`."""

    def _require_role(user: CurrentUserDep) -> User:
        if user.role != role:
            raise AuthorizationError(f"{role.capitalize()} access required")
        return user

    return _require_role


require_admin = require_role(ROLE_ADMIN)

AdminUserDep = Annotated[User, Depends(require_admin)]
