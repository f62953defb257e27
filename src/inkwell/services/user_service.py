"""Account registration and credential checks."""
from __future__ import annotations

import logging
import re

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkwell.core import security
from inkwell.core.errors import AuthenticationError, DuplicateUserError, ValidationFailedError
from inkwell.core.settings import settings
from inkwell.models.user import ROLE_USER, USER_ROLES, User

__all__ = [
    "get_user",
    "get_user_by_username",
    "register_user",
    "authenticate_user",
    "set_role",
]

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 6
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    """Return the user registered under `username`, if any."""
    return db.scalars(select(User).where(User.username == username)).first()


def _validate_registration(
    username: str | None,
    email: str | None,
    password: str | None,
    role: str | None,
) -> tuple[str, str, str, str]:
    errors: list[str] = []
    username = (username or "").strip()
    email = (email or "").strip().lower()
    password = password or ""

    if not username:
        errors.append("Username is required")
    elif not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        errors.append(
            f"Username must be between {USERNAME_MIN_LENGTH} and "
            f"{USERNAME_MAX_LENGTH} characters"
        )

    if not email:
        errors.append("Email is required")
    elif not EMAIL_PATTERN.match(email):
        errors.append("Please enter a valid email")

    if not password:
        errors.append("Password is required")
    elif len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")

    if role is None or not settings.allow_role_on_register:
        role = ROLE_USER
    elif role not in USER_ROLES:
        errors.append("Role must be either user or admin")

    if errors:
        raise ValidationFailedError(errors)
    return username, email, password, role


def register_user(
    db: Session,
    *,
    username: str | None,
    email: str | None,
    password: str | None,
    role: str | None = None,
) -> User:
    """Create an account after validating fields and uniqueness.

    Raises:
        ValidationFailedError: If any field is missing or malformed.
        DuplicateUserError: If the email or username is taken.
    """
    username, email, password, role = _validate_registration(username, email, password, role)

    existing = db.scalars(
        select(User).where(or_(User.email == email, User.username == username))
    ).first()
    if existing is not None:
        raise DuplicateUserError(
            "Email already exists" if existing.email == email else "Username already exists"
        )

    user = User(
        username=username,
        email=email,
        password_hash=security.hash_password(password),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise DuplicateUserError("Username or email already exists") from err
    db.refresh(user)
    logger.info("Registered user %s with role %s", user.id, user.role)
    return user


def authenticate_user(db: Session, *, email: str | None, password: str | None) -> User:
    """Return the account matching the credentials.

    Raises:
        ValidationFailedError: If either field is missing.
        AuthenticationError: If the email is unknown or the password is wrong.
    """
    if not email or not password:
        raise ValidationFailedError(["Email and password are required"])

    user = db.scalars(select(User).where(User.email == email.strip().lower())).first()
    if user is None or not security.verify_password(password, user.password_hash):
        logger.debug("Failed login attempt for %s", email)
        raise AuthenticationError("Invalid credentials")
    logger.info("User %s logged in", user.id)
    return user


def set_role(db: Session, user: User, role: str) -> User:
    """Change the role of an existing account."""
    if role not in USER_ROLES:
        raise ValidationFailedError(["Role must be either user or admin"])
    user.role = role
    db.commit()
    db.refresh(user)
    logger.info("User %s now has role %s", user.id, role)
    return user
