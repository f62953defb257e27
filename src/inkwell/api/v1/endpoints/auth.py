"""Authentication endpoints for the Inkwell API."""

from __future__ import annotations

from fastapi import APIRouter, status

from inkwell.api.v1.dependencies import CurrentUserDep, SessionDep
from inkwell.core.security import create_access_token
from inkwell.schemas.user import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from inkwell.services import user_service

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    summary="Register a new account",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
)
def register(payload: RegisterRequest, db: SessionDep) -> AuthResponse:
    """Create an account and return a bearer token for it."""
    user = user_service.register_user(
        db,
        username=payload.username,
        email=payload.email,
        password=payload.password,
        role=payload.role,
    )
    return AuthResponse(
        message="User registered successfully",
        token=create_access_token(user.id),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", summary="Exchange credentials for a token", response_model=AuthResponse)
def login(payload: LoginRequest, db: SessionDep) -> AuthResponse:
    """Authenticate with email and password."""
    user = user_service.authenticate_user(db, email=payload.email, password=payload.password)
    return AuthResponse(
        message="Login successful",
        token=create_access_token(user.id),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", summary="Return the authenticated account", response_model=CurrentUserResponse)
def read_current_user(user: CurrentUserDep) -> CurrentUserResponse:
    return CurrentUserResponse(user=UserResponse.model_validate(user))
