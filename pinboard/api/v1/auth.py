"""Authentication endpoints for registration, login and token checks."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials

from pinboard.api.deps import AuthServiceDep, bearer_scheme
from pinboard.core.exceptions import AuthenticationError, ConflictError, ErrorCode
from pinboard.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from pinboard.schemas.base import ApiResponse, ok

router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create a new account and return it with a bearer token.",
)
async def register(
    data: RegisterRequest,
    service: AuthServiceDep,
) -> ApiResponse[AuthResponse]:
    """Register a new user account.

    - **username**: 3-50 letters, digits or underscores (must be unique)
    - **email**: Valid email address (must be unique)
    - **password**: At least 6 characters
    """
    result = await service.register(data)
    if result is None:
        raise ConflictError(message="Username or email already exists")
    return ok(result, "User registered successfully")


@router.post(
    "/login",
    response_model=ApiResponse[AuthResponse],
    summary="Login",
    description="Authenticate with email and password to obtain a bearer token.",
)
async def login(
    data: LoginRequest,
    service: AuthServiceDep,
) -> ApiResponse[AuthResponse]:
    """Authenticate and obtain a token.

    The same error is returned for an unknown email and a wrong password.
    """
    result = await service.login(data)
    if result is None:
        raise AuthenticationError(
            message="Invalid email or password",
            code=ErrorCode.INVALID_CREDENTIALS,
        )
    return ok(result, "Login successful")


@router.get(
    "/me",
    response_model=ApiResponse[AuthResponse],
    summary="Get current user",
    description="Resolve the bearer token to the user it was issued for.",
)
async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    service: AuthServiceDep,
) -> ApiResponse[AuthResponse]:
    """Get the authenticated user together with the token that was sent."""
    if credentials is None:
        raise AuthenticationError(message="No token provided", code=ErrorCode.UNAUTHORIZED)

    user = await service.validate_token(credentials.credentials)
    if user is None:
        raise AuthenticationError(message="Invalid token", code=ErrorCode.TOKEN_INVALID)

    return ok(AuthResponse(**user.model_dump(), token=credentials.credentials))
