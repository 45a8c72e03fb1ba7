"""Authentication routes for handling signup, login and the current user's profile."""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.decorators import timed
from app.dependencies import AuthServiceDep, UserDBDep
from app.managers import limiter
from app.schemas.auth import AuthResponse, LoginRequest, ProfileResponse, SignupRequest

router = APIRouter(prefix="/auth", tags=["🔐 Auth"])

RATE_LIMITED = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Too Many Requests"}}},
}


@router.post(
    "/signup",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    status_code=HTTP_201_CREATED,
    summary="Register a new user",
    description="Create an account and receive an access token.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "message": "User created successfully",
                        "user": {
                            "id": "123e4567-e89b-12d3-a456-426614174000",
                            "email": "ada@example.com",
                            "username": "ada_l",
                        },
                        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                    },
                },
            },
        },
        400: {
            "description": "Email or username taken",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "User already exists",
                        "message": "Email already registered",
                    },
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="auth_signup",
)
@timed("/auth/signup")
@limiter.limit("5/minute")
async def signup(
    request: Request,
    data: SignupRequest,
    auth_service: AuthServiceDep,
) -> AuthResponse:
    """
    Register a new user.

    Parameters
    ----------
    request : Request
        Current request context.
    data : SignupRequest
        Email, username and password.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    AuthResponse
        The created user and an access token.

    Raises
    ------
    UserAlreadyExistsError
        If the email or username is taken.
    """
    return await auth_service.signup(data)


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    summary="Login for access token",
    description="Authenticate with email and password to obtain an access token.",
    responses={
        401: {
            "description": "Unauthorized",
            "content": {"application/json": {"example": {"detail": "Invalid credentials"}}},
        },
        429: RATE_LIMITED,
    },
    operation_id="auth_login",
)
@timed("/auth/login")
@limiter.limit("5/minute")
async def login(
    request: Request,
    data: LoginRequest,
    auth_service: AuthServiceDep,
) -> AuthResponse:
    """
    Login with email and password.

    Parameters
    ----------
    request : Request
        Current request context.
    data : LoginRequest
        Credentials.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    AuthResponse
        The user and an access token.

    Raises
    ------
    InvalidCredentialsError
        If authentication fails.
    """
    return await auth_service.login(data)


@router.get(
    "/profile",
    response_class=ORJSONResponse,
    response_model=ProfileResponse,
    summary="Current user profile",
    responses={
        401: {
            "description": "Unauthorized",
            "content": {
                "application/json": {"example": {"detail": "Could not validate credentials"}},
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="auth_profile",
)
@timed("/auth/profile")
@limiter.limit("30/minute")
async def profile(
    request: Request,
    current_user: UserDBDep,
    auth_service: AuthServiceDep,
) -> ProfileResponse:
    """Return the authenticated user with their post count."""
    return await auth_service.profile(current_user)
