from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from tasklist.core.modules.user.models import UserView
from tasklist.web.deps import AppDep, AuthTokenDep, ConfigDep
from tasklist.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class CredentialsRequest(BaseModel):
    """Username and password."""

    username: str = Field(..., description="Username")
    password: str = Field(..., description="Password")


class LoginResponse(BaseModel):
    """Authentication response."""

    token: str = Field(..., description="Session token for subsequent requests")


@router.post(
    "/auth/register",
    summary="Register user",
    description="Create a new user account.",
    operation_id="register",
    status_code=201,
    responses={
        201: {"description": "User created"},
        400: {"model": ErrorResponse, "description": "Invalid username or password, or username taken"},
    },
)
async def register(request: CredentialsRequest, app: AppDep) -> UserView:
    return await app.register(request.username, request.password)


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Authenticate with username and password to receive a session token.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(request: CredentialsRequest, app: AppDep, config: ConfigDep, response: Response) -> LoginResponse:
    """Authenticate user and create session."""
    token = await app.login(request.username, request.password)

    # Set cookie for browser-based clients
    response.set_cookie(
        key=config.session_cookie_name,
        value=token,
        httponly=True,
        samesite="lax",
        secure=config.cookie_secure,
        max_age=app.session_ttl_seconds,
    )

    return LoginResponse(token=token)


@router.post(
    "/auth/logout",
    summary="End session",
    description="Invalidate the current session. Succeeds even if the session is unknown or expired.",
    operation_id="logout",
    status_code=204,
    responses={204: {"description": "Successfully logged out"}},
)
async def logout(app: AppDep, auth_token: AuthTokenDep, config: ConfigDep, response: Response) -> None:
    await app.logout(auth_token)
    response.delete_cookie(config.session_cookie_name)
