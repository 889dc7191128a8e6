"""Auth API: registration, login, current user.

- POST /auth/register → create an account (400 if the email is taken)
- POST /auth/login → email/password → bearer token + profile
- GET /auth/me → the authenticated user's profile
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from yogastudio.auth.context import AuthContext
from yogastudio.auth.dependencies import get_current_user
from yogastudio.auth.jwt import TokenService, get_token_service
from yogastudio.auth.password import verify_password
from yogastudio.auth.user_details import UserDetailsService
from yogastudio.db.engine import get_db
from yogastudio.errors import BadRequestError, NotFoundError
from yogastudio.schemas.auth import JwtResponse, LoginRequest, SignupRequest
from yogastudio.schemas.common import MessageResponse
from yogastudio.schemas.user import UserRead
from yogastudio.services.user_service import UserService

logger = structlog.get_logger()

router = APIRouter(prefix="/auth")


@router.post("/register", response_model=MessageResponse)
async def register(body: SignupRequest, db: AsyncSession = Depends(get_db)):
    """Create a new (non-admin) user account."""
    if await UserDetailsService(db).exists_by_username(body.email):
        raise BadRequestError("Error: Email is already taken!")

    await UserService(db).create_user(
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        password=body.password,
    )
    return MessageResponse(message="User registered successfully!")


@router.post("/login", response_model=JwtResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Login with email and password → bearer token."""
    principal = await UserDetailsService(db).load_user_by_username(body.email)

    if principal is None or not verify_password(body.password, principal.password):
        logger.info("auth.login_failed", username=body.email)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return JwtResponse(
        token=tokens.issue(principal.username),
        id=principal.id,
        username=principal.username,
        first_name=principal.first_name,
        last_name=principal.last_name,
        admin=principal.admin,
    )


@router.get("/me", response_model=UserRead)
async def get_me(
    identity: AuthContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the current authenticated user's profile."""
    user = await UserService(db).get_user(identity.user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user
