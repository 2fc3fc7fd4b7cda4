"""Auth API — registration, login, current user.

Learn: Routes for the credential lifecycle:
- POST /auth/register → create an account, returns a token (201)
- POST /auth/login → email/password → token
- GET /auth/profile → the authenticated caller, no password field

Register and login both return {message, token, user}; either token is
valid on its own for the next 7 days.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.auth.dependencies import get_current_user
from blogapi.auth.identity import Identity
from blogapi.auth.tokens import TokenCodec, get_token_codec
from blogapi.db.engine import get_db
from blogapi.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserRead
from blogapi.services.auth_service import AuthService

router = APIRouter(prefix="/auth")


def _svc(
    db: AsyncSession = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec),
) -> AuthService:
    return AuthService(db, codec)


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(body: RegisterRequest, svc: AuthService = Depends(_svc)):
    """Create a new user account."""
    user, token = await svc.register(body.username, body.email, body.password)
    return AuthResponse(
        message="User created successfully",
        token=token,
        user=UserRead.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, svc: AuthService = Depends(_svc)):
    """Login with email and password → bearer token."""
    user, token = await svc.login(body.email, body.password)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserRead.model_validate(user),
    )


@router.get("/profile", response_model=UserRead)
async def profile(identity: Identity = Depends(get_current_user)):
    """Get the current authenticated user's info."""
    return UserRead(id=identity.id, username=identity.username, email=identity.email)
