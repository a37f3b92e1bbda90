"""
Authentication API routes
"""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.middleware.rate_limit import auth_limiter
from app.models import User
from app.schemas.user import UserRead
from .dependencies import get_current_user
from .schemas import (
    RegisterRequest,
    LoginRequest,
    AuthResponse,
)
from .services import AuthService

router = APIRouter()

@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create an account with email and password"
)
@auth_limiter
async def register(
    request: Request,
    response: Response,
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    """Register new user and return an access token"""
    service = AuthService(db)
    user = await service.register(payload)
    tokens = service.generate_tokens(user)

    return AuthResponse(
        user=UserRead.model_validate(user),
        tokens=tokens
    )

@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Login user",
    description="Login with email and password"
)
@auth_limiter
async def login(
    request: Request,
    response: Response,
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """Login user with email and password"""
    service = AuthService(db)
    user = await service.login(payload.email, payload.password)
    tokens = service.generate_tokens(user)

    return AuthResponse(
        user=UserRead.model_validate(user),
        tokens=tokens
    )

@router.get(
    "/me",
    response_model=UserRead,
    status_code=status.HTTP_200_OK,
    summary="Get current user",
    description="Get currently authenticated user information"
)
async def get_me(
    current_user: User = Depends(get_current_user)
):
    """Get current user information"""
    return UserRead.model_validate(current_user)
