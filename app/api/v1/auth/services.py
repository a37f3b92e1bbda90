"""
Authentication service layer
Handles business logic for authentication
"""

from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import logging

from app.models import User, UserRole
from app.core.security import SecurityUtils
from app.core.config import settings
from app.core.exceptions import (
    DuplicateResourceException,
    InvalidCredentialsException,
)
from .schemas import RegisterRequest, TokenResponse

logger = logging.getLogger(__name__)

class AuthService:
    """Authentication service"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str):
        result = await self.db.execute(
            select(User).where(User.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def register(self, request: RegisterRequest) -> User:
        """
        Register new user

        Raises:
            DuplicateResourceException: If email already exists
        """
        if await self.get_by_email(request.email):
            raise DuplicateResourceException("User", "email", request.email)

        user = User(
            email=request.email,
            password_hash=SecurityUtils.hash_password(request.password),
            first_name=request.first_name,
            last_name=request.last_name,
            role=UserRole.USER,
        )

        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info(f"User registered: {user.email}")
        return user

    async def login(self, email: str, password: str) -> User:
        """
        Authenticate email/password pair

        Raises:
            InvalidCredentialsException: unknown email, wrong password or inactive account
        """
        user = await self.get_by_email(email)

        if not user or not SecurityUtils.verify_password(password, user.password_hash):
            logger.warning(f"Failed login for {email}")
            raise InvalidCredentialsException()

        if not user.is_active:
            raise InvalidCredentialsException("Account is disabled")

        # Update last login
        user.last_login = datetime.now(timezone.utc)
        await self.db.commit()

        return user

    def generate_tokens(self, user: User) -> TokenResponse:
        """Generate access token for user"""
        token_data = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value if isinstance(user.role, UserRole) else user.role,
        }

        return TokenResponse(
            access_token=SecurityUtils.create_access_token(token_data),
            token_type="bearer",
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
        )
