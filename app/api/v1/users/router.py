"""User profile endpoints"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import logging

from app.core.database import get_db
from app.core.exceptions import DuplicateResourceException
from app.api.v1.auth.dependencies import get_current_user
from app.schemas.user import UserRead, UserProfileUpdate
from app.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/profile", response_model=UserRead)
async def get_user_profile(
    current_user: User = Depends(get_current_user)
):
    """Get current user profile"""
    return UserRead.model_validate(current_user)

@router.put("/profile", response_model=UserRead)
async def update_user_profile(
    profile_data: UserProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update current user profile"""
    update_data = profile_data.model_dump(exclude_unset=True)

    new_email = update_data.get("email")
    if new_email and new_email != current_user.email:
        result = await db.execute(
            select(User.id).where(User.email == new_email, User.id != current_user.id)
        )
        if result.first() is not None:
            raise DuplicateResourceException("User", "email", new_email)
    elif "email" in update_data and not new_email:
        update_data.pop("email")

    for field, value in update_data.items():
        setattr(current_user, field, value)

    await db.commit()
    await db.refresh(current_user)

    logger.info(f"Profile updated for {current_user.email}")
    return UserRead.model_validate(current_user)
