"""
Authentication dependencies and utilities
"""

from typing import Any, Dict, Optional
import uuid
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.database import get_db
from app.core.exceptions import UnauthorizedException
from app.core.security import get_token_payload
from app.models import User

async def _load_user(db: AsyncSession, payload: Dict[str, Any]) -> Optional[User]:
    try:
        user_id = uuid.UUID(str(payload.get("sub")))
    except ValueError:
        return None

    result = await db.execute(
        select(User).where(User.id == user_id, User.is_active == True)
    )
    return result.scalar_one_or_none()

async def get_current_user(
    payload: Dict[str, Any] = Depends(get_token_payload),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Get current authenticated user (required)
    Raises 401 if not authenticated or user not found
    """
    user = await _load_user(db, payload)
    if user is None:
        raise UnauthorizedException("User not found or inactive")
    return user
