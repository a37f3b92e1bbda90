"""API v1 routes aggregation"""

from fastapi import APIRouter

from .auth.router import router as auth_router
from .categories.router import router as categories_router
from .posts.router import router as posts_router
from .contacts.router import router as contacts_router
from .users.router import router as users_router

# Create v1 router
api_router = APIRouter()

# Include all routers
api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
api_router.include_router(categories_router, prefix="/categories", tags=["Categories"])
api_router.include_router(posts_router, prefix="/posts", tags=["Posts"])
api_router.include_router(contacts_router, prefix="/contacts", tags=["Contacts"])
api_router.include_router(users_router, prefix="/users", tags=["Users"])

# Export router
router = api_router
