"""Models package initialization"""

from .base import Base
from .user import User, UserRole
from .category import Category
from .post import Post, PostStatus, post_categories
from .contact import Contact

# Export all models
__all__ = [
    "Base",
    "User",
    "UserRole",
    "Category",
    "Post",
    "PostStatus",
    "post_categories",
    "Contact",
]
