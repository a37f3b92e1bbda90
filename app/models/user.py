"""
User model
Handles authentication and profile information
"""

from sqlalchemy import Column, String, Boolean, DateTime, Enum
import enum

from .base import Base, TimestampedModel, UUIDModel

class UserRole(str, enum.Enum):
    ADMIN = "admin"
    EDITOR = "editor"
    USER = "user"

class User(Base, UUIDModel, TimestampedModel):
    """CMS account"""

    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, values_callable=lambda e: [m.value for m in e], native_enum=False, length=20),
        default=UserRole.USER,
        nullable=False
    )

    # Profile fields
    first_name = Column(String(100))
    last_name = Column(String(100))
    bio = Column(String(500))
    avatar = Column(String(500))

    # Status fields
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime(timezone=True), nullable=True)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
