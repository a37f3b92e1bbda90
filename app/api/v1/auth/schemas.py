"""
Authentication schemas for request/response validation
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional

from app.core.security import SecurityUtils
from app.schemas.user import UserRead

class RegisterRequest(BaseModel):
    """User registration request"""
    email: EmailStr
    password: str = Field(..., max_length=128)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.lower()

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        is_valid, message = SecurityUtils.validate_password(v)
        if not is_valid:
            raise ValueError(message)
        return v

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "editor@vinpet.vn",
                "password": "secret123",
                "first_name": "Lan",
                "last_name": "Nguyen"
            }
        }
    }

class LoginRequest(BaseModel):
    """User login request"""
    email: EmailStr
    password: str

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.lower()

class TokenResponse(BaseModel):
    """JWT token response"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Access token expiry in seconds")

class AuthResponse(BaseModel):
    """Authentication response with token and user info"""
    user: UserRead
    tokens: TokenResponse
