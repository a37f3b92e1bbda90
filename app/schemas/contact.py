"""Contact form schemas"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
import uuid

from app.utils.validators import validate_phone_number, validate_email_address

class ContactCreate(BaseModel):
    """Public contact form submission"""
    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., description="Vietnamese phone number, e.g. 0912345678 or +84912345678")
    email: str = Field(..., max_length=255)
    subject: Optional[str] = Field(None, max_length=255)
    message: Optional[str] = Field(None, max_length=5000)

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v):
        return validate_phone_number(v)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        return validate_email_address(v)

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Nguyen Van A",
                "phone": "0912345678",
                "email": "customer@example.com",
                "message": "I would like a quote"
            }
        }
    }

class ContactResponse(BaseModel):
    id: uuid.UUID
    name: str
    phone: str
    email: str
    subject: Optional[str] = None
    message: Optional[str] = None
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True

class ContactListResponse(BaseModel):
    items: List[ContactResponse]
    total: int
    page: int
    size: int
    pages: int

class ContactStats(BaseModel):
    total_contacts: int
    contacts_last_7_days: int
