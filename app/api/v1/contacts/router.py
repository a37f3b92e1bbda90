"""
Contact API router
Submitting is public, reading requires authentication
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import NotFoundException
from app.api.v1.auth.dependencies import get_current_user
from app.models import User
from app.schemas.contact import (
    ContactCreate,
    ContactResponse,
    ContactListResponse,
    ContactStats,
)
from .services import ContactService

router = APIRouter()


@router.post("/", status_code=status.HTTP_201_CREATED)
async def submit_contact(
    contact_data: ContactCreate,
    db: AsyncSession = Depends(get_db)
):
    """Submit the contact form"""
    contact = await ContactService(db).create(contact_data)
    return {
        "success": True,
        "message": "Thank you for contacting us. We will get back to you soon.",
        "data": ContactResponse.model_validate(contact)
    }


@router.get("/", response_model=ContactListResponse)
async def get_contacts(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List contact submissions"""
    result = await ContactService(db).list_contacts(page=page, limit=limit, search=search)
    result["items"] = [ContactResponse.model_validate(contact) for contact in result["items"]]
    return ContactListResponse(**result)


@router.get("/stats", response_model=ContactStats)
async def get_contact_stats(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Contact submission counts"""
    return ContactStats(**await ContactService(db).get_stats())


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact(
    contact_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get contact submission by ID"""
    contact = await ContactService(db).get_by_id(contact_id)
    if not contact:
        raise NotFoundException("Contact not found")
    return contact


@router.delete("/{contact_id}")
async def delete_contact(
    contact_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete contact submission"""
    deleted = await ContactService(db).delete(contact_id)
    if not deleted:
        raise NotFoundException("Contact not found")
    return {"success": True, "message": "Contact deleted successfully"}
