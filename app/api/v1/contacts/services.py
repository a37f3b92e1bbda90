"""
Contact service layer
"""

from typing import Any, Dict, Optional
from datetime import timedelta
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_, desc
import logging
import uuid

from app.models import Contact
from app.models.base import utcnow
from app.schemas.contact import ContactCreate
from app.utils.pagination import paginate

logger = logging.getLogger(__name__)

class ContactService:
    """Contact service"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: ContactCreate) -> Contact:
        """Store a contact form submission"""
        contact = Contact(**data.model_dump())
        self.db.add(contact)
        await self.db.commit()

        logger.info(f"Contact received from {contact.email} ({contact.id})")
        return contact

    async def get_by_id(self, contact_id: uuid.UUID) -> Optional[Contact]:
        result = await self.db.execute(select(Contact).where(Contact.id == contact_id))
        return result.scalar_one_or_none()

    async def list_contacts(
        self,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None
    ) -> Dict[str, Any]:
        """Get contacts, newest first"""
        query = select(Contact)
        if search:
            search_term = f"%{search}%"
            query = query.where(or_(
                Contact.name.ilike(search_term),
                Contact.email.ilike(search_term),
                Contact.phone.ilike(search_term),
                Contact.message.ilike(search_term),
            ))
        query = query.order_by(desc(Contact.created_at))
        return await paginate(self.db, query, page=page, size=limit)

    async def delete(self, contact_id: uuid.UUID) -> bool:
        contact = await self.get_by_id(contact_id)
        if not contact:
            return False

        await self.db.delete(contact)
        await self.db.commit()
        logger.info(f"Contact deleted: {contact_id}")
        return True

    async def get_stats(self) -> Dict[str, int]:
        total = await self.db.scalar(select(func.count(Contact.id))) or 0
        recent = await self.db.scalar(
            select(func.count(Contact.id)).where(Contact.created_at >= utcnow() - timedelta(days=7))
        ) or 0
        return {"total_contacts": total, "contacts_last_7_days": recent}
