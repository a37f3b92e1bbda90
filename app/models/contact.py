"""Contact form submissions"""

from sqlalchemy import Column, String, Text

from .base import Base, TimestampedModel, UUIDModel

class Contact(Base, UUIDModel, TimestampedModel):
    """Message left through the public contact form"""

    __tablename__ = "contacts"

    name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    subject = Column(String(255), nullable=True)
    message = Column(Text, nullable=True)
