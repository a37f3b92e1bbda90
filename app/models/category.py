"""
Category model for the content menu
Supports hierarchical categories
"""

from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, Index, Uuid

from app.services.category_tree import resolve_display_name

from .base import Base, TimestampedModel, UUIDModel

class Category(Base, UUIDModel, TimestampedModel):
    """Menu category with parent-child hierarchy"""

    __tablename__ = "categories"

    name = Column(String(100), nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    key = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(String(500), nullable=True)

    # Localized names and descriptions
    name_en = Column(String(100), nullable=True)
    name_vi = Column(String(100), nullable=True)
    name_ko = Column(String(100), nullable=True)
    description_en = Column(String(500), nullable=True)
    description_vi = Column(String(500), nullable=True)
    description_ko = Column(String(500), nullable=True)

    # Hierarchy: parent_id is the source of truth, children are derived from it
    parent_id = Column(Uuid(as_uuid=True), ForeignKey("categories.id"), nullable=True)

    # Display
    color = Column(String(7), nullable=True)
    icon = Column(String(255), nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)

    # Status
    is_active = Column(Boolean, default=True, nullable=False)

    # SEO
    meta_title = Column(String(60), nullable=True)
    meta_description = Column(String(160), nullable=True)

    # Indexes
    __table_args__ = (
        Index("idx_categories_parent_active", "parent_id", "is_active"),
        Index("idx_categories_sort_order", "sort_order"),
    )

    @property
    def display_name(self) -> str:
        """Best available name: explicit name, then the first localized one"""
        return resolve_display_name(self)
