"""
Post model for multilingual articles
"""

from sqlalchemy import Column, String, Text, ForeignKey, DateTime, Enum, Table, JSON, Index, Uuid
from sqlalchemy.orm import relationship
import enum

from .base import Base, TimestampedModel, UUIDModel

class PostStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    PENDING = "pending"
    ARCHIVED = "archived"
    PRIVATE = "private"

# Many-to-many link between posts and the categories they are filed under
post_categories = Table(
    "post_categories",
    Base.metadata,
    Column("post_id", Uuid(as_uuid=True), ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Uuid(as_uuid=True), ForeignKey("categories.id"), primary_key=True, index=True),
)

class Post(Base, UUIDModel, TimestampedModel):
    """Article with per-locale title and content"""

    __tablename__ = "posts"

    # Localized content
    title_en = Column(String(255), nullable=True)
    title_vi = Column(String(255), nullable=True)
    title_ko = Column(String(255), nullable=True)
    content_en = Column(Text, nullable=True)
    content_vi = Column(Text, nullable=True)
    content_ko = Column(Text, nullable=True)
    excerpt = Column(Text, nullable=True)

    # Publication
    status = Column(
        Enum(PostStatus, values_callable=lambda e: [m.value for m in e], native_enum=False, length=20),
        default=PostStatus.DRAFT,
        nullable=False,
        index=True
    )
    publish_date = Column(DateTime(timezone=True), nullable=True)

    # SEO
    seo_title = Column(String(255), nullable=True)
    permalink = Column(String(255), unique=True, nullable=False, index=True)
    meta_description = Column(String(500), nullable=True)
    featured_image_url = Column(String(500), nullable=True)
    canonical_url = Column(String(500), nullable=True)
    tags = Column(JSON, default=list)

    # Authorship
    author_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    author = relationship("User", lazy="selectin")
    categories = relationship("Category", secondary=post_categories, lazy="selectin")

    __table_args__ = (
        Index("idx_posts_publish_date", "publish_date"),
    )

    @property
    def title(self) -> str:
        """First available title, English first"""
        return self.title_en or self.title_vi or self.title_ko or ""
