"""
Post schemas for request/response validation
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
import uuid

from app.models.post import PostStatus


class PostWriteFields(BaseModel):
    """Fields shared by create and update payloads"""
    title_en: Optional[str] = Field(None, max_length=255)
    title_vi: Optional[str] = Field(None, max_length=255)
    title_ko: Optional[str] = Field(None, max_length=255)
    content_en: Optional[str] = None
    content_vi: Optional[str] = None
    content_ko: Optional[str] = None
    excerpt: Optional[str] = None
    publish_date: Optional[datetime] = Field(None, alias="publishDate")
    seo_title: Optional[str] = Field(None, max_length=255, alias="seoTitle")
    permalink: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = Field(None, max_length=500, alias="metaDescription")
    featured_image_url: Optional[str] = Field(None, max_length=500, alias="featuredImageUrl")
    canonical_url: Optional[str] = Field(None, max_length=500, alias="canonicalUrl")

    @field_validator("permalink", mode="before")
    @classmethod
    def blank_permalink_is_generated(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    class Config:
        populate_by_name = True


class PostCreate(PostWriteFields):
    """Schema for creating post"""
    status: PostStatus = PostStatus.DRAFT
    tags: List[str] = Field(default=[])
    categories: List[uuid.UUID] = Field(default=[], description="Category IDs")


class PostUpdate(PostWriteFields):
    """Schema for updating post"""
    status: Optional[PostStatus] = None
    tags: Optional[List[str]] = None
    categories: Optional[List[uuid.UUID]] = None


class PostDuplicate(BaseModel):
    """Optional title for the copy"""
    title: Optional[str] = Field(None, max_length=255)


class PostAuthor(BaseModel):
    id: uuid.UUID
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    class Config:
        from_attributes = True


class PostCategory(BaseModel):
    id: uuid.UUID
    name: str
    slug: str

    class Config:
        from_attributes = True


class PostResponse(BaseModel):
    """Schema for post response"""
    id: uuid.UUID
    title_en: Optional[str] = None
    title_vi: Optional[str] = None
    title_ko: Optional[str] = None
    content_en: Optional[str] = None
    content_vi: Optional[str] = None
    content_ko: Optional[str] = None
    excerpt: Optional[str] = None
    status: PostStatus
    publish_date: Optional[datetime] = Field(None, alias="publishDate")
    seo_title: Optional[str] = Field(None, alias="seoTitle")
    permalink: str
    meta_description: Optional[str] = Field(None, alias="metaDescription")
    featured_image_url: Optional[str] = Field(None, alias="featuredImageUrl")
    canonical_url: Optional[str] = Field(None, alias="canonicalUrl")
    tags: List[str] = Field(default=[])
    categories: List[PostCategory] = Field(default=[])
    author: Optional[PostAuthor] = None
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class PostListResponse(BaseModel):
    """Schema for paginated post list"""
    items: List[PostResponse]
    total: int
    page: int
    size: int
    pages: int


class BlogPostItem(BaseModel):
    """Published post as shown on the blog page"""
    id: uuid.UUID
    permalink: str
    title_en: Optional[str] = None
    title_vi: Optional[str] = None
    title_ko: Optional[str] = None
    description_en: str = ""
    description_vi: str = ""
    description_ko: str = ""
    featured_image_url: Optional[str] = Field(None, alias="featuredImageUrl")
    publish_date: Optional[datetime] = Field(None, alias="publishDate")
    categories: List[PostCategory] = Field(default=[])

    class Config:
        populate_by_name = True


class BlogListResponse(BaseModel):
    items: List[BlogPostItem]
    total: int
    page: int
    size: int
    pages: int
