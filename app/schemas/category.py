"""
Category schemas for request/response validation
"""

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator
from typing import Optional, List, Literal
from datetime import datetime
import uuid

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class CategoryWriteFields(BaseModel):
    """Fields shared by create and update payloads"""
    name_en: Optional[str] = Field(None, max_length=100, description="English name")
    name_vi: Optional[str] = Field(None, max_length=100, description="Vietnamese name")
    name_ko: Optional[str] = Field(None, max_length=100, description="Korean name")
    description: Optional[str] = Field(None, max_length=500, description="Category description")
    description_en: Optional[str] = Field(None, max_length=500)
    description_vi: Optional[str] = Field(None, max_length=500)
    description_ko: Optional[str] = Field(None, max_length=500)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN, description="Hex color, e.g. #FF5733")
    icon: Optional[str] = Field(None, max_length=255, description="Icon name")
    meta_title: Optional[str] = Field(None, max_length=60, alias="metaTitle", description="SEO meta title")
    meta_description: Optional[str] = Field(
        None, max_length=160, alias="metaDescription", description="SEO meta description"
    )
    parent: Optional[uuid.UUID] = Field(None, description="Parent category ID, empty for a root category")
    status: Optional[Literal["active", "inactive"]] = Field(
        None, exclude=True, description="Shorthand for isActive"
    )

    @field_validator("name", "name_en", "name_vi", "name_ko", mode="before", check_fields=False)
    @classmethod
    def blank_name_is_missing(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("parent", mode="before")
    @classmethod
    def empty_parent_is_root(cls, v):
        if v == "":
            return None
        return v

    @model_validator(mode="after")
    def apply_status(self):
        """Translate status into is_active"""
        if self.status is not None:
            self.is_active = self.status == "active"
        return self

    class Config:
        populate_by_name = True


class CategoryCreate(CategoryWriteFields):
    """Schema for creating category"""
    name: Optional[str] = Field(
        None,
        min_length=1,
        max_length=100,
        validation_alias=AliasChoices("name", "menuName"),
        description="Menu name; slug and key are generated from it",
    )
    is_active: bool = Field(default=True, alias="isActive")
    sort_order: int = Field(default=0, alias="sortOrder", description="Lower numbers appear first")

    def resolved_name(self) -> Optional[str]:
        """Explicit name, else the first localized name"""
        for value in (self.name, self.name_en, self.name_vi, self.name_ko):
            if value:
                return value
        return None


class CategoryUpdate(CategoryWriteFields):
    """Schema for updating category"""
    name: Optional[str] = Field(
        None, min_length=1, max_length=100, validation_alias=AliasChoices("name", "menuName")
    )
    is_active: Optional[bool] = Field(None, alias="isActive")
    sort_order: Optional[int] = Field(None, alias="sortOrder")


class CategoryFields(BaseModel):
    """Stored category fields as exposed by the API"""
    id: uuid.UUID
    name: str
    slug: str
    key: str
    description: Optional[str] = None
    name_en: Optional[str] = None
    name_vi: Optional[str] = None
    name_ko: Optional[str] = None
    description_en: Optional[str] = None
    description_vi: Optional[str] = None
    description_ko: Optional[str] = None
    parent: Optional[uuid.UUID] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    is_active: bool = Field(True, alias="isActive")
    sort_order: int = Field(0, alias="sortOrder")
    meta_title: Optional[str] = Field(None, alias="metaTitle")
    meta_description: Optional[str] = Field(None, alias="metaDescription")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class CategoryResponse(CategoryFields):
    """Schema for category response"""
    children: List[uuid.UUID] = Field(default=[], description="Child category IDs")


class CategoryTreeNode(CategoryFields):
    """Category with its nested, ordered children"""
    children: List['CategoryTreeNode'] = Field(default=[], description="Child categories")


class CategoryListResponse(BaseModel):
    """Schema for paginated category list"""
    items: List[CategoryResponse]
    total: int
    page: int
    size: int
    pages: int


class CategoryStats(BaseModel):
    """Schema for category statistics"""
    total_categories: int
    active_categories: int
    inactive_categories: int
    root_categories: int
    categories_with_posts: int


# Enable forward references
CategoryTreeNode.model_rebuild()
