"""
Category API router
Menu categories, their nested tree and statistics
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Literal, Optional
import uuid

from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import NotFoundException
from app.api.v1.auth.dependencies import get_current_user
from app.models import User
from app.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryTreeNode,
    CategoryListResponse,
    CategoryStats,
)
from .services import CategoryService

router = APIRouter()


@router.get("/", response_model=CategoryListResponse)
async def get_categories(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Items per page"),
    search: Optional[str] = Query(None, description="Search categories by name or description"),
    parent: Optional[str] = Query(None, description="Parent category ID, empty for root categories"),
    status_filter: Optional[Literal["active", "inactive"]] = Query(None, alias="status"),
    sort_by: str = Query("sortOrder", description="sortOrder, name, createdAt or updatedAt"),
    sort_order: Literal["asc", "desc"] = Query("asc"),
    db: AsyncSession = Depends(get_db)
):
    """Get categories with pagination and filtering"""
    service = CategoryService(db)
    is_active = None if status_filter is None else status_filter == "active"

    result = await service.list_categories(
        page=page,
        limit=limit,
        search=search,
        parent=parent,
        is_active=is_active,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    result["items"] = [await service.to_response(category) for category in result["items"]]
    return CategoryListResponse(**result)


@router.get("/tree", response_model=List[CategoryTreeNode])
async def get_category_tree(
    include_inactive: bool = Query(False, description="Include inactive categories"),
    db: AsyncSession = Depends(get_db)
):
    """Get the nested menu tree, ordered by sortOrder then name"""
    service = CategoryService(db)
    tree = await service.get_tree(include_inactive=include_inactive)
    return [CategoryTreeNode.model_validate(node) for node in tree]


@router.get("/stats", response_model=CategoryStats)
async def get_category_stats(
    db: AsyncSession = Depends(get_db)
):
    """Get category statistics"""
    service = CategoryService(db)
    return CategoryStats(**await service.get_stats())


@router.get("/slug/{slug}", response_model=CategoryResponse)
async def get_category_by_slug(
    slug: str,
    db: AsyncSession = Depends(get_db)
):
    """Get category by slug"""
    service = CategoryService(db)
    category = await service.get_by_slug(slug)
    if not category:
        raise NotFoundException("Category not found")
    return await service.to_response(category)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    """Get category by ID with child IDs"""
    service = CategoryService(db)
    category = await service.get_by_id(category_id)
    if not category:
        raise NotFoundException("Category not found")
    return await service.to_response(category)


@router.post("/", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a new category; slug and key are generated from the name"""
    service = CategoryService(db)
    category = await service.create(category_data)
    return await service.to_response(category)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: uuid.UUID,
    category_data: CategoryUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update a category"""
    service = CategoryService(db)
    category = await service.update(category_id, category_data)
    if not category:
        raise NotFoundException("Category not found")
    return await service.to_response(category)


@router.delete("/{category_id}")
async def delete_category(
    category_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a category without children or posts"""
    service = CategoryService(db)
    deleted = await service.delete(category_id)
    if not deleted:
        raise NotFoundException("Category not found")
    return {"success": True, "message": "Category deleted successfully"}
