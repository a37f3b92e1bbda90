"""
Post API router
"""

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Literal, Optional
import uuid

from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import NotFoundException
from app.api.v1.auth.dependencies import get_current_user
from app.models import User, PostStatus
from app.schemas.post import (
    PostCreate,
    PostUpdate,
    PostDuplicate,
    PostResponse,
    PostListResponse,
    BlogListResponse,
)
from .services import PostService

router = APIRouter()


@router.get("/blog", response_model=BlogListResponse)
async def get_blog_posts(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db)
):
    """Published posts with per-locale descriptions, newest first"""
    service = PostService(db)
    return BlogListResponse(**await service.list_blog(page=page, limit=limit))


@router.get("/", response_model=PostListResponse)
async def get_posts(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    status_filter: Optional[PostStatus] = Query(None, alias="status"),
    category: Optional[str] = Query(None, description="Category ID or slug"),
    search: Optional[str] = Query(None, description="Search titles, contents and excerpt"),
    sort_by: Literal["createdAt", "publishDate", "updatedAt"] = Query("createdAt"),
    sort_order: Literal["asc", "desc"] = Query("desc"),
    db: AsyncSession = Depends(get_db)
):
    """Get posts with pagination and filtering"""
    service = PostService(db)
    result = await service.list_posts(
        page=page,
        limit=limit,
        status=status_filter,
        category=category,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    result["items"] = [PostResponse.model_validate(post) for post in result["items"]]
    return PostListResponse(**result)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    """Get post by ID"""
    post = await PostService(db).get_by_id(post_id)
    if not post:
        raise NotFoundException("Post not found")
    return post


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a post authored by the current user"""
    return await PostService(db).create(post_data, current_user)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: uuid.UUID,
    post_data: PostUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update a post"""
    post = await PostService(db).update(post_id, post_data)
    if not post:
        raise NotFoundException("Post not found")
    return post


@router.delete("/{post_id}")
async def delete_post(
    post_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a post"""
    deleted = await PostService(db).delete(post_id)
    if not deleted:
        raise NotFoundException("Post not found")
    return {"success": True, "message": "Post deleted successfully"}


@router.post("/{post_id}/duplicate", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def duplicate_post(
    post_id: uuid.UUID,
    payload: Optional[PostDuplicate] = Body(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Copy a post as a draft"""
    post = await PostService(db).duplicate(post_id, payload.title if payload else None)
    if not post:
        raise NotFoundException("Post not found")
    return post
