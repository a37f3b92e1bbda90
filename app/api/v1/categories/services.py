"""
Category service layer
Keeps the menu tree consistent: unique slug/key, valid parents, no cycles
"""

from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, func, and_, or_, asc, desc
import logging
import uuid

from app.models import Category, post_categories
from app.core.config import settings
from app.core.exceptions import (
    ConflictException,
    ValidationException,
    CategoryHasChildrenException,
    CategoryHasPostsException,
    CategoryCycleException,
)
from app.schemas.category import CategoryCreate, CategoryUpdate, CategoryResponse
from app.utils.pagination import paginate
from app.services.category_tree import (
    allocate_unique,
    build_tree,
    derive_key,
    derive_slug,
    find_cycle,
)

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "sortOrder": Category.sort_order,
    "sort_order": Category.sort_order,
    "name": Category.name,
    "createdAt": Category.created_at,
    "updatedAt": Category.updated_at,
}

SLUG_MAX_LENGTH = Category.__table__.c.slug.type.length
KEY_MAX_LENGTH = Category.__table__.c.key.type.length

class CategoryService:
    """Category service"""

    def __init__(self, db: AsyncSession):
        self.db = db

    # Lookups

    async def get_by_id(self, category_id: uuid.UUID) -> Optional[Category]:
        """Get category by ID, None when missing"""
        result = await self.db.execute(
            select(Category).where(Category.id == category_id)
        )
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[Category]:
        """Get category by slug, None when missing"""
        result = await self.db.execute(
            select(Category).where(Category.slug == slug)
        )
        return result.scalar_one_or_none()

    async def get_child_ids(self, category_id: uuid.UUID) -> List[uuid.UUID]:
        """IDs of direct children, in menu order"""
        result = await self.db.execute(
            select(Category.id)
            .where(Category.parent_id == category_id)
            .order_by(Category.sort_order, Category.name)
        )
        return list(result.scalars().all())

    async def to_response(self, category: Category) -> CategoryResponse:
        """Serialize a category with its parent and child IDs"""
        data = category.to_dict()
        data["parent"] = data.pop("parent_id")
        data["children"] = await self.get_child_ids(category.id)
        return CategoryResponse.model_validate(data)

    async def list_categories(
        self,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        parent: Optional[str] = None,
        is_active: Optional[bool] = None,
        sort_by: str = "sortOrder",
        sort_order: str = "asc",
    ) -> Dict[str, Any]:
        """
        Get categories with filters and pagination

        Args:
            parent: parent ID; an empty string selects root categories
            sort_by: sortOrder, name, createdAt or updatedAt

        Returns:
            Pagination dict (items, total, page, size, pages)
        """
        conditions = []

        if search:
            search_term = f"%{search}%"
            conditions.append(or_(
                Category.name.ilike(search_term),
                Category.description.ilike(search_term)
            ))

        if parent is not None:
            if parent == "":
                conditions.append(Category.parent_id.is_(None))
            else:
                try:
                    conditions.append(Category.parent_id == uuid.UUID(parent))
                except ValueError:
                    raise ValidationException("Invalid parent category ID", error_code="INVALID_PARENT_ID")

        if is_active is not None:
            conditions.append(Category.is_active == is_active)

        query = select(Category)
        if conditions:
            query = query.where(and_(*conditions))

        column = SORTABLE_FIELDS.get(sort_by, Category.sort_order)
        direction = asc if sort_order == "asc" else desc
        query = query.order_by(direction(column), Category.name)

        return await paginate(self.db, query, page=page, size=limit)

    # Slug and key allocation

    async def _slug_taken(self, slug: str, exclude_id: Optional[uuid.UUID]) -> bool:
        stmt = select(Category.id).where(Category.slug == slug)
        if exclude_id:
            stmt = stmt.where(Category.id != exclude_id)
        return (await self.db.execute(stmt)).first() is not None

    async def _key_taken(self, key: str, exclude_id: Optional[uuid.UUID]) -> bool:
        stmt = select(Category.id).where(Category.key == key)
        if exclude_id:
            stmt = stmt.where(Category.id != exclude_id)
        return (await self.db.execute(stmt)).first() is not None

    async def allocate_slug(self, candidate: str, exclude_id: Optional[uuid.UUID] = None) -> str:
        """First free slug among candidate, candidate-1, candidate-2..."""
        return await allocate_unique(
            candidate, "-", lambda value: self._slug_taken(value, exclude_id), SLUG_MAX_LENGTH
        )

    async def allocate_key(self, candidate: str, exclude_id: Optional[uuid.UUID] = None) -> str:
        """First free key among candidate, candidate_1, candidate_2..."""
        return await allocate_unique(
            candidate, "_", lambda value: self._key_taken(value, exclude_id), KEY_MAX_LENGTH
        )

    @staticmethod
    def _derive_identifiers(name: str) -> Tuple[str, str]:
        slug, key = derive_slug(name), derive_key(name)
        if not slug or not key:
            raise ValidationException(
                f"Category name '{name}' must contain at least one letter or digit",
                error_code="INVALID_CATEGORY_NAME"
            )
        return slug, key

    # Hierarchy checks

    async def _require_parent(self, parent_id: uuid.UUID) -> Category:
        parent = await self.get_by_id(parent_id)
        if not parent:
            raise ValidationException("Parent category not found", error_code="PARENT_NOT_FOUND")
        return parent

    async def _parent_map(self) -> Dict[uuid.UUID, Optional[uuid.UUID]]:
        result = await self.db.execute(select(Category.id, Category.parent_id))
        return {row.id: row.parent_id for row in result}

    async def _check_reparent(self, category_id: uuid.UUID, new_parent_id: uuid.UUID) -> None:
        if new_parent_id == category_id:
            raise CategoryCycleException("A category cannot be its own parent")
        await self._require_parent(new_parent_id)
        if find_cycle(category_id, new_parent_id, await self._parent_map()):
            raise CategoryCycleException()

    # Mutations

    async def create(self, data: CategoryCreate) -> Category:
        """
        Create new category

        Slug and key come from the display name and are suffixed until free.
        A concurrent creator that commits the same value first trips the
        unique index; the allocation is then retried against the new state.

        Raises:
            ValidationException: missing or unusable name, unknown parent
            ConflictException: no free slug/key after the configured attempts
        """
        display_name = data.resolved_name()
        if not display_name:
            raise ValidationException("menuName is required", error_code="NAME_REQUIRED")
        base_slug, base_key = self._derive_identifiers(display_name)

        if data.parent is not None:
            await self._require_parent(data.parent)

        values = data.model_dump(exclude={"name", "parent", "status"})

        for attempt in range(settings.SLUG_ALLOCATION_ATTEMPTS):
            category = Category(
                name=data.name or display_name,
                slug=await self.allocate_slug(base_slug),
                key=await self.allocate_key(base_key),
                parent_id=data.parent,
                **values
            )
            self.db.add(category)
            try:
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                logger.warning(f"Slug/key race on '{category.slug}', retrying (attempt {attempt + 1})")
                continue

            logger.info(f"Category created: {category.slug} ({category.id})")
            return category

        raise ConflictException(
            "Could not allocate a unique slug for this category, please retry",
            error_code="SLUG_ALLOCATION_FAILED"
        )

    async def update(self, category_id: uuid.UUID, data: CategoryUpdate) -> Optional[Category]:
        """
        Update category

        A changed display name regenerates slug and key (own record excluded
        from collision checks). A changed parent must exist and must not be
        the category itself or one of its descendants.

        Returns:
            Updated category, None if it does not exist
        """
        update_data = data.model_dump(exclude_unset=True)
        parent_given = "parent" in update_data
        new_parent_id = update_data.pop("parent", None)
        for field in ("name", "is_active", "sort_order"):
            if field in update_data and update_data[field] is None:
                update_data.pop(field)

        for attempt in range(settings.SLUG_ALLOCATION_ATTEMPTS):
            category = await self.get_by_id(category_id)
            if not category:
                return None

            previous_name = category.display_name

            if parent_given and new_parent_id is not None and new_parent_id != category.parent_id:
                await self._check_reparent(category.id, new_parent_id)

            for field, value in update_data.items():
                setattr(category, field, value)
            if parent_given:
                category.parent_id = new_parent_id

            if category.display_name != previous_name:
                base_slug, base_key = self._derive_identifiers(category.display_name)
                category.slug = await self.allocate_slug(base_slug, exclude_id=category.id)
                category.key = await self.allocate_key(base_key, exclude_id=category.id)

            try:
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                logger.warning(f"Slug/key race while updating {category_id}, retrying (attempt {attempt + 1})")
                continue

            logger.info(f"Category updated: {category.slug} ({category.id})")
            return category

        raise ConflictException(
            "Could not allocate a unique slug for this category, please retry",
            error_code="SLUG_ALLOCATION_FAILED"
        )

    async def delete(self, category_id: uuid.UUID) -> bool:
        """
        Delete category (only if it has no children and no posts)

        Returns:
            False if the category does not exist

        Raises:
            CategoryHasChildrenException, CategoryHasPostsException
        """
        category = await self.get_by_id(category_id)
        if not category:
            return False

        children_count = await self.db.scalar(
            select(func.count(Category.id)).where(Category.parent_id == category_id)
        )
        if children_count:
            raise CategoryHasChildrenException()

        posts_count = await self.db.scalar(
            select(func.count()).select_from(post_categories)
            .where(post_categories.c.category_id == category_id)
        )
        if posts_count:
            raise CategoryHasPostsException()

        await self.db.delete(category)
        await self.db.commit()
        logger.info(f"Category deleted: {category.slug} ({category_id})")
        return True

    # Views

    @staticmethod
    def _tree_node(category: Category) -> Dict[str, Any]:
        node = category.to_dict()
        node["parent"] = node.pop("parent_id")
        return node

    async def get_tree(self, include_inactive: bool = False) -> List[Dict[str, Any]]:
        """Nested menu tree; categories under a hidden parent become roots"""
        query = select(Category)
        if not include_inactive:
            query = query.where(Category.is_active == True)
        categories = (await self.db.execute(query)).scalars().all()

        known_ids = set((await self.db.execute(select(Category.id))).scalars().all())
        return build_tree(categories, self._tree_node, known_ids=known_ids)

    async def get_stats(self) -> Dict[str, int]:
        """Get category statistics"""
        total = await self.db.scalar(select(func.count(Category.id))) or 0
        active = await self.db.scalar(
            select(func.count(Category.id)).where(Category.is_active == True)
        ) or 0
        roots = await self.db.scalar(
            select(func.count(Category.id)).where(Category.parent_id.is_(None))
        ) or 0
        with_posts = await self.db.scalar(
            select(func.count(func.distinct(post_categories.c.category_id)))
        ) or 0

        return {
            "total_categories": total,
            "active_categories": active,
            "inactive_categories": total - active,
            "root_categories": roots,
            "categories_with_posts": with_posts,
        }
