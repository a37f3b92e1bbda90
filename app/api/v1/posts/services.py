"""
Post service layer
Multilingual articles filed under menu categories
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, or_, asc, desc
import logging
import uuid

from app.models import Category, Post, PostStatus, User, post_categories
from app.core.config import settings
from app.core.exceptions import ConflictException, ValidationException
from app.schemas.post import PostCategory, PostCreate, PostUpdate
from app.utils.helpers import generate_slug, make_description
from app.utils.pagination import paginate

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "createdAt": Post.created_at,
    "updatedAt": Post.updated_at,
    "publishDate": Post.publish_date,
}

class PostService:
    """Post service"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, post_id: uuid.UUID) -> Optional[Post]:
        result = await self.db.execute(select(Post).where(Post.id == post_id))
        return result.scalar_one_or_none()

    async def _reload(self, post_id: uuid.UUID) -> Post:
        """Fresh copy with author and categories loaded"""
        result = await self.db.execute(
            select(Post).where(Post.id == post_id).execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def _load_categories(self, category_ids: List[uuid.UUID]) -> List[Category]:
        """Resolve category IDs, every one of them must exist"""
        if not category_ids:
            return []
        unique_ids = list(dict.fromkeys(category_ids))
        result = await self.db.execute(select(Category).where(Category.id.in_(unique_ids)))
        categories = list(result.scalars().all())
        if len(categories) != len(unique_ids):
            missing = set(unique_ids) - {category.id for category in categories}
            raise ValidationException(
                f"Categories not found: {', '.join(str(m) for m in missing)}",
                error_code="CATEGORY_NOT_FOUND"
            )
        return categories

    async def allocate_permalink(self, title: str, exclude_id: Optional[uuid.UUID] = None) -> str:
        """Slugified title, suffixed with -1, -2... until unused"""
        base = generate_slug(title) or "post"
        candidate = base
        attempt = 0
        while True:
            stmt = select(Post.id).where(Post.permalink == candidate)
            if exclude_id:
                stmt = stmt.where(Post.id != exclude_id)
            if (await self.db.execute(stmt)).first() is None:
                return candidate
            attempt += 1
            candidate = f"{base}-{attempt}"

    async def _save_new(self, post: Post) -> Post:
        """Commit a new post, retrying permalink allocation when a concurrent writer took it"""
        title = post.title
        for attempt in range(settings.SLUG_ALLOCATION_ATTEMPTS):
            try:
                await self.db.commit()
                return post
            except IntegrityError:
                await self.db.rollback()
                logger.warning(f"Permalink race on '{post.permalink}', retrying (attempt {attempt + 1})")
                self.db.add(post)
                post.permalink = await self.allocate_permalink(title, exclude_id=post.id)

        raise ConflictException("Could not allocate a unique permalink", error_code="PERMALINK_ALLOCATION_FAILED")

    async def create(self, data: PostCreate, author: User) -> Post:
        """
        Create new post

        Raises:
            ValidationException: no title, no content or unknown category
        """
        title = data.title_en or data.title_vi or data.title_ko
        if not title:
            raise ValidationException("At least one title is required", error_code="TITLE_REQUIRED")
        if not (data.content_en or data.content_vi or data.content_ko):
            raise ValidationException("At least one content is required", error_code="CONTENT_REQUIRED")

        categories = await self._load_categories(data.categories)

        values = data.model_dump(exclude={"categories", "permalink"})
        post = Post(
            **values,
            categories=categories,
            author_id=author.id,
        )
        post.permalink = await self.allocate_permalink(data.permalink or title)
        if not post.seo_title:
            post.seo_title = title
        if not post.meta_description and post.excerpt:
            post.meta_description = post.excerpt[:500]

        self.db.add(post)
        await self._save_new(post)
        post = await self._reload(post.id)

        logger.info(f"Post created: {post.permalink} ({post.id}) by {author.email}")
        return post

    async def list_posts(
        self,
        page: int = 1,
        limit: int = 10,
        status: Optional[PostStatus] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
    ) -> Dict[str, Any]:
        """
        Get posts with filters and pagination

        Args:
            category: category ID or slug; an unknown slug matches nothing
        """
        query = select(Post)

        if status is not None:
            query = query.where(Post.status == status)

        if category:
            try:
                category_id = uuid.UUID(category)
            except ValueError:
                category_id = await self.db.scalar(select(Category.id).where(Category.slug == category))
                if category_id is None:
                    return {"items": [], "total": 0, "page": page, "size": limit, "pages": 0}
            query = query.where(Post.id.in_(
                select(post_categories.c.post_id).where(post_categories.c.category_id == category_id)
            ))

        if search:
            search_term = f"%{search}%"
            query = query.where(or_(
                Post.title_en.ilike(search_term),
                Post.title_vi.ilike(search_term),
                Post.title_ko.ilike(search_term),
                Post.content_en.ilike(search_term),
                Post.content_vi.ilike(search_term),
                Post.content_ko.ilike(search_term),
                Post.excerpt.ilike(search_term),
            ))

        column = SORTABLE_FIELDS.get(sort_by, Post.created_at)
        direction = asc if sort_order == "asc" else desc
        if column is Post.publish_date:
            query = query.order_by(direction(Post.publish_date), direction(Post.created_at))
        else:
            query = query.order_by(direction(column))

        return await paginate(self.db, query, page=page, size=limit)

    async def update(self, post_id: uuid.UUID, data: PostUpdate) -> Optional[Post]:
        """Partial update, None if the post does not exist"""
        post = await self.get_by_id(post_id)
        if not post:
            return None

        update_data = data.model_dump(exclude_unset=True)
        category_ids = update_data.pop("categories", None)
        permalink = update_data.pop("permalink", None)
        for field in ("status", "tags"):
            if field in update_data and update_data[field] is None:
                update_data.pop(field)

        for field, value in update_data.items():
            setattr(post, field, value)

        if category_ids is not None:
            post.categories = await self._load_categories(category_ids)

        if not post.title:
            raise ValidationException("At least one title is required", error_code="TITLE_REQUIRED")

        if permalink and permalink != post.permalink:
            post.permalink = await self.allocate_permalink(permalink, exclude_id=post.id)

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictException("Permalink is already in use", error_code="PERMALINK_TAKEN")
        post = await self._reload(post.id)

        logger.info(f"Post updated: {post.permalink} ({post.id})")
        return post

    async def delete(self, post_id: uuid.UUID) -> bool:
        post = await self.get_by_id(post_id)
        if not post:
            return False

        await self.db.delete(post)
        await self.db.commit()
        logger.info(f"Post deleted: {post.permalink} ({post_id})")
        return True

    async def duplicate(self, post_id: uuid.UUID, new_title: Optional[str] = None) -> Optional[Post]:
        """Copy a post as a draft with a new title and permalink"""
        original = await self.get_by_id(post_id)
        if not original:
            return None

        data = original.to_dict(exclude=["id", "created_at", "updated_at", "permalink", "publish_date", "status"])
        data["title_en"] = new_title or f"{original.title} (Copy)"

        copy = Post(**data, categories=list(original.categories), status=PostStatus.DRAFT)
        copy.permalink = await self.allocate_permalink(data["title_en"])

        self.db.add(copy)
        await self._save_new(copy)
        copy = await self._reload(copy.id)

        logger.info(f"Post {post_id} duplicated as {copy.permalink}")
        return copy

    async def list_blog(self, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        """Published posts for the blog page, newest first"""
        query = (
            select(Post)
            .where(Post.status == PostStatus.PUBLISHED)
            .order_by(desc(Post.publish_date), desc(Post.created_at))
        )
        result = await paginate(self.db, query, page=page, size=limit)
        result["items"] = [self.to_blog_item(post) for post in result["items"]]
        return result

    @staticmethod
    def to_blog_item(post: Post) -> Dict[str, Any]:
        """Titles plus per-locale descriptions built from the content"""
        return {
            "id": post.id,
            "permalink": post.permalink,
            "title_en": post.title_en,
            "title_vi": post.title_vi,
            "title_ko": post.title_ko,
            "description_en": make_description(post.content_en) or (post.excerpt or ""),
            "description_vi": make_description(post.content_vi),
            "description_ko": make_description(post.content_ko),
            "featured_image_url": post.featured_image_url,
            "publish_date": post.publish_date,
            "categories": [PostCategory.model_validate(category) for category in post.categories],
        }
