"""
Pagination utilities
"""

from typing import Any, Dict
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

def page_count(total: int, size: int) -> int:
    """Number of pages needed for total items"""
    return (total + size - 1) // size if size > 0 else 0

async def paginate(
    db: AsyncSession,
    query: Select,
    page: int = 1,
    size: int = 10
) -> Dict[str, Any]:
    """
    Paginate query results

    Args:
        db: Database session
        query: SQLAlchemy query, already filtered and ordered
        page: Page number (1-based)
        size: Page size

    Returns:
        Dictionary with pagination data
    """
    # Get total count
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total = await db.scalar(count_query) or 0

    # Apply pagination
    offset = (page - 1) * size
    result = await db.execute(query.offset(offset).limit(size))
    items = list(result.scalars().all())

    return {
        "items": items,
        "total": total,
        "page": page,
        "size": size,
        "pages": page_count(total, size)
    }
