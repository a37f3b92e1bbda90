"""
Custom exception classes and error handlers
Provides consistent error responses across the application
"""

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

class VinpetException(HTTPException):
    """Base exception class for the Vinpet CMS application"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code

class UnauthorizedException(VinpetException):
    """401 Unauthorized"""

    def __init__(self, detail: str = "Unauthorized", error_code: str = "UNAUTHORIZED"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code=error_code,
            headers={"WWW-Authenticate": "Bearer"}
        )

class NotFoundException(VinpetException):
    """404 Not Found"""

    def __init__(self, detail: str = "Not found", error_code: str = "NOT_FOUND"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code=error_code
        )

class ConflictException(VinpetException):
    """409 Conflict"""

    def __init__(self, detail: str, error_code: str = "CONFLICT"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code=error_code
        )

class ValidationException(VinpetException):
    """422 Unprocessable Entity"""

    def __init__(self, detail: str, error_code: str = "VALIDATION_ERROR"):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code=error_code
        )

# Business logic exceptions
class DuplicateResourceException(ConflictException):
    """Resource already exists"""

    def __init__(self, resource: str, field: str, value: str):
        super().__init__(
            detail=f"{resource} with {field} '{value}' already exists",
            error_code="DUPLICATE_RESOURCE"
        )

class InvalidCredentialsException(UnauthorizedException):
    """Email/password pair rejected"""

    def __init__(self, detail: str = "Invalid email or password"):
        super().__init__(
            detail=detail,
            error_code="INVALID_CREDENTIALS"
        )

class CategoryHasChildrenException(ConflictException):
    """Category still has child categories"""

    def __init__(self):
        super().__init__(
            detail="Cannot delete category with children. Please delete children first.",
            error_code="CATEGORY_HAS_CHILDREN"
        )

class CategoryHasPostsException(ConflictException):
    """Category is still referenced by posts"""

    def __init__(self):
        super().__init__(
            detail="Cannot delete category with posts. Please reassign posts first.",
            error_code="CATEGORY_HAS_POSTS"
        )

class CategoryCycleException(ConflictException):
    """Parent assignment would make a category its own ancestor"""

    def __init__(self, detail: str = "A category cannot be moved under itself or one of its descendants"):
        super().__init__(
            detail=detail,
            error_code="CATEGORY_CYCLE"
        )

async def vinpet_exception_handler(request: Request, exc: VinpetException) -> JSONResponse:
    """Render application exceptions with their error code"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error_code": exc.error_code,
            "detail": exc.detail
        },
        headers=exc.headers
    )
