"""Utilities package"""

from .validators import validate_phone_number, validate_email_address
from .helpers import generate_slug, strip_html, make_description
from .pagination import paginate, page_count

__all__ = [
    "validate_phone_number",
    "validate_email_address",
    "generate_slug",
    "strip_html",
    "make_description",
    "paginate",
    "page_count",
]
