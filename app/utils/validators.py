"""Custom validators"""

import re
from email_validator import validate_email, EmailNotValidError

# Vietnamese phone numbers: 0 or +84, then 9-10 digits not starting with 0
VN_PHONE_PATTERN = re.compile(r"^(0|\+84)[1-9][0-9]{8,9}$")

def validate_phone_number(phone: str) -> str:
    """Validate a Vietnamese phone number, spaces are ignored"""
    phone = re.sub(r"\s+", "", phone or "")
    if not VN_PHONE_PATTERN.match(phone):
        raise ValueError("Invalid Vietnamese phone number")
    return phone

def validate_email_address(email: str) -> str:
    """Validate and normalize email"""
    email = (email or "").strip().lower()

    try:
        validation = validate_email(email, check_deliverability=False)
        return validation.normalized.lower()
    except EmailNotValidError as e:
        raise ValueError(str(e))
