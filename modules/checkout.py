"""
Checkout form validation.

The cart store accepts any contact record; checking that name, email and
phone are present happens here, before create_order is called.
"""

from typing import Any, Dict, Mapping, Optional

import bleach

from core.exceptions import CheckoutValidationError
from models.order import CustomerInfo


REQUIRED_FIELDS = ("name", "email", "phone")
MAX_FIELD_LENGTH = 200
MAX_ADDRESS_LENGTH = 500


def _sanitize_text(text: Any, max_length: Optional[int] = None) -> str:
    """Strip whitespace and HTML from user input."""
    if not text:
        return ""
    text = str(text).strip()
    text = bleach.clean(text, tags=[], strip=True)
    if max_length and len(text) > max_length:
        text = text[:max_length]
    return text


def validate_customer_info(form: Mapping[str, Any]) -> CustomerInfo:
    """
    Build a CustomerInfo from submitted form data.

    Args:
        form: Request form or JSON body with name, email, phone, address

    Returns:
        Sanitized CustomerInfo

    Raises:
        CheckoutValidationError: One or more required fields are empty
    """
    cleaned: Dict[str, str] = {
        key: _sanitize_text(form.get(key), MAX_FIELD_LENGTH) for key in REQUIRED_FIELDS
    }

    missing = [key for key in REQUIRED_FIELDS if not cleaned[key]]
    if missing:
        raise CheckoutValidationError(missing)

    address = _sanitize_text(form.get("address"), MAX_ADDRESS_LENGTH)

    return CustomerInfo(
        name=cleaned["name"],
        email=cleaned["email"],
        phone=cleaned["phone"],
        address=address or None,
    )
