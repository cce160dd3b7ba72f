"""Reusable field rules for request schemas.

Every rule raises ``PydanticCustomError`` so the message that reaches the
client is exactly the one written here, without pydantic's own prefixes.
"""
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from pydantic_core import PydanticCustomError


# Messages for required fields, keyed by field name. Used both when a field is
# absent from the payload and when it is present but null/blank.
REQUIRED_MESSAGES = {
    "name": "Name is required",
    "industry": "Industry is required",
    "contact_email": "Contact email is required",
    "subscription_tier": "Subscription tier is required",
    "compliance_level": "Compliance level is required",
    "metadata": "Metadata is required",
    "region": "Region is required",
    "country": "Country is required",
    "status": "Status is required",
    "reason": "Reason for status change is required",
    "tenantIds": "No tenant IDs provided",
}


def fail(message: str, error_type: str = "tenant_rule", **context: Any):
    raise PydanticCustomError(error_type, message, context or None)


def required_message(field: str) -> str:
    return REQUIRED_MESSAGES.get(field, f"{field} is required")


def clean(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def require(value: Any, field: str) -> Any:
    """Trim strings and reject null/blank values for a required field."""
    value = clean(value)
    if value is None or value == "":
        fail(required_message(field), "missing")
    return value


def one_of(value: Any, enum_cls: type[Enum], message: str) -> Any:
    value = clean(value)
    if isinstance(value, enum_cls):
        return value
    if value not in {member.value for member in enum_cls}:
        fail(message)
    return value


def max_length(value: Any, limit: int, message: str, type_message: Optional[str] = None) -> Optional[str]:
    value = clean(value)
    if value is None:
        return None
    if not isinstance(value, str):
        fail(type_message or message)
    if len(value) > limit:
        fail(message)
    return value


def matches(value: Any, predicate: Callable[[str], bool], message: str) -> str:
    value = clean(value)
    if not isinstance(value, str) or not predicate(value):
        fail(message)
    return value


def reject_unknown_keys(data: Any, allowed: Iterable[str], label: str) -> Any:
    """Closed key set: any key outside ``allowed`` fails the whole payload."""
    if isinstance(data, dict):
        allowed = set(allowed)
        unknown = [str(key) for key in data if key not in allowed]
        if unknown:
            fail("{label}: {keys}", "unknown_keys", label=label, keys=", ".join(unknown))
    return data
