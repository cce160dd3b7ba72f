"""Format predicates shared by the request schemas and the services."""
import re
from typing import Any, Iterable, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from email_validator import EmailNotValidError, validate_email

from tenant_admin.core.countries import ISO_3166_ALPHA2


TENANT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")
PHONE_PATTERN = re.compile(r"^\+?[\d\s-]{10,}$")
DATE_FORMAT_PATTERN = re.compile(r"^[MDYmdy/\-.\s]+$")
# language[-Script][-REGION|-area][-variant...]
LOCALE_PATTERN = re.compile(
    r"^[A-Za-z]{2,3}"
    r"(-[A-Za-z]{4})?"
    r"(-(?:[A-Za-z]{2}|\d{3}))?"
    r"(-(?:[A-Za-z0-9]{5,8}|\d[A-Za-z0-9]{3}))*$"
)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100


def is_valid_tenant_id(value: Any) -> bool:
    return isinstance(value, str) and bool(TENANT_ID_PATTERN.match(value))


def find_invalid_ids(values: Iterable[Any]) -> List[str]:
    """Return the offending entries (stringified) that are not tenant identifiers."""
    return [str(value) for value in values if not is_valid_tenant_id(value)]


def check_name(value: Any) -> Optional[str]:
    """Return the violation message for a tenant name, or None when it is valid."""
    if not isinstance(value, str) or not value.strip():
        return "Name is required"
    trimmed = value.strip()
    if len(trimmed) < NAME_MIN_LENGTH:
        return f"Name must be at least {NAME_MIN_LENGTH} characters"
    if len(trimmed) > NAME_MAX_LENGTH:
        return f"Name cannot exceed {NAME_MAX_LENGTH} characters"
    return None


def is_valid_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_timezone(value: str) -> bool:
    if not value:
        return False
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True


def is_valid_date_format(value: str) -> bool:
    return bool(DATE_FORMAT_PATTERN.match(value))


def is_valid_language(value: str) -> bool:
    return bool(LOCALE_PATTERN.match(value))


def is_valid_country(value: str) -> bool:
    return value.upper() in ISO_3166_ALPHA2


def is_valid_phone(value: Optional[str]) -> bool:
    return not value or bool(PHONE_PATTERN.match(value))
