"""Enum definitions for the application."""
from enum import Enum


class Industry(str, Enum):
    """Industry options."""
    TECHNOLOGY = "Technology"
    FINANCE = "Finance"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    RETAIL = "Retail"
    OTHER = "Other"


class SubscriptionTier(str, Enum):
    """Tenant subscription tier options."""
    BASIC = "Basic"
    PROFESSIONAL = "Professional"
    ENTERPRISE = "Enterprise"


class ComplianceLevel(str, Enum):
    """Compliance level options."""
    STANDARD = "Standard"
    ENHANCED = "Enhanced"
    PREMIUM = "Premium"


class TenantStatus(str, Enum):
    """Tenant lifecycle status."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class CompanySize(str, Enum):
    """Company size brackets."""
    MICRO = "1-10"
    SMALL = "11-50"
    MEDIUM = "51-200"
    LARGE = "201-500"
    XLARGE = "501-1000"
    ENTERPRISE = "1000+"


class UserRole(str, Enum):
    """Caller role carried in the access token."""
    ADMIN = "admin"
    MANAGER = "manager"
    VIEWER = "viewer"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Persisted/accepted values of an enum, in declaration order."""
    return [member.value for member in enum_cls]
