"""Tenant schemas: embedded records, create/update payloads and responses."""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from tenant_admin.core.enums import (
    CompanySize, ComplianceLevel, Industry, SubscriptionTier, TenantStatus,
)
from tenant_admin.core.validators import (
    check_name, is_valid_country, is_valid_date_format, is_valid_email,
    is_valid_language, is_valid_phone, is_valid_timezone,
)
from tenant_admin.schemas.rules import (
    clean, fail, matches, max_length, one_of, reject_unknown_keys, require,
)


SETTINGS_KEYS = frozenset({"timezone", "dateFormat", "language", "notificationPreferences"})
METADATA_KEYS = frozenset({
    "industry", "subIndustry", "companySize", "region", "country", "primaryContact", "tags",
})


def validate_name(value: Any) -> str:
    """Tenant name rule shared by create and update."""
    message = check_name(value)
    if message:
        fail(message, "missing" if message == "Name is required" else "tenant_rule")
    return value.strip()


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class NotificationPreferences(BaseModel):
    """Notification channel toggles."""
    email: bool = True
    slack: bool = False

    @field_validator("email", "slack", mode="before")
    @classmethod
    def validate_flag(cls, v: Any) -> bool:
        if not isinstance(v, bool):
            fail("Invalid notification preferences format")
        return v


class TenantSettings(BaseModel):
    """Per-tenant presentation settings."""
    timezone: str = "UTC"
    dateFormat: str = "MM/DD/YYYY"
    language: str = "en-US"
    notificationPreferences: NotificationPreferences = Field(default_factory=NotificationPreferences)

    @field_validator("timezone", mode="before")
    @classmethod
    def validate_timezone(cls, v: Any) -> str:
        return matches(v, is_valid_timezone, "Invalid timezone")

    @field_validator("dateFormat", mode="before")
    @classmethod
    def validate_date_format(cls, v: Any) -> str:
        return matches(v, is_valid_date_format, "Invalid date format")

    @field_validator("language", mode="before")
    @classmethod
    def validate_language(cls, v: Any) -> str:
        return matches(v, is_valid_language, "Invalid language code")

    @field_validator("notificationPreferences", mode="before")
    @classmethod
    def validate_notification_preferences(cls, v: Any) -> Any:
        if not isinstance(v, (dict, NotificationPreferences)):
            fail("Invalid notification preferences format")
        return v


class TenantSettingsUpdate(TenantSettings):
    """Partial settings update; only the four settings keys are accepted."""
    timezone: Optional[str] = None
    dateFormat: Optional[str] = None
    language: Optional[str] = None
    notificationPreferences: Optional[NotificationPreferences] = None

    @model_validator(mode="before")
    @classmethod
    def check_keys(cls, data: Any) -> Any:
        return reject_unknown_keys(data, SETTINGS_KEYS, "Invalid settings")


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


class PrimaryContact(BaseModel):
    """Primary contact person of a tenant."""
    name: Optional[str] = None
    position: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def validate_contact_name(cls, v: Any) -> Optional[str]:
        v = clean(v)
        if v is None:
            return None
        if not isinstance(v, str) or len(v) < 2:
            fail("Contact name must be at least 2 characters")
        if len(v) > 100:
            fail("Contact name cannot exceed 100 characters")
        return v

    @field_validator("position", mode="before")
    @classmethod
    def validate_position(cls, v: Any) -> Optional[str]:
        return max_length(v, 100, "Position cannot exceed 100 characters")

    @field_validator("phone", mode="before")
    @classmethod
    def validate_phone(cls, v: Any) -> Optional[str]:
        v = clean(v)
        if v is not None and (not isinstance(v, str) or not is_valid_phone(v)):
            fail("Invalid phone number format")
        return v or None


class TenantMetadata(BaseModel):
    """Descriptive business metadata of a tenant."""
    industry: Industry
    subIndustry: Optional[str] = None
    companySize: Optional[CompanySize] = None
    region: str
    country: str
    primaryContact: Optional[PrimaryContact] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator("industry", mode="before")
    @classmethod
    def validate_industry(cls, v: Any) -> Any:
        return one_of(require(v, "industry"), Industry, "Invalid industry value")

    @field_validator("subIndustry", mode="before")
    @classmethod
    def validate_sub_industry(cls, v: Any) -> Optional[str]:
        return max_length(v, 100, "Sub-industry cannot exceed 100 characters")

    @field_validator("companySize", mode="before")
    @classmethod
    def validate_company_size(cls, v: Any) -> Any:
        if v is None:
            return None
        return one_of(v, CompanySize, "Invalid company size")

    @field_validator("region", mode="before")
    @classmethod
    def validate_region(cls, v: Any) -> str:
        v = require(v, "region")
        if not isinstance(v, str):
            fail("Invalid region value")
        return v

    @field_validator("country", mode="before")
    @classmethod
    def validate_country(cls, v: Any) -> str:
        return matches(require(v, "country"), is_valid_country, "Invalid country code").upper()

    @field_validator("primaryContact", mode="before")
    @classmethod
    def validate_primary_contact(cls, v: Any) -> Any:
        if v is not None and not isinstance(v, (dict, PrimaryContact)):
            fail("Invalid primary contact format")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v: Any) -> List[str]:
        if v is None:
            return []
        if not isinstance(v, list):
            fail("Tags must be an array")
        return [
            max_length(tag, 50, "Tag cannot exceed 50 characters", "Tags must be strings")
            for tag in v
        ]


class TenantMetadataUpdate(TenantMetadata):
    """Partial metadata update; only the seven metadata keys are accepted."""
    industry: Optional[Industry] = None
    region: Optional[str] = None
    country: Optional[str] = None
    tags: Optional[List[str]] = None

    @model_validator(mode="before")
    @classmethod
    def check_keys(cls, data: Any) -> Any:
        return reject_unknown_keys(data, METADATA_KEYS, "Invalid metadata fields")


# ---------------------------------------------------------------------------
# Tenant create / update
# ---------------------------------------------------------------------------


class TenantCreate(BaseModel):
    """Payload for creating a tenant. Unknown keys (status, history, ids) are ignored."""
    name: str
    industry: Industry
    contact_email: str
    subscription_tier: SubscriptionTier
    compliance_level: ComplianceLevel
    settings: TenantSettings = Field(default_factory=TenantSettings)
    metadata: TenantMetadata

    class Config:
        extra = "ignore"

    @field_validator("name", mode="before")
    @classmethod
    def validate_tenant_name(cls, v: Any) -> str:
        return validate_name(v)

    @field_validator("industry", mode="before")
    @classmethod
    def validate_industry(cls, v: Any) -> Any:
        return one_of(require(v, "industry"), Industry, "Invalid industry value")

    @field_validator("contact_email", mode="before")
    @classmethod
    def validate_contact_email(cls, v: Any) -> str:
        return matches(require(v, "contact_email"), is_valid_email, "Invalid email format").lower()

    @field_validator("subscription_tier", mode="before")
    @classmethod
    def validate_subscription_tier(cls, v: Any) -> Any:
        return one_of(require(v, "subscription_tier"), SubscriptionTier, "Invalid subscription tier")

    @field_validator("compliance_level", mode="before")
    @classmethod
    def validate_compliance_level(cls, v: Any) -> Any:
        return one_of(require(v, "compliance_level"), ComplianceLevel, "Invalid compliance level")

    @field_validator("settings", mode="before")
    @classmethod
    def validate_settings(cls, v: Any) -> Any:
        if v is None:
            return TenantSettings()
        if not isinstance(v, (dict, TenantSettings)):
            fail("Invalid settings format")
        return v

    @field_validator("metadata", mode="before")
    @classmethod
    def validate_metadata(cls, v: Any) -> Any:
        v = require(v, "metadata")
        if not isinstance(v, (dict, TenantMetadata)):
            fail("Invalid metadata format")
        return v


class TenantUpdate(TenantCreate):
    """Partial tenant update. Status is changed only through the status endpoints."""
    name: Optional[str] = None
    industry: Optional[Industry] = None
    contact_email: Optional[str] = None
    subscription_tier: Optional[SubscriptionTier] = None
    compliance_level: Optional[ComplianceLevel] = None
    settings: Optional[TenantSettingsUpdate] = None
    metadata: Optional[TenantMetadataUpdate] = None

    @field_validator("settings", mode="before")
    @classmethod
    def validate_settings(cls, v: Any) -> Any:
        if not isinstance(v, (dict, TenantSettingsUpdate)):
            fail("Invalid settings format")
        return v

    @field_validator("metadata", mode="before")
    @classmethod
    def validate_metadata(cls, v: Any) -> Any:
        if not isinstance(v, (dict, TenantMetadataUpdate)):
            fail("Invalid metadata format")
        return v


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class StatusHistoryEntryResponse(BaseModel):
    """One entry of the status audit trail."""
    status: TenantStatus
    reason: Optional[str] = None
    changedAt: datetime = Field(validation_alias="changed_at")
    changedBy: str = Field(validation_alias="changed_by")

    class Config:
        from_attributes = True
        populate_by_name = True


class TenantResponse(BaseModel):
    """Tenant response schema. The internal revision counter is never exposed."""
    id: str
    name: str
    industry: Industry
    contact_email: str
    subscription_tier: SubscriptionTier
    compliance_level: ComplianceLevel
    status: TenantStatus
    statusReason: Optional[str] = Field(None, validation_alias="status_reason")
    statusChangedAt: Optional[datetime] = Field(None, validation_alias="status_changed_at")
    statusHistory: List[StatusHistoryEntryResponse] = Field(
        default_factory=list, validation_alias="status_history"
    )
    settings: TenantSettings
    metadata: TenantMetadata = Field(validation_alias="tenant_metadata")
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        populate_by_name = True


class PaginationMeta(BaseModel):
    currentPage: int
    totalPages: int
    totalItems: int
    limit: int
    hasNext: bool
    hasPrev: bool


class TenantListResponse(BaseModel):
    """One page of tenants."""
    data: List[TenantResponse]
    pagination: PaginationMeta


class MessageResponse(BaseModel):
    message: str


class BulkDeleteResponse(BaseModel):
    message: str
    deletedCount: int
