"""Tenant management schemas: status transitions and bulk operations."""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, field_validator

from tenant_admin.core.enums import TenantStatus
from tenant_admin.core.validators import find_invalid_ids
from tenant_admin.schemas.rules import fail, max_length, one_of, require


STATUS_REASON_MAX_LENGTH = 500


class TenantIdList(BaseModel):
    """A non-empty list of well-formed tenant identifiers."""
    tenantIds: List[str]

    @field_validator("tenantIds", mode="before")
    @classmethod
    def validate_tenant_ids(cls, v: Any) -> List[str]:
        if v is None:
            fail("No tenant IDs provided", "missing")
        if not isinstance(v, list):
            fail("tenantIds must be an array")
        if not v:
            fail("tenantIds array cannot be empty")
        invalid = find_invalid_ids(v)
        if invalid:
            fail("Invalid tenant ID format: {ids}", "malformed_id", ids=", ".join(invalid), invalid_ids=invalid)
        # Ids are stored lower-case; repeated ids address the same tenant once
        return list(dict.fromkeys(tenant_id.lower() for tenant_id in v))


class StatusUpdate(BaseModel):
    """Status transition request."""
    status: TenantStatus
    reason: str

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v: Any) -> Any:
        return one_of(require(v, "status"), TenantStatus, "Invalid status value")

    @field_validator("reason", mode="before")
    @classmethod
    def validate_reason(cls, v: Any) -> str:
        return max_length(
            require(v, "reason"),
            STATUS_REASON_MAX_LENGTH,
            f"Status reason cannot exceed {STATUS_REASON_MAX_LENGTH} characters",
            "Reason for status change is required",
        )


class BulkStatusUpdate(TenantIdList, StatusUpdate):
    """Apply one status and reason to many tenants."""


class BulkDelete(TenantIdList):
    """Delete many tenants at once."""


class StatusResponse(BaseModel):
    """Current status of a tenant."""
    status: TenantStatus
    reason: Optional[str] = None
    changedAt: Optional[datetime] = None


class BulkStatusResponse(BaseModel):
    message: str
    updatedCount: int
