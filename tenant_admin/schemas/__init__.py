"""Pydantic schemas."""
from tenant_admin.schemas.tenant import (
    TenantSettings, TenantSettingsUpdate, TenantMetadata, TenantMetadataUpdate,
    TenantCreate, TenantUpdate, TenantResponse, TenantListResponse,
    StatusHistoryEntryResponse, MessageResponse, BulkDeleteResponse,
)
from tenant_admin.schemas.management import (
    StatusUpdate, BulkStatusUpdate, BulkDelete, StatusResponse, BulkStatusResponse,
)

__all__ = [
    "TenantSettings", "TenantSettingsUpdate", "TenantMetadata", "TenantMetadataUpdate",
    "TenantCreate", "TenantUpdate", "TenantResponse", "TenantListResponse",
    "StatusHistoryEntryResponse", "MessageResponse", "BulkDeleteResponse",
    "StatusUpdate", "BulkStatusUpdate", "BulkDelete", "StatusResponse", "BulkStatusResponse",
]
