"""Tenant management endpoints: status, history, settings, metadata and bulk status."""
from typing import Any, List

from fastapi import APIRouter, Body

from tenant_admin.core.dependencies import Admin, DbSession, Reader, SessionFactory, Writer
from tenant_admin.core.validation import validate_payload
from tenant_admin.schemas.management import (
    BulkStatusResponse, BulkStatusUpdate, StatusResponse, StatusUpdate,
)
from tenant_admin.schemas.tenant import (
    StatusHistoryEntryResponse, TenantMetadata, TenantMetadataUpdate,
    TenantSettings, TenantSettingsUpdate,
)
from tenant_admin.services import tenant_management_service


router = APIRouter()


@router.post("/bulk/status", response_model=BulkStatusResponse)
async def bulk_update_status(
    principal: Admin,
    session_factory: SessionFactory,
    payload: Any = Body(None),
):
    """Apply one status to many tenants. Unknown ids are skipped, not reported."""
    data: BulkStatusUpdate = validate_payload("bulk_update_status", payload)
    updated_count = await tenant_management_service.bulk_update_status(
        data.tenantIds, data.status, data.reason, session_factory, actor=principal.id
    )
    return BulkStatusResponse(
        message=f"Successfully updated {updated_count} tenants",
        updatedCount=updated_count,
    )


@router.put("/{tenant_id}/status", response_model=StatusResponse)
async def update_tenant_status(
    tenant_id: str,
    principal: Writer,
    db: DbSession,
    payload: Any = Body(None),
):
    data: StatusUpdate = validate_payload("update_tenant_status", payload)
    return await tenant_management_service.update_tenant_status(
        tenant_id, data.status, data.reason, db, actor=principal.id
    )


@router.get("/{tenant_id}/status", response_model=StatusResponse)
async def get_tenant_status(
    tenant_id: str,
    principal: Reader,
    db: DbSession,
):
    return await tenant_management_service.get_tenant_status(tenant_id, db)


@router.get("/{tenant_id}/status/history", response_model=List[StatusHistoryEntryResponse])
async def get_status_history(
    tenant_id: str,
    principal: Reader,
    db: DbSession,
):
    """Full status history, oldest first."""
    history = await tenant_management_service.get_status_history(tenant_id, db)
    return [StatusHistoryEntryResponse.model_validate(entry) for entry in history]


@router.put("/{tenant_id}/settings", response_model=TenantSettings)
async def update_tenant_settings(
    tenant_id: str,
    principal: Writer,
    db: DbSession,
    payload: Any = Body(None),
):
    """Shallow-merge the supplied settings keys and return the stored settings."""
    data: TenantSettingsUpdate = validate_payload("update_tenant_settings", payload)
    return await tenant_management_service.update_tenant_settings(tenant_id, data, db)


@router.get("/{tenant_id}/settings", response_model=TenantSettings)
async def get_tenant_settings(
    tenant_id: str,
    principal: Reader,
    db: DbSession,
):
    return await tenant_management_service.get_tenant_settings(tenant_id, db)


@router.put("/{tenant_id}/metadata", response_model=TenantMetadata, response_model_exclude_none=True)
async def update_tenant_metadata(
    tenant_id: str,
    principal: Writer,
    db: DbSession,
    payload: Any = Body(None),
):
    """Shallow-merge the supplied metadata keys and return the stored metadata."""
    data: TenantMetadataUpdate = validate_payload("update_tenant_metadata", payload)
    return await tenant_management_service.update_tenant_metadata(tenant_id, data, db)


@router.get("/{tenant_id}/metadata", response_model=TenantMetadata, response_model_exclude_none=True)
async def get_tenant_metadata(
    tenant_id: str,
    principal: Reader,
    db: DbSession,
):
    return await tenant_management_service.get_tenant_metadata(tenant_id, db)
