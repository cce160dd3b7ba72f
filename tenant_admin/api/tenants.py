"""Tenant API endpoints: create, list, fetch, update and delete."""
from typing import Any, Optional

from fastapi import APIRouter, Body, Query, status

from tenant_admin.core.dependencies import Admin, DbSession, Reader, Writer
from tenant_admin.core.enums import Industry, TenantStatus
from tenant_admin.core.pagination import PageRequest, build_pagination
from tenant_admin.core.validation import validate_payload
from tenant_admin.schemas.management import BulkDelete
from tenant_admin.schemas.tenant import (
    BulkDeleteResponse, MessageResponse, TenantCreate, TenantListResponse,
    TenantResponse, TenantUpdate,
)
from tenant_admin.services import tenant_service


router = APIRouter()


@router.post("", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
async def create_tenant(
    principal: Writer,
    db: DbSession,
    payload: Any = Body(None),
):
    """Create a tenant. New tenants always start active."""
    data: TenantCreate = validate_payload("create_tenant", payload)
    tenant = await tenant_service.create_tenant(data, db, actor=principal.id)
    return TenantResponse.model_validate(tenant)


@router.get("", response_model=TenantListResponse)
async def list_tenants(
    principal: Reader,
    db: DbSession,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    industry: Optional[Industry] = Query(None),
    status_filter: Optional[TenantStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    order: Optional[str] = Query(None),
):
    """List tenants with filtering, search, sorting and pagination."""
    page_request = PageRequest.from_query(page, limit, sort_by, order)
    tenants, total = await tenant_service.list_tenants(
        db,
        page_request,
        industry=industry,
        status=status_filter,
        search=search.strip() if search else None,
    )
    return TenantListResponse(
        data=[TenantResponse.model_validate(tenant) for tenant in tenants],
        pagination=build_pagination(page_request, total),
    )


@router.post("/bulk/delete", response_model=BulkDeleteResponse)
async def bulk_delete_tenants(
    principal: Admin,
    db: DbSession,
    payload: Any = Body(None),
):
    """Delete every listed tenant; unknown ids are ignored."""
    data: BulkDelete = validate_payload("bulk_delete_tenants", payload)
    deleted_count = await tenant_service.bulk_delete_tenants(data.tenantIds, db)
    return BulkDeleteResponse(message="Tenants deleted successfully", deletedCount=deleted_count)


@router.get("/{tenant_id}", response_model=TenantResponse)
async def get_tenant(
    tenant_id: str,
    principal: Reader,
    db: DbSession,
):
    tenant = await tenant_service.get_tenant(tenant_id, db)
    return TenantResponse.model_validate(tenant)


@router.put("/{tenant_id}", response_model=TenantResponse)
async def update_tenant(
    tenant_id: str,
    principal: Writer,
    db: DbSession,
    payload: Any = Body(None),
):
    """Partially update a tenant. Status changes go through the status endpoint."""
    data: TenantUpdate = validate_payload("update_tenant", payload)
    tenant = await tenant_service.update_tenant(tenant_id, data, db)
    return TenantResponse.model_validate(tenant)


@router.delete("/{tenant_id}", response_model=MessageResponse)
async def delete_tenant(
    tenant_id: str,
    principal: Admin,
    db: DbSession,
):
    await tenant_service.delete_tenant(tenant_id, db)
    return MessageResponse(message="Tenant deleted successfully")
