"""
Tenant Service

Async CRUD operations and paginated listing for Tenant entities.
All functions accept an injected AsyncSession.
"""
from typing import Any, Iterable, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import String, asc, cast, delete, desc, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tenant_admin.core.enums import Industry, SortOrder, TenantStatus
from tenant_admin.core.exceptions import ConflictError, NotFoundError, ValidationError
from tenant_admin.core.logging import get_logger
from tenant_admin.core.pagination import PageRequest
from tenant_admin.core.validation import collect_violations, validate_tenant_id
from tenant_admin.models.tenant import Tenant, TenantStatusHistory
from tenant_admin.schemas.tenant import (
    TenantCreate, TenantMetadata, TenantMetadataUpdate, TenantSettings,
    TenantSettingsUpdate, TenantUpdate,
)


logger = get_logger(__name__)

UPDATABLE_FIELDS = ("name", "industry", "contact_email", "subscription_tier", "compliance_level")


async def commit_or_conflict(db: AsyncSession) -> None:
    """Commit, translating unique-constraint violations into ConflictError."""
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning(f"Unique constraint rejected tenant write: {exc.orig}")
        raise ConflictError() from exc


def _merge(model_cls, current: Optional[dict], update, exclude_none: bool = False) -> dict:
    """Shallow-merge the supplied top-level keys over ``current`` and re-validate."""
    merged = {**(current or {}), **update.model_dump(mode="json", exclude_unset=True)}
    try:
        record = model_cls.model_validate(merged)
    except PydanticValidationError as exc:
        raise ValidationError(collect_violations(exc)) from None
    return record.model_dump(mode="json", exclude_none=exclude_none)


def merge_settings(current: Optional[dict], update: TenantSettingsUpdate) -> dict:
    return _merge(TenantSettings, current, update)


def merge_metadata(current: Optional[dict], update: TenantMetadataUpdate) -> dict:
    return _merge(TenantMetadata, current, update, exclude_none=True)


async def find_by_email(email: str, db: AsyncSession, exclude_id: Optional[str] = None) -> Optional[Tenant]:
    """Return the tenant owning ``email`` (case-insensitive), optionally ignoring one id."""
    query = select(Tenant).where(func.lower(Tenant.contact_email) == email.lower())
    if exclude_id:
        query = query.where(Tenant.id != exclude_id)
    result = await db.execute(query.limit(1))
    return result.scalar_one_or_none()


async def get_tenant(tenant_id: Any, db: AsyncSession) -> Tenant:
    """Return a Tenant by id; malformed ids and missing tenants are errors."""
    tenant_id = validate_tenant_id(tenant_id)
    tenant = await db.get(Tenant, tenant_id)
    if tenant is None:
        raise NotFoundError()
    return tenant


async def create_tenant(data: TenantCreate, db: AsyncSession, actor: Optional[str] = None) -> Tenant:
    """Create a tenant in the active state with its first history entry."""
    if await find_by_email(data.contact_email, db):
        raise ConflictError()

    tenant = Tenant(
        name=data.name,
        industry=data.industry,
        contact_email=data.contact_email,
        subscription_tier=data.subscription_tier,
        compliance_level=data.compliance_level,
        settings=data.settings.model_dump(mode="json"),
        tenant_metadata=data.metadata.model_dump(mode="json", exclude_none=True),
    )
    tenant.record_status(TenantStatus.ACTIVE, None, actor)
    db.add(tenant)
    await commit_or_conflict(db)

    logger.info(f"Tenant created: {tenant.id}", extra={"tenant_id": tenant.id, "actor_id": actor})
    return tenant


async def list_tenants(
    db: AsyncSession,
    page_request: PageRequest,
    industry: Optional[Industry] = None,
    status: Optional[TenantStatus] = None,
    search: Optional[str] = None,
) -> Tuple[List[Tenant], int]:
    """Return one page of tenants plus the total number matching the filters."""
    filters = []
    if industry:
        filters.append(Tenant.industry == industry)
    if status:
        filters.append(Tenant.status == status)
    if search:
        filters.append(or_(
            Tenant.name.icontains(search, autoescape=True),
            cast(Tenant.industry, String).icontains(search, autoescape=True),
        ))

    count_result = await db.execute(select(func.count(Tenant.id)).where(*filters))
    total = count_result.scalar() or 0

    direction = asc if page_request.sort_order == SortOrder.ASC else desc
    query = (
        select(Tenant)
        .where(*filters)
        .order_by(direction(getattr(Tenant, page_request.sort_field)), direction(Tenant.id))
        .offset(page_request.offset)
        .limit(page_request.limit)
    )
    result = await db.execute(query)
    return list(result.scalars().all()), total


async def update_tenant(tenant_id: Any, data: TenantUpdate, db: AsyncSession) -> Tenant:
    """
    Apply a partial update to a Tenant.

    Only keys present in the payload are changed; settings and metadata are
    shallow-merged over the stored records.
    """
    tenant = await get_tenant(tenant_id, db)
    supplied = data.model_fields_set
    if not supplied:
        return tenant

    if "contact_email" in supplied and data.contact_email != tenant.contact_email:
        if await find_by_email(data.contact_email, db, exclude_id=tenant.id):
            raise ConflictError()

    for field in UPDATABLE_FIELDS:
        if field in supplied:
            setattr(tenant, field, getattr(data, field))
    if "settings" in supplied:
        tenant.settings = merge_settings(tenant.settings, data.settings)
    if "metadata" in supplied:
        tenant.tenant_metadata = merge_metadata(tenant.tenant_metadata, data.metadata)

    tenant.touch()
    await commit_or_conflict(db)

    logger.info(f"Tenant updated: {tenant.id} fields={sorted(supplied)}", extra={"tenant_id": tenant.id})
    return tenant


async def delete_tenant(tenant_id: Any, db: AsyncSession) -> None:
    """Hard-delete a tenant together with its status history."""
    tenant = await get_tenant(tenant_id, db)
    await db.delete(tenant)
    await db.commit()
    logger.info(f"Tenant deleted: {tenant.id}", extra={"tenant_id": tenant.id})


async def bulk_delete_tenants(tenant_ids: Iterable[str], db: AsyncSession) -> int:
    """Delete every listed tenant that exists; returns how many were removed."""
    tenant_ids = list(tenant_ids)
    await db.execute(
        delete(TenantStatusHistory).where(TenantStatusHistory.tenant_id.in_(tenant_ids))
    )
    result = await db.execute(delete(Tenant).where(Tenant.id.in_(tenant_ids)))
    await db.commit()

    deleted_count = result.rowcount or 0
    logger.info(f"Bulk delete removed {deleted_count} of {len(tenant_ids)} tenants")
    return deleted_count
