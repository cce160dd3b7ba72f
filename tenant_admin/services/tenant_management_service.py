"""
Tenant Management Service

Status transitions with their audit trail, partial settings/metadata updates
and bulk status changes. Every operation checks that the database is reachable
before touching a tenant so an outage is never reported as a missing tenant.
"""
import asyncio
from typing import Any, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenant_admin.core.database import check_connection
from tenant_admin.core.enums import TenantStatus
from tenant_admin.core.logging import get_logger
from tenant_admin.models.tenant import Tenant, TenantStatusHistory
from tenant_admin.schemas.tenant import TenantMetadataUpdate, TenantSettingsUpdate
from tenant_admin.services.tenant_service import get_tenant, merge_metadata, merge_settings


logger = get_logger(__name__)


def status_snapshot(tenant: Tenant) -> dict:
    return {
        "status": tenant.status,
        "reason": tenant.status_reason,
        "changedAt": tenant.status_changed_at,
    }


async def update_tenant_status(
    tenant_id: Any,
    status: TenantStatus,
    reason: str,
    db: AsyncSession,
    actor: Optional[str] = None,
) -> dict:
    """
    Move a tenant to ``status`` and append one history entry.

    Any state may follow any other, including itself. Concurrent transitions
    are last-write-wins on the current status; history rows are independent
    inserts so none of them is lost.
    """
    await check_connection(db)
    tenant = await get_tenant(tenant_id, db)

    previous = tenant.status
    tenant.record_status(status, reason, actor)
    tenant.touch()
    await db.commit()

    logger.info(
        f"Tenant {tenant.id} status changed: {previous.value} -> {status.value}",
        extra={"tenant_id": tenant.id, "actor_id": actor},
    )
    return status_snapshot(tenant)


async def get_tenant_status(tenant_id: Any, db: AsyncSession) -> dict:
    await check_connection(db)
    tenant = await get_tenant(tenant_id, db)
    return status_snapshot(tenant)


async def get_status_history(tenant_id: Any, db: AsyncSession) -> List[TenantStatusHistory]:
    """Return the full status history, oldest first."""
    await check_connection(db)
    tenant = await get_tenant(tenant_id, db)
    return list(tenant.status_history)


async def _apply_status(
    session_factory: async_sessionmaker[AsyncSession],
    tenant_id: str,
    status: TenantStatus,
    reason: str,
    actor: Optional[str],
) -> bool:
    async with session_factory() as db:
        tenant = await db.get(Tenant, tenant_id)
        if tenant is None:
            return False
        tenant.record_status(status, reason, actor)
        tenant.touch()
        await db.commit()
        return True


async def bulk_update_status(
    tenant_ids: Sequence[str],
    status: TenantStatus,
    reason: str,
    session_factory: async_sessionmaker[AsyncSession],
    actor: Optional[str] = None,
) -> int:
    """
    Apply one status and reason to every listed tenant.

    Each tenant is written in its own session, concurrently. Ids with no
    matching tenant are skipped and a failure on one tenant does not undo the
    others; the return value counts only tenants that were actually changed.
    """
    async with session_factory() as db:
        await check_connection(db)

    results = await asyncio.gather(
        *(_apply_status(session_factory, tenant_id, status, reason, actor) for tenant_id in tenant_ids),
        return_exceptions=True,
    )

    updated_count = 0
    skipped = []
    for tenant_id, result in zip(tenant_ids, results):
        if isinstance(result, Exception):
            logger.error(f"Bulk status update failed for tenant {tenant_id}: {result}", extra={"tenant_id": tenant_id})
        elif result:
            updated_count += 1
        else:
            skipped.append(tenant_id)

    if skipped:
        logger.info(f"Bulk status update skipped unknown tenants: {', '.join(skipped)}")
    logger.info(
        f"Bulk status update to {status.value}: {updated_count} of {len(tenant_ids)} tenants",
        extra={"actor_id": actor},
    )
    return updated_count


async def update_tenant_settings(tenant_id: Any, data: TenantSettingsUpdate, db: AsyncSession) -> dict:
    """Shallow-merge the supplied settings keys; returns the stored settings."""
    await check_connection(db)
    tenant = await get_tenant(tenant_id, db)
    if not data.model_fields_set:
        return tenant.settings

    tenant.settings = merge_settings(tenant.settings, data)
    tenant.touch()
    await db.commit()

    logger.info(f"Tenant {tenant.id} settings updated: {sorted(data.model_fields_set)}", extra={"tenant_id": tenant.id})
    return tenant.settings


async def get_tenant_settings(tenant_id: Any, db: AsyncSession) -> dict:
    await check_connection(db)
    tenant = await get_tenant(tenant_id, db)
    return tenant.settings


async def update_tenant_metadata(tenant_id: Any, data: TenantMetadataUpdate, db: AsyncSession) -> dict:
    """Shallow-merge the supplied metadata keys; returns the stored metadata."""
    await check_connection(db)
    tenant = await get_tenant(tenant_id, db)
    if not data.model_fields_set:
        return tenant.tenant_metadata

    tenant.tenant_metadata = merge_metadata(tenant.tenant_metadata, data)
    tenant.touch()
    await db.commit()

    logger.info(f"Tenant {tenant.id} metadata updated: {sorted(data.model_fields_set)}", extra={"tenant_id": tenant.id})
    return tenant.tenant_metadata


async def get_tenant_metadata(tenant_id: Any, db: AsyncSession) -> dict:
    await check_connection(db)
    tenant = await get_tenant(tenant_id, db)
    return tenant.tenant_metadata
