"""API router."""
from fastapi import APIRouter

from tenant_admin.api.tenant_management import router as tenant_management_router
from tenant_admin.api.tenants import router as tenants_router


router = APIRouter()

# Management routes first so /tenants/bulk/... is never read as a tenant id
router.include_router(tenant_management_router, prefix="/tenants", tags=["Tenant Management"])
router.include_router(tenants_router, prefix="/tenants", tags=["Tenants"])
