"""SQLAlchemy models."""
from tenant_admin.models.tenant import Tenant, TenantStatusHistory

__all__ = ["Tenant", "TenantStatusHistory"]
