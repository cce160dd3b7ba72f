"""Tenant model and its status audit trail."""
import os
import time
from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import (
    JSON, DateTime, Enum as SQLEnum, ForeignKey, Index, Integer, String, TypeDecorator,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tenant_admin.core.database import Base
from tenant_admin.core.enums import (
    ComplianceLevel, Industry, SubscriptionTier, TenantStatus, enum_values,
)


SYSTEM_ACTOR = "system"


def new_tenant_id() -> str:
    """24 hex chars: 4-byte creation time followed by 8 random bytes."""
    return f"{int(time.time()):08x}{os.urandom(8).hex()}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetimes; naive values read back (SQLite) are taken as UTC."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


def _enum_column(enum_cls, name: str) -> SQLEnum:
    return SQLEnum(enum_cls, name=name, values_callable=enum_values, native_enum=False, length=20)


class TenantStatusHistory(Base):
    """One status transition. Rows are only ever inserted."""

    __tablename__ = "tenant_status_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[str] = mapped_column(
        String(24),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    status: Mapped[TenantStatus] = mapped_column(_enum_column(TenantStatus, "tenantstatus"), nullable=False)
    reason: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    changed_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utcnow,
        nullable=False
    )
    changed_by: Mapped[str] = mapped_column(String(255), default=SYSTEM_ACTOR, nullable=False)

    tenant = relationship("Tenant", back_populates="status_history")


class Tenant(Base):
    """Tenant model representing a managed organization."""

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_tenant_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    industry: Mapped[Industry] = mapped_column(_enum_column(Industry, "industry"), nullable=False)
    contact_email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    subscription_tier: Mapped[SubscriptionTier] = mapped_column(
        _enum_column(SubscriptionTier, "subscriptiontier"), nullable=False
    )
    compliance_level: Mapped[ComplianceLevel] = mapped_column(
        _enum_column(ComplianceLevel, "compliancelevel"), nullable=False
    )
    status: Mapped[TenantStatus] = mapped_column(
        _enum_column(TenantStatus, "tenantstatus"),
        default=TenantStatus.ACTIVE,
        nullable=False,
        index=True
    )
    status_reason: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    status_changed_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utcnow,
        nullable=False
    )
    settings: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    # "metadata" is reserved on declarative classes; the column keeps the public name
    tenant_metadata: Mapped[dict[str, Any]] = mapped_column("metadata", JSON, nullable=False)
    revision: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utcnow,
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utcnow,
        onupdate=utcnow,
        nullable=False
    )

    # Relationships
    status_history: Mapped[List[TenantStatusHistory]] = relationship(
        TenantStatusHistory,
        back_populates="tenant",
        cascade="all, delete-orphan",
        order_by=TenantStatusHistory.id,
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_tenant_created_at", "created_at"),
        Index("ix_tenant_status_created_at", "status", "created_at"),
    )

    def record_status(self, status: TenantStatus, reason: Optional[str], actor: Optional[str]) -> TenantStatusHistory:
        """Move to ``status`` and append the matching history entry."""
        changed_at = utcnow()
        self.status = status
        self.status_reason = reason
        self.status_changed_at = changed_at
        entry = TenantStatusHistory(
            status=status,
            reason=reason,
            changed_at=changed_at,
            changed_by=actor or SYSTEM_ACTOR,
        )
        self.status_history.append(entry)
        return entry

    def touch(self) -> None:
        self.revision = (self.revision or 0) + 1
        self.updated_at = utcnow()

