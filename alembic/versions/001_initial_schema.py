"""Tenants and tenant status history

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Tenants table
    op.create_table(
        'tenants',
        sa.Column('id', sa.String(24), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('industry', sa.String(20), nullable=False),
        sa.Column('contact_email', sa.String(255), nullable=False),
        sa.Column('subscription_tier', sa.String(20), nullable=False),
        sa.Column('compliance_level', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('status_reason', sa.String(500), nullable=True),
        sa.Column('status_changed_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('settings', sa.JSON(), nullable=False),
        sa.Column('metadata', sa.JSON(), nullable=False),
        sa.Column('revision', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id', name='pk_tenants'),
        sa.UniqueConstraint('contact_email', name='uq_tenants_contact_email'),
    )
    op.create_index('ix_tenants_name', 'tenants', ['name'])
    op.create_index('ix_tenants_status', 'tenants', ['status'])
    op.create_index('ix_tenant_created_at', 'tenants', ['created_at'])
    op.create_index('ix_tenant_status_created_at', 'tenants', ['status', 'created_at'])

    # Status history table (append-only)
    op.create_table(
        'tenant_status_history',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tenant_id', sa.String(24), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('reason', sa.String(500), nullable=True),
        sa.Column('changed_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('changed_by', sa.String(255), nullable=False, server_default='system'),
        sa.PrimaryKeyConstraint('id', name='pk_tenant_status_history'),
        sa.ForeignKeyConstraint(
            ['tenant_id'], ['tenants.id'],
            name='fk_tenant_status_history_tenant_id_tenants',
            ondelete='CASCADE',
        ),
    )
    op.create_index('ix_tenant_status_history_tenant_id', 'tenant_status_history', ['tenant_id'])


def downgrade() -> None:
    op.drop_index('ix_tenant_status_history_tenant_id', table_name='tenant_status_history')
    op.drop_table('tenant_status_history')

    op.drop_index('ix_tenant_status_created_at', table_name='tenants')
    op.drop_index('ix_tenant_created_at', table_name='tenants')
    op.drop_index('ix_tenants_status', table_name='tenants')
    op.drop_index('ix_tenants_name', table_name='tenants')
    op.drop_table('tenants')
