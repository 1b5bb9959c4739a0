"""initial procurement schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Shared by several tables; created once up front
role_enum = postgresql.ENUM('ADMIN', 'ACCOUNTANT', 'VIEWER', name='role', create_type=False)
record_status_enum = postgresql.ENUM('ACTIVE', 'INACTIVE', name='recordstatus', create_type=False)
charge_type_enum = postgresql.ENUM(
    'FREIGHT', 'PACKING', 'CUSTOM_DUTIES', 'OTHER', name='chargetype', create_type=False
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
    ]


def _author_stamps() -> list[sa.Column]:
    return [
        sa.Column('created_by', sa.Uuid(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('updated_by', sa.Uuid(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
    ]


def _corporation(nullable: bool = False) -> sa.Column:
    return sa.Column(
        'corporation_uuid',
        sa.Uuid(),
        sa.ForeignKey('corporations.uuid', ondelete='CASCADE'),
        nullable=nullable,
    )


def upgrade() -> None:
    bind = op.get_bind()
    role_enum.create(bind, checkfirst=True)
    record_status_enum.create(bind, checkfirst=True)
    charge_type_enum.create(bind, checkfirst=True)

    # Auth
    op.create_table('users',
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('email', sa.String(length=255), nullable=False),
    sa.Column('hashed_password', sa.String(length=255), nullable=False),
    sa.Column('full_name', sa.String(length=255), nullable=False),
    sa.Column('role', role_enum, nullable=False),
    sa.Column('is_active', sa.Boolean(), nullable=False),
    *_timestamps(),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('refresh_tokens',
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('user_id', sa.Uuid(), nullable=False),
    sa.Column('token_hash', sa.String(length=255), nullable=False),
    sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
    sa.Column('revoked', sa.Boolean(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
    sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('token_hash')
    )
    op.create_table('password_reset_tokens',
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('user_id', sa.Uuid(), nullable=False),
    sa.Column('token_hash', sa.String(length=255), nullable=False),
    sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
    sa.Column('used', sa.Boolean(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
    sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('token_hash')
    )

    # Corporations
    op.create_table('corporations',
    sa.Column('uuid', sa.Uuid(), nullable=False),
    sa.Column('corporation_name', sa.String(length=255), nullable=False),
    sa.Column('legal_name', sa.String(length=255), nullable=True),
    sa.Column('country', sa.String(length=100), nullable=True),
    sa.Column('is_active', sa.Boolean(), nullable=False),
    sa.Column('created_by', sa.Uuid(), nullable=True),
    *_timestamps(),
    sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('uuid'),
    sa.UniqueConstraint('corporation_name')
    )
    op.create_table('corporation_members',
    sa.Column('corporation_uuid', sa.Uuid(), nullable=False),
    sa.Column('user_id', sa.Uuid(), nullable=False),
    sa.ForeignKeyConstraint(['corporation_uuid'], ['corporations.uuid'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('corporation_uuid', 'user_id')
    )

    # Purchasing masters
    op.create_table('charges',
    sa.Column('uuid', sa.Uuid(), nullable=False),
    _corporation(nullable=True),
    sa.Column('charge_name', sa.String(length=255), nullable=False),
    sa.Column('charge_type', charge_type_enum, nullable=False),
    sa.Column('status', record_status_enum, nullable=False),
    *_timestamps(),
    *_author_stamps(),
    sa.PrimaryKeyConstraint('uuid'),
    sa.UniqueConstraint('corporation_uuid', 'charge_name', 'charge_type')
    )
    op.create_index('ix_charges_corporation_uuid', 'charges', ['corporation_uuid'])
    op.create_index(
        'uq_charges_global_name_type', 'charges', ['charge_name', 'charge_type'], unique=True,
        sqlite_where=sa.text('corporation_uuid IS NULL'),
        postgresql_where=sa.text('corporation_uuid IS NULL'),
    )

    op.create_table('sales_taxes',
    sa.Column('uuid', sa.Uuid(), nullable=False),
    _corporation(nullable=True),
    sa.Column('tax_name', sa.String(length=255), nullable=False),
    sa.Column('tax_percentage', sa.Float(), nullable=False),
    sa.Column('status', record_status_enum, nullable=False),
    *_timestamps(),
    *_author_stamps(),
    sa.PrimaryKeyConstraint('uuid'),
    sa.UniqueConstraint('corporation_uuid', 'tax_name')
    )
    op.create_index('ix_sales_taxes_corporation_uuid', 'sales_taxes', ['corporation_uuid'])
    op.create_index(
        'uq_sales_taxes_global_name', 'sales_taxes', ['tax_name'], unique=True,
        sqlite_where=sa.text('corporation_uuid IS NULL'),
        postgresql_where=sa.text('corporation_uuid IS NULL'),
    )

    op.create_table('units_of_measure',
    sa.Column('uuid', sa.Uuid(), nullable=False),
    _corporation(),
    sa.Column('uom_name', sa.String(length=100), nullable=False),
    sa.Column('short_name', sa.String(length=20), nullable=False),
    sa.Column('status', record_status_enum, nullable=False),
    *_timestamps(),
    *_author_stamps(),
    sa.PrimaryKeyConstraint('uuid'),
    sa.UniqueConstraint('corporation_uuid', 'uom_name'),
    sa.UniqueConstraint('corporation_uuid', 'short_name')
    )
    op.create_index('ix_units_of_measure_corporation_uuid', 'units_of_measure', ['corporation_uuid'])

    op.create_table('ship_via',
    sa.Column('uuid', sa.Uuid(), nullable=False),
    sa.Column('ship_via', sa.String(length=255), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('active', sa.Boolean(), nullable=False),
    *_timestamps(),
    *_author_stamps(),
    sa.PrimaryKeyConstraint('uuid'),
    sa.UniqueConstraint('ship_via')
    )

    op.create_table('po_instructions',
    sa.Column('uuid', sa.Uuid(), nullable=False),
    _corporation(),
    sa.Column('po_instruction_name', sa.String(length=255), nullable=False),
    sa.Column('instruction', sa.Text(), nullable=False),
    sa.Column('status', record_status_enum, nullable=False),
    *_timestamps(),
    *_author_stamps(),
    sa.PrimaryKeyConstraint('uuid'),
    sa.UniqueConstraint('corporation_uuid', 'po_instruction_name')
    )
    op.create_index('ix_po_instructions_corporation_uuid', 'po_instructions', ['corporation_uuid'])

    op.create_table('terms_and_conditions',
    sa.Column('uuid', sa.Uuid(), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('content', sa.Text(), nullable=False),
    sa.Column('is_active', sa.Boolean(), nullable=False),
    *_timestamps(),
    *_author_stamps(),
    sa.PrimaryKeyConstraint('uuid'),
    sa.UniqueConstraint('name')
    )

    op.create_table('service_types',
    sa.Column('uuid', sa.Uuid(), nullable=False),
    _corporation(),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('is_active', sa.Boolean(), nullable=False),
    *_timestamps(),
    *_author_stamps(),
    sa.PrimaryKeyConstraint('uuid'),
    sa.UniqueConstraint('corporation_uuid', 'name')
    )
    op.create_index('ix_service_types_corporation_uuid', 'service_types', ['corporation_uuid'])

    op.create_table('locations',
    sa.Column('uuid', sa.Uuid(), nullable=False),
    sa.Column('location_name', sa.String(length=255), nullable=False),
    sa.Column('address_line1', sa.String(length=255), nullable=False),
    sa.Column('address_line2', sa.String(length=255), nullable=True),
    sa.Column('city', sa.String(length=100), nullable=True),
    sa.Column('state', sa.String(length=100), nullable=True),
    sa.Column('zip', sa.String(length=20), nullable=True),
    sa.Column('country', sa.String(length=100), nullable=True),
    sa.Column('active', sa.Boolean(), nullable=False),
    *_timestamps(),
    *_author_stamps(),
    sa.PrimaryKeyConstraint('uuid'),
    sa.UniqueConstraint('location_name')
    )

    # Projects and item types
    op.create_table('project_types',
    sa.Column('uuid', sa.Uuid(), nullable=False),
    _corporation(),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('short_name', sa.String(length=50), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('is_active', sa.Boolean(), nullable=False),
    *_timestamps(),
    *_author_stamps(),
    sa.PrimaryKeyConstraint('uuid'),
    sa.UniqueConstraint('corporation_uuid', 'name')
    )
    op.create_index('ix_project_types_corporation_uuid', 'project_types', ['corporation_uuid'])

    op.create_table('projects',
    sa.Column('uuid', sa.Uuid(), nullable=False),
    _corporation(),
    sa.Column('project_name', sa.String(length=255), nullable=False),
    sa.Column('project_id', sa.String(length=100), nullable=False),
    sa.Column('project_type_uuid', sa.Uuid(), nullable=True),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('is_active', sa.Boolean(), nullable=False),
    *_timestamps(),
    *_author_stamps(),
    sa.ForeignKeyConstraint(['project_type_uuid'], ['project_types.uuid'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('uuid'),
    sa.UniqueConstraint('corporation_uuid', 'project_id')
    )
    op.create_index('ix_projects_corporation_uuid', 'projects', ['corporation_uuid'])

    op.create_table('item_types',
    sa.Column('uuid', sa.Uuid(), nullable=False),
    _corporation(),
    sa.Column('project_uuid', sa.Uuid(), nullable=False),
    sa.Column('item_type', sa.String(length=255), nullable=False),
    sa.Column('short_name', sa.String(length=50), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('is_active', sa.Boolean(), nullable=False),
    *_timestamps(),
    *_author_stamps(),
    sa.ForeignKeyConstraint(['project_uuid'], ['projects.uuid'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('uuid'),
    sa.UniqueConstraint('corporation_uuid', 'project_uuid', 'item_type'),
    sa.UniqueConstraint('corporation_uuid', 'project_uuid', 'short_name')
    )
    op.create_index('ix_item_types_corporation_uuid', 'item_types', ['corporation_uuid'])
    op.create_index('ix_item_types_project_uuid', 'item_types', ['project_uuid'])

    op.create_table('item_type_usages',
    sa.Column('item_type_uuid', sa.Uuid(), nullable=False),
    sa.Column('project_uuid', sa.Uuid(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    sa.ForeignKeyConstraint(['item_type_uuid'], ['item_types.uuid'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['project_uuid'], ['projects.uuid'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('item_type_uuid', 'project_uuid')
    )

    # Cost codes
    op.create_table('cost_code_divisions',
    sa.Column('uuid', sa.Uuid(), nullable=False),
    _corporation(),
    sa.Column('division_number', sa.String(length=50), nullable=False),
    sa.Column('division_name', sa.String(length=255), nullable=False),
    sa.Column('division_order', sa.Integer(), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('is_active', sa.Boolean(), nullable=False),
    sa.Column('exclude_in_estimates_and_reports', sa.Boolean(), nullable=False),
    *_timestamps(),
    *_author_stamps(),
    sa.PrimaryKeyConstraint('uuid'),
    sa.UniqueConstraint('corporation_uuid', 'division_number')
    )
    op.create_index('ix_cost_code_divisions_corporation_uuid', 'cost_code_divisions', ['corporation_uuid'])

    op.create_table('cost_code_configurations',
    sa.Column('uuid', sa.Uuid(), nullable=False),
    _corporation(),
    sa.Column('division_uuid', sa.Uuid(), nullable=True),
    sa.Column('parent_cost_code_uuid', sa.Uuid(), nullable=True),
    sa.Column('cost_code_number', sa.String(length=50), nullable=False),
    sa.Column('cost_code_name', sa.String(length=255), nullable=False),
    sa.Column('order', sa.Integer(), nullable=True),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('is_active', sa.Boolean(), nullable=False),
    *_timestamps(),
    *_author_stamps(),
    sa.ForeignKeyConstraint(['division_uuid'], ['cost_code_divisions.uuid']),
    sa.ForeignKeyConstraint(['parent_cost_code_uuid'], ['cost_code_configurations.uuid'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('uuid'),
    sa.UniqueConstraint('corporation_uuid', 'cost_code_number')
    )
    op.create_index('ix_cost_code_configurations_corporation_uuid', 'cost_code_configurations', ['corporation_uuid'])
    op.create_index('ix_cost_code_configurations_division_uuid', 'cost_code_configurations', ['division_uuid'])

    op.create_table('cost_code_preferred_items',
    sa.Column('uuid', sa.Uuid(), nullable=False),
    sa.Column('cost_code_configuration_uuid', sa.Uuid(), nullable=False),
    sa.Column('item_name', sa.String(length=255), nullable=False),
    sa.Column('unit_price', sa.Float(), nullable=False),
    sa.Column('uom_uuid', sa.Uuid(), nullable=True),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('position', sa.Integer(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    sa.ForeignKeyConstraint(['cost_code_configuration_uuid'], ['cost_code_configurations.uuid'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['uom_uuid'], ['units_of_measure.uuid'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('uuid')
    )
    op.create_index('ix_cost_code_preferred_items_cost_code_configuration_uuid', 'cost_code_preferred_items', ['cost_code_configuration_uuid'])

    # Audit trail
    op.create_table('audit_logs',
    sa.Column('uuid', sa.Uuid(), nullable=False),
    _corporation(),
    sa.Column('entity_type', sa.String(length=100), nullable=False),
    sa.Column('entity_id', sa.String(length=100), nullable=False),
    sa.Column('action', sa.String(length=50), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('changes', sa.JSON(), nullable=True),
    sa.Column('performed_by', sa.Uuid(), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    sa.ForeignKeyConstraint(['performed_by'], ['users.id'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('uuid')
    )
    op.create_index('ix_audit_logs_corporation_uuid', 'audit_logs', ['corporation_uuid'])
    op.create_index('ix_audit_logs_entity', 'audit_logs', ['entity_type', 'entity_id'])
    op.create_index('ix_audit_logs_created_at', 'audit_logs', ['created_at'])


def downgrade() -> None:
    for table in (
        'audit_logs',
        'cost_code_preferred_items',
        'cost_code_configurations',
        'cost_code_divisions',
        'item_type_usages',
        'item_types',
        'projects',
        'project_types',
        'locations',
        'service_types',
        'terms_and_conditions',
        'po_instructions',
        'ship_via',
        'units_of_measure',
        'sales_taxes',
        'charges',
        'corporation_members',
        'corporations',
        'password_reset_tokens',
        'refresh_tokens',
        'users',
    ):
        op.drop_table(table)

    bind = op.get_bind()
    charge_type_enum.drop(bind, checkfirst=True)
    record_status_enum.drop(bind, checkfirst=True)
    role_enum.drop(bind, checkfirst=True)
