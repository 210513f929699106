"""initial crm tables

Revision ID: 3c7e1a9d2b41
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c7e1a9d2b41'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', sa.String(50), nullable=False, server_default='user'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('phone', sa.String(50)),
        sa.Column('company', sa.String(255)),
        sa.Column('profile_image', sa.String()),
        sa.Column('last_login', sa.DateTime()),
        *_timestamps(),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='available'),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('address', sa.JSON(), nullable=False),
        sa.Column('features', sa.JSON()),
        sa.Column('amenities', sa.JSON(), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('owner', sa.JSON()),
        sa.Column('agent_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('views', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('favorites', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('listing_date', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('last_updated', sa.DateTime(), server_default=sa.func.now()),
        *_timestamps(),
    )
    op.create_index('ix_properties_id', 'properties', ['id'])
    op.create_index('ix_properties_type', 'properties', ['type'])
    op.create_index('ix_properties_status', 'properties', ['status'])
    op.create_index('ix_properties_price', 'properties', ['price'])
    op.create_index('ix_properties_agent_id', 'properties', ['agent_id'])

    op.create_table(
        'clients',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50)),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('source', sa.String(30), nullable=False, server_default='website'),
        sa.Column('preferences', sa.JSON()),
        sa.Column('notes', sa.JSON(), nullable=False),
        sa.Column('documents', sa.JSON(), nullable=False),
        sa.Column('assigned_agent_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('last_contact', sa.DateTime(), server_default=sa.func.now()),
        *_timestamps(),
    )
    op.create_index('ix_clients_id', 'clients', ['id'])
    op.create_index('ix_clients_name', 'clients', ['name'])
    op.create_index('ix_clients_email', 'clients', ['email'], unique=True)
    op.create_index('ix_clients_type', 'clients', ['type'])
    op.create_index('ix_clients_status', 'clients', ['status'])
    op.create_index('ix_clients_assigned_agent_id', 'clients', ['assigned_agent_id'])

    op.create_table(
        'client_properties',
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('clients.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('property_id', sa.Integer(), sa.ForeignKey('properties.id', ondelete='CASCADE'), primary_key=True),
    )

    op.create_table(
        'leads',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50)),
        sa.Column('source', sa.String(30), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='new'),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('preferences', sa.JSON()),
        sa.Column('notes', sa.JSON(), nullable=False),
        sa.Column('assigned_agent_id', sa.Integer(), sa.ForeignKey('users.id')),
        sa.Column('follow_up_date', sa.DateTime()),
        sa.Column('last_contact', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('conversion_date', sa.DateTime()),
        sa.Column('converted_to_id', sa.Integer(), sa.ForeignKey('clients.id', ondelete='RESTRICT')),
        *_timestamps(),
    )
    op.create_index('ix_leads_id', 'leads', ['id'])
    op.create_index('ix_leads_name', 'leads', ['name'])
    op.create_index('ix_leads_email', 'leads', ['email'])
    op.create_index('ix_leads_status', 'leads', ['status'])
    op.create_index('ix_leads_assigned_agent_id', 'leads', ['assigned_agent_id'])
    op.create_index('ix_leads_follow_up_date', 'leads', ['follow_up_date'])


def downgrade() -> None:
    op.drop_table('leads')
    op.drop_table('client_properties')
    op.drop_table('clients')
    op.drop_table('properties')
    op.drop_table('users')
