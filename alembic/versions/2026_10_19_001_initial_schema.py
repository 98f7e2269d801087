"""Initial schema: companies, users, app_accounts

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '001_initial_schema'
down_revision = None

IN_USE_EXTENSION = "status <> 'deleted' AND extension IS NOT NULL"


def upgrade():
    # Create companies table
    op.create_table(
        'companies',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.current_timestamp()),
    )
    op.create_index('ix_companies_name', 'companies', ['name'])

    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('company_id', sa.Uuid(), sa.ForeignKey('companies.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('extension', sa.String(64), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('outbound_caller_id', sa.String(64), nullable=True),
        sa.Column('did', sa.String(64), nullable=True),
        sa.Column(
            'status',
            sa.Enum('active', 'pending', 'deleted', name='user_status', native_enum=False, length=16),
            nullable=False,
            server_default='active',
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.current_timestamp()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_company_id', 'users', ['company_id'])
    op.create_index('ix_users_extension', 'users', ['extension'])
    op.create_index('ix_users_status', 'users', ['status'])

    # One live holder per extension per company
    op.create_index(
        'uq_users_company_extension_in_use',
        'users',
        ['company_id', 'extension'],
        unique=True,
        postgresql_where=sa.text(IN_USE_EXTENSION),
        sqlite_where=sa.text(IN_USE_EXTENSION),
    )

    # Create app_accounts table
    op.create_table(
        'app_accounts',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=True, unique=True),
        sa.Column('company_id', sa.Uuid(), sa.ForeignKey('companies.id'), nullable=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('role', sa.Enum('ADMIN', 'EDITOR', name='accountrole'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.current_timestamp()),
    )
    op.create_index('ix_app_accounts_company_id', 'app_accounts', ['company_id'])
    op.create_index('ix_app_accounts_email', 'app_accounts', ['email'])
    op.create_index('ix_app_accounts_created_at', 'app_accounts', ['created_at'])


def downgrade():
    op.drop_index('ix_app_accounts_created_at', 'app_accounts')
    op.drop_index('ix_app_accounts_email', 'app_accounts')
    op.drop_index('ix_app_accounts_company_id', 'app_accounts')
    op.drop_table('app_accounts')

    op.drop_index('uq_users_company_extension_in_use', 'users')
    op.drop_index('ix_users_status', 'users')
    op.drop_index('ix_users_extension', 'users')
    op.drop_index('ix_users_company_id', 'users')
    op.drop_table('users')

    op.drop_index('ix_companies_name', 'companies')
    op.drop_table('companies')

    if op.get_bind().dialect.name == 'postgresql':
        op.execute('DROP TYPE IF EXISTS accountrole')
