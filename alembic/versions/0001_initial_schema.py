"""initial schema: users, access tokens, categories, transactions

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql
from fastapi_users_db_sqlalchemy.generics import GUID, TIMESTAMPAware

# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

ENTRY_TYPE_PG = postgresql.ENUM('expense', 'income', name='entry_type')
# Created once up front; the columns only reference it
ENTRY_TYPE = sa.Enum('expense', 'income', name='entry_type').with_variant(
    postgresql.ENUM('expense', 'income', name='entry_type', create_type=False), 'postgresql'
)

def upgrade():
    ENTRY_TYPE_PG.create(op.get_bind(), checkfirst=True)

    op.create_table(
        'users',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('hashed_password', sa.String(length=1024), nullable=False),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('is_superuser', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('is_verified', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('name', sa.String(length=100), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'access_tokens',
        sa.Column('token', sa.String(length=43), primary_key=True),
        sa.Column('user_id', GUID(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', TIMESTAMPAware(timezone=True), nullable=False),
    )
    op.create_index('ix_access_tokens_created_at', 'access_tokens', ['created_at'])

    op.create_table(
        'categories',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('user_id', GUID(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('type', ENTRY_TYPE, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_categories_user_id', 'categories', ['user_id'])

    op.create_table(
        'transactions',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('user_id', GUID(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('category_id', GUID(), sa.ForeignKey('categories.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('type', ENTRY_TYPE, nullable=False),
        sa.Column('amount', sa.Float, nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('date', sa.DateTime, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_transactions_user_id', 'transactions', ['user_id'])
    op.create_index('ix_transactions_category_id', 'transactions', ['category_id'])
    op.create_index('ix_transactions_date', 'transactions', ['date'])

def downgrade():
    op.drop_table('transactions')
    op.drop_table('categories')
    op.drop_table('access_tokens')
    op.drop_table('users')
    ENTRY_TYPE_PG.drop(op.get_bind(), checkfirst=True)
