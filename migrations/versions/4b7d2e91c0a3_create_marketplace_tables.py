"""create_marketplace_tables

Revision ID: 4b7d2e91c0a3
Revises:
Create Date: 2026-10-19 16:40:12.311052

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4b7d2e91c0a3'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, seller_profiles and sessions tables."""
    op.create_table('users',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('first_name', sa.String(length=255), nullable=True),
        sa.Column('last_name', sa.String(length=255), nullable=True),
        sa.Column('profile_image_url', sa.String(length=1024), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='buyer'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("role IN ('buyer', 'seller')", name='ck_users_role'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    op.create_table('seller_profiles',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('business_name', sa.String(length=255), nullable=False),
        sa.Column('service_category', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('contact_number', sa.String(length=20), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('service_area', sa.String(length=100), nullable=True),
        sa.Column('experience_years', sa.Integer(), nullable=False),
        sa.Column('is_verified', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('rating', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('review_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('price_range', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint(
            'experience_years >= 0 AND experience_years <= 50',
            name='ck_seller_profiles_experience_years',
        ),
        sa.CheckConstraint(
            "is_verified IN ('pending', 'verified', 'rejected')",
            name='ck_seller_profiles_is_verified',
        ),
        sa.CheckConstraint('rating >= 0 AND rating <= 50', name='ck_seller_profiles_rating'),
        sa.CheckConstraint('review_count >= 0', name='ck_seller_profiles_review_count'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index(
        'ix_seller_profiles_is_verified_created_at',
        'seller_profiles',
        ['is_verified', 'created_at'],
        unique=False,
    )

    op.create_table('sessions',
        sa.Column('sid', sa.String(length=64), nullable=False),
        sa.Column('sess', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('expire', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('sid'),
    )
    op.create_index('ix_sessions_expire', 'sessions', ['expire'], unique=False)


def downgrade() -> None:
    """Drop marketplace tables."""
    op.drop_index('ix_sessions_expire', table_name='sessions')
    op.drop_table('sessions')
    op.drop_index('ix_seller_profiles_is_verified_created_at', table_name='seller_profiles')
    op.drop_table('seller_profiles')
    op.drop_table('users')
