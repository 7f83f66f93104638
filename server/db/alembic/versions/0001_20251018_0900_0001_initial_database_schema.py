"""Initial database schema

Revision ID: 0001
Revises:
Create Date: 2025-10-18 09:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade database schema."""
    # Create users table
    op.create_table('users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=100), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('user_type', sa.String(length=20), nullable=False),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint("user_type IN ('tourist', 'guide')", name='ck_user_type_valid'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    # Create tours table
    op.create_table('tours',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('guide_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('location', sa.String(length=200), nullable=False),
        sa.Column('duration', sa.String(length=50), nullable=False),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('base_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('max_people', sa.Integer(), nullable=False),
        sa.Column('extra_person_price', sa.Numeric(precision=10, scale=2), server_default='0', nullable=False),
        sa.Column('rating', sa.Numeric(precision=3, scale=2), server_default='5.0', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('base_price >= 0', name='ck_tour_base_price_non_negative'),
        sa.CheckConstraint('max_people > 0', name='ck_tour_max_people_positive'),
        sa.CheckConstraint('extra_person_price >= 0', name='ck_tour_extra_person_price_non_negative'),
        sa.ForeignKeyConstraint(['guide_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_tours_guide_id'), 'tours', ['guide_id'], unique=False)

    # Create tour_requests table
    op.create_table('tour_requests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tour_id', sa.Integer(), nullable=False),
        sa.Column('tourist_id', sa.Integer(), nullable=False),
        sa.Column('request_date', sa.Date(), nullable=False),
        sa.Column('people_count', sa.Integer(), nullable=False),
        sa.Column('total_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('special_requests', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), server_default='pending', nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('people_count > 0', name='ck_tour_request_people_count_positive'),
        sa.CheckConstraint('total_price >= 0', name='ck_tour_request_total_price_non_negative'),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'cancelled')",
            name='ck_tour_request_status_valid'
        ),
        sa.ForeignKeyConstraint(['tour_id'], ['tours.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tourist_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_tour_requests_tour_id'), 'tour_requests', ['tour_id'], unique=False)
    op.create_index(op.f('ix_tour_requests_tourist_id'), 'tour_requests', ['tourist_id'], unique=False)
    op.create_index(op.f('ix_tour_requests_status'), 'tour_requests', ['status'], unique=False)

    # Create tour_reviews table
    op.create_table('tour_reviews',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tour_id', sa.Integer(), nullable=False),
        sa.Column('tourist_id', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_tour_review_rating_range'),
        sa.ForeignKeyConstraint(['tour_id'], ['tours.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tourist_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tour_id', 'tourist_id', name='uq_tour_review_tour_tourist')
    )
    op.create_index(op.f('ix_tour_reviews_tour_id'), 'tour_reviews', ['tour_id'], unique=False)
    op.create_index(op.f('ix_tour_reviews_tourist_id'), 'tour_reviews', ['tourist_id'], unique=False)

    # Create guide_reviews table
    op.create_table('guide_reviews',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('guide_id', sa.Integer(), nullable=False),
        sa.Column('tourist_id', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_guide_review_rating_range'),
        sa.ForeignKeyConstraint(['guide_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tourist_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('guide_id', 'tourist_id', name='uq_guide_review_guide_tourist')
    )
    op.create_index(op.f('ix_guide_reviews_guide_id'), 'guide_reviews', ['guide_id'], unique=False)
    op.create_index(op.f('ix_guide_reviews_tourist_id'), 'guide_reviews', ['tourist_id'], unique=False)

    # Create notifications table
    op.create_table('notifications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('is_read', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('related_id', sa.Integer(), nullable=True),
        sa.Column('related_type', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_notifications_user_id'), 'notifications', ['user_id'], unique=False)

    # Create businesses table
    op.create_table('businesses',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('website', sa.String(length=500), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('rating', sa.Numeric(precision=3, scale=2), server_default='5.0', nullable=False),
        sa.Column('is_verified', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint(
            "type IN ('restaurant', 'store', 'hotel', 'attraction')",
            name='ck_business_type_valid'
        ),
        sa.CheckConstraint('rating >= 0 AND rating <= 5', name='ck_business_rating_range'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_businesses_name'), 'businesses', ['name'], unique=False)
    op.create_index(op.f('ix_businesses_type'), 'businesses', ['type'], unique=False)


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table('businesses')
    op.drop_table('notifications')
    op.drop_table('guide_reviews')
    op.drop_table('tour_reviews')
    op.drop_table('tour_requests')
    op.drop_table('tours')
    op.drop_table('users')
