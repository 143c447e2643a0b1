"""create catalog tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column(
            'status',
            sa.Enum('active', 'blocked', 'pending', name='user_status'),
            server_default='active',
            nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'categories',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('name', name='uq_categories_name'),
    )

    op.create_table(
        'courses',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Float(), nullable=False, server_default='0'),
        sa.Column('is_free', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('thumbnail', sa.String(length=1024), nullable=True),
        sa.Column('thumbnail_public_id', sa.String(length=512), nullable=True),
        sa.Column('overview_video', sa.String(length=1024), nullable=True),
        sa.Column('overview_video_public_id', sa.String(length=512), nullable=True),
        sa.Column('features', sa.JSON(), nullable=False),
        sa.Column('stack', sa.JSON(), nullable=False),
        sa.Column('overviews', sa.JSON(), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('author_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('category_id', sa.Uuid(), sa.ForeignKey('categories.id', ondelete='SET NULL'), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('price >= 0', name='ck_courses_price_non_negative'),
    )
    op.create_index('ix_courses_author_id', 'courses', ['author_id'])
    op.create_index('ix_courses_category_id', 'courses', ['category_id'])
    op.create_index('ix_courses_is_deleted', 'courses', ['is_deleted'])
    # Enforces (title, author) uniqueness for active courses only
    op.create_index(
        'uq_courses_title_author_active',
        'courses',
        ['title', 'author_id'],
        unique=True,
        postgresql_where=sa.text('NOT is_deleted'),
        sqlite_where=sa.text('NOT is_deleted'),
    )

    op.create_table(
        'lessons',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('course_id', sa.Uuid(), sa.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('order_index', sa.Integer(), nullable=False, server_default='1'),
        *_timestamps(),
    )
    op.create_index('ix_lessons_course_id', 'lessons', ['course_id'])

    op.create_table(
        'enrollments',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('course_id', sa.Uuid(), sa.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('enrolled_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'course_id', name='uq_enrollments_user_course'),
    )
    op.create_index('ix_enrollments_user_id', 'enrollments', ['user_id'])
    op.create_index('ix_enrollments_course_id', 'enrollments', ['course_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('enrollments')
    op.drop_table('lessons')
    op.drop_index('uq_courses_title_author_active', table_name='courses')
    op.drop_table('courses')
    op.drop_table('categories')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    sa.Enum(name='user_status').drop(op.get_bind(), checkfirst=True)
