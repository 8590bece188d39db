"""reports and community posts

Creates reports and community_posts with their comment and upvote tables.
Upvotes are unique per (document, device).

Revision ID: 0001_reports_and_community
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_reports_and_community'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

report_status = sa.Enum('unresolved', 'assigned', 'resolved', name='reportstatus')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'reports',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.Column('device_id', sa.String(length=128), nullable=False),
        sa.Column('caption', sa.String(length=2000), nullable=False),
        sa.Column('image_url', sa.String(length=500), nullable=False),
        sa.Column('address', sa.String(length=300), nullable=False, server_default=''),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('status', report_status, nullable=False, server_default='unresolved'),
        sa.Column('assigned_department', sa.String(length=120), nullable=False, server_default=''),
        sa.Column('community', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_reports_device_id', 'reports', ['device_id'])
    op.create_index('ix_reports_status', 'reports', ['status'])
    op.create_index('ix_reports_created_at', 'reports', ['created_at'])
    op.create_index('ix_reports_lat_lng', 'reports', ['latitude', 'longitude'])

    op.create_table(
        'report_comments',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('report_id', sa.Integer(), sa.ForeignKey('reports.id', ondelete='CASCADE'), nullable=False),
        sa.Column('device_id', sa.String(length=128), nullable=False),
        sa.Column('text', sa.String(length=2000), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_report_comments_report_id', 'report_comments', ['report_id'])

    op.create_table(
        'report_upvotes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('report_id', sa.Integer(), sa.ForeignKey('reports.id', ondelete='CASCADE'), nullable=False),
        sa.Column('device_id', sa.String(length=128), nullable=False),
        sa.UniqueConstraint('report_id', 'device_id', name='uq_report_upvote'),
    )
    op.create_index('ix_report_upvotes_report_id', 'report_upvotes', ['report_id'])

    op.create_table(
        'community_posts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.Column('device_id', sa.String(length=128), nullable=False),
        sa.Column('caption', sa.String(length=2000), nullable=False),
        sa.Column('image_url', sa.String(length=500), nullable=False),
        sa.Column('address', sa.String(length=300), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_community_posts_device_id', 'community_posts', ['device_id'])
    op.create_index('ix_community_posts_created_at', 'community_posts', ['created_at'])

    op.create_table(
        'community_comments',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('post_id', sa.Integer(), sa.ForeignKey('community_posts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('device_id', sa.String(length=128), nullable=False),
        sa.Column('text', sa.String(length=2000), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_community_comments_post_id', 'community_comments', ['post_id'])

    op.create_table(
        'community_upvotes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('post_id', sa.Integer(), sa.ForeignKey('community_posts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('device_id', sa.String(length=128), nullable=False),
        sa.UniqueConstraint('post_id', 'device_id', name='uq_community_upvote'),
    )
    op.create_index('ix_community_upvotes_post_id', 'community_upvotes', ['post_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('community_upvotes')
    op.drop_table('community_comments')
    op.drop_table('community_posts')
    op.drop_table('report_upvotes')
    op.drop_table('report_comments')
    op.drop_table('reports')
    report_status.drop(op.get_bind(), checkfirst=True)
