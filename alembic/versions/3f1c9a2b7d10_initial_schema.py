"""initial_schema

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-19 10:12:41.517203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('google_id', sa.String(length=128), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('photo_url', sa.String(length=2048), nullable=True),
        sa.Column('can_comment', sa.Boolean(), nullable=False),
        sa.Column('can_upload', sa.Boolean(), nullable=False),
        sa.Column('creation_date', sa.DateTime(), nullable=False),
        sa.Column('last_access', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('google_id'),
    )

    # mask_id is assigned by the application (first free integer), never autoincremented
    op.create_table(
        'masks',
        sa.Column('mask_id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('mask_url', sa.String(length=2048), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('uploader_google_id', sa.String(length=128), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('average_rating', sa.Double(), nullable=False),
        sa.Column('ratings_count', sa.Integer(), nullable=False),
        sa.Column('uploaded_on', sa.DateTime(), nullable=False),
        sa.Column('last_accessed_on', sa.DateTime(), nullable=False),
        sa.Column('is_removed', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('mask_id'),
        sa.ForeignKeyConstraint(['uploader_google_id'], ['users.google_id'], name='fk_masks_uploader_google_id', onupdate='CASCADE'),
    )
    op.create_index('idx_masks_ratings_count', 'masks', ['ratings_count'])
    op.create_index('idx_masks_average_rating', 'masks', ['average_rating'])
    op.create_index('idx_masks_uploaded_on', 'masks', ['uploaded_on'])

    op.create_table(
        'mask_tags',
        sa.Column('mask_id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('tag', sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint('mask_id', 'tag'),
        sa.ForeignKeyConstraint(['mask_id'], ['masks.mask_id'], name='fk_mask_tags_mask_id', onupdate='CASCADE', ondelete='CASCADE'),
    )
    op.create_index('idx_mask_tags_tag', 'mask_tags', ['tag'])

    op.create_table(
        'ratings',
        sa.Column('mask_id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('google_id', sa.String(length=128), nullable=False),
        sa.Column('rating', sa.Double(), nullable=False),
        sa.Column('posted_on', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('mask_id', 'google_id'),
        sa.ForeignKeyConstraint(['mask_id'], ['masks.mask_id'], name='fk_ratings_mask_id', onupdate='CASCADE', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['google_id'], ['users.google_id'], name='fk_ratings_google_id', onupdate='CASCADE', ondelete='CASCADE'),
    )
    op.create_index('fk_ratings_google_id', 'ratings', ['google_id'])

    op.create_table(
        'comments',
        sa.Column('comment_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('mask_id', sa.Integer(), nullable=False),
        sa.Column('google_id', sa.String(length=128), nullable=False),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.Column('posted_on', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('comment_id'),
        sa.ForeignKeyConstraint(['mask_id'], ['masks.mask_id'], name='fk_comments_mask_id', onupdate='CASCADE', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['google_id'], ['users.google_id'], name='fk_comments_google_id', onupdate='CASCADE', ondelete='CASCADE'),
    )
    op.create_index('idx_comments_mask_posted_on', 'comments', ['mask_id', 'posted_on'])
    op.create_index('fk_comments_google_id', 'comments', ['google_id'])

    op.create_table(
        'reports',
        sa.Column('report_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('reported_item_type', sa.String(length=50), nullable=False),
        sa.Column('reported_item_id', sa.String(length=128), nullable=False),
        sa.Column('reporter_google_id', sa.String(length=128), nullable=False),
        sa.Column('reason', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('reported_on', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('report_id'),
    )
    op.create_index('idx_reports_item', 'reports', ['reported_item_type', 'reported_item_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_reports_item', table_name='reports')
    op.drop_table('reports')

    op.drop_index('fk_comments_google_id', table_name='comments')
    op.drop_index('idx_comments_mask_posted_on', table_name='comments')
    op.drop_table('comments')

    op.drop_index('fk_ratings_google_id', table_name='ratings')
    op.drop_table('ratings')

    op.drop_index('idx_mask_tags_tag', table_name='mask_tags')
    op.drop_table('mask_tags')

    op.drop_index('idx_masks_uploaded_on', table_name='masks')
    op.drop_index('idx_masks_average_rating', table_name='masks')
    op.drop_index('idx_masks_ratings_count', table_name='masks')
    op.drop_table('masks')

    op.drop_table('users')
