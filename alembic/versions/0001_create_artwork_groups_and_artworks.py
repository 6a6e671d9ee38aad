"""Create artwork_groups and artworks tables

Revision ID: 3a7e1c0d9b42
Revises:
Create Date: 2025-08-14 10:12:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3a7e1c0d9b42'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the group table and the per-model artwork table that hangs off it."""
    op.create_table(
        'artwork_groups',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('prompt', sa.Text(), nullable=False),
        sa.Column('category', sa.String(), nullable=False, server_default=''),
        sa.Column('original_url', sa.String(), nullable=False, server_default=''),
        sa.Column('artist_name', sa.String(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_artwork_groups_category', 'artwork_groups', ['category'])
    op.create_index('ix_artwork_groups_created_at', 'artwork_groups', ['created_at'])

    # Deleting a group removes its artworks through the foreign key.
    op.create_table(
        'artworks',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('group_id', sa.Integer(), sa.ForeignKey('artwork_groups.id', ondelete='CASCADE'), nullable=False),
        sa.Column('model', sa.String(), nullable=False),
        sa.Column('temperature', sa.Float(), nullable=False),
        sa.Column('max_tokens', sa.Integer(), nullable=False),
        sa.Column('svg', sa.Text(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_artworks_group_id', 'artworks', ['group_id'])
    op.create_index('ix_artworks_created_at', 'artworks', ['created_at'])


def downgrade() -> None:
    """Drop both tables, children first."""
    op.drop_index('ix_artworks_created_at', table_name='artworks')
    op.drop_index('ix_artworks_group_id', table_name='artworks')
    op.drop_table('artworks')
    op.drop_index('ix_artwork_groups_created_at', table_name='artwork_groups')
    op.drop_index('ix_artwork_groups_category', table_name='artwork_groups')
    op.drop_table('artwork_groups')
