"""create songs, artists, awards, history and blog tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2025-11-02 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1b2c3d4e5f6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'songs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('artist', sa.String(500), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('cover_url', sa.String(500), nullable=True),
        sa.Column('spotify_track_id', sa.String(50), nullable=True),
        sa.Column('youtube_video_id', sa.String(20), nullable=True),
        sa.Column('album_name', sa.String(255), nullable=True),
        sa.Column('release_date', sa.String(20), nullable=True),
        sa.Column('duration_ms', sa.Integer(), nullable=True),
        sa.Column('explicit', sa.Boolean(), nullable=True),
        sa.Column('popularity', sa.Integer(), nullable=True),
        sa.Column('isrc', sa.String(20), nullable=True),
        sa.Column('track_number', sa.Integer(), nullable=True),
        sa.Column('disc_number', sa.Integer(), nullable=True),
        sa.Column('album_type', sa.String(20), nullable=True),
        sa.Column('preview_url', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_songs_title', 'songs', ['title'])
    op.create_index('ix_songs_artist', 'songs', ['artist'])
    op.create_index('ix_songs_album_name', 'songs', ['album_name'])

    op.create_table(
        'artists',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('image_url', sa.String(500), nullable=True),
        sa.Column('spotify_id', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_artists_name', 'artists', ['name'], unique=True)

    op.create_table(
        'awards',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('song_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('detail', sa.String(500), nullable=True),
        sa.Column('position', sa.String(50), nullable=True),
        sa.ForeignKeyConstraint(['song_id'], ['songs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_awards_song_id', 'awards', ['song_id'])

    op.create_table(
        'rating_history',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('song_id', sa.Uuid(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('changed_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['song_id'], ['songs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_rating_history_song_id', 'rating_history', ['song_id'])

    op.create_table(
        'comment_history',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('song_id', sa.Uuid(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('changed_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['song_id'], ['songs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_comment_history_song_id', 'comment_history', ['song_id'])

    op.create_table(
        'blog_posts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('preview', sa.Text(), nullable=True),
        sa.Column('song_ids', sa.JSON(), nullable=False),
        sa.Column('published', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_blog_posts_slug', 'blog_posts', ['slug'], unique=True)
    op.create_index('ix_blog_posts_published', 'blog_posts', ['published'])


def downgrade() -> None:
    op.drop_index('ix_blog_posts_published', table_name='blog_posts')
    op.drop_index('ix_blog_posts_slug', table_name='blog_posts')
    op.drop_table('blog_posts')

    op.drop_index('ix_comment_history_song_id', table_name='comment_history')
    op.drop_table('comment_history')

    op.drop_index('ix_rating_history_song_id', table_name='rating_history')
    op.drop_table('rating_history')

    op.drop_index('ix_awards_song_id', table_name='awards')
    op.drop_table('awards')

    op.drop_index('ix_artists_name', table_name='artists')
    op.drop_table('artists')

    op.drop_index('ix_songs_album_name', table_name='songs')
    op.drop_index('ix_songs_artist', table_name='songs')
    op.drop_index('ix_songs_title', table_name='songs')
    op.drop_table('songs')
