"""initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-17 12:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create films table
    op.create_table(
        'films',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('slug', sa.String(length=200), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('short_description', sa.String(length=500), nullable=True),
        sa.Column('full_description', sa.Text(), nullable=True),
        sa.Column('release_year', sa.Integer(), nullable=True),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('thumbnail_url', sa.String(length=1000), nullable=True),
        sa.Column('trailer_url', sa.String(length=1000), nullable=True),
        sa.Column('pitch_deck_url', sa.String(length=1000), nullable=True),
        sa.Column('gallery_images', JSONB(), nullable=False, server_default='[]'),
        sa.Column('festival_awards', sa.Text(), nullable=True),
        sa.Column('credits', JSONB(), nullable=False, server_default='{}'),
        sa.Column('reviews', JSONB(), nullable=False, server_default='[]'),
        sa.Column('articles', JSONB(), nullable=False, server_default='[]'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_films_slug'), 'films', ['slug'], unique=True)
    op.create_index(op.f('ix_films_release_year'), 'films', ['release_year'], unique=False)

    # Create site_settings table
    op.create_table(
        'site_settings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('director_name', sa.String(length=200), nullable=False),
        sa.Column('tagline', sa.String(length=500), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('profile_image_url', sa.String(length=1000), nullable=True),
        sa.Column('hero_video_url', sa.String(length=1000), nullable=True),
        sa.Column('theme_color', sa.String(length=20), nullable=True),
        sa.Column('show_featured_section', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    # Create contact_messages table
    op.create_table(
        'contact_messages',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_contact_messages_created_at'), 'contact_messages', ['created_at'], unique=False)

    # Create admin_users table
    op.create_table(
        'admin_users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=True),
        sa.Column('password_hash', sa.String(length=200), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_admin_users_email'), 'admin_users', ['email'], unique=True)


def downgrade() -> None:
    op.drop_index(op.f('ix_admin_users_email'), table_name='admin_users')
    op.drop_table('admin_users')
    op.drop_index(op.f('ix_contact_messages_created_at'), table_name='contact_messages')
    op.drop_table('contact_messages')
    op.drop_table('site_settings')
    op.drop_index(op.f('ix_films_release_year'), table_name='films')
    op.drop_index(op.f('ix_films_slug'), table_name='films')
    op.drop_table('films')
