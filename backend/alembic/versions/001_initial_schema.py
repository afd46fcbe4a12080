"""Initial schema

Revision ID: 001
Revises: 
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _site_fk() -> sa.Column:
    return sa.Column('site_id', postgresql.UUID(as_uuid=True),
                     sa.ForeignKey('sites.id', ondelete='CASCADE'), nullable=False)


def upgrade() -> None:
    # Create sites table
    op.create_table(
        'sites',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('identifier', sa.String(255), nullable=False),
        sa.Column('label', sa.String(255), nullable=False),
        sa.Column('hostname', sa.String(255), nullable=False),
        sa.Column('path', sa.String(255), nullable=False, server_default=''),
        sa.Column('locale', sa.String(16), nullable=False, server_default='en'),
        sa.Column('is_mirrored', sa.Boolean, nullable=False, server_default='false'),
        *_timestamps(),
        sa.UniqueConstraint('hostname', 'path', name='uq_sites_hostname_path'),
    )
    op.create_index('ix_sites_id', 'sites', ['id'])
    op.create_index('ix_sites_identifier', 'sites', ['identifier'], unique=True)
    op.create_index('ix_sites_hostname', 'sites', ['hostname'])
    op.create_index('ix_sites_is_mirrored', 'sites', ['is_mirrored'])

    # Create layouts table
    op.create_table(
        'layouts',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        _site_fk(),
        sa.Column('parent_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('layouts.id', ondelete='CASCADE'), nullable=True),
        sa.Column('identifier', sa.String(255), nullable=False),
        sa.Column('label', sa.String(255), nullable=False),
        sa.Column('content', sa.Text),
        sa.Column('position', sa.Integer, nullable=False, server_default='0'),
        *_timestamps(),
        sa.UniqueConstraint('site_id', 'identifier', name='uq_layouts_site_identifier'),
    )
    op.create_index('ix_layouts_site_id', 'layouts', ['site_id'])
    op.create_index('ix_layouts_parent_id', 'layouts', ['parent_id'])

    # Create pages table
    op.create_table(
        'pages',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        _site_fk(),
        sa.Column('parent_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('pages.id', ondelete='CASCADE'), nullable=True),
        sa.Column('layout_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('layouts.id', ondelete='SET NULL'), nullable=True),
        sa.Column('label', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255)),
        sa.Column('full_path', sa.String(1024), nullable=False, server_default='/'),
        sa.Column('content', sa.Text),
        sa.Column('position', sa.Integer, nullable=False, server_default='0'),
        *_timestamps(),
        sa.UniqueConstraint('site_id', 'full_path', name='uq_pages_site_full_path'),
    )
    op.create_index('ix_pages_site_id', 'pages', ['site_id'])
    op.create_index('ix_pages_parent_id', 'pages', ['parent_id'])

    # Create snippets table
    op.create_table(
        'snippets',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        _site_fk(),
        sa.Column('identifier', sa.String(255), nullable=False),
        sa.Column('label', sa.String(255), nullable=False),
        sa.Column('content', sa.Text),
        sa.Column('position', sa.Integer, nullable=False, server_default='0'),
        *_timestamps(),
        sa.UniqueConstraint('site_id', 'identifier', name='uq_snippets_site_identifier'),
    )
    op.create_index('ix_snippets_site_id', 'snippets', ['site_id'])

    # Create files table
    op.create_table(
        'files',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        _site_fk(),
        sa.Column('label', sa.String(255), nullable=False),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('content_type', sa.String(255)),
        sa.Column('file_size', sa.Integer),
        sa.Column('description', sa.Text),
        *_timestamps(),
    )
    op.create_index('ix_files_site_id', 'files', ['site_id'])

    # Create categories table
    op.create_table(
        'categories',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        _site_fk(),
        sa.Column('label', sa.String(255), nullable=False),
        sa.Column('categorized_type', sa.String(100), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('site_id', 'categorized_type', 'label', name='uq_categories_site_type_label'),
    )
    op.create_index('ix_categories_site_id', 'categories', ['site_id'])


def downgrade() -> None:
    op.drop_table('categories')
    op.drop_table('files')
    op.drop_table('snippets')
    op.drop_table('pages')
    op.drop_table('layouts')
    op.drop_table('sites')
