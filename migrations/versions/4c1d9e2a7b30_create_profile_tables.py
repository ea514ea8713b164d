"""create_profile_tables

Revision ID: 4c1d9e2a7b30
Revises:
Create Date: 2026-10-18 09:12:44.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4c1d9e2a7b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

document_type = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')


def upgrade() -> None:
    """Create profile_drafts and profile_cache tables."""
    op.create_table('profile_drafts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('document', document_type, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_profile_drafts_owner_id', 'profile_drafts', ['owner_id'], unique=False)

    op.create_table('profile_cache',
        sa.Column('key', sa.String(length=255), nullable=False),
        sa.Column('document', document_type, nullable=False),
        sa.Column('stored_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('key'),
    )


def downgrade() -> None:
    """Drop profile tables."""
    op.drop_table('profile_cache')
    op.drop_index('ix_profile_drafts_owner_id', table_name='profile_drafts')
    op.drop_table('profile_drafts')
