"""snapshots

Revision ID: 4f1a2b7c9d30
Revises:
Create Date: 2026-10-18 21:40:12.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1a2b7c9d30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the key-value snapshot table."""
    op.create_table(
        'snapshots',
        sa.Column('key', sa.String(64), primary_key=True),
        sa.Column('payload', sa.Text, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )


def downgrade() -> None:
    """Drop the snapshot table."""
    op.drop_table('snapshots')
