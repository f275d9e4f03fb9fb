"""add_scores

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-18 15:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0002'
down_revision: Union[str, Sequence[str], None] = '0001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema - Add competition scores."""
    op.create_table(
        'scores',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('gymnast_id', sa.Uuid(), nullable=False),
        sa.Column('event_id', sa.Uuid(), nullable=True),
        sa.Column('vault', sa.Numeric(precision=5, scale=3), nullable=True),
        sa.Column('bars', sa.Numeric(precision=5, scale=3), nullable=True),
        sa.Column('beam', sa.Numeric(precision=5, scale=3), nullable=True),
        sa.Column('floor', sa.Numeric(precision=5, scale=3), nullable=True),
        sa.Column('all_around', sa.Numeric(precision=6, scale=3), nullable=True),
        sa.Column('recorded_by', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['gymnast_id'], ['gymnasts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['recorded_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_scores_gymnast_id', 'scores', ['gymnast_id'])


def downgrade() -> None:
    """Downgrade schema - Drop competition scores."""
    op.drop_index('ix_scores_gymnast_id', table_name='scores')
    op.drop_table('scores')
