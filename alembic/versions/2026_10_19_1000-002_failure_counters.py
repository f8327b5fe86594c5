"""Failure counters

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '002'
down_revision: Union[str, None] = '001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the consecutive-failure counters used by deload progressions."""
    op.create_table('failure_counters', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('lift_id', sa.Integer(), nullable=False),
        sa.Column('progression_id', sa.Integer(), nullable=False),
        sa.Column('consecutive_failures', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_failure_at', sa.DateTime(), nullable=True),
        sa.Column('last_success_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.ForeignKeyConstraint(['lift_id'], ['lifts.id']),
        sa.ForeignKeyConstraint(['progression_id'], ['progressions.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'lift_id', 'progression_id',
                            name='uq_failure_counters_user_lift_progression'))
    op.create_index(op.f('ix_failure_counters_user_id'), 'failure_counters', ['user_id'], unique=False)


def downgrade() -> None:
    """Drop the failure counters."""
    op.drop_index(op.f('ix_failure_counters_user_id'), table_name='failure_counters')
    op.drop_table('failure_counters')
