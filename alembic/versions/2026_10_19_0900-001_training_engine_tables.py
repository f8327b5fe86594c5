"""Training engine tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create catalog, enrollment, max, progression and session tables."""
    # Catalog
    op.create_table('lifts', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('slug', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_lifts_slug'), 'lifts', ['slug'], unique=True)

    op.create_table('cycles', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('length_weeks', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'))

    op.create_table('programs', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('slug', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('cycle_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['cycle_id'], ['cycles.id']),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_programs_slug'), 'programs', ['slug'], unique=True)

    op.create_table('weeks', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('cycle_id', sa.Integer(), nullable=False),
        sa.Column('week_number', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['cycle_id'], ['cycles.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('cycle_id', 'week_number', name='uq_weeks_cycle_number'))
    op.create_index(op.f('ix_weeks_cycle_id'), 'weeks', ['cycle_id'], unique=False)

    op.create_table('days', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('slug', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('program_id', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['program_id'], ['programs.id']),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_days_slug'), 'days', ['slug'], unique=False)

    op.create_table('week_days', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('week_id', sa.Integer(), nullable=False),
        sa.Column('day_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['week_id'], ['weeks.id']),
        sa.ForeignKeyConstraint(['day_id'], ['days.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('week_id', 'day_id', name='uq_week_days_week_day'))
    op.create_index(op.f('ix_week_days_week_id'), 'week_days', ['week_id'], unique=False)

    op.create_table('prescriptions', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('day_id', sa.Integer(), nullable=False),
        sa.Column('lift_id', sa.Integer(), nullable=False),
        sa.Column('load_strategy', sa.JSON(), nullable=False),
        sa.Column('set_scheme', sa.JSON(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column('rest_seconds', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['day_id'], ['days.id']),
        sa.ForeignKeyConstraint(['lift_id'], ['lifts.id']),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_prescriptions_day_id'), 'prescriptions', ['day_id'], unique=False)

    op.create_table('progressions', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('type', sqlmodel.sql.sqltypes.AutoString(length=40), nullable=False),
        sa.Column('parameters', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('id'))

    op.create_table('program_progressions', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('program_id', sa.Integer(), nullable=False),
        sa.Column('progression_id', sa.Integer(), nullable=False),
        sa.Column('lift_id', sa.Integer(), nullable=True),
        sa.Column('priority', sa.Integer(), nullable=False),
        sa.Column('enabled', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('override_increment', sa.Float(), nullable=True),
        sa.ForeignKeyConstraint(['program_id'], ['programs.id']),
        sa.ForeignKeyConstraint(['progression_id'], ['progressions.id']),
        sa.ForeignKeyConstraint(['lift_id'], ['lifts.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('program_id', 'progression_id', 'lift_id', name='uq_program_progression_lift'))
    op.create_index(op.f('ix_program_progressions_program_id'), 'program_progressions', ['program_id'],
                    unique=False)

    # User state
    op.create_table('user_program_states', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('program_id', sa.Integer(), nullable=False),
        sa.Column('cycle_iteration', sa.Integer(), nullable=False),
        sa.Column('current_week', sa.Integer(), nullable=False),
        sa.Column('current_day_index', sa.Integer(), nullable=True),
        sa.Column('enrollment_status', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('cycle_status', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('week_status', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('meet_date', sa.Date(), nullable=True),
        sa.Column('enrolled_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.ForeignKeyConstraint(['program_id'], ['programs.id']),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_user_program_states_user_id'), 'user_program_states', ['user_id'], unique=True)

    op.create_table('lift_maxes', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('lift_id', sa.Integer(), nullable=False),
        sa.Column('type', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('value', sa.Float(), nullable=False),
        sa.Column('effective_date', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.ForeignKeyConstraint(['lift_id'], ['lifts.id']),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_lift_maxes_user_id'), 'lift_maxes', ['user_id'], unique=False)
    op.create_index('ix_lift_maxes_lookup', 'lift_maxes', ['user_id', 'lift_id', 'type', 'effective_date'],
                    unique=False)

    op.create_table('progression_logs', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('progression_id', sa.Integer(), nullable=False),
        sa.Column('lift_id', sa.Integer(), nullable=False),
        sa.Column('previous_value', sa.Float(), nullable=False),
        sa.Column('new_value', sa.Float(), nullable=False),
        sa.Column('delta', sa.Float(), nullable=False),
        sa.Column('trigger_type', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('trigger_context', sa.JSON(), nullable=False),
        sa.Column('idempotency_key', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column('applied_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['progression_id'], ['progressions.id']),
        sa.ForeignKeyConstraint(['lift_id'], ['lifts.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'progression_id', 'lift_id', 'idempotency_key',
                            name='uq_progression_logs_idempotency'))
    op.create_index(op.f('ix_progression_logs_user_id'), 'progression_logs', ['user_id'], unique=False)

    # Sessions
    op.create_table('workout_sessions', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('program_id', sa.Integer(), nullable=False),
        sa.Column('cycle_iteration', sa.Integer(), nullable=False),
        sa.Column('week_number', sa.Integer(), nullable=False),
        sa.Column('day_index', sa.Integer(), nullable=False),
        sa.Column('day_slug', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column('status', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('started_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('finished_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['program_id'], ['programs.id']),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_workout_sessions_user_id'), 'workout_sessions', ['user_id'], unique=False)

    op.create_table('logged_sets', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('lift_id', sa.Integer(), nullable=False),
        sa.Column('prescription_id', sa.Integer(), nullable=True),
        sa.Column('set_number', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('target_reps', sa.Integer(), nullable=False),
        sa.Column('reps_performed', sa.Integer(), nullable=False),
        sa.Column('is_amrap', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.ForeignKeyConstraint(['session_id'], ['workout_sessions.id']),
        sa.ForeignKeyConstraint(['lift_id'], ['lifts.id']),
        sa.ForeignKeyConstraint(['prescription_id'], ['prescriptions.id']),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_logged_sets_session_id'), 'logged_sets', ['session_id'], unique=False)
    op.create_index(op.f('ix_logged_sets_user_id'), 'logged_sets', ['user_id'], unique=False)


def downgrade() -> None:
    """Drop all training engine tables."""
    for table in ('logged_sets', 'workout_sessions', 'progression_logs', 'lift_maxes', 'user_program_states',
                  'program_progressions', 'progressions', 'prescriptions', 'week_days', 'days', 'weeks',
                  'programs', 'cycles', 'lifts'):
        op.drop_table(table)
