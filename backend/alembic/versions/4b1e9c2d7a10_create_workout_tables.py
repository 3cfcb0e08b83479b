"""create exercises/workouts/workout_exercises/sets

Revision ID: 4b1e9c2d7a10
Revises:
Create Date: 2025-09-02 19:12:41.530114

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1e9c2d7a10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade() -> None:
    # 1) exercise catalog (user_id NULL = global)
    op.create_table(
        'exercises',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.String(length=255), nullable=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=True),
        sa.Column('is_compound', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'name', name='uq_exercises_user_name'),
    )
    op.create_index('ix_exercises_user_id', 'exercises', ['user_id'])

    # 2) workouts
    op.create_table(
        'workouts',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_template', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_workouts_user_id', 'workouts', ['user_id'])
    op.create_index('ix_workouts_user_started_at', 'workouts', ['user_id', 'started_at'])

    # 3) workout_exercises: cascade with the workout, restrict exercise deletes
    op.create_table(
        'workout_exercises',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('workout_id', sa.Uuid(), sa.ForeignKey('workouts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('exercise_id', sa.Uuid(), sa.ForeignKey('exercises.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('target_sets', sa.Integer(), nullable=True),
        sa.Column('target_reps', sa.Integer(), nullable=True),
        sa.Column('target_weight', sa.Numeric(6, 2), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.UniqueConstraint('workout_id', 'order', name='uq_workout_exercises_workout_order'),
        sa.CheckConstraint('"order" >= 0', name='ck_workout_exercises_order_non_negative'),
    )
    op.create_index('ix_workout_exercises_workout_order', 'workout_exercises', ['workout_id', 'order'])
    op.create_index('ix_workout_exercises_exercise_id', 'workout_exercises', ['exercise_id'])

    # 4) sets
    op.create_table(
        'sets',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('workout_exercise_id', sa.Uuid(), sa.ForeignKey('workout_exercises.id', ondelete='CASCADE'), nullable=False),
        sa.Column('set_number', sa.Integer(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Numeric(6, 2), nullable=True),
        sa.Column('rir', sa.Integer(), nullable=True),
        sa.Column('tempo', sa.String(length=20), nullable=True),
        sa.Column('is_warmup', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_drop_set', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_failure', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('workout_exercise_id', 'set_number', name='uq_sets_workout_exercise_set_number'),
        sa.CheckConstraint('set_number > 0', name='ck_sets_set_number_positive'),
        sa.CheckConstraint('reps > 0', name='ck_sets_reps_positive'),
        sa.CheckConstraint('weight IS NULL OR weight >= 0', name='ck_sets_weight_non_negative'),
        sa.CheckConstraint('rir IS NULL OR (rir >= 0 AND rir <= 10)', name='ck_sets_rir_range'),
    )
    op.create_index('ix_sets_workout_exercise_set_number', 'sets', ['workout_exercise_id', 'set_number'])


def downgrade() -> None:
    # drop child tables first
    op.drop_index('ix_sets_workout_exercise_set_number', table_name='sets')
    op.drop_table('sets')
    op.drop_index('ix_workout_exercises_workout_order', table_name='workout_exercises')
    op.drop_index('ix_workout_exercises_exercise_id', table_name='workout_exercises')
    op.drop_table('workout_exercises')
    op.drop_index('ix_workouts_user_started_at', table_name='workouts')
    op.drop_index('ix_workouts_user_id', table_name='workouts')
    op.drop_table('workouts')
    op.drop_index('ix_exercises_user_id', table_name='exercises')
    op.drop_table('exercises')
