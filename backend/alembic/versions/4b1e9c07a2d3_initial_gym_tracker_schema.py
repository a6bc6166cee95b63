"""initial gym tracker schema

Revision ID: 4b1e9c07a2d3
Revises:
Create Date: 2026-10-19 10:12:31.402115

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

from gymapp.fitness.achievements import DEFAULT_ACHIEVEMENTS

# define the enum types once so we can create/drop them explicitly
unit_system = sa.Enum('metric', 'imperial', name='unit_system')
subscription_status = sa.Enum('free', 'premium', 'cancelled', 'past_due', name='subscription_status')


# revision identifiers, used by Alembic.
revision: str = '4b1e9c07a2d3'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at():
    return sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False)


def upgrade() -> None:
    # 1) users + profile + billing mirror
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('username', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('display_name', sa.String(length=120), nullable=True),
        sa.Column('avatar_url', sa.Text(), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('gender', sa.String(length=32), nullable=True),
        sa.Column('height_cm', sa.Numeric(6, 2), nullable=True),
        sa.Column('weight_kg', sa.Numeric(6, 2), nullable=True),
        sa.Column('unit_system', unit_system, nullable=False, server_default='metric'),
        sa.Column('fitness_goal', sa.String(length=32), nullable=True),
        sa.Column('experience_level', sa.String(length=32), nullable=True),
        sa.Column('subscription_status', subscription_status, nullable=False, server_default='free'),
        sa.Column('stripe_customer_id', sa.String(length=255), nullable=True),
        sa.Column('stripe_subscription_id', sa.String(length=255), nullable=True),
        sa.Column('subscription_started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('subscription_ends_at', sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_stripe_customer_id', 'users', ['stripe_customer_id'])

    # 2) finished workouts
    op.create_table(
        'workout_sessions',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('template_id', sa.String(length=64), nullable=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='completed'),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('duration_sec', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('perceived_exertion', sa.Integer(), nullable=True),
        sa.Column('calories_burned', sa.Integer(), nullable=True),
        _created_at(),
    )
    op.create_table(
        'exercise_logs',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('session_id', sa.String(length=36), sa.ForeignKey('workout_sessions.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_id', sa.String(length=64), nullable=False),
        sa.Column('exercise_name', sa.String(length=120), nullable=False),
        sa.Column('order_index', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('notes', sa.Text(), nullable=True),
        _created_at(),
    )
    op.create_table(
        'sets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('exercise_log_id', sa.String(length=36), sa.ForeignKey('exercise_logs.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('set_number', sa.Integer(), nullable=False),
        sa.Column('set_type', sa.String(length=16), nullable=False, server_default='working'),
        sa.Column('reps', sa.Integer(), nullable=True),
        sa.Column('weight_kg', sa.Numeric(10, 2), nullable=True),
        sa.Column('rpe', sa.Numeric(3, 1), nullable=True),
        sa.Column('is_pr', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
    )
    op.create_table(
        'cardio_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('exercise_log_id', sa.String(length=36), sa.ForeignKey('exercise_logs.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('duration_sec', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('distance_km', sa.Numeric(8, 3), nullable=True),
        sa.Column('avg_heart_rate', sa.Integer(), nullable=True),
        sa.Column('max_heart_rate', sa.Integer(), nullable=True),
        sa.Column('avg_pace_sec_per_km', sa.Integer(), nullable=True),
        sa.Column('calories_burned', sa.Integer(), nullable=True),
        sa.Column('elevation_gain_m', sa.Numeric(8, 2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
    )

    # 3) custom exercises, goals, measurements
    op.create_table(
        'exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=True, index=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('category', sa.String(length=32), nullable=False, server_default='strength'),
        sa.Column('muscle_groups', sa.JSON(), nullable=False),
        sa.Column('equipment', sa.JSON(), nullable=False),
        sa.Column('difficulty', sa.String(length=32), nullable=False, server_default='beginner'),
        sa.Column('is_compound', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_system', sa.Boolean(), nullable=False, server_default=sa.false()),
        _created_at(),
    )
    op.create_table(
        'user_goals',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('goal_type', sa.String(length=32), nullable=False),
        sa.Column('title', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('target_value', sa.Numeric(10, 2), nullable=False),
        sa.Column('current_value', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('unit', sa.String(length=32), nullable=False),
        sa.Column('exercise_id', sa.String(length=64), nullable=True),
        sa.Column('deadline', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )
    op.create_table(
        'body_measurements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('measured_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        *[sa.Column(name, sa.Numeric(6, 2), nullable=True) for name in (
            'weight_kg', 'body_fat_percent', 'muscle_mass_kg', 'chest_cm',
            'waist_cm', 'hips_cm', 'bicep_cm', 'thigh_cm',
        )],
        sa.Column('notes', sa.Text(), nullable=True),
    )

    # 4) achievements
    achievements = op.create_table(
        'achievements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('icon', sa.String(length=32), nullable=False),
        sa.Column('category', sa.String(length=32), nullable=False),
        sa.Column('criteria', sa.JSON(), nullable=False),
        sa.Column('points', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_table(
        'user_achievements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('achievement_id', sa.Integer(), sa.ForeignKey('achievements.id', ondelete='CASCADE'), nullable=False),
        sa.Column('unlocked_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('progress', sa.Integer(), nullable=False, server_default='0'),
        sa.UniqueConstraint('user_id', 'achievement_id'),
    )
    op.bulk_insert(achievements, list(DEFAULT_ACHIEVEMENTS))

    # 5) stripe webhook audit trail
    op.create_table(
        'subscription_events',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('event_type', sa.String(length=64), nullable=False),
        sa.Column('stripe_event_id', sa.String(length=255), nullable=False, unique=True),
        sa.Column('stripe_subscription_id', sa.String(length=255), nullable=True),
        sa.Column('payload', sa.JSON(), nullable=True),
        _created_at(),
    )


def downgrade() -> None:
    # drop child tables in reverse order
    op.drop_table('subscription_events')
    op.drop_table('user_achievements')
    op.drop_table('achievements')
    op.drop_table('body_measurements')
    op.drop_table('user_goals')
    op.drop_table('exercises')
    op.drop_table('cardio_logs')
    op.drop_table('sets')
    op.drop_table('exercise_logs')
    op.drop_table('workout_sessions')
    op.drop_table('users')

    # finally drop enum types
    subscription_status.drop(op.get_bind(), checkfirst=True)
    unit_system.drop(op.get_bind(), checkfirst=True)
