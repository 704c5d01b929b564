"""Create core application tables"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

_COUNTERS = (
    "coins",
    "xp",
    "current_streak",
    "longest_streak",
    "total_workouts",
    "total_exercises",
    "personal_records",
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("height", sa.Float(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("sex", sa.String(length=20), nullable=False),
        sa.Column("training_experience", sa.String(length=50), nullable=False),
        sa.Column("training_frequency", sa.String(length=50), nullable=False),
        sa.Column("equipment_access", sa.String(length=50), nullable=False),
        sa.Column("primary_goal", sa.String(length=100), nullable=False),
        sa.Column("diet_type", sa.String(length=50), nullable=False),
        sa.Column("daily_activity", sa.String(length=50), nullable=False),
        sa.Column("injury_flags", postgresql.ARRAY(sa.Text()), nullable=True),
        sa.Column("medical_conditions", sa.Text(), nullable=True),
        sa.Column("goal_aggressiveness", sa.String(length=50), nullable=False),
        sa.Column("timeline_expectation", sa.String(length=50), nullable=False),
        sa.Column("recovery_capacity", sa.String(length=50), nullable=False),
        sa.Column("workout_routine", sa.String(length=255), nullable=True),
        sa.Column("body_type", sa.String(length=50), nullable=True),
        sa.Column("strength_test", postgresql.JSONB(), nullable=True),
        sa.Column("additional_objectives", postgresql.ARRAY(sa.Text()), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("timezone('utc', now())"), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("timezone('utc', now())"), nullable=True),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "workouts",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("exercises", postgresql.JSONB(), nullable=False),
        sa.Column("status", sa.String(length=20), server_default=sa.text("'generated'"), nullable=False),
        sa.Column("rewarded_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rewarded_exercises", postgresql.JSONB(), server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("timezone('utc', now())"), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("timezone('utc', now())"), nullable=True),
        sa.UniqueConstraint("user_id", "date", name="uq_workouts_user_date"),
    )
    op.create_index("ix_workouts_user_id", "workouts", ["user_id"], unique=False)

    op.create_table(
        "exercise_logs",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("workout_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("exercise_name", sa.String(length=255), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("sets_completed", sa.Integer(), nullable=False),
        sa.Column("reps_completed", sa.Integer(), nullable=False),
        sa.Column("weight_used", sa.Float(), server_default=sa.text("0"), nullable=False),
        sa.Column("rpe", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("timezone('utc', now())"), nullable=True),
        sa.CheckConstraint("sets_completed > 0", name="ck_exercise_logs_sets_positive"),
        sa.CheckConstraint("reps_completed > 0", name="ck_exercise_logs_reps_positive"),
        sa.CheckConstraint("weight_used >= 0", name="ck_exercise_logs_weight_non_negative"),
    )
    op.create_index("ix_exercise_logs_user_exercise", "exercise_logs", ["user_id", "exercise_name"], unique=False)
    op.create_index("ix_exercise_logs_user_date", "exercise_logs", ["user_id", "date"], unique=False)
    op.create_index("ix_exercise_logs_workout_exercise", "exercise_logs", ["workout_id", "exercise_name"], unique=False)

    op.create_table(
        "game_profiles",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        *[
            sa.Column(name, sa.Integer(), server_default=sa.text("0"), nullable=False)
            for name in ("coins", "xp")
        ],
        sa.Column("level", sa.Integer(), server_default=sa.text("1"), nullable=False),
        *[
            sa.Column(name, sa.Integer(), server_default=sa.text("0"), nullable=False)
            for name in _COUNTERS[2:]
        ],
        sa.Column("last_active_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("timezone('utc', now())"), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("timezone('utc', now())"), nullable=True),
        *[
            sa.CheckConstraint(f"{name} >= 0", name=f"ck_game_profiles_{name}_non_negative")
            for name in _COUNTERS
        ],
        sa.CheckConstraint("level >= 1", name="ck_game_profiles_level_positive"),
    )
    op.create_index("ix_game_profiles_user_id", "game_profiles", ["user_id"], unique=True)

    op.create_table(
        "user_achievements",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("achievement_id", sa.String(length=50), nullable=False),
        sa.Column("unlocked_at", sa.DateTime(timezone=True), server_default=sa.text("timezone('utc', now())"), nullable=False),
        sa.UniqueConstraint("user_id", "achievement_id", name="uq_user_achievements_user_achievement"),
    )
    op.create_index("ix_user_achievements_user_id", "user_achievements", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_user_achievements_user_id", table_name="user_achievements")
    op.drop_table("user_achievements")
    op.drop_index("ix_game_profiles_user_id", table_name="game_profiles")
    op.drop_table("game_profiles")
    op.drop_index("ix_exercise_logs_workout_exercise", table_name="exercise_logs")
    op.drop_index("ix_exercise_logs_user_date", table_name="exercise_logs")
    op.drop_index("ix_exercise_logs_user_exercise", table_name="exercise_logs")
    op.drop_table("exercise_logs")
    op.drop_index("ix_workouts_user_id", table_name="workouts")
    op.drop_table("workouts")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
