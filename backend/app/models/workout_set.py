import uuid
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import (
    Uuid, Integer, Numeric, String, Boolean, DateTime, ForeignKey, Index, UniqueConstraint,
    CheckConstraint, false, func,
)
from app.db import Base

class WorkoutSet(Base):
    __tablename__ = "sets"
    __table_args__ = (
        UniqueConstraint("workout_exercise_id", "set_number", name="uq_sets_workout_exercise_set_number"),
        Index("ix_sets_workout_exercise_set_number", "workout_exercise_id", "set_number"),
        CheckConstraint("set_number > 0", name="ck_sets_set_number_positive"),
        CheckConstraint("reps > 0", name="ck_sets_reps_positive"),
        CheckConstraint("weight IS NULL OR weight >= 0", name="ck_sets_weight_non_negative"),
        CheckConstraint("rir IS NULL OR (rir >= 0 AND rir <= 10)", name="ck_sets_rir_range"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    workout_exercise_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("workout_exercises.id", ondelete="CASCADE"), nullable=False
    )
    set_number: Mapped[int] = mapped_column(Integer, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[float | None] = mapped_column(Numeric(6, 2, asdecimal=False), nullable=True)
    rir: Mapped[int | None] = mapped_column(Integer, nullable=True)
    tempo: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_warmup: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    is_drop_set: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    is_failure: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    workout_exercise = relationship("WorkoutExercise", back_populates="sets")
