import uuid
from datetime import datetime, timezone
from sqlalchemy import Boolean, DateTime, Enum as SAEnum, Float, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column
from workout_api.database import Base
from workout_api.models.enums import ExerciseType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Workout(Base):
    __tablename__ = "workouts"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    # Owner reference; never reassigned after insert.
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)


class CompletedExercise(Base):
    __tablename__ = "completed_exercises"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    exercise_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("exercises.id"), nullable=False, index=True)
    workout_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True)
    exercise_type: Mapped[ExerciseType] = mapped_column(
        SAEnum(ExerciseType, native_enum=False, values_callable=lambda enum: [member.value for member in enum]),
        nullable=False,
    )
    sets: Mapped[int] = mapped_column(Integer, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    load: Mapped[float | None] = mapped_column(Float, nullable=True)
    unilateral: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    mum: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
