import uuid
from datetime import datetime, timezone
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from workout_api.models.enums import ExerciseType


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _id_field():
    return Field(validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")


# --- Requests ---

class WorkoutCreate(BaseModel):
    date: datetime | None = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value) if value is not None else None


class WorkoutUpdate(BaseModel):
    date: datetime

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        return _as_utc(value)


class CompletedExerciseCreate(BaseModel):
    # Any workout_id in the body is ignored; the path decides.
    exercise_id: uuid.UUID
    exercise_type: ExerciseType
    sets: int = Field(ge=1)
    reps: int = Field(ge=1)
    load: float | None = Field(default=None, ge=0)
    unilateral: bool = False
    mum: bool = False


# --- Responses ---

class ExerciseSummary(BaseModel):
    id: uuid.UUID = _id_field()
    name: str
    muscle_id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)


class CompletedExerciseResponse(BaseModel):
    id: uuid.UUID = _id_field()
    exercise_id: uuid.UUID
    workout_id: uuid.UUID
    exercise_type: ExerciseType
    sets: int
    reps: int
    load: float | None = None
    unilateral: bool = False
    mum: bool = False

    model_config = ConfigDict(from_attributes=True)


class CompletedExerciseDetail(CompletedExerciseResponse):
    """Completed exercise with ``exercise_id`` expanded to the catalog entry."""
    exercise_id: ExerciseSummary | None  # type: ignore[assignment]


class WorkoutResponse(BaseModel):
    id: uuid.UUID = _id_field()
    date: datetime
    user_id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        return _as_utc(value)


class WorkoutDetail(WorkoutResponse):
    exercises: list[CompletedExerciseDetail] = []
