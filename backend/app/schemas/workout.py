import uuid
from datetime import datetime
from typing import Annotated
from pydantic import BaseModel, Field, StringConstraints, field_validator, model_validator

from app.schemas.exercise import ExerciseSummary
from app.schemas.workout_set import PosInt, SetEntry, SetRead, UtcDatetime, Weight

# Blank names are stored as NULL (see _blank_name_to_none)
WorkoutName = Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]
Order = Annotated[int, Field(ge=0)]

def _blank_name_to_none(v: str | None) -> str | None:
    return v or None

def _check_unique_orders(exercises: list["ExerciseEntry"] | None) -> None:
    if not exercises:
        return
    orders = [e.order for e in exercises]
    if len(orders) != len(set(orders)):
        raise ValueError("exercise order values must be unique within a workout")

class ExerciseEntry(BaseModel):
    exercise_id: uuid.UUID
    order: Order
    target_sets: PosInt | None = None
    target_reps: PosInt | None = None
    target_weight: Weight | None = None
    sets: list[SetEntry] = Field(default_factory=list)

    @field_validator("sets")
    @classmethod
    def set_numbers_unique(cls, v: list[SetEntry]) -> list[SetEntry]:
        numbers = [s.set_number for s in v]
        if len(numbers) != len(set(numbers)):
            raise ValueError("set_number values must be unique within an exercise")
        return v

class WorkoutCreate(BaseModel):
    name: WorkoutName | None = None
    started_at: UtcDatetime | None = None  # defaults to now
    is_template: bool = False
    exercises: list[ExerciseEntry] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def blank_name_is_none(cls, v: str | None) -> str | None:
        return _blank_name_to_none(v)

    @field_validator("exercises")
    @classmethod
    def orders_unique(cls, v: list[ExerciseEntry]) -> list[ExerciseEntry]:
        _check_unique_orders(v)
        return v

class WorkoutPatch(BaseModel):
    """
    Partial update. Only fields present in the payload are applied
    (see `model_fields_set`); an explicit null clears a nullable field.
    Supplying `exercises` replaces the whole nested list.
    """
    name: WorkoutName | None = None
    started_at: UtcDatetime | None = None
    completed_at: UtcDatetime | None = None
    is_template: bool | None = None
    exercises: list[ExerciseEntry] | None = None

    @field_validator("name")
    @classmethod
    def blank_name_is_none(cls, v: str | None) -> str | None:
        return _blank_name_to_none(v)

    @model_validator(mode="after")
    def reject_clearing_required_fields(self):
        for field in ("started_at", "is_template", "exercises"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        _check_unique_orders(self.exercises)
        return self

class WorkoutExerciseRead(BaseModel):
    id: uuid.UUID
    exercise_id: uuid.UUID
    order: int
    target_sets: int | None = None
    target_reps: int | None = None
    target_weight: float | None = None
    exercise: ExerciseSummary
    sets: list[SetRead] = []

    model_config = {"from_attributes": True}

class WorkoutRead(BaseModel):
    id: uuid.UUID
    user_id: str
    name: str | None = None
    started_at: datetime
    completed_at: datetime | None = None
    is_template: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

class WorkoutDetail(WorkoutRead):
    workout_exercises: list[WorkoutExerciseRead] = []
