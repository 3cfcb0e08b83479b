import uuid
from datetime import datetime
from decimal import Decimal
from typing import Annotated
from pydantic import AfterValidator, BaseModel, Field, StringConstraints
from app.timeutil import as_utc

PosInt = Annotated[int, Field(ge=1)]
RepsInt = Annotated[int, Field(ge=1, le=999)]
RirInt = Annotated[int, Field(ge=0, le=10)]
# Numeric(6, 2) column: 100.555 is rejected rather than rounded by the database
Weight = Annotated[Decimal, Field(ge=0, max_digits=6, decimal_places=2)]
TempoStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=20)]
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]

class SetEntry(BaseModel):
    set_number: PosInt
    reps: RepsInt
    weight: Weight | None = None
    rir: RirInt | None = None
    tempo: TempoStr | None = None   # e.g. "3-1-1-0"
    is_warmup: bool = False
    is_drop_set: bool = False
    is_failure: bool = False
    completed_at: UtcDatetime | None = None

class SetRead(BaseModel):
    id: uuid.UUID
    workout_exercise_id: uuid.UUID
    set_number: int
    reps: int
    weight: float | None = None
    rir: int | None = None
    tempo: str | None = None
    is_warmup: bool
    is_drop_set: bool
    is_failure: bool
    completed_at: datetime | None = None

    model_config = {"from_attributes": True}
