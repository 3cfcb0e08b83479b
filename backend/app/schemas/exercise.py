import uuid
from datetime import datetime
from typing import Annotated
from pydantic import BaseModel, StringConstraints

ExerciseName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
CategoryStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]

class ExerciseCreate(BaseModel):
    name: ExerciseName
    category: CategoryStr | None = None
    is_compound: bool = False

class ExerciseSummary(BaseModel):
    id: uuid.UUID
    name: str
    category: str | None = None
    is_compound: bool = False

    model_config = {"from_attributes": True}

class ExerciseRead(ExerciseSummary):
    # None = global exercise shared by everyone
    user_id: str | None = None
    created_at: datetime
    updated_at: datetime
