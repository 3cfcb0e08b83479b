import uuid
from datetime import date, datetime
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.deps.auth import get_current_user_id
from app.repositories.workout_repo import WorkoutRepository
from app.schemas.workout import WorkoutCreate, WorkoutDetail, WorkoutPatch
from app.timeutil import as_utc

router = APIRouter(prefix="/workouts", tags=["workouts"])

@router.post("", response_model=WorkoutDetail, status_code=status.HTTP_201_CREATED)
def create_workout(
    payload: WorkoutCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return WorkoutRepository(db).create(user_id, payload)

@router.get("", response_model=list[WorkoutDetail])
def list_my_workouts(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    start: datetime | None = None,
    end: datetime | None = None,
    on: date | None = Query(None, description="Single calendar day; overrides start/end"),
    include_templates: bool = False,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    repo = WorkoutRepository(db)
    if on is not None:
        return repo.list_for_day(user_id, on, include_templates=include_templates, limit=limit, offset=offset)
    if start is not None and end is not None and as_utc(end) <= as_utc(start):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="end must be after start")
    return repo.list_for_user(
        user_id, start=start, end=end, include_templates=include_templates, limit=limit, offset=offset
    )

@router.get("/{workout_id}", response_model=WorkoutDetail)
def get_workout(
    workout_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return WorkoutRepository(db).get_for_user(user_id, workout_id)

@router.patch("/{workout_id}", response_model=WorkoutDetail)
def update_workout(
    workout_id: uuid.UUID,
    payload: WorkoutPatch,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return WorkoutRepository(db).update(user_id, workout_id, payload)

@router.post("/{workout_id}/complete", response_model=WorkoutDetail)
def complete_workout(
    workout_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return WorkoutRepository(db).complete(user_id, workout_id)

@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_workout(
    workout_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    if not WorkoutRepository(db).delete(user_id, workout_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
