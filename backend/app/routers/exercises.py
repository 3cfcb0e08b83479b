import uuid
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.deps.auth import get_current_user_id
from app.repositories.exercise_repo import ExerciseRepository
from app.schemas.exercise import ExerciseCreate, ExerciseRead

router = APIRouter(prefix="/exercises", tags=["exercises"])

@router.get("", response_model=list[ExerciseRead])
def list_my_exercises(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    include_global: bool | None = None,
):
    return ExerciseRepository(db).list_for_user(user_id, include_global=include_global)

@router.post("", response_model=ExerciseRead, status_code=status.HTTP_201_CREATED)
def create_exercise(
    payload: ExerciseCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return ExerciseRepository(db).create(user_id, payload)

@router.delete("/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exercise(
    exercise_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    if not ExerciseRepository(db).delete(user_id, exercise_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
