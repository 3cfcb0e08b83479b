import uuid
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from app.db import get_db
from app.deps.auth import get_current_user_id
from app.repositories.set_repo import SetRepository
from app.schemas.workout_set import SetEntry, SetRead

router = APIRouter(tags=["sets"])

@router.get("/workout-exercises/{workout_exercise_id}/sets", response_model=list[SetRead])
def list_sets(
    workout_exercise_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return SetRepository(db).list_for_workout_exercise(user_id, workout_exercise_id)

@router.post("/workout-exercises/{workout_exercise_id}/sets", response_model=SetRead,
             status_code=status.HTTP_201_CREATED)
def add_set(
    workout_exercise_id: uuid.UUID,
    payload: SetEntry,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return SetRepository(db).add(user_id, workout_exercise_id, payload)

@router.post("/sets/{set_id}/complete", response_model=SetRead)
def complete_set(
    set_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return SetRepository(db).complete(user_id, set_id)

@router.delete("/sets/{set_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_set(
    set_id: uuid.UUID,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    if not SetRepository(db).delete(user_id, set_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Set not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
