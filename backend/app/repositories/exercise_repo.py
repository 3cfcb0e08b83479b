# app/repositories/exercise_repo.py
from __future__ import annotations
import logging
import uuid

from sqlalchemy import select, delete, exists, or_
from sqlalchemy.orm import Session

from app.errors import NotFoundOrUnauthorized, RestrictViolation, UniquenessViolation
from app.models import Exercise, WorkoutExercise
from app.repositories.base import BaseRepository, require_user_id
from app.schemas.exercise import ExerciseCreate
from app.settings import get_settings

log = logging.getLogger(__name__)

def _visible_to(user_id: str):
    return or_(Exercise.user_id == user_id, Exercise.user_id.is_(None))

class ExerciseRepository(BaseRepository[Exercise]):
    def __init__(self, db: Session, *, include_global: bool | None = None):
        super().__init__(db)
        if include_global is None:
            include_global = get_settings().INCLUDE_GLOBAL_EXERCISES
        self.include_global = include_global

    # READS
    def list_for_user(self, user_id: str, *, include_global: bool | None = None) -> list[Exercise]:
        require_user_id(user_id)
        if include_global is None:
            include_global = self.include_global
        owner = _visible_to(user_id) if include_global else Exercise.user_id == user_id
        stmt = select(Exercise).where(owner).order_by(Exercise.name.asc(), Exercise.id.asc())
        return self.guarded_read(lambda: list(self.db.execute(stmt).scalars().all()))

    def get_visible(self, user_id: str, exercise_id: uuid.UUID) -> Exercise:
        """Owned by the user, or global. Anything else is reported as not found."""
        require_user_id(user_id)
        stmt = select(Exercise).where(Exercise.id == exercise_id, _visible_to(user_id))
        ex = self.guarded_read(lambda: self.db.execute(stmt).scalar_one_or_none())
        if ex is None:
            raise NotFoundOrUnauthorized("exercise")
        return ex

    def visible_ids(self, user_id: str, exercise_ids: set[uuid.UUID]) -> set[uuid.UUID]:
        require_user_id(user_id)
        if not exercise_ids:
            return set()
        stmt = select(Exercise.id).where(Exercise.id.in_(exercise_ids), _visible_to(user_id))
        return self.guarded_read(lambda: set(self.db.execute(stmt).scalars().all()))

    def name_taken(self, user_id: str, name: str) -> bool:
        stmt = select(exists().where(Exercise.user_id == user_id, Exercise.name == name))
        return self.guarded_read(lambda: self.db.execute(stmt).scalar())

    # WRITES
    def create(self, user_id: str, payload: ExerciseCreate) -> Exercise:
        require_user_id(user_id)
        duplicate = UniquenessViolation("name", f"exercise '{payload.name}' already exists")
        if self.name_taken(user_id, payload.name):
            raise duplicate

        ex = Exercise(
            user_id=user_id,
            name=payload.name,
            category=payload.category,
            is_compound=payload.is_compound,
        )
        # The unique constraint still catches a concurrent insert of the same name
        with self.atomic(on_integrity_error=lambda _exc: duplicate):
            self.db.add(ex)
            self.db.flush()
        self.db.refresh(ex)
        return ex

    def delete(self, user_id: str, exercise_id: uuid.UUID) -> bool:
        """
        Delete one of the user's own exercises. Global exercises never match.
        Raises RestrictViolation while any workout still uses the exercise.
        """
        require_user_id(user_id)
        in_use = RestrictViolation("exercise_id", "exercise is used by one or more workouts")
        owned = select(exists().where(Exercise.id == exercise_id, Exercise.user_id == user_id))
        if not self.guarded_read(lambda: self.db.execute(owned).scalar()):
            return False

        referenced = select(exists().where(WorkoutExercise.exercise_id == exercise_id))
        if self.guarded_read(lambda: self.db.execute(referenced).scalar()):
            raise in_use

        # FK is ON DELETE RESTRICT, so a reference added since the check fails here
        with self.atomic(on_integrity_error=lambda _exc: in_use):
            result = self.db.execute(
                delete(Exercise).where(Exercise.id == exercise_id, Exercise.user_id == user_id)
            )
        deleted = result.rowcount > 0
        if deleted:
            log.info("deleted exercise %s", exercise_id)
        return deleted
