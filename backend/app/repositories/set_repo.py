from __future__ import annotations
import uuid
from sqlalchemy import select, exists
from app.errors import NotFoundOrUnauthorized, UniquenessViolation
from app.models import Workout, WorkoutExercise, WorkoutSet
from app.repositories.base import BaseRepository, require_user_id
from app.schemas.workout_set import SetEntry
from app.timeutil import utcnow

class SetRepository(BaseRepository[WorkoutSet]):
    """Sets are reached only through a workout the caller owns."""

    def _owned_workout_exercise(self, user_id: str, workout_exercise_id: uuid.UUID) -> WorkoutExercise:
        stmt = select(WorkoutExercise).join(Workout)\
                                      .where(WorkoutExercise.id == workout_exercise_id,
                                             Workout.user_id == user_id)
        we = self.guarded_read(lambda: self.db.execute(stmt).scalar_one_or_none())
        if we is None:
            raise NotFoundOrUnauthorized("workout exercise")
        return we

    def _owned_set(self, user_id: str, set_id: uuid.UUID) -> WorkoutSet:
        stmt = select(WorkoutSet).join(WorkoutExercise).join(Workout)\
                                 .where(WorkoutSet.id == set_id, Workout.user_id == user_id)
        s = self.guarded_read(lambda: self.db.execute(stmt).scalar_one_or_none())
        if s is None:
            raise NotFoundOrUnauthorized("set")
        return s

    def list_for_workout_exercise(self, user_id: str, workout_exercise_id: uuid.UUID) -> list[WorkoutSet]:
        require_user_id(user_id)
        self._owned_workout_exercise(user_id, workout_exercise_id)
        stmt = select(WorkoutSet).where(WorkoutSet.workout_exercise_id == workout_exercise_id)\
                                 .order_by(WorkoutSet.set_number.asc())
        return self.guarded_read(lambda: list(self.db.execute(stmt).scalars().all()))

    def add(self, user_id: str, workout_exercise_id: uuid.UUID, entry: SetEntry) -> WorkoutSet:
        require_user_id(user_id)
        we = self._owned_workout_exercise(user_id, workout_exercise_id)
        duplicate = UniquenessViolation("set_number", f"set {entry.set_number} already exists")
        taken = select(exists().where(WorkoutSet.workout_exercise_id == we.id,
                                      WorkoutSet.set_number == entry.set_number))
        if self.guarded_read(lambda: self.db.execute(taken).scalar()):
            raise duplicate

        s = WorkoutSet(workout_exercise_id=we.id, **entry.model_dump())
        with self.atomic(on_integrity_error=lambda _exc: duplicate):
            self.db.add(s)
            self.db.flush()
        self.db.refresh(s)
        return s

    def complete(self, user_id: str, set_id: uuid.UUID) -> WorkoutSet:
        """Same rule as workouts: the first completion timestamp is kept."""
        require_user_id(user_id)
        with self.atomic():
            s = self._owned_set(user_id, set_id)
            if s.completed_at is None:
                s.completed_at = utcnow()
        self.db.refresh(s)
        return s

    def delete(self, user_id: str, set_id: uuid.UUID) -> bool:
        require_user_id(user_id)
        try:
            s = self._owned_set(user_id, set_id)
        except NotFoundOrUnauthorized:
            return False
        with self.atomic():
            self.db.delete(s)
        return True
