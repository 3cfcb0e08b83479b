# app/repositories/workout_repo.py
from __future__ import annotations
import logging
import uuid
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from app.errors import NotFoundOrUnauthorized, ValidationFailure
from app.models import Workout, WorkoutExercise, WorkoutSet
from app.repositories.base import BaseRepository, require_user_id
from app.repositories.exercise_repo import ExerciseRepository
from app.schemas.workout import ExerciseEntry, WorkoutCreate, WorkoutPatch
from app.timeutil import as_utc, utcnow

log = logging.getLogger(__name__)

# Loads workout -> workout_exercises (by order) -> exercise + sets (by set_number)
_WITH_CHILDREN = (
    selectinload(Workout.workout_exercises).selectinload(WorkoutExercise.exercise),
    selectinload(Workout.workout_exercises).selectinload(WorkoutExercise.sets),
)

def _build_workout_exercises(entries: Iterable[ExerciseEntry]) -> list[WorkoutExercise]:
    rows = []
    for entry in sorted(entries, key=lambda e: e.order):
        we = WorkoutExercise(
            exercise_id=entry.exercise_id,
            order=entry.order,
            target_sets=entry.target_sets,
            target_reps=entry.target_reps,
            target_weight=entry.target_weight,
        )
        we.sets = [WorkoutSet(**s.model_dump()) for s in sorted(entry.sets, key=lambda s: s.set_number)]
        rows.append(we)
    return rows

class WorkoutRepository(BaseRepository[Workout]):
    def _owned(self, user_id: str, workout_id: uuid.UUID):
        # The (id, user) pair is the only way a workout is ever looked up
        return select(Workout).where(Workout.id == workout_id, Workout.user_id == user_id)

    def _get_owned(self, user_id: str, workout_id: uuid.UUID, *, with_children: bool = False) -> Workout:
        stmt = self._owned(user_id, workout_id)
        if with_children:
            stmt = stmt.options(*_WITH_CHILDREN)
        workout = self.guarded_read(lambda: self.db.execute(stmt).scalar_one_or_none())
        if workout is None:
            log.debug("workout %s not visible to caller", workout_id)
            raise NotFoundOrUnauthorized("workout")
        return workout

    def _check_exercise_refs(self, user_id: str, entries: list[ExerciseEntry]) -> None:
        wanted = {e.exercise_id for e in entries}
        visible = ExerciseRepository(self.db).visible_ids(user_id, wanted)
        for i, entry in enumerate(entries):
            if entry.exercise_id not in visible:
                raise ValidationFailure(f"exercises[{i}].exercise_id", "unknown exercise")

    # READS
    def get_for_user(self, user_id: str, workout_id: uuid.UUID) -> Workout:
        require_user_id(user_id)
        return self._get_owned(user_id, workout_id, with_children=True)

    def list_for_user(
        self,
        user_id: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        include_templates: bool = False,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Workout]:
        """
        Most recent first. `start` is inclusive, `end` exclusive; both are
        compared in UTC. Everything matches unless `limit` is given.
        """
        require_user_id(user_id)
        stmt = select(Workout).where(Workout.user_id == user_id)
        if start is not None:
            stmt = stmt.where(Workout.started_at >= as_utc(start))
        if end is not None:
            stmt = stmt.where(Workout.started_at < as_utc(end))
        if not include_templates:
            stmt = stmt.where(Workout.is_template.is_(False))
        stmt = stmt.options(*_WITH_CHILDREN)\
                   .order_by(Workout.started_at.desc(), Workout.created_at.desc())\
                   .offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return self.guarded_read(lambda: list(self.db.execute(stmt).scalars().all()))

    def list_for_day(self, user_id: str, day: date, **kwargs) -> list[Workout]:
        # UTC calendar day
        start = datetime.combine(day, time.min, tzinfo=timezone.utc)
        return self.list_for_user(user_id, start=start, end=start + timedelta(days=1), **kwargs)

    def count_for_user(self, user_id: str) -> int:
        require_user_id(user_id)
        stmt = select(func.count()).select_from(Workout).where(Workout.user_id == user_id)
        return self.guarded_read(lambda: self.db.execute(stmt).scalar_one())

    # WRITES
    def create(self, user_id: str, payload: WorkoutCreate) -> Workout:
        require_user_id(user_id)
        self._check_exercise_refs(user_id, payload.exercises)

        workout = Workout(
            user_id=user_id,
            name=payload.name,
            started_at=payload.started_at or utcnow(),
            is_template=payload.is_template,
        )
        workout.workout_exercises = _build_workout_exercises(payload.exercises)
        # Single flush: workout row, then workout_exercises, then sets
        with self.atomic():
            self.db.add(workout)
            self.db.flush()
            workout_id = workout.id
        log.info("created workout %s with %d exercises", workout_id, len(payload.exercises))
        return self.get_for_user(user_id, workout_id)

    def update(self, user_id: str, workout_id: uuid.UUID, patch: WorkoutPatch) -> Workout:
        require_user_id(user_id)
        fields = patch.model_fields_set
        with self.atomic():
            workout = self._get_owned(user_id, workout_id, with_children="exercises" in fields)
            if "exercises" in fields:
                self._check_exercise_refs(user_id, patch.exercises or [])
            for field in ("name", "started_at", "completed_at", "is_template"):
                if field in fields:
                    setattr(workout, field, getattr(patch, field))

            if "exercises" in fields:
                # Old rows must be gone before the new (workout_id, order) pairs go in
                workout.workout_exercises.clear()
                self.db.flush()
                workout.workout_exercises.extend(_build_workout_exercises(patch.exercises))
                workout.updated_at = utcnow()
            self.db.flush()
        return self.get_for_user(user_id, workout_id)

    def delete(self, user_id: str, workout_id: uuid.UUID) -> bool:
        """True if the user's workout was removed (with its exercises and sets)."""
        require_user_id(user_id)
        try:
            workout = self._get_owned(user_id, workout_id, with_children=True)
        except NotFoundOrUnauthorized:
            return False
        with self.atomic():
            self.db.delete(workout)
        log.info("deleted workout %s", workout_id)
        return True

    def complete(self, user_id: str, workout_id: uuid.UUID) -> Workout:
        """
        Stamp completed_at. Completing an already completed workout is a
        no-op: the first timestamp is kept.
        """
        require_user_id(user_id)
        with self.atomic():
            workout = self._get_owned(user_id, workout_id)
            if workout.completed_at is None:
                workout.completed_at = utcnow()
        return self.get_for_user(user_id, workout_id)
