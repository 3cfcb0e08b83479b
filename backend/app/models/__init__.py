from app.models.exercise import Exercise
from app.models.workout import Workout
from app.models.workout_exercise import WorkoutExercise
from app.models.workout_set import WorkoutSet

__all__ = ["Exercise", "Workout", "WorkoutExercise", "WorkoutSet"]
