from workout_api.models.catalog import Exercise, Muscle
from workout_api.models.enums import ExerciseType
from workout_api.models.user import User
from workout_api.models.workout import CompletedExercise, Workout


__all__ = [
    "User",
    "Muscle",
    "Exercise",
    "ExerciseType",
    "Workout",
    "CompletedExercise",
]
