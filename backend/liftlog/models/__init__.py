from liftlog.models.user import User
from liftlog.models.workout import Workout
from liftlog.models.session import ExerciseSession, SessionStatus, TERMINAL_STATUSES
from liftlog.models.exercise_set import ExerciseSet

__all__ = ["User", "Workout", "ExerciseSession", "SessionStatus", "TERMINAL_STATUSES", "ExerciseSet"]
