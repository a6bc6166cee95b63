from gymapp.models.user import User, UnitSystem, SubscriptionStatus
from gymapp.models.workout import WorkoutSession, ExerciseLog, WorkoutSet, CardioLog
from gymapp.models.exercise import Exercise
from gymapp.models.goal import UserGoal
from gymapp.models.measurement import BodyMeasurement
from gymapp.models.achievement import Achievement, UserAchievement
from gymapp.models.subscription_event import SubscriptionEvent

__all__ = [
    "User", "UnitSystem", "SubscriptionStatus",
    "WorkoutSession", "ExerciseLog", "WorkoutSet", "CardioLog",
    "Exercise", "UserGoal", "BodyMeasurement",
    "Achievement", "UserAchievement", "SubscriptionEvent",
]
