"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.patient_repository import (
    ProfessionalRepository,
    PatientRepository,
    BiometricRecordRepository,
)
from repositories.diet_plan_repository import (
    DietPlanRepository,
    DietMealRepository,
    meal_sort_key,
)
from repositories.workout_plan_repository import WorkoutPlanRepository

__all__ = [
    "BaseRepository",
    "ProfessionalRepository",
    "PatientRepository",
    "BiometricRecordRepository",
    "DietPlanRepository",
    "DietMealRepository",
    "meal_sort_key",
    "WorkoutPlanRepository",
]
