"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
    atomic,
)
from domain.models.practice import Professional, Patient, BiometricRecord
from domain.models.plans import (
    DietPlan,
    DietMeal,
    WorkoutPlan,
    WorkoutDay,
    Exercise,
)

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    "atomic",
    # Practice models
    "Professional",
    "Patient",
    "BiometricRecord",
    # Plan models
    "DietPlan",
    "DietMeal",
    "WorkoutPlan",
    "WorkoutDay",
    "Exercise",
]
