"""
Domain enums for NutriTrack.
Contains all enumeration types used across the domain models.

Declaration order is meaningful: plans list meals by day of week and then
by meal type in the order the members are declared here.
"""

import enum


class ProfessionType(str, enum.Enum):
    """Kind of professional operating the practice"""

    NUTRITIONIST = "NUTRITIONIST"
    TRAINER = "TRAINER"


class MealType(str, enum.Enum):
    """Meal slots within a day"""

    BREAKFAST = "BREAKFAST"
    MID_MORNING_SNACK = "MID_MORNING_SNACK"
    LUNCH = "LUNCH"
    AFTERNOON_SNACK = "AFTERNOON_SNACK"
    DINNER = "DINNER"


class DayOfWeek(str, enum.Enum):
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"


class PlanStatus(str, enum.Enum):
    """Status exposed to clients; persisted as the plan's boolean active flag"""

    ACTIVE = "ACTIVE"
    DRAFT = "DRAFT"
