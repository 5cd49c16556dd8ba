"""
Diet Plan Repository - Data access layer for diet plans and their meals
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.enums import DayOfWeek, MealType
from domain.models import DietPlan, DietMeal, Patient

_DAY_RANK = {day: rank for rank, day in enumerate(DayOfWeek)}
_MEAL_RANK = {meal: rank for rank, meal in enumerate(MealType)}


def meal_sort_key(meal: DietMeal) -> Tuple[int, int]:
    """Day of week first, then meal type, both in declaration order"""
    return _DAY_RANK[DayOfWeek(meal.day_of_week)], _MEAL_RANK[MealType(meal.meal_type)]


class DietPlanRepository(BaseRepository[DietPlan]):
    """Repository for diet plans. Soft-deleted plans are never returned."""

    def __init__(self, db: Session):
        super().__init__(db, DietPlan)

    def get_by_id(self, plan_id: int) -> Optional[DietPlan]:
        """Get a non-deleted plan by ID"""
        return (
            self.db.query(DietPlan)
            .filter(DietPlan.id == plan_id, DietPlan.is_deleted.is_(False))
            .first()
        )

    def get_with_owner(self, plan_id: int) -> Optional[Tuple[DietPlan, int]]:
        """
        Get a non-deleted plan together with its patient's professional id.

        Ownership is decided through the patient, not the denormalised
        professional_id on the plan row.
        """
        row = (
            self.db.query(DietPlan, Patient.professional_id)
            .join(Patient, Patient.id == DietPlan.patient_id)
            .filter(DietPlan.id == plan_id, DietPlan.is_deleted.is_(False))
            .first()
        )
        if row is None:
            return None
        plan, owner_id = row
        return plan, owner_id

    def list_for_patient(self, patient_id: int) -> List[DietPlan]:
        """Non-deleted plans of a patient, newest first"""
        return (
            self.db.query(DietPlan)
            .filter(DietPlan.patient_id == patient_id, DietPlan.is_deleted.is_(False))
            .order_by(DietPlan.created_at.desc(), DietPlan.id.desc())
            .all()
        )

    def get_for_patient(
        self, plan_id: int, patient_id: int, professional_id: int
    ) -> Optional[DietPlan]:
        """Non-deleted plan matching patient and professional"""
        return (
            self.db.query(DietPlan)
            .join(Patient, Patient.id == DietPlan.patient_id)
            .filter(
                DietPlan.id == plan_id,
                DietPlan.patient_id == patient_id,
                Patient.professional_id == professional_id,
                DietPlan.is_deleted.is_(False),
            )
            .first()
        )

    def soft_delete(self, plan: DietPlan) -> DietPlan:
        plan.is_deleted = True
        plan.deleted_at = datetime.now(timezone.utc)
        self.db.flush()
        return plan


class DietMealRepository(BaseRepository[DietMeal]):
    """Repository for meals; every operation is scoped by plan id"""

    def __init__(self, db: Session):
        super().__init__(db, DietMeal)

    def list_for_plan(self, plan_id: int) -> List[DietMeal]:
        """Meals of a plan ordered by day of week, then meal type, then id"""
        meals = (
            self.db.query(DietMeal)
            .filter(DietMeal.diet_plan_id == plan_id)
            .order_by(DietMeal.id)
            .all()
        )
        return sorted(meals, key=meal_sort_key)

    def delete_for_plan(self, plan_id: int, meal_ids: Iterable[int]) -> int:
        """Delete the given meals, but only those belonging to plan_id"""
        ids = list(meal_ids)
        if not ids:
            return 0
        return (
            self.db.query(DietMeal)
            .filter(DietMeal.diet_plan_id == plan_id, DietMeal.id.in_(ids))
            .delete(synchronize_session="fetch")
        )

    def update_for_plan(
        self, plan_id: int, meal_id: int, meal_type, day_of_week, content: str
    ) -> int:
        """Update one meal in place by identity; returns affected row count"""
        return (
            self.db.query(DietMeal)
            .filter(DietMeal.diet_plan_id == plan_id, DietMeal.id == meal_id)
            .update(
                {
                    DietMeal.meal_type: meal_type,
                    DietMeal.day_of_week: day_of_week,
                    DietMeal.content: content,
                },
                synchronize_session="fetch",
            )
        )

    def bulk_insert(self, plan_id: int, meals: Iterable) -> List[DietMeal]:
        """Insert new meals tagged with the owning plan id"""
        rows = [
            DietMeal(
                diet_plan_id=plan_id,
                meal_type=m.meal_type,
                day_of_week=m.day_of_week,
                content=m.content,
            )
            for m in meals
        ]
        if rows:
            self.db.add_all(rows)
            self.db.flush()
        return rows
