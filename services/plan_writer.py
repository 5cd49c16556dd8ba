"""
Transactional diet plan writer.

Applies a plan change set and its meal reconciliation as one unit of work:
either every row change lands, or none do.
"""

import logging
from typing import Iterable

from sqlalchemy.orm import Session

from app.exceptions import (
    InternalInconsistencyError,
    NotFoundError,
    PlanOwnershipError,
    ServiceValidationError,
    UnknownMealError,
)
from domain.mappers import DietPlanMapper, status_to_active
from domain.models import DietPlan, atomic
from domain.schemas import DietPlanChanges, DietPlanCreate, DietPlanResponse
from repositories import DietMealRepository, DietPlanRepository
from services.plan_reconciler import MealDiff, reconcile_meals

logger = logging.getLogger("nutritrack.services.plan_writer")


class TransactionalPlanWriter:
    def __init__(self, db: Session):
        self.db = db
        self.plans = DietPlanRepository(db)
        self.meals = DietMealRepository(db)

    def create(
        self, patient_id: int, professional_id: int, data: DietPlanCreate
    ) -> DietPlanResponse:
        """Insert a plan and its meals, then return the persisted state."""
        with atomic(self.db):
            plan = DietPlan(
                patient_id=patient_id,
                professional_id=professional_id,
                title=data.title,
                description=data.description,
                start_date=data.start_date,
                end_date=data.end_date,
                objectives=data.objectives,
                notes=data.notes,
                is_active=status_to_active(data.status),
            )
            self.plans.add(plan)
            self.meals.bulk_insert(plan.id, data.meals)

            response = self._read_back(plan.id)

        logger.info(
            "Created diet plan %s for patient %s with %d meals",
            response.id,
            patient_id,
            len(response.meals),
        )
        return response

    def update(
        self, plan_id: int, professional_id: int, changes: DietPlanChanges
    ) -> DietPlanResponse:
        """
        Apply a partial update to a plan.

        Only fields present in the change set are written. When meals are
        present the stored meal set is reconciled to match them exactly.

        Raises:
            NotFoundError: plan missing, soft-deleted, or owned by another professional
            UnknownMealError: a meal id does not belong to the plan,
                or was removed by a concurrent update
            ServiceValidationError: merged dates are inconsistent
            TransactionError: the database rejected the unit of work
        """
        with atomic(self.db):
            found = self.plans.get_with_owner(plan_id)
            if found is None:
                raise NotFoundError(f"Diet plan {plan_id} not found")
            plan, owner_id = found
            if owner_id != professional_id:
                raise PlanOwnershipError(f"Diet plan {plan_id} not found")

            self._apply_plan_fields(plan, changes)

            diff = None
            if changes.has_meals:
                existing = self.meals.list_for_plan(plan_id)
                diff = reconcile_meals(existing, changes.meals)
                self._apply_meal_diff(plan_id, diff)

            self.db.flush()
            response = self._read_back(plan_id)

        if diff is not None:
            logger.info(
                "Updated diet plan %s: %d created, %d updated, %d deleted",
                plan_id,
                len(diff.to_create),
                len(diff.to_update),
                len(diff.to_delete),
            )
        else:
            logger.info("Updated diet plan %s fields only", plan_id)
        return response

    def _apply_plan_fields(self, plan: DietPlan, changes: DietPlanChanges) -> None:
        for name, value in changes.plan_fields().items():
            if name == "status":
                plan.is_active = status_to_active(value)
            else:
                setattr(plan, name, value)

        if plan.start_date and plan.end_date and plan.end_date < plan.start_date:
            raise ServiceValidationError(
                "endDate cannot be earlier than startDate",
                details={
                    "start_date": plan.start_date.isoformat(),
                    "end_date": plan.end_date.isoformat(),
                },
            )

    def _apply_meal_diff(self, plan_id: int, diff: MealDiff) -> None:
        self.meals.delete_for_plan(plan_id, diff.to_delete)

        # A concurrent writer may have deleted the row since it was read
        for meal in diff.to_update:
            updated = self.meals.update_for_plan(
                plan_id, meal.id, meal.meal_type, meal.day_of_week, meal.content
            )
            if updated != 1:
                raise UnknownMealError(
                    f"Meal {meal.id} no longer belongs to diet plan {plan_id}",
                    details={"unknown_meal_ids": [meal.id]},
                )

        self.meals.bulk_insert(plan_id, diff.to_create)

    def _read_back(self, plan_id: int) -> DietPlanResponse:
        plan = self.plans.get_by_id(plan_id)
        if plan is None:
            raise InternalInconsistencyError(
                f"Diet plan {plan_id} could not be read back after write"
            )
        meals: Iterable = self.meals.list_for_plan(plan_id)
        return DietPlanMapper.to_response(plan, meals)
