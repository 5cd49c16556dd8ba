"""
Diet plan service - entry point for every diet plan operation.

Each call checks that the plan (or its patient) belongs to the requesting
professional before touching data. A failed check is reported as
NotFoundError so existence is never leaked across professionals.
"""

from typing import List, Union

from sqlalchemy.orm import Session

from domain.mappers import DietPlanMapper
from domain.models import atomic
from domain.schemas import (
    DietPlanChanges,
    DietPlanCreate,
    DietPlanResponse,
    DietPlanUpdate,
)
from repositories import DietMealRepository, DietPlanRepository
from services.base_service import BaseService
from services.ownership import OwnershipGuard, plan_not_found
from services.plan_writer import TransactionalPlanWriter


class DietPlanService(BaseService):
    """Business logic for diet plans"""

    logger_name = "nutritrack.services.diet_plans"

    def __init__(self, db: Session):
        super().__init__(db)
        self.guard = OwnershipGuard(db)
        self.writer = TransactionalPlanWriter(db)
        self.plans = DietPlanRepository(db)
        self.meals = DietMealRepository(db)

    def create_plan(
        self, patient_id: int, professional_id: int, data: DietPlanCreate
    ) -> DietPlanResponse:
        self.guard.require_patient(patient_id, professional_id)
        plan = self.writer.create(patient_id, professional_id, data)
        self.log_info(
            "diet_plan_created",
            plan_id=plan.id,
            patient_id=patient_id,
            professional_id=professional_id,
        )
        return plan

    def get_plan(self, plan_id: int, professional_id: int) -> DietPlanResponse:
        self.guard.require_plan(plan_id, professional_id)
        plan = self.plans.get_by_id(plan_id)
        if plan is None:
            raise plan_not_found(plan_id)
        return DietPlanMapper.to_response(plan, self.meals.list_for_plan(plan_id))

    def list_plans(
        self, patient_id: int, professional_id: int
    ) -> List[DietPlanResponse]:
        """All non-deleted plans of a patient, newest first, meals included"""
        self.guard.require_patient(patient_id, professional_id)
        return [
            DietPlanMapper.to_response(plan, self.meals.list_for_plan(plan.id))
            for plan in self.plans.list_for_patient(patient_id)
        ]

    def update_plan(
        self, plan_id: int, professional_id: int, update: Union[DietPlanUpdate, DietPlanChanges]
    ) -> DietPlanResponse:
        """
        Partially update a plan. Accepts either the validated request body or
        an already built change set.
        """
        changes = update if isinstance(update, DietPlanChanges) else update.to_changes()

        self.guard.require_plan(plan_id, professional_id)
        plan = self.writer.update(plan_id, professional_id, changes)
        self.log_info(
            "diet_plan_updated",
            plan_id=plan_id,
            professional_id=professional_id,
            meals_replaced=changes.has_meals,
        )
        return plan

    def delete_plan(self, plan_id: int, professional_id: int) -> None:
        """Soft delete: the plan disappears from every read but the row stays."""
        self.guard.require_plan(plan_id, professional_id)
        with atomic(self.db):
            plan = self.plans.get_by_id(plan_id)
            if plan is None:
                raise plan_not_found(plan_id)
            self.plans.soft_delete(plan)
        self.log_info(
            "diet_plan_deleted", plan_id=plan_id, professional_id=professional_id
        )
