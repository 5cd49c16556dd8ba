"""
Plan domain mappers.
Translates between persisted plan rows and the DTOs exposed to clients,
including the boolean is_active flag <-> status string convention.
"""

from typing import Iterable, Optional, Union

from domain.enums import PlanStatus
from domain.models import DietMeal, DietPlan, WorkoutPlan
from domain.schemas.diet_schemas import DietMealResponse, DietPlanResponse
from domain.schemas.patient_schemas import PlanSummary


def status_to_active(status: Optional[Union[PlanStatus, str]]) -> bool:
    """ACTIVE maps to True; every other value, None included, maps to False."""
    if isinstance(status, PlanStatus):
        status = status.value
    return status == PlanStatus.ACTIVE.value


def active_to_status(is_active: Optional[bool]) -> PlanStatus:
    return PlanStatus.ACTIVE if is_active else PlanStatus.DRAFT


class DietPlanMapper:
    """Mapper for diet plan transformations."""

    @staticmethod
    def to_response(plan: DietPlan, meals: Iterable[DietMeal]) -> DietPlanResponse:
        """
        Compose the client-facing plan from its row and an already ordered meal list.

        The meal list is passed separately so callers control ordering and never
        depend on a possibly stale relationship collection.
        """
        return DietPlanResponse(
            id=plan.id,
            patient_id=plan.patient_id,
            professional_id=plan.professional_id,
            title=plan.title,
            description=plan.description,
            start_date=plan.start_date,
            end_date=plan.end_date,
            objectives=plan.objectives,
            notes=plan.notes,
            status=active_to_status(plan.is_active),
            meals=[DietMealResponse.model_validate(m) for m in meals],
            created_at=plan.created_at,
            updated_at=plan.updated_at,
        )

    @staticmethod
    def to_summary(plan: Union[DietPlan, WorkoutPlan]) -> PlanSummary:
        return PlanSummary(
            id=plan.id,
            title=plan.title,
            status=active_to_status(plan.is_active),
            start_date=plan.start_date,
            end_date=plan.end_date,
        )
