"""
Ownership checks shared by every professional-scoped operation.

Callers turn a negative answer into NotFoundError, never into a 403.
"""

import logging

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError
from repositories import DietPlanRepository, PatientRepository

logger = logging.getLogger("nutritrack.services.ownership")


def plan_not_found(plan_id: int) -> NotFoundError:
    return NotFoundError(f"Diet plan {plan_id} not found")


def patient_not_found(patient_id: int) -> NotFoundError:
    return NotFoundError(f"Patient {patient_id} not found")


class OwnershipGuard:
    def __init__(self, db: Session):
        self.patients = PatientRepository(db)
        self.plans = DietPlanRepository(db)

    def patient_belongs_to(self, patient_id: int, professional_id: int) -> bool:
        return self.patients.get_owned(patient_id, professional_id) is not None

    def plan_belongs_to(self, plan_id: int, professional_id: int) -> bool:
        """
        True when the plan's patient is managed by the professional.

        Raises:
            NotFoundError: plan does not exist or is soft-deleted
        """
        found = self.plans.get_with_owner(plan_id)
        if found is None:
            raise plan_not_found(plan_id)
        _, owner_id = found
        if owner_id != professional_id:
            logger.info(
                "Plan %s requested by professional %s but owned by %s",
                plan_id,
                professional_id,
                owner_id,
            )
            return False
        return True

    def require_patient(self, patient_id: int, professional_id: int) -> None:
        if not self.patient_belongs_to(patient_id, professional_id):
            raise patient_not_found(patient_id)

    def require_plan(self, plan_id: int, professional_id: int) -> None:
        if not self.plan_belongs_to(plan_id, professional_id):
            raise plan_not_found(plan_id)
