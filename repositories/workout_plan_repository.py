"""
Workout Plan Repository - Read access to workout plans used by plan exports
"""

from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.enums import DayOfWeek
from domain.models import WorkoutPlan, WorkoutDay, Patient

_DAY_RANK = {day: rank for rank, day in enumerate(DayOfWeek)}


class WorkoutPlanRepository(BaseRepository[WorkoutPlan]):
    """Repository for workout plans"""

    def __init__(self, db: Session):
        super().__init__(db, WorkoutPlan)

    def get_for_patient(
        self, plan_id: int, patient_id: int, professional_id: int
    ) -> Optional[WorkoutPlan]:
        """Non-deleted plan matching patient and professional, days and exercises loaded"""
        return (
            self.db.query(WorkoutPlan)
            .join(Patient, Patient.id == WorkoutPlan.patient_id)
            .options(selectinload(WorkoutPlan.days).selectinload(WorkoutDay.exercises))
            .filter(
                WorkoutPlan.id == plan_id,
                WorkoutPlan.patient_id == patient_id,
                Patient.professional_id == professional_id,
                WorkoutPlan.is_deleted.is_(False),
            )
            .first()
        )

    def list_for_patient(self, patient_id: int) -> List[WorkoutPlan]:
        return (
            self.db.query(WorkoutPlan)
            .filter(
                WorkoutPlan.patient_id == patient_id, WorkoutPlan.is_deleted.is_(False)
            )
            .order_by(WorkoutPlan.created_at.desc(), WorkoutPlan.id.desc())
            .all()
        )

    @staticmethod
    def ordered_days(plan: WorkoutPlan) -> List[WorkoutDay]:
        """Days of a plan in week order"""
        return sorted(plan.days, key=lambda d: (_DAY_RANK[DayOfWeek(d.day_of_week)], d.id))
