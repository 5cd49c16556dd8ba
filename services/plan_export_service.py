"""
Plan export service - combined PDF download and email delivery.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError
from domain.models import DietMeal, DietPlan, Patient, WorkoutDay, WorkoutPlan
from domain.schemas import (
    AttachmentInfo,
    PlanReference,
    SendPlansEmailResponse,
    SentPlans,
)
from repositories import (
    DietMealRepository,
    DietPlanRepository,
    PatientRepository,
    ProfessionalRepository,
    WorkoutPlanRepository,
)
from services import pdf_service
from services.base_service import BaseService
from services.email_service import EmailAttachment, EmailService
from services.ownership import patient_not_found, plan_not_found


@dataclass
class _ExportBundle:
    patient: Patient
    diet_plan: Optional[DietPlan]
    diet_meals: List[DietMeal]
    workout_plan: Optional[WorkoutPlan]
    workout_days: List[WorkoutDay]


class PlanExportService(BaseService):
    logger_name = "nutritrack.services.exports"

    def __init__(self, db: Session, email_service: Optional[EmailService] = None):
        super().__init__(db)
        self.email_service = email_service or EmailService()
        self.patients = PatientRepository(db)
        self.professionals = ProfessionalRepository(db)
        self.diet_plans = DietPlanRepository(db)
        self.meals = DietMealRepository(db)
        self.workout_plans = WorkoutPlanRepository(db)

    def get_owned_workout_plan(
        self, plan_id: int, patient_id: int, professional_id: int
    ) -> WorkoutPlan:
        plan = self.workout_plans.get_for_patient(plan_id, patient_id, professional_id)
        if plan is None:
            raise NotFoundError(f"Workout plan {plan_id} not found")
        return plan

    def _collect(
        self,
        patient_id: int,
        professional_id: int,
        diet_plan_id: Optional[int],
        workout_plan_id: Optional[int],
    ) -> _ExportBundle:
        patient = self.patients.get_owned(patient_id, professional_id)
        if patient is None:
            raise patient_not_found(patient_id)

        diet_plan, diet_meals = None, []
        if diet_plan_id is not None:
            diet_plan = self.diet_plans.get_for_patient(
                diet_plan_id, patient_id, professional_id
            )
            if diet_plan is None:
                raise plan_not_found(diet_plan_id)
            diet_meals = self.meals.list_for_plan(diet_plan_id)

        workout_plan, workout_days = None, []
        if workout_plan_id is not None:
            workout_plan = self.get_owned_workout_plan(
                workout_plan_id, patient_id, professional_id
            )
            workout_days = WorkoutPlanRepository.ordered_days(workout_plan)

        return _ExportBundle(patient, diet_plan, diet_meals, workout_plan, workout_days)

    def build_combined_pdf(
        self,
        patient_id: int,
        professional_id: int,
        diet_plan_id: Optional[int] = None,
        workout_plan_id: Optional[int] = None,
    ) -> Tuple[str, bytes]:
        """Render the selected plans of a patient; returns (filename, pdf bytes)."""
        bundle = self._collect(patient_id, professional_id, diet_plan_id, workout_plan_id)
        return self._render(bundle, professional_id)

    def _render(self, bundle: _ExportBundle, professional_id: int) -> Tuple[str, bytes]:
        pdf = pdf_service.generate_combined_plans_pdf(
            patient=bundle.patient,
            professional=self.professionals.get_by_id(professional_id),
            diet_plan=bundle.diet_plan,
            diet_meals=bundle.diet_meals,
            workout_plan=bundle.workout_plan,
            workout_days=bundle.workout_days,
        )
        filename = pdf_service.generate_file_name(bundle.patient)
        self.log_info(
            "combined_pdf_built",
            patient_id=bundle.patient.id,
            diet_plan_id=bundle.diet_plan.id if bundle.diet_plan else None,
            workout_plan_id=bundle.workout_plan.id if bundle.workout_plan else None,
            size=len(pdf),
        )
        return filename, pdf

    def email_plans(
        self,
        patient_id: int,
        professional_id: int,
        recipient_email: str,
        subject: str,
        body_message: Optional[str] = None,
        diet_plan_id: Optional[int] = None,
        workout_plan_id: Optional[int] = None,
    ) -> SendPlansEmailResponse:
        bundle = self._collect(patient_id, professional_id, diet_plan_id, workout_plan_id)
        filename, pdf = self._render(bundle, professional_id)

        receipt = self.email_service.send_plan_email(
            to=recipient_email,
            subject=subject,
            body_message=body_message,
            attachments=[EmailAttachment(filename=filename, content=pdf)],
            patient_name=f"{bundle.patient.first_name} {bundle.patient.last_name}",
        )

        plans = SentPlans(
            diet_plan=(
                PlanReference(id=bundle.diet_plan.id, title=bundle.diet_plan.title)
                if bundle.diet_plan
                else None
            ),
            workout_plan=(
                PlanReference(id=bundle.workout_plan.id, title=bundle.workout_plan.title)
                if bundle.workout_plan
                else None
            ),
        )
        self.log_info(
            "plans_emailed",
            patient_id=patient_id,
            recipient=recipient_email,
            message_id=receipt.message_id,
        )
        return SendPlansEmailResponse(
            recipient=receipt.recipient,
            message_id=receipt.message_id,
            timestamp=receipt.timestamp,
            attachment=AttachmentInfo(filename=filename, size=len(pdf)),
            plans=plans,
        )
