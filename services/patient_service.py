from typing import List, Optional

from sqlalchemy.orm import Session

from domain.mappers import DietPlanMapper
from domain.models import BiometricRecord, Patient, atomic
from domain.schemas import (
    BiometricRecordResponse,
    PatientCreate,
    PatientDetailResponse,
    PatientResponse,
)
from repositories import (
    BiometricRecordRepository,
    DietPlanRepository,
    PatientRepository,
    WorkoutPlanRepository,
)
from services.base_service import BaseService
from services.ownership import patient_not_found


class PatientService(BaseService):
    """Business logic for a professional's patient roster"""

    logger_name = "nutritrack.services.patients"

    def __init__(self, db: Session):
        super().__init__(db)
        self.patients = PatientRepository(db)
        self.biometrics = BiometricRecordRepository(db)
        self.diet_plans = DietPlanRepository(db)
        self.workout_plans = WorkoutPlanRepository(db)

    def list_patients(
        self, professional_id: int, search: Optional[str] = None
    ) -> List[PatientResponse]:
        patients = self.patients.list_for_professional(professional_id, search)
        self.log_info(
            "patients_listed", professional_id=professional_id, count=len(patients)
        )
        return [PatientResponse.model_validate(p) for p in patients]

    def get_patient(self, patient_id: int, professional_id: int) -> PatientDetailResponse:
        """
        Patient profile with the latest biometric record and summaries of
        the non-deleted diet and workout plans.
        """
        patient = self.patients.get_owned(patient_id, professional_id)
        if patient is None:
            raise patient_not_found(patient_id)

        latest = self.biometrics.latest_for_patient(patient_id)
        detail = PatientDetailResponse.model_validate(patient)
        detail.last_biometric_record = (
            BiometricRecordResponse.model_validate(latest) if latest else None
        )
        detail.diet_plans_summary = [
            DietPlanMapper.to_summary(p) for p in self.diet_plans.list_for_patient(patient_id)
        ]
        detail.workout_plans_summary = [
            DietPlanMapper.to_summary(p)
            for p in self.workout_plans.list_for_patient(patient_id)
        ]
        return detail

    def create_patient(self, professional_id: int, data: PatientCreate) -> PatientResponse:
        """Create a patient, plus its first biometric record when one is supplied."""
        values = data.model_dump(exclude={"initial_biometrics"})
        if values.get("email"):
            values["email"] = str(values["email"]).lower()

        with atomic(self.db):
            patient = Patient(professional_id=professional_id, **values)
            self.patients.add(patient)
            if data.initial_biometrics is not None:
                self.biometrics.add(
                    BiometricRecord(
                        patient_id=patient.id, **data.initial_biometrics.model_dump()
                    )
                )
            response = PatientResponse.model_validate(patient)

        self.log_info(
            "patient_created",
            patient_id=response.id,
            professional_id=professional_id,
            with_biometrics=data.initial_biometrics is not None,
        )
        return response
