from typing import List
import logging

from sqlalchemy.orm import Session

from domain.models import BiometricRecord, atomic
from domain.schemas import BiometricRecordCreate, BiometricRecordResponse
from repositories import BiometricRecordRepository
from services.ownership import OwnershipGuard

logger = logging.getLogger("nutritrack.services.biometrics")


class BiometricService:
    """Biometric history of a patient"""

    @staticmethod
    def list_records(
        db: Session, patient_id: int, professional_id: int
    ) -> List[BiometricRecordResponse]:
        """Records newest first"""
        OwnershipGuard(db).require_patient(patient_id, professional_id)
        records = BiometricRecordRepository(db).list_for_patient(patient_id)
        return [BiometricRecordResponse.model_validate(r) for r in records]

    @staticmethod
    def add_record(
        db: Session, patient_id: int, professional_id: int, data: BiometricRecordCreate
    ) -> BiometricRecordResponse:
        OwnershipGuard(db).require_patient(patient_id, professional_id)
        with atomic(db):
            record = BiometricRecord(patient_id=patient_id, **data.model_dump())
            BiometricRecordRepository(db).add(record)
            response = BiometricRecordResponse.model_validate(record)
        logger.info(
            f"biometric_record_added patient_id={patient_id} record_id={response.id}"
        )
        return response
