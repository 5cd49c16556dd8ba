"""
Patient Repository - Data access layer for professionals, patients and biometrics
"""

from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Professional, Patient, BiometricRecord


class ProfessionalRepository(BaseRepository[Professional]):
    """Repository for professional accounts"""

    def __init__(self, db: Session):
        super().__init__(db, Professional)


class PatientRepository(BaseRepository[Patient]):
    """Repository for patient data access, always scoped by professional"""

    def __init__(self, db: Session):
        super().__init__(db, Patient)

    def get_owned(self, patient_id: int, professional_id: int) -> Optional[Patient]:
        """Get patient only if it belongs to the professional"""
        return (
            self.db.query(Patient)
            .filter(
                Patient.id == patient_id,
                Patient.professional_id == professional_id,
            )
            .first()
        )

    def list_for_professional(
        self, professional_id: int, search: Optional[str] = None
    ) -> List[Patient]:
        """
        List a professional's patients, newest first.

        search matches first name, last name or email, case-insensitively.
        """
        query = self.db.query(Patient).filter(Patient.professional_id == professional_id)
        term = (search or "").strip()
        if term:
            pattern = f"%{term}%"
            query = query.filter(
                or_(
                    Patient.first_name.ilike(pattern),
                    Patient.last_name.ilike(pattern),
                    Patient.email.ilike(pattern),
                )
            )
        return query.order_by(Patient.created_at.desc(), Patient.id.desc()).all()


class BiometricRecordRepository(BaseRepository[BiometricRecord]):
    """Repository for biometric history"""

    def __init__(self, db: Session):
        super().__init__(db, BiometricRecord)

    def list_for_patient(self, patient_id: int) -> List[BiometricRecord]:
        return (
            self.db.query(BiometricRecord)
            .filter(BiometricRecord.patient_id == patient_id)
            .order_by(BiometricRecord.record_date.desc(), BiometricRecord.id.desc())
            .all()
        )

    def latest_for_patient(self, patient_id: int) -> Optional[BiometricRecord]:
        return (
            self.db.query(BiometricRecord)
            .filter(BiometricRecord.patient_id == patient_id)
            .order_by(BiometricRecord.record_date.desc(), BiometricRecord.id.desc())
            .first()
        )
