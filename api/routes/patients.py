"""Patient roster and biometric history routes"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.auth import AuthenticatedProfessional, get_current_professional
from domain.models import get_db_session
from domain.schemas import (
    BiometricRecordCreate,
    BiometricRecordResponse,
    PatientCreate,
    PatientDetailResponse,
    PatientResponse,
)
from services import BiometricService, PatientService

router = APIRouter(prefix="/patients", tags=["Patients"])
logger = logging.getLogger("nutritrack.api.patients")


@router.get("", response_model=List[PatientResponse])
def list_patients(
    search: Optional[str] = Query(None, max_length=100),
    db: Session = Depends(get_db_session),
    current: AuthenticatedProfessional = Depends(get_current_professional),
):
    """List the caller's patients, optionally filtered by name or email."""
    return PatientService(db).list_patients(current.professional_id, search)


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
def create_patient(
    body: PatientCreate,
    db: Session = Depends(get_db_session),
    current: AuthenticatedProfessional = Depends(get_current_professional),
):
    return PatientService(db).create_patient(current.professional_id, body)


@router.get("/{patient_id}", response_model=PatientDetailResponse)
def get_patient(
    patient_id: int,
    db: Session = Depends(get_db_session),
    current: AuthenticatedProfessional = Depends(get_current_professional),
):
    return PatientService(db).get_patient(patient_id, current.professional_id)


@router.get("/{patient_id}/biometric-records", response_model=List[BiometricRecordResponse])
def list_biometric_records(
    patient_id: int,
    db: Session = Depends(get_db_session),
    current: AuthenticatedProfessional = Depends(get_current_professional),
):
    return BiometricService.list_records(db, patient_id, current.professional_id)


@router.post(
    "/{patient_id}/biometric-records",
    response_model=BiometricRecordResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_biometric_record(
    patient_id: int,
    body: BiometricRecordCreate,
    db: Session = Depends(get_db_session),
    current: AuthenticatedProfessional = Depends(get_current_professional),
):
    logger.info(
        "Adding biometric record for patient %s by professional %s",
        patient_id,
        current.professional_id,
    )
    return BiometricService.add_record(db, patient_id, current.professional_id, body)
