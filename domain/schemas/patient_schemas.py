from datetime import date, datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from domain.enums import PlanStatus
from domain.schemas.base import CamelModel


class BiometricRecordCreate(CamelModel):
    record_date: date
    weight: Optional[float] = Field(default=None, gt=0)
    body_fat_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    muscle_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    water_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    back_chest_diameter: Optional[float] = Field(default=None, ge=0)
    waist_diameter: Optional[float] = Field(default=None, ge=0)
    arms_diameter: Optional[float] = Field(default=None, ge=0)
    legs_diameter: Optional[float] = Field(default=None, ge=0)
    calves_diameter: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None


class BiometricRecordResponse(CamelModel):
    id: int
    patient_id: int
    record_date: date
    weight: Optional[float] = None
    body_fat_percentage: Optional[float] = None
    muscle_percentage: Optional[float] = None
    water_percentage: Optional[float] = None
    back_chest_diameter: Optional[float] = None
    waist_diameter: Optional[float] = None
    arms_diameter: Optional[float] = None
    legs_diameter: Optional[float] = None
    calves_diameter: Optional[float] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class PatientCreate(CamelModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[str] = None
    height: Optional[float] = Field(default=None, gt=0)
    medical_notes: Optional[str] = None
    diet_restrictions: Optional[str] = None
    objectives: Optional[str] = None
    initial_biometrics: Optional[BiometricRecordCreate] = None


class PatientResponse(CamelModel):
    id: int
    professional_id: int
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[str] = None
    height: Optional[float] = None
    medical_notes: Optional[str] = None
    diet_restrictions: Optional[str] = None
    objectives: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PlanSummary(CamelModel):
    id: int
    title: str
    status: PlanStatus
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class PatientDetailResponse(PatientResponse):
    last_biometric_record: Optional[BiometricRecordResponse] = None
    diet_plans_summary: List[PlanSummary] = Field(default_factory=list)
    workout_plans_summary: List[PlanSummary] = Field(default_factory=list)
