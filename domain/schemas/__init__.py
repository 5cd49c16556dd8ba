"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.diet_schemas import (
    DietMealCreate,
    DietMealInput,
    DietPlanCreate,
    DietPlanUpdate,
    DietPlanChanges,
    DietMealResponse,
    DietPlanResponse,
    UNSET,
)
from domain.schemas.patient_schemas import (
    BiometricRecordCreate,
    BiometricRecordResponse,
    PatientCreate,
    PatientResponse,
    PatientDetailResponse,
    PlanSummary,
)
from domain.schemas.export_schemas import (
    CombinedPdfRequest,
    SendPlansEmailRequest,
    SendPlansEmailResponse,
    AttachmentInfo,
    PlanReference,
    SentPlans,
)

__all__ = [
    # Diet plan schemas
    "DietMealCreate",
    "DietMealInput",
    "DietPlanCreate",
    "DietPlanUpdate",
    "DietPlanChanges",
    "DietMealResponse",
    "DietPlanResponse",
    "UNSET",
    # Patient schemas
    "BiometricRecordCreate",
    "BiometricRecordResponse",
    "PatientCreate",
    "PatientResponse",
    "PatientDetailResponse",
    "PlanSummary",
    # Export schemas
    "CombinedPdfRequest",
    "SendPlansEmailRequest",
    "SendPlansEmailResponse",
    "AttachmentInfo",
    "PlanReference",
    "SentPlans",
]
