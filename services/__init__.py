"""
Services package - Business logic layer.
"""

from services.ownership import OwnershipGuard
from services.plan_reconciler import MealDiff, reconcile_meals
from services.plan_writer import TransactionalPlanWriter
from services.diet_plan_service import DietPlanService
from services.patient_service import PatientService
from services.biometric_service import BiometricService
from services.email_service import EmailAttachment, EmailReceipt, EmailService
from services.plan_export_service import PlanExportService

__all__ = [
    "OwnershipGuard",
    "MealDiff",
    "reconcile_meals",
    "TransactionalPlanWriter",
    "DietPlanService",
    "PatientService",
    "BiometricService",
    "EmailAttachment",
    "EmailReceipt",
    "EmailService",
    "PlanExportService",
]
