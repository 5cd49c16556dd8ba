"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import settings
from app.exceptions import (
    NutriTrackError,
    ServiceValidationError,
    UnknownMealError,
    UnauthorizedError,
    NotFoundError,
    PlanOwnershipError,
    TransactionError,
    InternalInconsistencyError,
    PdfGenerationError,
    EmailDeliveryError,
)

__all__ = [
    "settings",
    "NutriTrackError",
    "ServiceValidationError",
    "UnknownMealError",
    "UnauthorizedError",
    "NotFoundError",
    "PlanOwnershipError",
    "TransactionError",
    "InternalInconsistencyError",
    "PdfGenerationError",
    "EmailDeliveryError",
]
