from typing import Any, Mapping, Optional


class NutriTrackError(Exception):
    """Base class for every error the service layer raises on purpose.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, ids)
        code: machine-readable error code, defaults to the class code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Internal error"
    default_code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(NutriTrackError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_message = "Invalid input"
    default_code = "SERVICE_VALIDATION_ERROR"


class UnknownMealError(ServiceValidationError):
    """A desired meal carries an id that is not part of the plan being updated."""

    default_message = "Meal does not belong to this diet plan"
    default_code = "UNKNOWN_MEAL"


class UnauthorizedError(NutriTrackError):
    """Raised when the bearer token is missing, expired or malformed."""

    http_status = 401
    default_message = "Unauthorized"
    default_code = "UNAUTHORIZED"


class NotFoundError(NutriTrackError):
    """Raised when a requested resource was not found (or is not visible to the caller)."""

    http_status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class PlanOwnershipError(NotFoundError):
    """A plan was found inside a transaction but belongs to another professional.

    Reported to clients exactly like a missing plan.
    """


class TransactionError(NutriTrackError):
    """Storage failure inside an atomic unit; the unit has been rolled back."""

    http_status = 500
    default_message = "Database transaction failed"
    default_code = "TRANSACTION_FAILED"


class InternalInconsistencyError(NutriTrackError):
    """A row written in the current transaction could not be read back."""

    http_status = 500
    default_message = "Internal inconsistency"
    default_code = "INTERNAL_INCONSISTENCY"


class PdfGenerationError(NutriTrackError):
    http_status = 500
    default_message = "Unable to generate PDF document"
    default_code = "PDF_GENERATION_FAILED"


class EmailDeliveryError(NutriTrackError):
    http_status = 502
    default_message = "Email could not be delivered"
    default_code = "EMAIL_DELIVERY_FAILED"
