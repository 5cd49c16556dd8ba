"""Combined plan PDF download and email routes"""

import logging
import unicodedata
from urllib.parse import quote

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from api.auth import AuthenticatedProfessional, get_current_professional
from domain.models import get_db_session
from domain.schemas import CombinedPdfRequest, SendPlansEmailRequest, SendPlansEmailResponse
from services import EmailService, PlanExportService

router = APIRouter(prefix="/patients/{patient_id}", tags=["Plan Export"])
logger = logging.getLogger("nutritrack.api.exports")


def get_email_service() -> EmailService:
    return EmailService()


def attachment_disposition(filename: str) -> str:
    """
    Content-Disposition for a download whose name may hold any Unicode.

    Header values must be Latin-1, so the plain filename is an ASCII
    fallback and the real name travels RFC 5987 encoded in filename*.
    """
    ascii_name = (
        unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
    )
    ascii_name = ascii_name.replace("\\", "").replace('"', "").strip() or "plan.pdf"
    encoded = quote(filename, safe="")
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{encoded}"


@router.post("/combined-pdf", response_class=Response)
def download_combined_pdf(
    patient_id: int,
    body: CombinedPdfRequest,
    db: Session = Depends(get_db_session),
    current: AuthenticatedProfessional = Depends(get_current_professional),
):
    """Return the selected diet and/or workout plan as one PDF attachment."""
    filename, pdf = PlanExportService(db).build_combined_pdf(
        patient_id,
        current.professional_id,
        diet_plan_id=body.diet_plan_id,
        workout_plan_id=body.workout_plan_id,
    )
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={
            "Content-Disposition": attachment_disposition(filename),
            "Content-Length": str(len(pdf)),
        },
    )


@router.post("/send-plans-email", response_model=SendPlansEmailResponse)
def send_plans_email(
    patient_id: int,
    body: SendPlansEmailRequest,
    db: Session = Depends(get_db_session),
    current: AuthenticatedProfessional = Depends(get_current_professional),
    email_service: EmailService = Depends(get_email_service),
):
    logger.info(
        "Emailing plans of patient %s to %s", patient_id, body.recipient_email
    )
    return PlanExportService(db, email_service=email_service).email_plans(
        patient_id,
        current.professional_id,
        recipient_email=body.recipient_email,
        subject=body.subject,
        body_message=body.body_message,
        diet_plan_id=body.diet_plan_id,
        workout_plan_id=body.workout_plan_id,
    )
