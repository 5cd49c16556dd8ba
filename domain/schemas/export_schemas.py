from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, model_validator

from domain.schemas.base import CamelModel


class PlanSelection(CamelModel):
    """Which plans go into the combined document; at least one is required."""

    diet_plan_id: Optional[int] = Field(default=None, gt=0)
    workout_plan_id: Optional[int] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def require_a_plan(self):
        if self.diet_plan_id is None and self.workout_plan_id is None:
            raise ValueError("Specify at least one plan (diet or workout)")
        return self


class CombinedPdfRequest(PlanSelection):
    pass


class SendPlansEmailRequest(PlanSelection):
    recipient_email: EmailStr
    subject: str = Field(..., min_length=1, max_length=200)
    body_message: Optional[str] = Field(default=None, max_length=1000)


class AttachmentInfo(CamelModel):
    filename: str
    size: int


class PlanReference(CamelModel):
    id: int
    title: str


class SentPlans(CamelModel):
    diet_plan: Optional[PlanReference] = None
    workout_plan: Optional[PlanReference] = None


class SendPlansEmailResponse(CamelModel):
    message: str = "Email sent successfully"
    recipient: str
    message_id: str
    timestamp: datetime
    attachment: AttachmentInfo
    plans: SentPlans
