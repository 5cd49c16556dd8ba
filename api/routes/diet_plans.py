"""Diet plan routes"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from api.auth import AuthenticatedProfessional, get_current_professional
from domain.models import get_db_session
from domain.schemas import DietPlanCreate, DietPlanResponse, DietPlanUpdate
from services import DietPlanService

router = APIRouter(tags=["Diet Plans"])
logger = logging.getLogger("nutritrack.api.diet_plans")


@router.post(
    "/patients/{patient_id}/diet-plans",
    response_model=DietPlanResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_diet_plan(
    patient_id: int,
    body: DietPlanCreate,
    db: Session = Depends(get_db_session),
    current: AuthenticatedProfessional = Depends(get_current_professional),
):
    """Create a diet plan with its initial meals. Status defaults to ACTIVE."""
    return DietPlanService(db).create_plan(patient_id, current.professional_id, body)


@router.get("/patients/{patient_id}/diet-plans", response_model=List[DietPlanResponse])
def list_diet_plans(
    patient_id: int,
    db: Session = Depends(get_db_session),
    current: AuthenticatedProfessional = Depends(get_current_professional),
):
    return DietPlanService(db).list_plans(patient_id, current.professional_id)


@router.get("/diet-plans/{plan_id}", response_model=DietPlanResponse)
def get_diet_plan(
    plan_id: int,
    db: Session = Depends(get_db_session),
    current: AuthenticatedProfessional = Depends(get_current_professional),
):
    return DietPlanService(db).get_plan(plan_id, current.professional_id)


@router.patch("/diet-plans/{plan_id}", response_model=DietPlanResponse)
def update_diet_plan(
    plan_id: int,
    body: DietPlanUpdate,
    db: Session = Depends(get_db_session),
    current: AuthenticatedProfessional = Depends(get_current_professional),
):
    """
    Partially update a diet plan.

    When `meals` is sent it is the complete desired meal list: entries with
    an id are updated in place, entries without one are created, and stored
    meals left out are deleted.
    """
    logger.info(
        "Updating diet plan %s (fields=%s)",
        plan_id,
        sorted(body.model_fields_set),
    )
    return DietPlanService(db).update_plan(plan_id, current.professional_id, body)


@router.delete("/diet-plans/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_diet_plan(
    plan_id: int,
    db: Session = Depends(get_db_session),
    current: AuthenticatedProfessional = Depends(get_current_professional),
):
    DietPlanService(db).delete_plan(plan_id, current.professional_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
