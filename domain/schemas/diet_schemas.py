"""
Diet plan request/response schemas and the partial-update change set.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, model_validator

from domain.enums import DayOfWeek, MealType, PlanStatus
from domain.schemas.base import CamelModel


class DietMealCreate(CamelModel):
    meal_type: MealType
    day_of_week: DayOfWeek
    content: str = Field(..., min_length=1)


class DietMealInput(DietMealCreate):
    """Desired meal in an update; carries the id when it already exists."""

    id: Optional[int] = Field(default=None, gt=0)


class DietPlanCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    objectives: Optional[str] = None
    status: PlanStatus = PlanStatus.ACTIVE
    notes: Optional[str] = None
    meals: List[DietMealCreate] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_date_range(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("endDate cannot be earlier than startDate")
        return self


class DietPlanUpdate(CamelModel):
    """
    Partial update. Only keys present in the request body are applied;
    an explicit null or empty string clears an optional text/date field.
    """

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    objectives: Optional[str] = None
    status: Optional[PlanStatus] = None
    notes: Optional[str] = None
    meals: Optional[List[DietMealInput]] = None

    @model_validator(mode="after")
    def check_payload(self):
        provided = self.model_fields_set
        if not provided:
            raise ValueError("At least one field must be provided")
        for name in ("title", "status", "meals"):
            if name in provided and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("endDate cannot be earlier than startDate")
        return self

    def to_changes(self) -> "DietPlanChanges":
        provided = self.model_fields_set
        values = {
            name: getattr(self, name)
            for name in PLAN_FIELD_NAMES
            if name in provided
        }
        meals = self.meals if "meals" in provided else UNSET
        return DietPlanChanges(meals=meals, **values)


class _Unset(enum.Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset.UNSET


@dataclass(frozen=True)
class DietPlanChanges:
    """
    Field-by-field change set for a diet plan.

    Every attribute is either UNSET (leave the stored value alone) or the
    new value, which may itself be None to clear the column.
    """

    title: Union[str, _Unset] = UNSET
    description: Union[Optional[str], _Unset] = UNSET
    start_date: Union[Optional[date], _Unset] = UNSET
    end_date: Union[Optional[date], _Unset] = UNSET
    objectives: Union[Optional[str], _Unset] = UNSET
    status: Union[PlanStatus, str, _Unset] = UNSET
    notes: Union[Optional[str], _Unset] = UNSET
    meals: Union[List[DietMealInput], _Unset] = UNSET

    def plan_fields(self) -> Dict[str, Any]:
        """Plan columns explicitly present in the change set (meals excluded)."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "meals" and getattr(self, f.name) is not UNSET
        }

    @property
    def has_meals(self) -> bool:
        return self.meals is not UNSET


PLAN_FIELD_NAMES = tuple(f.name for f in fields(DietPlanChanges) if f.name != "meals")


class DietMealResponse(CamelModel):
    id: int
    diet_plan_id: int
    meal_type: MealType
    day_of_week: DayOfWeek
    content: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DietPlanResponse(CamelModel):
    id: int
    patient_id: int
    professional_id: int
    title: str
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    objectives: Optional[str] = None
    notes: Optional[str] = None
    status: PlanStatus
    meals: List[DietMealResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
