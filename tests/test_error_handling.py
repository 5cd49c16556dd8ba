"""
Error handling and edge case tests.

This test suite covers:
- The typed error hierarchy and its JSON shape
- The atomic unit-of-work helper
- Status <-> is_active mapping edge values
- Request validation of partial updates
- Storage failures surfacing through the API
"""

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from app.exceptions import (
    EmailDeliveryError,
    NotFoundError,
    NutriTrackError,
    PlanOwnershipError,
    ServiceValidationError,
    TransactionError,
    UnauthorizedError,
    UnknownMealError,
)
from domain.enums import PlanStatus
from domain.mappers import active_to_status, status_to_active
from domain.models import DietPlan, atomic
from domain.schemas import UNSET, DietPlanUpdate
from repositories import DietMealRepository


# =============================================================================
# ERROR HIERARCHY
# =============================================================================


@pytest.mark.parametrize(
    "error_cls, status, code",
    [
        (ServiceValidationError, 400, "SERVICE_VALIDATION_ERROR"),
        (UnknownMealError, 400, "UNKNOWN_MEAL"),
        (UnauthorizedError, 401, "UNAUTHORIZED"),
        (NotFoundError, 404, "NOT_FOUND"),
        (PlanOwnershipError, 404, "NOT_FOUND"),
        (TransactionError, 500, "TRANSACTION_FAILED"),
        (EmailDeliveryError, 502, "EMAIL_DELIVERY_FAILED"),
    ],
)
def test_error_classes_carry_status_and_code(error_cls, status, code):
    err = error_cls()

    assert isinstance(err, NutriTrackError)
    assert err.http_status == status
    assert err.to_dict()["code"] == code
    assert "details" not in err.to_dict()


def test_error_details_are_serialized():
    err = UnknownMealError("bad meals", details={"unknown_meal_ids": [3]})

    assert err.to_dict() == {
        "code": "UNKNOWN_MEAL",
        "message": "bad meals",
        "details": {"unknown_meal_ids": [3]},
    }
    assert str(err) == "bad meals"


# =============================================================================
# ATOMIC
# =============================================================================


def test_atomic_commits_on_success(db_session, patient):
    with atomic(db_session):
        db_session.add(DietPlan(patient_id=patient.id, professional_id=patient.professional_id, title="A"))

    db_session.rollback()
    assert db_session.query(DietPlan).count() == 1


def test_atomic_rolls_back_service_error_unchanged(db_session, patient):
    with pytest.raises(ServiceValidationError):
        with atomic(db_session):
            db_session.add(
                DietPlan(patient_id=patient.id, professional_id=patient.professional_id, title="B")
            )
            db_session.flush()
            raise ServiceValidationError("stop")

    assert db_session.query(DietPlan).count() == 0


def test_atomic_wraps_storage_errors(db_session):
    with pytest.raises(TransactionError) as exc_info:
        with atomic(db_session):
            raise OperationalError("UPDATE diet_meal", {}, Exception("database is locked"))

    assert exc_info.value.details == {"reason": "OperationalError"}
    assert isinstance(exc_info.value.__cause__, OperationalError)


# =============================================================================
# STATUS MAPPING
# =============================================================================


@pytest.mark.parametrize(
    "status, expected",
    [
        (PlanStatus.ACTIVE, True),
        ("ACTIVE", True),
        (PlanStatus.DRAFT, False),
        ("DRAFT", False),
        ("active", False),
        ("ARCHIVED", False),
        (None, False),
    ],
)
def test_status_to_active(status, expected):
    assert status_to_active(status) is expected


def test_active_to_status():
    assert active_to_status(True) == PlanStatus.ACTIVE
    assert active_to_status(False) == PlanStatus.DRAFT


# =============================================================================
# PARTIAL UPDATE VALIDATION
# =============================================================================


def test_update_tracks_only_sent_fields():
    changes = DietPlanUpdate.model_validate({"notes": None, "title": "T"}).to_changes()

    assert changes.plan_fields() == {"notes": None, "title": "T"}
    assert changes.meals is UNSET
    assert not changes.has_meals


def test_empty_meals_list_is_a_change():
    changes = DietPlanUpdate.model_validate({"meals": []}).to_changes()

    assert changes.has_meals
    assert changes.meals == []


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"title": None},
        {"status": None},
        {"meals": None},
        {"title": ""},
        {"status": "ARCHIVED"},
        {"startDate": "2025-03-01", "endDate": "2025-02-01"},
        {"meals": [{"id": 0, "mealType": "LUNCH", "dayOfWeek": "MONDAY", "content": "x"}]},
        {"meals": [{"mealType": "BRUNCH", "dayOfWeek": "MONDAY", "content": "x"}]},
        {"meals": [{"mealType": "LUNCH", "dayOfWeek": "MONDAY", "content": ""}]},
    ],
)
def test_invalid_update_payloads(payload):
    with pytest.raises(ValidationError):
        DietPlanUpdate.model_validate(payload)


# =============================================================================
# API ERROR ENVELOPE
# =============================================================================


def test_storage_failure_is_500_envelope(client, auth_headers, seeded_plan, monkeypatch):
    def broken_delete(self, plan_id, meal_ids):
        raise OperationalError("DELETE FROM diet_meal", {}, Exception("disk I/O error"))

    monkeypatch.setattr(DietMealRepository, "delete_for_plan", broken_delete)

    resp = client.patch(
        f"/api/diet-plans/{seeded_plan.id}", json={"title": "x", "meals": []}, headers=auth_headers
    )

    assert resp.status_code == 500
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "TRANSACTION_FAILED"
    assert "timestamp" in body
