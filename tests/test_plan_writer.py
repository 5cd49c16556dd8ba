"""
Tests for the transactional diet plan writer.

Verifies:
- Plan fields and meal reconciliation land together
- A storage failure half way leaves the plan exactly as it was
- Partial updates only touch the fields that were sent
- The status string round-trips through the stored boolean
- Meals come back ordered by day of week, then meal type
"""

from datetime import date

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import (
    NotFoundError,
    PlanOwnershipError,
    ServiceValidationError,
    TransactionError,
    UnknownMealError,
)
from domain.enums import DayOfWeek, MealType, PlanStatus
from domain.models import DietMeal, DietPlan
from domain.schemas import DietMealCreate, DietPlanCreate, DietPlanUpdate
from repositories import DietMealRepository
from services.plan_writer import TransactionalPlanWriter

from conftest import make_diet_plan, make_patient


def update(**payload):
    return DietPlanUpdate.model_validate(payload).to_changes()


# =============================================================================
# CREATE
# =============================================================================


def test_create_defaults_to_active(db_session, patient):
    data = DietPlanCreate(
        title="Cut phase",
        meals=[
            DietMealCreate(meal_type=MealType.DINNER, day_of_week=DayOfWeek.FRIDAY, content="Fish"),
            DietMealCreate(meal_type=MealType.BREAKFAST, day_of_week=DayOfWeek.MONDAY, content="Eggs"),
        ],
    )

    plan = TransactionalPlanWriter(db_session).create(patient.id, patient.professional_id, data)

    assert plan.status == PlanStatus.ACTIVE
    assert plan.title == "Cut phase"
    assert [m.content for m in plan.meals] == ["Eggs", "Fish"]
    assert all(m.diet_plan_id == plan.id for m in plan.meals)
    assert db_session.get(DietPlan, plan.id).is_active is True


def test_create_draft_with_no_meals(db_session, patient):
    data = DietPlanCreate(title="Draft", status=PlanStatus.DRAFT)

    plan = TransactionalPlanWriter(db_session).create(patient.id, patient.professional_id, data)

    assert plan.status == PlanStatus.DRAFT
    assert plan.meals == []


# =============================================================================
# UPDATE: RECONCILIATION
# =============================================================================


def test_update_moves_deletes_and_adds_meals(db_session, patient, seeded_plan):
    """
    Verifies:
    - Meal 1 is moved to Tuesday, keeping its id
    - Meal 2 is deleted
    - A new dinner is inserted
    """
    changes = update(
        title="Week 2",
        meals=[
            {"id": 1, "mealType": "BREAKFAST", "dayOfWeek": "TUESDAY", "content": "Oats"},
            {"mealType": "DINNER", "dayOfWeek": "MONDAY", "content": "Fish"},
        ],
    )

    plan = TransactionalPlanWriter(db_session).update(
        seeded_plan.id, patient.professional_id, changes
    )

    assert plan.title == "Week 2"
    assert len(plan.meals) == 2
    by_content = {m.content: m for m in plan.meals}
    assert by_content["Oats"].id == 1
    assert by_content["Oats"].day_of_week == DayOfWeek.TUESDAY
    assert by_content["Fish"].id not in (1, 2)
    assert db_session.get(DietMeal, 2) is None


def test_deleted_meal_id_is_never_reassigned(db_session, patient, seeded_plan):
    """Deleting the highest meal id and inserting must not hand that id out again."""
    writer = TransactionalPlanWriter(db_session)
    writer.update(
        seeded_plan.id,
        patient.professional_id,
        update(meals=[{"id": 1, "mealType": "BREAKFAST", "dayOfWeek": "MONDAY", "content": "Oats"}]),
    )

    plan = writer.update(
        seeded_plan.id,
        patient.professional_id,
        update(
            meals=[
                {"id": 1, "mealType": "BREAKFAST", "dayOfWeek": "MONDAY", "content": "Oats"},
                {"mealType": "LUNCH", "dayOfWeek": "MONDAY", "content": "Pasta"},
            ]
        ),
    )

    assert [m.id for m in plan.meals] == [1, 3]


def test_resubmitting_plan_changes_nothing(db_session, patient, seeded_plan):
    writer = TransactionalPlanWriter(db_session)
    before = writer.update(seeded_plan.id, patient.professional_id, update(notes="n"))

    after = writer.update(
        seeded_plan.id,
        patient.professional_id,
        update(
            meals=[
                {"id": m.id, "mealType": m.meal_type, "dayOfWeek": m.day_of_week, "content": m.content}
                for m in before.meals
            ]
        ),
    )

    assert [(m.id, m.meal_type, m.day_of_week, m.content) for m in after.meals] == [
        (m.id, m.meal_type, m.day_of_week, m.content) for m in before.meals
    ]


def test_empty_meal_list_clears_meals(db_session, patient, seeded_plan):
    plan = TransactionalPlanWriter(db_session).update(
        seeded_plan.id, patient.professional_id, update(meals=[])
    )

    assert plan.meals == []
    assert db_session.query(DietMeal).count() == 0


def test_unknown_meal_id_rolls_back_field_changes(db_session, patient, seeded_plan):
    with pytest.raises(UnknownMealError):
        TransactionalPlanWriter(db_session).update(
            seeded_plan.id,
            patient.professional_id,
            update(
                title="Should not stick",
                meals=[{"id": 42, "mealType": "LUNCH", "dayOfWeek": "MONDAY", "content": "x"}],
            ),
        )

    db_session.expire_all()
    assert db_session.get(DietPlan, seeded_plan.id).title == "Weekly plan"


def test_meal_of_another_plan_cannot_be_hijacked(db_session, patient, seeded_plan):
    other = make_diet_plan(
        db_session, patient, meals=[(MealType.DINNER, DayOfWeek.SUNDAY, "Soup")], title="Other"
    )
    foreign_id = db_session.query(DietMeal).filter_by(diet_plan_id=other.id).one().id

    with pytest.raises(UnknownMealError):
        TransactionalPlanWriter(db_session).update(
            seeded_plan.id,
            patient.professional_id,
            update(meals=[{"id": foreign_id, "mealType": "LUNCH", "dayOfWeek": "MONDAY", "content": "x"}]),
        )

    db_session.expire_all()
    assert db_session.get(DietMeal, foreign_id).content == "Soup"


# =============================================================================
# UPDATE: ATOMICITY
# =============================================================================


def test_storage_failure_rolls_back_whole_update(db_session, patient, seeded_plan, monkeypatch):
    """
    Verifies:
    - Insert step fails after the delete and field update already ran
    - TransactionError surfaces and nothing of the update is visible
    """

    def failing_insert(self, plan_id, meals):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(DietMealRepository, "bulk_insert", failing_insert)

    with pytest.raises(TransactionError):
        TransactionalPlanWriter(db_session).update(
            seeded_plan.id,
            patient.professional_id,
            update(
                title="Broken",
                meals=[
                    {"id": 1, "mealType": "BREAKFAST", "dayOfWeek": "TUESDAY", "content": "Oats"},
                    {"mealType": "DINNER", "dayOfWeek": "MONDAY", "content": "Fish"},
                ],
            ),
        )

    db_session.expire_all()
    plan = db_session.get(DietPlan, seeded_plan.id)
    assert plan.title == "Weekly plan"
    meals = DietMealRepository(db_session).list_for_plan(plan.id)
    assert [(m.id, m.day_of_week) for m in meals] == [
        (1, DayOfWeek.MONDAY),
        (2, DayOfWeek.MONDAY),
    ]


def test_meal_removed_concurrently_is_unknown_meal(db_session, patient, seeded_plan, monkeypatch):
    """An update that matches no row means another writer deleted the meal first."""
    monkeypatch.setattr(DietMealRepository, "update_for_plan", lambda self, *args: 0)

    with pytest.raises(UnknownMealError) as exc_info:
        TransactionalPlanWriter(db_session).update(
            seeded_plan.id,
            patient.professional_id,
            update(
                title="Raced",
                meals=[{"id": 1, "mealType": "BREAKFAST", "dayOfWeek": "TUESDAY", "content": "Oats"}],
            ),
        )

    assert exc_info.value.http_status == 400
    assert exc_info.value.details == {"unknown_meal_ids": [1]}
    db_session.expire_all()
    assert db_session.get(DietPlan, seeded_plan.id).title == "Weekly plan"
    assert db_session.query(DietMeal).count() == 2


def test_storage_failure_rolls_back_whole_create(db_session, patient, monkeypatch):
    """
    Verifies:
    - Meal insert fails after the plan row was flushed
    - TransactionError surfaces and no plan or meal row is left behind
    """

    def failing_insert(self, plan_id, meals):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(DietMealRepository, "bulk_insert", failing_insert)
    data = DietPlanCreate(
        title="Never stored",
        meals=[DietMealCreate(meal_type=MealType.LUNCH, day_of_week=DayOfWeek.MONDAY, content="Rice")],
    )

    with pytest.raises(TransactionError):
        TransactionalPlanWriter(db_session).create(patient.id, patient.professional_id, data)

    assert db_session.query(DietPlan).count() == 0
    assert db_session.query(DietMeal).count() == 0


# =============================================================================
# UPDATE: FIELDS AND STATUS
# =============================================================================


def test_partial_update_only_touches_sent_fields(db_session, patient, seeded_plan):
    writer = TransactionalPlanWriter(db_session)
    writer.update(
        seeded_plan.id, patient.professional_id, update(notes="Drink water", objectives="Tone")
    )

    plan = writer.update(seeded_plan.id, patient.professional_id, update(notes=""))

    assert plan.notes == ""
    assert plan.objectives == "Tone"
    assert plan.title == "Weekly plan"
    assert [m.content for m in plan.meals] == ["Oats", "Rice"]


def test_explicit_null_clears_optional_field(db_session, patient, seeded_plan):
    plan = TransactionalPlanWriter(db_session).update(
        seeded_plan.id, patient.professional_id, update(endDate=None)
    )

    assert plan.end_date is None
    assert plan.start_date == date(2025, 1, 6)


@pytest.mark.parametrize(
    "sent, stored, shown",
    [
        ("DRAFT", False, PlanStatus.DRAFT),
        ("ACTIVE", True, PlanStatus.ACTIVE),
    ],
)
def test_status_round_trip(db_session, patient, seeded_plan, sent, stored, shown):
    plan = TransactionalPlanWriter(db_session).update(
        seeded_plan.id, patient.professional_id, update(status=sent)
    )

    assert plan.status == shown
    db_session.expire_all()
    assert db_session.get(DietPlan, seeded_plan.id).is_active is stored


def test_merged_dates_are_validated(db_session, patient, seeded_plan):
    """Stored start is 2025-01-06; sending only an earlier end must fail."""
    with pytest.raises(ServiceValidationError):
        TransactionalPlanWriter(db_session).update(
            seeded_plan.id, patient.professional_id, update(endDate="2025-01-01")
        )


# =============================================================================
# UPDATE: ORDERING AND OWNERSHIP
# =============================================================================


def test_meals_are_ordered_by_day_then_meal_type(db_session, patient):
    plan = make_diet_plan(
        db_session,
        patient,
        meals=[
            (MealType.DINNER, DayOfWeek.WEDNESDAY, "c"),
            (MealType.LUNCH, DayOfWeek.MONDAY, "b"),
            (MealType.BREAKFAST, DayOfWeek.WEDNESDAY, "d"),
            (MealType.BREAKFAST, DayOfWeek.MONDAY, "a"),
            (MealType.AFTERNOON_SNACK, DayOfWeek.SUNDAY, "e"),
        ],
    )

    result = TransactionalPlanWriter(db_session).update(
        plan.id, patient.professional_id, update(title="Sorted")
    )

    assert [m.content for m in result.meals] == ["a", "b", "d", "c", "e"]


def test_update_by_non_owner_raises_ownership_error(db_session, seeded_plan, other_professional):
    with pytest.raises(PlanOwnershipError) as exc_info:
        TransactionalPlanWriter(db_session).update(
            seeded_plan.id, other_professional.id, update(title="Mine now")
        )

    assert isinstance(exc_info.value, NotFoundError)


def test_update_soft_deleted_plan_is_not_found(db_session, patient, seeded_plan):
    seeded_plan.is_deleted = True
    db_session.commit()

    with pytest.raises(NotFoundError):
        TransactionalPlanWriter(db_session).update(
            seeded_plan.id, patient.professional_id, update(title="Ghost")
        )


def test_ownership_follows_patient_not_plan_column(db_session, professional, other_professional):
    """A plan whose patient moved to another professional belongs to the new one."""
    patient = make_patient(db_session, other_professional.id, first_name="Ana")
    plan = make_diet_plan(db_session, patient)
    plan.professional_id = professional.id
    db_session.commit()

    with pytest.raises(PlanOwnershipError):
        TransactionalPlanWriter(db_session).update(plan.id, professional.id, update(title="x"))
