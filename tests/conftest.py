"""
Pytest configuration and shared fixtures.

Every test gets a fresh in-memory SQLite database. The API client reuses
the same session through a dependency override, so route tests and service
tests see the same rows.
"""

import os
import sys
from datetime import date
from pathlib import Path

# Point settings at SQLite before any application module is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ["JWT_SECRET_KEY"] = "test-secret"

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from api.auth import create_access_token
from domain.enums import DayOfWeek, MealType, ProfessionType
from domain.models import Base, DietMeal, DietPlan, Patient, Professional, get_db_session
from main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSession = sessionmaker(bind=engine, future=True)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


def make_professional(db, email="laura.gomez@example.com", profession=ProfessionType.NUTRITIONIST):
    professional = Professional(
        first_name="Laura",
        last_name="Gómez",
        email=email,
        password_hash="not-a-real-hash",
        profession=profession,
    )
    db.add(professional)
    db.commit()
    return professional


def make_patient(db, professional_id, first_name="Carlos", last_name="Ruiz", email=None):
    patient = Patient(
        professional_id=professional_id,
        first_name=first_name,
        last_name=last_name,
        email=email or f"{first_name.lower()}.{last_name.lower()}@example.com",
        birth_date=date(1990, 5, 17),
        height=178,
        objectives="Lose 5 kg",
    )
    db.add(patient)
    db.commit()
    return patient


def make_diet_plan(db, patient, meals=(), title="Weekly plan", is_active=True):
    """Seed a plan directly; meals are (meal_type, day_of_week, content) tuples"""
    plan = DietPlan(
        patient_id=patient.id,
        professional_id=patient.professional_id,
        title=title,
        is_active=is_active,
        start_date=date(2025, 1, 6),
        end_date=date(2025, 2, 2),
    )
    db.add(plan)
    db.flush()
    for meal_type, day, content in meals:
        db.add(DietMeal(diet_plan_id=plan.id, meal_type=meal_type, day_of_week=day, content=content))
    db.commit()
    return plan


@pytest.fixture
def professional(db_session):
    return make_professional(db_session)


@pytest.fixture
def other_professional(db_session):
    return make_professional(
        db_session, email="marco.trainer@example.com", profession=ProfessionType.TRAINER
    )


@pytest.fixture
def patient(db_session, professional):
    return make_patient(db_session, professional.id)


@pytest.fixture
def seeded_plan(db_session, patient):
    """Plan with meal 1 = Monday breakfast and meal 2 = Monday lunch"""
    return make_diet_plan(
        db_session,
        patient,
        meals=[
            (MealType.BREAKFAST, DayOfWeek.MONDAY, "Oats"),
            (MealType.LUNCH, DayOfWeek.MONDAY, "Rice"),
        ],
    )


@pytest.fixture
def client(db_session):
    def override_get_db_session():
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def bearer(professional):
    token = create_access_token(
        professional.id, professional.email, professional.profession.value
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(professional):
    return bearer(professional)


@pytest.fixture
def other_auth_headers(other_professional):
    return bearer(other_professional)


class FakeSMTP:
    """Records what an smtplib.SMTP client would have been asked to do"""

    sent = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.calls = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(("login", user))

    def send_message(self, message):
        FakeSMTP.sent.append(message)


@pytest.fixture(autouse=True)
def reset_outbox():
    FakeSMTP.sent = []
