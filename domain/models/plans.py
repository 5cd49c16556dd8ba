"""
Diet and workout plan models.
"""

from sqlalchemy import (
    Column,
    Integer,
    Text,
    Date,
    Boolean,
    TIMESTAMP,
    ForeignKey,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base
from domain.enums import DayOfWeek, MealType


class DietPlan(Base):
    """
    Diet plan owned by a patient and, denormalised, by the patient's professional.

    professional_id always equals patient.professional_id; it is set once on
    creation and never rewritten.
    """

    __tablename__ = "diet_plan"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(
        Integer, ForeignKey("patient.id", ondelete="CASCADE"), nullable=False, index=True
    )
    professional_id = Column(
        Integer,
        ForeignKey("professional.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(Text, nullable=False)
    description = Column(Text)
    start_date = Column(Date)
    end_date = Column(Date)
    objectives = Column(Text)
    notes = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    deleted_at = Column(TIMESTAMP(timezone=True))
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    patient = relationship("Patient", back_populates="diet_plans")
    meals = relationship(
        "DietMeal", back_populates="plan", cascade="all, delete-orphan"
    )


class DietMeal(Base):
    """One meal of a diet plan, placed on a day of the week"""

    __tablename__ = "diet_meal"
    # Meal ids are never reused after a delete, on SQLite included
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    diet_plan_id = Column(
        Integer,
        ForeignKey("diet_plan.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    meal_type = Column(SQLEnum(MealType, name="meal_type"), nullable=False)
    day_of_week = Column(SQLEnum(DayOfWeek, name="day_of_week"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    plan = relationship("DietPlan", back_populates="meals")


class WorkoutPlan(Base):
    """Training plan; same ownership shape as DietPlan"""

    __tablename__ = "workout_plan"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(
        Integer, ForeignKey("patient.id", ondelete="CASCADE"), nullable=False, index=True
    )
    professional_id = Column(
        Integer,
        ForeignKey("professional.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(Text, nullable=False)
    description = Column(Text)
    start_date = Column(Date)
    end_date = Column(Date)
    objectives = Column(Text)
    notes = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    deleted_at = Column(TIMESTAMP(timezone=True))
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    patient = relationship("Patient", back_populates="workout_plans")
    days = relationship(
        "WorkoutDay", back_populates="plan", cascade="all, delete-orphan"
    )


class WorkoutDay(Base):
    __tablename__ = "workout_day"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    workout_plan_id = Column(
        Integer,
        ForeignKey("workout_plan.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    day_of_week = Column(SQLEnum(DayOfWeek, name="day_of_week"), nullable=False)
    description = Column(Text)

    plan = relationship("WorkoutPlan", back_populates="days")
    exercises = relationship(
        "Exercise",
        back_populates="day",
        cascade="all, delete-orphan",
        order_by="Exercise.display_order",
    )


class Exercise(Base):
    __tablename__ = "exercise"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    workout_day_id = Column(
        Integer,
        ForeignKey("workout_day.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(Text, nullable=False)
    sets_reps = Column(Text)
    observations = Column(Text)
    display_order = Column(Integer, nullable=False, default=0)

    day = relationship("WorkoutDay", back_populates="exercises")
