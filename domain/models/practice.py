"""
Professional, patient and biometric history models.
"""

from sqlalchemy import (
    Column,
    Integer,
    Text,
    Date,
    Numeric,
    TIMESTAMP,
    ForeignKey,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base
from domain.enums import ProfessionType


class Professional(Base):
    """Nutritionist or trainer account"""

    __tablename__ = "professional"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    profession = Column(SQLEnum(ProfessionType, name="profession_type"), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    patients = relationship(
        "Patient", back_populates="professional", cascade="all, delete-orphan"
    )


class Patient(Base):
    """Patient managed by exactly one professional"""

    __tablename__ = "patient"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    professional_id = Column(
        Integer,
        ForeignKey("professional.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text)
    phone = Column(Text)
    birth_date = Column(Date)
    gender = Column(Text)
    height = Column(Numeric)  # cm
    medical_notes = Column(Text)
    diet_restrictions = Column(Text)
    objectives = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    professional = relationship("Professional", back_populates="patients")
    biometric_records = relationship(
        "BiometricRecord", back_populates="patient", cascade="all, delete-orphan"
    )
    diet_plans = relationship("DietPlan", back_populates="patient")
    workout_plans = relationship("WorkoutPlan", back_populates="patient")


class BiometricRecord(Base):
    """Point-in-time body measurements for a patient"""

    __tablename__ = "biometric_record"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(
        Integer, ForeignKey("patient.id", ondelete="CASCADE"), nullable=False, index=True
    )
    record_date = Column(Date, nullable=False)
    weight = Column(Numeric)  # kg
    body_fat_percentage = Column(Numeric)
    muscle_percentage = Column(Numeric)
    water_percentage = Column(Numeric)
    back_chest_diameter = Column(Numeric)  # cm
    waist_diameter = Column(Numeric)
    arms_diameter = Column(Numeric)
    legs_diameter = Column(Numeric)
    calves_diameter = Column(Numeric)
    notes = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    patient = relationship("Patient", back_populates="biometric_records")
