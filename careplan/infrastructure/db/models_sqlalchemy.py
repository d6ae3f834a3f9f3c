from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase

naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=naming_convention)


class Base(DeclarativeBase):
    metadata = metadata


def utc_now() -> datetime:
    return datetime.now(UTC)


def new_id() -> str:
    return str(uuid4())


class Client(Base):
    __tablename__ = "clients"

    id = Column(String, primary_key=True, default=new_id)
    title = Column(String)
    first_name = Column(String, nullable=False)
    middle_name = Column(String)
    last_name = Column(String, nullable=False)
    preferred_name = Column(String)
    email = Column(String)
    phone = Column(String)
    mobile_number = Column(String)
    telephone_number = Column(String)
    country_code = Column(String)
    region = Column(String)
    address = Column(Text)
    date_of_birth = Column(Date)
    gender = Column(String)
    pronouns = Column(String)
    other_identifier = Column(String)
    additional_information = Column(Text)
    status = Column(String, nullable=False, default="active")
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)


class ClientPersonalInfo(Base):
    __tablename__ = "client_personal_info"

    id = Column(String, primary_key=True, default=new_id)
    client_id = Column(String, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, unique=True)
    next_of_kin_name = Column(String)
    next_of_kin_phone = Column(String)
    next_of_kin_relationship = Column(String)
    emergency_contact_name = Column(String)
    emergency_contact_phone = Column(String)
    emergency_contact_relationship = Column(String)
    gp_name = Column(String)
    gp_practice = Column(String)
    gp_phone = Column(String)
    marital_status = Column(String)
    religion = Column(String)
    language_preferences = Column(String)
    cultural_preferences = Column(String)
    preferred_communication = Column(String)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)


class ClientMedicalInfo(Base):
    __tablename__ = "client_medical_info"

    id = Column(String, primary_key=True, default=new_id)
    client_id = Column(String, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, unique=True)
    medical_conditions = Column(JSON)
    current_medications = Column(JSON)
    allergies = Column(JSON)
    medical_history = Column(Text)
    mobility_status = Column(String)
    mental_health_status = Column(String)
    sensory_impairments = Column(JSON)
    communication_needs = Column(Text)
    cognitive_status = Column(String)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)


class ClientDietaryRequirements(Base):
    __tablename__ = "client_dietary_requirements"

    id = Column(String, primary_key=True, default=new_id)
    client_id = Column(String, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, unique=True)
    dietary_restrictions = Column(JSON)
    food_allergies = Column(JSON)
    food_preferences = Column(JSON)
    nutritional_needs = Column(Text)
    supplements = Column(JSON)
    meal_schedule = Column(JSON)
    feeding_assistance_required = Column(Boolean)
    weight_monitoring = Column(Boolean)
    fluid_restrictions = Column(Text)
    texture_modifications = Column(Text)
    special_equipment_needed = Column(Text)
    at_risk_malnutrition = Column(Boolean)
    malnutrition_items = Column(JSON)
    at_risk_dehydration = Column(Boolean)
    dehydration_items = Column(JSON)
    check_fridge_expiry = Column(Boolean)
    fridge_expiry_items = Column(JSON)
    do_you_cook = Column(Boolean)
    cooking_items = Column(JSON)
    avoid_medical_reasons = Column(Boolean)
    medical_avoidance_items = Column(JSON)
    avoid_religious_reasons = Column(Boolean)
    religious_avoidance_items = Column(JSON)
    has_allergies = Column(String)
    needs_cooking_help = Column(String)
    religious_cultural_requirements = Column(String)
    swallowing_concerns = Column(String)
    needs_help_cutting_food = Column(String)
    meal_schedule_requirements = Column(String)
    hydration_support = Column(String)
    food_prep_instructions = Column(Text)
    religious_cultural_details = Column(Text)
    swallowing_details = Column(Text)
    cutting_food_details = Column(Text)
    meal_schedule_details = Column(Text)
    hydration_details = Column(Text)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)


class ClientPersonalCare(Base):
    __tablename__ = "client_personal_care"

    id = Column(String, primary_key=True, default=new_id)
    client_id = Column(String, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, unique=True)
    bathing_preferences = Column(Text)
    dressing_assistance_level = Column(String)
    toileting_assistance_level = Column(String)
    continence_status = Column(String)
    personal_hygiene_needs = Column(Text)
    skin_care_needs = Column(Text)
    pain_management = Column(Text)
    comfort_measures = Column(Text)
    sleep_patterns = Column(Text)
    behavioral_notes = Column(Text)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)


class ClientNote(Base):
    __tablename__ = "client_notes"

    id = Column(String, primary_key=True, default=new_id)
    client_id = Column(String, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    author = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utc_now)


class ClientEventLog(Base):
    __tablename__ = "client_events_logs"

    id = Column(String, primary_key=True, default=new_id)
    client_id = Column(String, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    event_type = Column(String, nullable=False)
    severity = Column(String)
    description = Column(Text)
    reporter = Column(String)
    status = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utc_now)


class ClientCarePlanGoal(Base):
    __tablename__ = "client_care_plan_goals"

    id = Column(String, primary_key=True, default=new_id)
    client_id = Column(String, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    care_plan_id = Column(String)
    description = Column(Text, nullable=False)
    status = Column(String, nullable=False)
    progress = Column(Integer)
    notes = Column(Text)
    created_at = Column(DateTime, nullable=False, default=utc_now)


class ClientActivity(Base):
    __tablename__ = "client_activities"

    id = Column(String, primary_key=True, default=new_id)
    client_id = Column(String, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    care_plan_id = Column(String)
    name = Column(String, nullable=False)
    description = Column(Text)
    frequency = Column(String, nullable=False)
    status = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utc_now)


class ClientAssessment(Base):
    __tablename__ = "client_assessments"

    id = Column(String, primary_key=True, default=new_id)
    client_id = Column(String, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    care_plan_id = Column(String)
    assessment_name = Column(String, nullable=False)
    assessment_type = Column(String, nullable=False)
    assessment_date = Column(Date, nullable=False)
    performed_by = Column(String, nullable=False)
    score = Column(Integer)
    results = Column(Text)
    recommendations = Column(Text)
    next_review_date = Column(Date)
    status = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utc_now)


class ClientEquipment(Base):
    __tablename__ = "client_equipment"

    id = Column(String, primary_key=True, default=new_id)
    client_id = Column(String, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    equipment_name = Column(String, nullable=False)
    equipment_type = Column(String, nullable=False)
    manufacturer = Column(String)
    model_number = Column(String)
    serial_number = Column(String)
    installation_date = Column(Date)
    last_maintenance_date = Column(Date)
    next_maintenance_date = Column(Date)
    maintenance_schedule = Column(String)
    location = Column(String)
    status = Column(String, nullable=False)
    notes = Column(Text)
    created_at = Column(DateTime, nullable=False, default=utc_now)


class ClientRiskAssessment(Base):
    __tablename__ = "client_risk_assessments"

    id = Column(String, primary_key=True, default=new_id)
    client_id = Column(String, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    risk_type = Column(String, nullable=False)
    risk_level = Column(String, nullable=False)
    risk_factors = Column(JSON, nullable=False)
    mitigation_strategies = Column(JSON, nullable=False)
    risk_to_staff = Column(JSON, nullable=False)
    assessment_date = Column(Date, nullable=False)
    assessed_by = Column(String, nullable=False)
    review_date = Column(Date)
    status = Column(String, nullable=False)
    # Remaining checklist answers (rag status, falls, living situation ...).
    details = Column(JSON)
    created_at = Column(DateTime, nullable=False, default=utc_now)


class ClientServiceAction(Base):
    __tablename__ = "client_service_actions"

    id = Column(String, primary_key=True, default=new_id)
    client_id = Column(String, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    care_plan_id = Column(String)
    service_name = Column(String, nullable=False)
    service_category = Column(String, nullable=False)
    provider_name = Column(String, nullable=False)
    frequency = Column(String, nullable=False)
    duration = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)
    next_scheduled_date = Column(Date)
    schedule_details = Column(Text)
    goals = Column(JSON, nullable=False)
    progress_status = Column(String, nullable=False)
    notes = Column(Text)
    created_at = Column(DateTime, nullable=False, default=utc_now)


class ClientServicePlan(Base):
    __tablename__ = "client_service_plans"

    id = Column(String, primary_key=True, default=new_id)
    client_id = Column(String, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    care_plan_id = Column(String)
    caption = Column(String, nullable=False)
    service_id = Column(String)
    service_name = Column(String)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    start_time = Column(String)
    end_time = Column(String)
    selected_days = Column(JSON, nullable=False)
    frequency = Column(String)
    location = Column(String)
    note = Column(Text)
    status = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utc_now)


class AuditLog(Base):
    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True)
    event_ts = Column(DateTime, nullable=False, default=utc_now)
    entity_type = Column(String, nullable=False)
    entity_id = Column(String, nullable=False)
    action = Column(String, nullable=False)
    payload_json = Column(Text)
