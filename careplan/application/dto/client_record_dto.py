from __future__ import annotations

from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

YesNo = Literal["yes", "no"]


class _RecordModel(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    client_id: str = Field(..., min_length=1)


# Section updates: every field optional, only keys the dialog sent are written.


class ClientProfileUpdate(_RecordModel):
    title: str | None = None
    first_name: str | None = Field(default=None, min_length=1)
    middle_name: str | None = None
    last_name: str | None = Field(default=None, min_length=1)
    preferred_name: str | None = None
    email: str | None = None
    phone: str | None = None
    mobile_number: str | None = None
    telephone_number: str | None = None
    country_code: str | None = None
    region: str | None = None
    address: str | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    pronouns: str | None = None
    other_identifier: str | None = None
    additional_information: str | None = None
    status: str | None = None

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _blank_date_is_none(cls, v: Any) -> Any:
        return None if v == "" else v


class PersonalInfoUpdate(_RecordModel):
    next_of_kin_name: str | None = None
    next_of_kin_phone: str | None = None
    next_of_kin_relationship: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    emergency_contact_relationship: str | None = None
    gp_name: str | None = None
    gp_practice: str | None = None
    gp_phone: str | None = None
    marital_status: str | None = None
    religion: str | None = None
    language_preferences: str | None = None
    cultural_preferences: str | None = None
    preferred_communication: str | None = None


class MedicalInfoUpdate(_RecordModel):
    medical_conditions: list[str] | None = None
    current_medications: list[str] | None = None
    allergies: list[str] | None = None
    medical_history: str | None = None
    mobility_status: str | None = None
    mental_health_status: str | None = None
    sensory_impairments: list[str] | None = None
    communication_needs: str | None = None
    cognitive_status: str | None = None


class DietaryRequirementsUpdate(_RecordModel):
    dietary_restrictions: list[str] | None = None
    food_allergies: list[str] | None = None
    food_preferences: list[str] | None = None
    nutritional_needs: str | None = None
    supplements: list[str] | None = None
    meal_schedule: Any | None = None
    feeding_assistance_required: bool | None = None
    weight_monitoring: bool | None = None
    fluid_restrictions: str | None = None
    texture_modifications: str | None = None
    special_equipment_needed: str | None = None
    # Screening checklist: each "at risk" answer carries its own item list.
    at_risk_malnutrition: bool | None = None
    malnutrition_items: list[str] | None = None
    at_risk_dehydration: bool | None = None
    dehydration_items: list[str] | None = None
    check_fridge_expiry: bool | None = None
    fridge_expiry_items: list[str] | None = None
    do_you_cook: bool | None = None
    cooking_items: list[str] | None = None
    avoid_medical_reasons: bool | None = None
    medical_avoidance_items: list[str] | None = None
    avoid_religious_reasons: bool | None = None
    religious_avoidance_items: list[str] | None = None
    has_allergies: YesNo | None = None
    needs_cooking_help: YesNo | None = None
    religious_cultural_requirements: YesNo | None = None
    swallowing_concerns: YesNo | None = None
    needs_help_cutting_food: YesNo | None = None
    meal_schedule_requirements: YesNo | None = None
    hydration_support: YesNo | None = None
    food_prep_instructions: str | None = None
    religious_cultural_details: str | None = None
    swallowing_details: str | None = None
    cutting_food_details: str | None = None
    meal_schedule_details: str | None = None
    hydration_details: str | None = None


class PersonalCareUpdate(_RecordModel):
    bathing_preferences: str | None = None
    dressing_assistance_level: str | None = None
    toileting_assistance_level: str | None = None
    continence_status: str | None = None
    personal_hygiene_needs: str | None = None
    skin_care_needs: str | None = None
    pain_management: str | None = None
    comfort_measures: str | None = None
    sleep_patterns: str | None = None
    behavioral_notes: str | None = None


# Care plan records: one insert per save.


class NoteCreateRequest(_RecordModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    author: str | None = None


class EventCreateRequest(_RecordModel):
    title: str = Field(..., min_length=1)
    event_type: str = Field(..., min_length=1)
    severity: str | None = None
    description: str | None = None
    reporter: str | None = None
    status: str = Field(..., min_length=1)


class GoalCreateRequest(_RecordModel):
    care_plan_id: str | None = None
    description: str = Field(..., min_length=1)
    status: str = Field(..., min_length=1)
    progress: int | None = Field(default=None, ge=0, le=100)
    notes: str | None = None


class ActivityCreateRequest(_RecordModel):
    care_plan_id: str | None = None
    name: str = Field(..., min_length=1)
    description: str | None = None
    frequency: str = Field(..., min_length=1)
    status: str = Field(..., min_length=1)


class AssessmentCreateRequest(_RecordModel):
    care_plan_id: str | None = None
    assessment_name: str = Field(..., min_length=1)
    assessment_type: str = Field(..., min_length=1)
    assessment_date: date
    performed_by: str = Field(..., min_length=1)
    score: int | None = None
    results: str | None = None
    recommendations: str | None = None
    next_review_date: date | None = None
    status: str = Field(..., min_length=1)


class EquipmentCreateRequest(_RecordModel):
    equipment_name: str = Field(..., min_length=1)
    equipment_type: str = Field(..., min_length=1)
    manufacturer: str | None = None
    model_number: str | None = None
    serial_number: str | None = None
    installation_date: date | None = None
    last_maintenance_date: date | None = None
    next_maintenance_date: date | None = None
    maintenance_schedule: str | None = None
    location: str | None = None
    status: str = Field(..., min_length=1)
    notes: str | None = None


RISK_DETAIL_FIELDS: tuple[str, ...] = (
    "rag_status",
    "has_pets",
    "fall_risk",
    "adverse_weather_plan",
    "lives_alone",
    "rural_area",
    "cared_in_bed",
    "smoker",
    "can_call_for_assistance",
    "communication_needs",
    "social_support",
    "fallen_past_six_months",
    "has_assistance_device",
    "arrange_assistance_device",
)


class RiskAssessmentCreateRequest(_RecordModel):
    risk_type: str = Field(..., min_length=1)
    risk_level: str = Field(..., min_length=1)
    risk_factors: list[str] = Field(default_factory=list)
    mitigation_strategies: list[str] = Field(default_factory=list)
    risk_to_staff: list[str] = Field(default_factory=list)
    assessment_date: date
    assessed_by: str = Field(..., min_length=1)
    review_date: date | None = None
    status: str = Field(..., min_length=1)
    rag_status: str | None = None
    has_pets: bool | None = None
    fall_risk: str | None = None
    adverse_weather_plan: str | None = None
    lives_alone: bool | None = None
    rural_area: bool | None = None
    cared_in_bed: bool | None = None
    smoker: bool | None = None
    can_call_for_assistance: bool | None = None
    communication_needs: str | None = None
    social_support: str | None = None
    fallen_past_six_months: bool | None = None
    has_assistance_device: bool | None = None
    arrange_assistance_device: bool | None = None


class ServiceActionCreateRequest(_RecordModel):
    care_plan_id: str | None = None
    service_name: str = Field(..., min_length=1)
    service_category: str = Field(..., min_length=1)
    provider_name: str = Field(..., min_length=1)
    frequency: str = Field(..., min_length=1)
    duration: str = Field(..., min_length=1)
    start_date: date
    end_date: date | None = None
    next_scheduled_date: date | None = None
    schedule_details: str | None = None
    goals: list[str] = Field(default_factory=list)
    progress_status: str = Field(..., min_length=1)
    notes: str | None = None


class ServicePlanCreateRequest(_RecordModel):
    care_plan_id: str | None = None
    caption: str = Field(..., min_length=1)
    service_id: str | None = None
    service_name: str | None = None
    start_date: date
    end_date: date
    start_time: str | None = None
    end_time: str | None = None
    selected_days: list[str] = Field(default_factory=list)
    frequency: str | None = None
    location: str | None = None
    note: str | None = None
    status: str = Field(..., min_length=1)

    @field_validator("end_date")
    @classmethod
    def _end_not_before_start(cls, v: date, info: ValidationInfo) -> date:
        start = info.data.get("start_date")
        if start is not None and v < start:
            raise ValueError("end_date must not be before start_date")
        return v


class RecordResponse(BaseModel):
    id: str
    client_id: str
    fields: dict[str, Any] = Field(default_factory=dict)
