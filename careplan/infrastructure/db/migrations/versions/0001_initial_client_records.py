"""Client profile, record sections and care plan records"""
from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_initial_client_records"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(*, with_updated: bool = True) -> list[sa.Column]:
    columns = [sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("(CURRENT_TIMESTAMP)"))]
    if with_updated:
        columns.append(
            sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("(CURRENT_TIMESTAMP)"))
        )
    return columns


def _client_fk(*, unique: bool = False) -> sa.Column:
    return sa.Column(
        "client_id",
        sa.String(),
        sa.ForeignKey("clients.id", ondelete="CASCADE"),
        nullable=False,
        unique=unique,
        index=not unique,
    )


def upgrade() -> None:
    op.create_table(
        "clients",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("title", sa.String()),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("middle_name", sa.String()),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("preferred_name", sa.String()),
        sa.Column("email", sa.String()),
        sa.Column("phone", sa.String()),
        sa.Column("mobile_number", sa.String()),
        sa.Column("telephone_number", sa.String()),
        sa.Column("country_code", sa.String()),
        sa.Column("region", sa.String()),
        sa.Column("address", sa.Text()),
        sa.Column("date_of_birth", sa.Date()),
        sa.Column("gender", sa.String()),
        sa.Column("pronouns", sa.String()),
        sa.Column("other_identifier", sa.String()),
        sa.Column("additional_information", sa.Text()),
        sa.Column("status", sa.String(), nullable=False, server_default="active"),
        *_timestamps(),
    )

    op.create_table(
        "client_personal_info",
        sa.Column("id", sa.String(), primary_key=True),
        _client_fk(unique=True),
        sa.Column("next_of_kin_name", sa.String()),
        sa.Column("next_of_kin_phone", sa.String()),
        sa.Column("next_of_kin_relationship", sa.String()),
        sa.Column("emergency_contact_name", sa.String()),
        sa.Column("emergency_contact_phone", sa.String()),
        sa.Column("emergency_contact_relationship", sa.String()),
        sa.Column("gp_name", sa.String()),
        sa.Column("gp_practice", sa.String()),
        sa.Column("gp_phone", sa.String()),
        sa.Column("marital_status", sa.String()),
        sa.Column("religion", sa.String()),
        sa.Column("language_preferences", sa.String()),
        sa.Column("cultural_preferences", sa.String()),
        sa.Column("preferred_communication", sa.String()),
        *_timestamps(),
    )

    op.create_table(
        "client_medical_info",
        sa.Column("id", sa.String(), primary_key=True),
        _client_fk(unique=True),
        sa.Column("medical_conditions", sa.JSON()),
        sa.Column("current_medications", sa.JSON()),
        sa.Column("allergies", sa.JSON()),
        sa.Column("medical_history", sa.Text()),
        sa.Column("mobility_status", sa.String()),
        sa.Column("mental_health_status", sa.String()),
        sa.Column("sensory_impairments", sa.JSON()),
        sa.Column("communication_needs", sa.Text()),
        sa.Column("cognitive_status", sa.String()),
        *_timestamps(),
    )

    op.create_table(
        "client_dietary_requirements",
        sa.Column("id", sa.String(), primary_key=True),
        _client_fk(unique=True),
        sa.Column("dietary_restrictions", sa.JSON()),
        sa.Column("food_allergies", sa.JSON()),
        sa.Column("food_preferences", sa.JSON()),
        sa.Column("nutritional_needs", sa.Text()),
        sa.Column("supplements", sa.JSON()),
        sa.Column("meal_schedule", sa.JSON()),
        sa.Column("feeding_assistance_required", sa.Boolean()),
        sa.Column("weight_monitoring", sa.Boolean()),
        sa.Column("fluid_restrictions", sa.Text()),
        sa.Column("texture_modifications", sa.Text()),
        sa.Column("special_equipment_needed", sa.Text()),
        *_timestamps(),
    )

    op.create_table(
        "client_personal_care",
        sa.Column("id", sa.String(), primary_key=True),
        _client_fk(unique=True),
        sa.Column("bathing_preferences", sa.Text()),
        sa.Column("dressing_assistance_level", sa.String()),
        sa.Column("toileting_assistance_level", sa.String()),
        sa.Column("continence_status", sa.String()),
        sa.Column("personal_hygiene_needs", sa.Text()),
        sa.Column("skin_care_needs", sa.Text()),
        sa.Column("pain_management", sa.Text()),
        sa.Column("comfort_measures", sa.Text()),
        sa.Column("sleep_patterns", sa.Text()),
        sa.Column("behavioral_notes", sa.Text()),
        *_timestamps(),
    )

    op.create_table(
        "client_notes",
        sa.Column("id", sa.String(), primary_key=True),
        _client_fk(),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author", sa.String(), nullable=False),
        *_timestamps(with_updated=False),
    )

    op.create_table(
        "client_events_logs",
        sa.Column("id", sa.String(), primary_key=True),
        _client_fk(),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("event_type", sa.String(), nullable=False),
        sa.Column("severity", sa.String()),
        sa.Column("description", sa.Text()),
        sa.Column("reporter", sa.String()),
        sa.Column("status", sa.String(), nullable=False),
        *_timestamps(with_updated=False),
    )

    op.create_table(
        "client_care_plan_goals",
        sa.Column("id", sa.String(), primary_key=True),
        _client_fk(),
        sa.Column("care_plan_id", sa.String()),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("progress", sa.Integer()),
        sa.Column("notes", sa.Text()),
        *_timestamps(with_updated=False),
    )

    op.create_table(
        "client_activities",
        sa.Column("id", sa.String(), primary_key=True),
        _client_fk(),
        sa.Column("care_plan_id", sa.String()),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("frequency", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        *_timestamps(with_updated=False),
    )

    op.create_table(
        "client_assessments",
        sa.Column("id", sa.String(), primary_key=True),
        _client_fk(),
        sa.Column("care_plan_id", sa.String()),
        sa.Column("assessment_name", sa.String(), nullable=False),
        sa.Column("assessment_type", sa.String(), nullable=False),
        sa.Column("assessment_date", sa.Date(), nullable=False),
        sa.Column("performed_by", sa.String(), nullable=False),
        sa.Column("score", sa.Integer()),
        sa.Column("results", sa.Text()),
        sa.Column("recommendations", sa.Text()),
        sa.Column("next_review_date", sa.Date()),
        sa.Column("status", sa.String(), nullable=False),
        *_timestamps(with_updated=False),
    )

    op.create_table(
        "client_equipment",
        sa.Column("id", sa.String(), primary_key=True),
        _client_fk(),
        sa.Column("equipment_name", sa.String(), nullable=False),
        sa.Column("equipment_type", sa.String(), nullable=False),
        sa.Column("manufacturer", sa.String()),
        sa.Column("model_number", sa.String()),
        sa.Column("serial_number", sa.String()),
        sa.Column("installation_date", sa.Date()),
        sa.Column("last_maintenance_date", sa.Date()),
        sa.Column("next_maintenance_date", sa.Date()),
        sa.Column("maintenance_schedule", sa.String()),
        sa.Column("location", sa.String()),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("notes", sa.Text()),
        *_timestamps(with_updated=False),
    )

    op.create_table(
        "client_risk_assessments",
        sa.Column("id", sa.String(), primary_key=True),
        _client_fk(),
        sa.Column("risk_type", sa.String(), nullable=False),
        sa.Column("risk_level", sa.String(), nullable=False),
        sa.Column("risk_factors", sa.JSON(), nullable=False),
        sa.Column("mitigation_strategies", sa.JSON(), nullable=False),
        sa.Column("risk_to_staff", sa.JSON(), nullable=False),
        sa.Column("assessment_date", sa.Date(), nullable=False),
        sa.Column("assessed_by", sa.String(), nullable=False),
        sa.Column("review_date", sa.Date()),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("details", sa.JSON()),
        *_timestamps(with_updated=False),
    )

    op.create_table(
        "client_service_actions",
        sa.Column("id", sa.String(), primary_key=True),
        _client_fk(),
        sa.Column("care_plan_id", sa.String()),
        sa.Column("service_name", sa.String(), nullable=False),
        sa.Column("service_category", sa.String(), nullable=False),
        sa.Column("provider_name", sa.String(), nullable=False),
        sa.Column("frequency", sa.String(), nullable=False),
        sa.Column("duration", sa.String(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date()),
        sa.Column("next_scheduled_date", sa.Date()),
        sa.Column("schedule_details", sa.Text()),
        sa.Column("goals", sa.JSON(), nullable=False),
        sa.Column("progress_status", sa.String(), nullable=False),
        sa.Column("notes", sa.Text()),
        *_timestamps(with_updated=False),
    )

    op.create_table(
        "client_service_plans",
        sa.Column("id", sa.String(), primary_key=True),
        _client_fk(),
        sa.Column("care_plan_id", sa.String()),
        sa.Column("caption", sa.String(), nullable=False),
        sa.Column("service_id", sa.String()),
        sa.Column("service_name", sa.String()),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String()),
        sa.Column("end_time", sa.String()),
        sa.Column("selected_days", sa.JSON(), nullable=False),
        sa.Column("frequency", sa.String()),
        sa.Column("location", sa.String()),
        sa.Column("note", sa.Text()),
        sa.Column("status", sa.String(), nullable=False),
        *_timestamps(with_updated=False),
    )

    op.create_table(
        "audit_log",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("event_ts", sa.DateTime(), nullable=False, server_default=sa.text("(CURRENT_TIMESTAMP)")),
        sa.Column("entity_type", sa.String(), nullable=False),
        sa.Column("entity_id", sa.String(), nullable=False),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("payload_json", sa.Text()),
    )


def downgrade() -> None:
    for table in (
        "audit_log",
        "client_service_plans",
        "client_service_actions",
        "client_risk_assessments",
        "client_equipment",
        "client_assessments",
        "client_activities",
        "client_care_plan_goals",
        "client_events_logs",
        "client_notes",
        "client_personal_care",
        "client_dietary_requirements",
        "client_medical_info",
        "client_personal_info",
        "clients",
    ):
        op.drop_table(table)
