"""Dietary assessment screening and yes/no detail fields"""
from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0002_dietary_assessment_fields"
down_revision = "0001_initial_client_records"
branch_labels = None
depends_on = None

SCREENING_FIELDS = (
    ("at_risk_malnutrition", "malnutrition_items"),
    ("at_risk_dehydration", "dehydration_items"),
    ("check_fridge_expiry", "fridge_expiry_items"),
    ("do_you_cook", "cooking_items"),
    ("avoid_medical_reasons", "medical_avoidance_items"),
    ("avoid_religious_reasons", "religious_avoidance_items"),
)

YES_NO_FIELDS = (
    "has_allergies",
    "needs_cooking_help",
    "religious_cultural_requirements",
    "swallowing_concerns",
    "needs_help_cutting_food",
    "meal_schedule_requirements",
    "hydration_support",
)

DETAIL_FIELDS = (
    "food_prep_instructions",
    "religious_cultural_details",
    "swallowing_details",
    "cutting_food_details",
    "meal_schedule_details",
    "hydration_details",
)


def _new_columns() -> list[sa.Column]:
    columns: list[sa.Column] = []
    for flag, items in SCREENING_FIELDS:
        columns.append(sa.Column(flag, sa.Boolean(), nullable=True))
        columns.append(sa.Column(items, sa.JSON(), nullable=True))
    columns.extend(sa.Column(name, sa.String(), nullable=True) for name in YES_NO_FIELDS)
    columns.extend(sa.Column(name, sa.Text(), nullable=True) for name in DETAIL_FIELDS)
    return columns


def upgrade() -> None:
    with op.batch_alter_table("client_dietary_requirements") as batch_op:
        for column in _new_columns():
            batch_op.add_column(column)


def downgrade() -> None:
    with op.batch_alter_table("client_dietary_requirements") as batch_op:
        for column in reversed(_new_columns()):
            batch_op.drop_column(column.name)
