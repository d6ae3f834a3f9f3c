from __future__ import annotations

from PySide6.QtWidgets import QComboBox, QLineEdit

from careplan.application.dto.client_record_dto import (
    DietaryRequirementsUpdate,
    NoteCreateRequest,
    ServicePlanCreateRequest,
)
from careplan.ui.care_plan.record_form_dialog import RecordFormDialog, field_shape


def test_field_shapes_follow_request_annotations() -> None:
    fields = DietaryRequirementsUpdate.model_fields

    assert field_shape(fields["weight_monitoring"].annotation) == ("bool", ())
    assert field_shape(fields["food_allergies"].annotation) == ("list", ())
    assert field_shape(fields["has_allergies"].annotation) == ("choice", ("yes", "no"))
    assert field_shape(fields["hydration_details"].annotation) == ("text", ())
    assert field_shape(ServicePlanCreateRequest.model_fields["start_date"].annotation) == ("date", ())


def test_form_sends_only_filled_inputs(qapp) -> None:
    dialog = RecordFormDialog("Edit dietary requirements", DietaryRequirementsUpdate)
    allergies = dialog.input_for("food_allergies")
    assert isinstance(allergies, QLineEdit)
    allergies.setText(" Peanuts, , Shellfish ")
    answer = dialog.input_for("has_allergies")
    assert isinstance(answer, QComboBox)
    answer.setCurrentIndex(answer.findText("yes"))
    monitoring = dialog.input_for("weight_monitoring")
    assert isinstance(monitoring, QComboBox)
    monitoring.setCurrentIndex(monitoring.findText("No"))

    assert dialog.values() == {
        "food_allergies": ["Peanuts", "Shellfish"],
        "weight_monitoring": False,
        "has_allergies": "yes",
    }

    dialog.clear()
    assert dialog.values() == {}


def test_form_skips_client_id_and_emits_values_on_save(qapp) -> None:
    dialog = RecordFormDialog("Add note", NoteCreateRequest)
    received: list[dict] = []
    dialog.submitted.connect(received.append)
    title = dialog.input_for("title")
    assert isinstance(title, QLineEdit)
    title.setText("Morning visit")

    dialog.save_btn.click()

    assert received == [{"title": "Morning visit"}]
    assert "client_id" not in dialog.values()
