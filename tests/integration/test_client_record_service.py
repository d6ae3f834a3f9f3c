from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from careplan.application.ports import PortError
from careplan.application.services.client_record_service import ClientRecordService
from careplan.domain.constants import ActionKind, EntityKind, PortFailureKind
from careplan.infrastructure.db.engine import get_engine
from careplan.infrastructure.db.models_sqlalchemy import Base
from careplan.infrastructure.db.repositories.audit_repo import AuditLogRepository
from careplan.infrastructure.db.session import SessionFactory, make_session_scope


def make_session_factory(db_path: Path) -> SessionFactory:
    engine = get_engine(f"sqlite:///{db_path.as_posix()}")
    Base.metadata.create_all(engine)
    return make_session_scope(engine)


def _make_service(db_path: Path) -> tuple[ClientRecordService, SessionFactory]:
    session_factory = make_session_factory(db_path)
    return ClientRecordService(session_factory=session_factory), session_factory


def test_section_update_upserts_one_row_per_client(tmp_path: Path) -> None:
    service, _ = _make_service(tmp_path / "sections.db")
    client = service.create_client(first_name="Jane", last_name="Doe")

    service.update_section(EntityKind.DIETARY, client.id, {"food_allergies": ["nuts"]})
    service.update_section(EntityKind.DIETARY, client.id, {"food_preferences": ["soup"]})

    section = service.get_section(EntityKind.DIETARY, client.id)
    assert section is not None
    assert section.fields["food_allergies"] == ["nuts"]
    assert section.fields["food_preferences"] == ["soup"]


def test_client_profile_update_changes_only_sent_fields(tmp_path: Path) -> None:
    service, _ = _make_service(tmp_path / "profile.db")
    client = service.create_client(first_name="Jane", last_name="Doe", email="jane@example.org")

    service.update_section(EntityKind.CLIENT_PROFILE, client.id, {"first_name": "  Janet ", "date_of_birth": ""})

    profile = service.get_section(EntityKind.CLIENT_PROFILE, client.id)
    assert profile is not None
    assert profile.fields["first_name"] == "Janet"
    assert profile.fields["email"] == "jane@example.org"
    assert profile.fields["date_of_birth"] is None


def test_update_for_missing_client_is_a_validation_failure(tmp_path: Path) -> None:
    service, _ = _make_service(tmp_path / "missing.db")

    with pytest.raises(PortError) as excinfo:
        service.update_section(EntityKind.MEDICAL_INFO, "nope", {"allergies": []})

    assert excinfo.value.kind is PortFailureKind.VALIDATION
    assert excinfo.value.message == "Client not found"


def test_unknown_section_key_is_rejected(tmp_path: Path) -> None:
    service, _ = _make_service(tmp_path / "extra.db")
    client = service.create_client(first_name="Jane", last_name="Doe")

    with pytest.raises(PortError) as excinfo:
        service.update_section(EntityKind.PERSONAL_CARE, client.id, {"bathing_preferences": "bath", "shoe_size": 7})

    assert "shoe_size" in excinfo.value.message
    assert service.get_section(EntityKind.PERSONAL_CARE, client.id) is None


def test_dietary_screening_answers_are_stored(tmp_path: Path) -> None:
    service, _ = _make_service(tmp_path / "screening.db")
    client = service.create_client(first_name="Jane", last_name="Doe")

    service.update_section(
        EntityKind.DIETARY,
        client.id,
        {"at_risk_dehydration": True, "dehydration_items": ["Forgets to drink"], "hydration_support": "yes"},
    )

    section = service.get_section(EntityKind.DIETARY, client.id)
    assert section is not None
    assert section.fields["at_risk_dehydration"] is True
    assert section.fields["dehydration_items"] == ["Forgets to drink"]
    assert section.fields["hydration_support"] == "yes"
    assert section.fields["food_allergies"] is None


def test_dietary_yes_no_answer_outside_choices_is_rejected(tmp_path: Path) -> None:
    service, _ = _make_service(tmp_path / "yes_no.db")
    client = service.create_client(first_name="Jane", last_name="Doe")

    with pytest.raises(PortError) as excinfo:
        service.update_section(EntityKind.DIETARY, client.id, {"has_allergies": "maybe"})

    assert excinfo.value.kind is PortFailureKind.VALIDATION
    assert "has_allergies" in excinfo.value.message
    assert service.get_section(EntityKind.DIETARY, client.id) is None


def test_note_author_defaults_and_records_list_in_order(tmp_path: Path) -> None:
    service, _ = _make_service(tmp_path / "notes.db")
    client = service.create_client(first_name="Jane", last_name="Doe")

    service.create_record(ActionKind.ADD_NOTE, {"client_id": client.id, "title": "First", "content": "a"})
    service.create_record(
        ActionKind.ADD_NOTE,
        {"client_id": client.id, "title": "Second", "content": "b", "author": "Nurse Lee"},
    )

    notes = service.list_records(ActionKind.ADD_NOTE, client.id)
    assert [note.fields["title"] for note in notes] == ["First", "Second"]
    assert [note.fields["author"] for note in notes] == ["Admin", "Nurse Lee"]


def test_note_missing_required_field_is_rejected(tmp_path: Path) -> None:
    service, _ = _make_service(tmp_path / "note_invalid.db")
    client = service.create_client(first_name="Jane", last_name="Doe")

    with pytest.raises(PortError) as excinfo:
        service.create_record(ActionKind.ADD_NOTE, {"client_id": client.id, "title": "Only title"})

    assert "content" in excinfo.value.message
    assert service.list_records(ActionKind.ADD_NOTE, client.id) == []


def test_risk_assessment_checklist_is_stored_as_details(tmp_path: Path) -> None:
    service, _ = _make_service(tmp_path / "risk.db")
    client = service.create_client(first_name="Jane", last_name="Doe")

    service.create_record(
        ActionKind.ADD_RISK_ASSESSMENT,
        {
            "client_id": client.id,
            "risk_type": "falls",
            "risk_level": "high",
            "assessment_date": "2024-03-01",
            "assessed_by": "Nurse Lee",
            "status": "active",
            "lives_alone": True,
            "rag_status": "red",
        },
    )

    [risk] = service.list_records(ActionKind.ADD_RISK_ASSESSMENT, client.id)
    assert risk.fields["assessment_date"] == date(2024, 3, 1)
    assert risk.fields["risk_factors"] == []
    assert risk.fields["details"]["lives_alone"] is True
    assert risk.fields["details"]["rag_status"] == "red"


def test_service_plan_end_before_start_is_rejected(tmp_path: Path) -> None:
    service, _ = _make_service(tmp_path / "plan.db")
    client = service.create_client(first_name="Jane", last_name="Doe")

    with pytest.raises(PortError) as excinfo:
        service.create_record(
            ActionKind.ADD_SERVICE_PLAN,
            {
                "client_id": client.id,
                "caption": "Morning visit",
                "start_date": "2024-05-10",
                "end_date": "2024-05-01",
                "status": "active",
            },
        )

    assert "end_date" in excinfo.value.message


def test_record_for_missing_client_is_rejected(tmp_path: Path) -> None:
    service, _ = _make_service(tmp_path / "orphan.db")

    with pytest.raises(PortError) as excinfo:
        service.create_record(
            ActionKind.ADD_EVENT,
            {"client_id": "ghost", "title": "Fall", "event_type": "incident", "status": "open"},
        )

    assert excinfo.value.message == "Client not found"


def test_writes_are_audited(tmp_path: Path) -> None:
    service, session_factory = _make_service(tmp_path / "audit.db")
    client = service.create_client(first_name="Jane", last_name="Doe")

    service.update_section(EntityKind.MEDICAL_INFO, client.id, {"allergies": ["latex"], "medical_history": "n/a"})

    with session_factory() as session:
        entries = AuditLogRepository().list_for_entity(session, EntityKind.MEDICAL_INFO.value, client.id)
        assert [entry.action for entry in entries] == ["update_medical_info"]
        assert json.loads(entries[0].payload_json) == {"fields": ["allergies", "medical_history"]}
