from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QThreadPool
from PySide6.QtWidgets import QComboBox, QLineEdit

from careplan.container import build_container
from careplan.domain.constants import ActionKind, DialogKind, EntityKind
from careplan.infrastructure.db.engine import get_engine
from careplan.infrastructure.db.models_sqlalchemy import Base
from careplan.infrastructure.db.session import make_session_scope
from careplan.ui import main_window
from careplan.ui.care_plan import feedback_bridge
from careplan.ui.main_window import MainWindow


def _make_window(db_path: Path, monkeypatch) -> tuple[MainWindow, list[tuple[str, str]]]:
    shown: list[tuple[str, str]] = []
    monkeypatch.setattr(feedback_bridge, "notify", lambda _host, message, level="info": shown.append((message, level)))
    engine = get_engine(f"sqlite:///{db_path.as_posix()}")
    Base.metadata.create_all(engine)
    container = build_container(session_factory=make_session_scope(engine))
    return MainWindow(container, care_plan_id="PLAN-7"), shown


def _drain(qapp) -> None:
    QThreadPool.globalInstance().waitForDone(5000)
    qapp.processEvents()


def test_window_has_one_dialog_per_action(qapp, tmp_path: Path, monkeypatch) -> None:
    window, _ = _make_window(tmp_path / "dialogs.db", monkeypatch)

    assert set(window.dialogs) == set(ActionKind)
    assert window.dialogs[ActionKind.EDIT_DIETARY].windowTitle() == "Edit dietary requirements"
    assert window.dialogs[ActionKind.ADD_RISK_ASSESSMENT].windowTitle() == "Add risk assessment"


def test_dietary_edit_from_window_is_stored_and_closes_dialog(qapp, tmp_path: Path, monkeypatch) -> None:
    window, shown = _make_window(tmp_path / "dietary.db", monkeypatch)
    window.first_name.setText("Jane")
    window.last_name.setText("Doe")
    window._create_client()
    client_id = window.client_id.text()
    assert client_id

    window.open_dialog(ActionKind.EDIT_DIETARY)
    qapp.processEvents()
    dialog = window.dialogs[ActionKind.EDIT_DIETARY]
    assert dialog.isVisible() is True
    answer = dialog.input_for("hydration_support")
    assert isinstance(answer, QComboBox)
    answer.setCurrentIndex(answer.findText("yes"))
    details = dialog.input_for("hydration_details")
    assert isinstance(details, QLineEdit)
    details.setText("Prompt every two hours")

    dialog.save_btn.click()
    _drain(qapp)

    section = window.container.record_service.get_section(EntityKind.DIETARY, client_id)
    assert section is not None
    assert section.fields["hydration_support"] == "yes"
    assert section.fields["hydration_details"] == "Prompt every two hours"
    assert shown == [("Information updated successfully", "success")]
    assert window.care_plan.session_state.is_open(DialogKind.EDIT_DIETARY) is False
    assert dialog.isVisible() is False
    assert dialog.values() == {}


def test_save_without_client_reports_error(qapp, tmp_path: Path, monkeypatch) -> None:
    window, shown = _make_window(tmp_path / "no_client.db", monkeypatch)
    errors: list[str] = []
    monkeypatch.setattr(main_window, "show_error", lambda _parent, message: errors.append(message))
    window.open_dialog(ActionKind.ADD_NOTE)

    window.save(ActionKind.ADD_NOTE, {"title": "Visit", "content": "All well"})
    _drain(qapp)

    assert errors == ["Create or enter a client first"]
    assert shown == []
    assert window.care_plan.session_state.is_open(DialogKind.ADD_NOTE) is True
