from __future__ import annotations

import logging
from functools import partial
from typing import Any

from pydantic import BaseModel
from PySide6.QtWidgets import (
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from careplan.application.services.client_record_service import RECORD_REQUESTS, SECTION_REQUESTS
from careplan.application.services.save_dispatcher import SaveOutcome
from careplan.container import Container
from careplan.domain.constants import (
    ACTION_LABELS,
    EDIT_ACTION_FOR_KIND,
    STATIC_ACTIONS,
    ActionKind,
    EntityKind,
)
from careplan.ui.care_plan.dialog_binding import DialogBinding, submit_save
from careplan.ui.care_plan.feedback_bridge import QtFeedbackBridge
from careplan.ui.care_plan.record_form_dialog import RecordFormDialog
from careplan.ui.widgets.notifications import show_error

SECTION_FOR_ACTION: dict[ActionKind, EntityKind] = {action: kind for kind, action in EDIT_ACTION_FOR_KIND.items()}

EDIT_TITLES: dict[ActionKind, str] = {
    ActionKind.EDIT_PERSONAL_INFO: "Edit personal information",
    ActionKind.EDIT_MEDICAL_INFO: "Edit medical information",
    ActionKind.EDIT_ABOUT_ME: "Edit about me",
    ActionKind.EDIT_DIETARY: "Edit dietary requirements",
    ActionKind.EDIT_PERSONAL_CARE: "Edit personal care",
}


def dialog_title(action: ActionKind) -> str:
    return EDIT_TITLES.get(action) or f"Add {ACTION_LABELS[action]}"


def request_type_for(action: ActionKind) -> type[BaseModel]:
    if action in SECTION_FOR_ACTION:
        return SECTION_REQUESTS[SECTION_FOR_ACTION[action]]
    return RECORD_REQUESTS[action]


class MainWindow(QMainWindow):
    """One care plan view: a client picker and a launcher for every add/edit dialog."""

    def __init__(self, container: Container, care_plan_id: str | None = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.container = container
        self.setWindowTitle("Care plan records")
        self.bridge = QtFeedbackBridge(self)
        self.care_plan = container.new_care_plan_session(care_plan_id, self.bridge)
        self.bridge.attach(self.care_plan.session_state)
        self.dialogs: dict[ActionKind, RecordFormDialog] = {}
        self._bindings: dict[ActionKind, DialogBinding] = {}

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)
        layout.addWidget(self._build_client_box())
        layout.addWidget(self._build_actions_box(STATIC_ACTIONS, "Care plan records"))
        layout.addWidget(self._build_actions_box(tuple(EDIT_TITLES), "Client details"))
        layout.addStretch()
        self.setCentralWidget(central)

        for action in ActionKind:
            self._add_dialog(action)

    def _build_client_box(self) -> QGroupBox:
        box = QGroupBox("Client")
        row = QHBoxLayout(box)
        self.first_name = QLineEdit()
        self.first_name.setPlaceholderText("First name")
        self.last_name = QLineEdit()
        self.last_name.setPlaceholderText("Last name")
        create_btn = QPushButton("Create client")
        create_btn.clicked.connect(self._create_client)
        self.client_id = QLineEdit()
        self.client_id.setPlaceholderText("Client ID")
        row.addWidget(self.first_name)
        row.addWidget(self.last_name)
        row.addWidget(create_btn)
        row.addWidget(QLabel("ID"))
        row.addWidget(self.client_id, 1)
        return box

    def _build_actions_box(self, actions: tuple[ActionKind, ...], title: str) -> QGroupBox:
        box = QGroupBox(title)
        grid = QGridLayout(box)
        for index, action in enumerate(actions):
            button = QPushButton(dialog_title(action))
            button.clicked.connect(partial(self.open_dialog, action))
            grid.addWidget(button, index // 3, index % 3)
        return box

    def _add_dialog(self, action: ActionKind) -> None:
        dialog = RecordFormDialog(dialog_title(action), request_type_for(action), parent=self)
        dialog.submitted.connect(partial(self.save, action))
        self.dialogs[action] = dialog
        self._bindings[action] = DialogBinding(
            dialog,
            action.dialog,
            self.care_plan.session_state,
            self.bridge,
            submit_button=dialog.save_btn,
        )

    def open_dialog(self, action: ActionKind) -> None:
        self._bindings[action].open()

    def save(self, action: ActionKind, values: dict[str, Any]) -> None:
        client_id = self.client_id.text().strip()
        if not client_id:
            show_error(self, "Create or enter a client first")
            return
        dialog = self.dialogs[action]

        def _on_done(outcome: SaveOutcome) -> None:
            if outcome.succeeded:
                dialog.clear()

        submit_save(
            self,
            self.care_plan.dispatcher,
            action,
            values,
            client_id,
            on_done=_on_done,
            kind=SECTION_FOR_ACTION.get(action),
        )

    def _create_client(self) -> None:
        first_name = self.first_name.text().strip()
        last_name = self.last_name.text().strip()
        if not first_name or not last_name:
            show_error(self, "First and last name are required")
            return
        try:
            client = self.container.record_service.create_client(first_name=first_name, last_name=last_name)
        except Exception as exc:  # noqa: BLE001
            logging.getLogger(__name__).exception("Client could not be created")
            show_error(self, f"Client could not be created: {exc}")
            return
        self.client_id.setText(client.id)
        self.first_name.clear()
        self.last_name.clear()
