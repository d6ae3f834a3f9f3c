from __future__ import annotations

import types
from datetime import date
from typing import Any, Literal, Union, get_args, get_origin

from pydantic import BaseModel
from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

_BOOL_CHOICES = (("", None), ("Yes", True), ("No", False))


def _members(annotation: Any) -> tuple[Any, ...]:
    if get_origin(annotation) in (Union, types.UnionType):
        return tuple(arg for arg in get_args(annotation) if arg is not type(None))
    return (annotation,)


def field_shape(annotation: Any) -> tuple[str, tuple[str, ...]]:
    """Widget shape for one request field and the choices a ``choice`` field offers."""
    members = _members(annotation)
    if bool in members:
        return "bool", ()
    if any(get_origin(member) is list for member in members):
        return "list", ()
    for member in members:
        if get_origin(member) is Literal:
            return "choice", tuple(str(arg) for arg in get_args(member))
    if date in members:
        return "date", ()
    return "text", ()


def _label(name: str) -> str:
    return name.replace("_", " ").capitalize()


class RecordFormDialog(QDialog):
    """Form with one input per field of a request model.

    Blank inputs are left out of ``values()`` so a section edit only sends
    what the user filled in.
    """

    submitted = Signal(dict)

    def __init__(self, title: str, request_type: type[BaseModel], parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setWindowFlag(Qt.WindowType.WindowContextHelpButtonHint, False)
        self.setMinimumWidth(520)
        self.request_type = request_type
        self._inputs: dict[str, tuple[str, QWidget]] = {}
        self._build_ui(title)

    def _build_ui(self, title: str) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        header = QLabel(title)
        header.setObjectName("pageTitle")
        layout.addWidget(header)

        body = QWidget()
        form = QFormLayout(body)
        for name, info in self.request_type.model_fields.items():
            if name == "client_id":
                continue
            shape, choices = field_shape(info.annotation)
            widget = self._make_input(shape, choices)
            self._inputs[name] = (shape, widget)
            suffix = " *" if info.is_required() else ""
            form.addRow(f"{_label(name)}{suffix}", widget)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(body)
        layout.addWidget(scroll)

        btn_row = QHBoxLayout()
        btn_row.addStretch()
        self.save_btn = QPushButton("Save")
        self.save_btn.setObjectName("primaryButton")
        self.save_btn.clicked.connect(self._on_save)
        cancel_btn = QPushButton("Cancel")
        cancel_btn.clicked.connect(self.reject)
        btn_row.addWidget(self.save_btn)
        btn_row.addWidget(cancel_btn)
        layout.addLayout(btn_row)

    def _make_input(self, shape: str, choices: tuple[str, ...]) -> QWidget:
        if shape == "bool":
            combo = QComboBox()
            for text, value in _BOOL_CHOICES:
                combo.addItem(text, value)
            return combo
        if shape == "choice":
            combo = QComboBox()
            combo.addItem("", None)
            for choice in choices:
                combo.addItem(choice, choice)
            return combo
        line = QLineEdit()
        if shape == "list":
            line.setPlaceholderText("Comma separated")
        elif shape == "date":
            line.setPlaceholderText("YYYY-MM-DD")
        return line

    def input_for(self, name: str) -> QWidget:
        return self._inputs[name][1]

    def values(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for name, (shape, widget) in self._inputs.items():
            if isinstance(widget, QComboBox):
                value = widget.currentData()
                if value is not None:
                    result[name] = value
                continue
            assert isinstance(widget, QLineEdit)
            text = widget.text().strip()
            if not text:
                continue
            if shape == "list":
                result[name] = [item.strip() for item in text.split(",") if item.strip()]
            else:
                result[name] = text
        return result

    def clear(self) -> None:
        for _shape, widget in self._inputs.values():
            if isinstance(widget, QComboBox):
                widget.setCurrentIndex(0)
            elif isinstance(widget, QLineEdit):
                widget.clear()

    def _on_save(self) -> None:
        self.submitted.emit(self.values())
