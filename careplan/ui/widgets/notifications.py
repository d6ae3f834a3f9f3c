from __future__ import annotations

import logging

from PySide6.QtWidgets import QMessageBox, QWidget

from careplan.ui.widgets.toast import show_toast as _show_toast

LEVEL_TITLES = {
    "success": "Saved",
    "warning": "Warning",
    "error": "Error",
    "info": "Information",
}


def show_message(parent: QWidget | None, title: str, message: str, level: str = "info") -> None:
    logger = logging.getLogger(__name__)
    if level == "error":
        logger.error("%s: %s", title, message)
    elif level == "warning":
        logger.warning("%s: %s", title, message)
    else:
        logger.info("%s: %s", title, message)
    if _show_toast(parent, message, level=level) is not None:
        return
    # No window to host a toast; fall back to a modal box.
    icon_map = {
        "success": QMessageBox.Icon.Information,
        "warning": QMessageBox.Icon.Warning,
        "error": QMessageBox.Icon.Critical,
        "info": QMessageBox.Icon.Information,
    }
    box = QMessageBox(parent)
    box.setWindowTitle(title)
    box.setText(message)
    box.setIcon(icon_map.get(level, QMessageBox.Icon.Information))
    box.exec()


def notify(parent: QWidget | None, message: str, level: str = "info") -> None:
    show_message(parent, LEVEL_TITLES.get(level, LEVEL_TITLES["info"]), message, level=level)


def show_error(parent: QWidget | None, message: str, title: str = LEVEL_TITLES["error"]) -> None:
    show_message(parent, title, message, level="error")
