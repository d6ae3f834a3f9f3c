from __future__ import annotations

import logging
from collections.abc import Callable, Coroutine, Mapping
from typing import Any

from PySide6.QtWidgets import QAbstractButton, QDialog, QWidget

from careplan.application.services.edit_session import EditSessionState
from careplan.application.services.save_dispatcher import SaveDispatcher, SaveOutcome
from careplan.domain.constants import ActionKind, DialogKind, EntityKind
from careplan.ui.care_plan.feedback_bridge import QtFeedbackBridge
from careplan.ui.widgets.async_task import AsyncTask, run_coroutine
from careplan.ui.widgets.notifications import show_error


class DialogBinding:
    """Keeps one dialog's visibility and submit button in step with its flags."""

    def __init__(
        self,
        dialog: QDialog,
        kind: DialogKind,
        session_state: EditSessionState,
        bridge: QtFeedbackBridge,
        submit_button: QAbstractButton | None = None,
    ) -> None:
        self.dialog = dialog
        self.kind = kind
        self.session_state = session_state
        self.submit_button = submit_button
        bridge.flags_changed.connect(self._on_flags_changed)
        dialog.rejected.connect(self._on_rejected)
        self.sync()

    def open(self) -> None:
        self.session_state.open(self.kind)

    def sync(self) -> None:
        flags = self.session_state.flags(self.kind)
        self._apply(flags.open, flags.pending)

    def _on_flags_changed(self, dialog_name: str, is_open: bool, pending: bool) -> None:
        if dialog_name != self.kind.value:
            return
        self._apply(is_open, pending)

    def _apply(self, is_open: bool, pending: bool) -> None:
        # hide() does not emit rejected, so a programmatic close never loops back as a cancel.
        if is_open and not self.dialog.isVisible():
            self.dialog.show()
        elif not is_open and self.dialog.isVisible():
            self.dialog.hide()
        if self.submit_button is not None:
            self.submit_button.setEnabled(not pending)

    def _on_rejected(self) -> None:
        self.session_state.cancel(self.kind)


def submit_save(
    parent: QWidget,
    dispatcher: SaveDispatcher,
    action: ActionKind | str,
    payload: Mapping[str, Any],
    client_id: str,
    on_done: Callable[[SaveOutcome], None] | None = None,
    *,
    kind: EntityKind | None = None,
) -> AsyncTask:
    """Run one dispatch off the GUI thread.

    With ``kind`` the payload goes straight to that record section instead of
    being classified by its keys.

    Port failures are already reported by the dispatcher; only misuse
    (unknown action, unregistered port) reaches ``_on_error``.
    """
    snapshot = dict(payload)

    def _on_error(exc: Exception) -> None:
        logging.getLogger(__name__).error("Save %s could not be dispatched", action, exc_info=exc)
        show_error(parent, str(exc))

    def _save() -> Coroutine[Any, Any, SaveOutcome]:
        if kind is None:
            return dispatcher.dispatch(action, snapshot, client_id)
        return dispatcher.dispatch_tagged(kind, snapshot, client_id, action=action)

    return run_coroutine(
        parent,
        _save,
        on_success=on_done,
        on_error=_on_error,
    )
