from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QWidget

from careplan.application.services.edit_session import DialogFlags, EditSessionState
from careplan.domain.constants import DialogKind
from careplan.ui.widgets.notifications import notify


class QtFeedbackBridge(QObject):
    """Notifier and flags listener that hops onto the GUI thread.

    Saves resolve on a pool thread; both signals are delivered queued to the
    thread owning the bridge, so toasts and dialog visibility only change there.
    """

    notified = Signal(str, str)
    flags_changed = Signal(str, bool, bool)

    def __init__(self, host: QWidget, session_state: EditSessionState | None = None) -> None:
        super().__init__(host)
        self.host = host
        self._unsubscribe: Callable[[], None] | None = None
        self.notified.connect(self._show)
        if session_state is not None:
            self.attach(session_state)

    def notify(self, message: str, level: str = "info") -> None:
        self.notified.emit(message, level)

    def attach(self, session_state: EditSessionState) -> None:
        self.detach()
        self._unsubscribe = session_state.subscribe(self._on_flags)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_flags(self, dialog: DialogKind, flags: DialogFlags) -> None:
        self.flags_changed.emit(dialog.value, flags.open, flags.pending)

    def _show(self, message: str, level: str) -> None:
        notify(self.host, message, level=level)
