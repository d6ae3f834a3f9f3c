from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from careplan.domain.constants import DialogKind

FlagsListener = Callable[[DialogKind, "DialogFlags"], None]


@dataclass(frozen=True)
class DialogFlags:
    open: bool = False
    pending: bool = False


@dataclass(frozen=True)
class SaveTicket:
    dialog: DialogKind
    generation: int


class EditSessionState:
    """Open/pending flags for every dialog of one mounted care plan view.

    ``pending`` is derived from a per-dialog in-flight counter so overlapping
    saves do not clear each other's flag. Opening or cancelling a dialog bumps
    its generation and a save ticket taken before the bump is stale. Closing
    dialogs after a successful save leaves generations alone, so other saves
    still in flight keep their result.
    """

    def __init__(self, dialogs: Iterable[DialogKind] = tuple(DialogKind)) -> None:
        self._open: dict[DialogKind, bool] = {dialog: False for dialog in dialogs}
        self._in_flight: dict[DialogKind, int] = dict.fromkeys(self._open, 0)
        self._generation: dict[DialogKind, int] = dict.fromkeys(self._open, 0)
        self._listeners: list[FlagsListener] = []
        # Saves may resolve on a worker thread while the view mutates flags.
        self._lock = threading.RLock()

    def flags(self, dialog: DialogKind) -> DialogFlags:
        with self._lock:
            self._require(dialog)
            return DialogFlags(open=self._open[dialog], pending=self._in_flight[dialog] > 0)

    def snapshot(self) -> dict[DialogKind, DialogFlags]:
        with self._lock:
            return {dialog: self.flags(dialog) for dialog in self._open}

    def is_open(self, dialog: DialogKind) -> bool:
        return self.flags(dialog).open

    def is_pending(self, dialog: DialogKind) -> bool:
        return self.flags(dialog).pending

    def open(self, dialog: DialogKind) -> None:
        self._set_open(dialog, True, bump=True)

    def cancel(self, dialog: DialogKind) -> None:
        self._set_open(dialog, False, bump=True)

    def close_many(self, dialogs: Iterable[DialogKind]) -> None:
        for dialog in dialogs:
            self._set_open(dialog, False, bump=False)

    def begin_save(self, dialog: DialogKind) -> SaveTicket:
        with self._lock:
            self._require(dialog)
            self._in_flight[dialog] += 1
            changed = self._in_flight[dialog] == 1
            ticket = SaveTicket(dialog=dialog, generation=self._generation[dialog])
        if changed:
            self._emit(dialog)
        return ticket

    def end_save(self, ticket: SaveTicket) -> None:
        dialog = ticket.dialog
        with self._lock:
            if self._in_flight[dialog] == 0:
                logging.getLogger(__name__).warning("end_save without matching begin_save for %s", dialog)
                return
            self._in_flight[dialog] -= 1
            changed = self._in_flight[dialog] == 0
        if changed:
            self._emit(dialog)

    def is_stale(self, ticket: SaveTicket) -> bool:
        with self._lock:
            return self._generation[ticket.dialog] != ticket.generation

    def subscribe(self, listener: FlagsListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def _set_open(self, dialog: DialogKind, value: bool, *, bump: bool) -> None:
        with self._lock:
            self._require(dialog)
            if self._open[dialog] == value:
                return
            self._open[dialog] = value
            if bump:
                self._generation[dialog] += 1
        self._emit(dialog)

    def _emit(self, dialog: DialogKind) -> None:
        flags = self.flags(dialog)
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(dialog, flags)
            except Exception:  # noqa: BLE001
                logging.getLogger(__name__).exception("Dialog flags listener failed for %s", dialog)

    def _require(self, dialog: DialogKind) -> None:
        if dialog not in self._open:
            raise KeyError(f"Unknown dialog: {dialog}")
