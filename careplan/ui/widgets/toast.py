from __future__ import annotations

from weakref import WeakKeyDictionary

from PySide6.QtCore import QEasingCurve, QEvent, QObject, QPropertyAnimation, Qt, QTimer
from PySide6.QtWidgets import QHBoxLayout, QLabel, QWidget

# Failed saves stay on screen longer so the message can be read before retrying.
LEVEL_TIMEOUTS_MS = {
    "success": 2400,
    "info": 2400,
    "warning": 4000,
    "error": 6000,
}

MARGIN = 16
SPACING = 8


def normalize_level(level: str) -> str:
    return level if level in LEVEL_TIMEOUTS_MS else "info"


def _fade(target: QWidget, start: float, end: float, curve: QEasingCurve.Type) -> QPropertyAnimation:
    anim = QPropertyAnimation(target, b"windowOpacity", target)
    anim.setDuration(180)
    anim.setEasingCurve(curve)
    anim.setStartValue(start)
    anim.setEndValue(end)
    return anim


class Toast(QWidget):
    """One save notification; repeats of the same message bump a counter."""

    def __init__(
        self,
        parent: QWidget,
        text: str,
        *,
        level: str = "info",
        timeout_ms: int | None = None,
    ) -> None:
        super().__init__(parent)
        self._manager: ToastManager | None = None
        self.level = normalize_level(level)
        self.text = text
        self.count = 1
        self.timeout_ms = timeout_ms or LEVEL_TIMEOUTS_MS[self.level]
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self.setWindowFlags(Qt.WindowType.SubWindow | Qt.WindowType.FramelessWindowHint)
        self.setObjectName("toast")
        self.setProperty("toastLevel", self.level)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 9, 12, 9)
        self._label = QLabel(text)
        self._label.setWordWrap(True)
        self._label.setMaximumWidth(420)
        layout.addWidget(self._label)

        self._anim_in = _fade(self, 0.0, 1.0, QEasingCurve.Type.OutCubic)
        self._anim_out = _fade(self, 1.0, 0.0, QEasingCurve.Type.InCubic)
        self._anim_out.finished.connect(self._finalize_close)
        self._expiry = QTimer(self)
        self._expiry.setSingleShot(True)
        self._expiry.timeout.connect(self._anim_out.start)

        self.setWindowOpacity(0.0)
        self._anim_in.start()
        self._expiry.start(self.timeout_ms)

    def matches(self, text: str, level: str) -> bool:
        return self.text == text and self.level == normalize_level(level)

    def repeat(self) -> None:
        self.count += 1
        self._label.setText(f"{self.text} (×{self.count})")
        self._expiry.start(self.timeout_ms)

    def dismiss(self) -> None:
        self._expiry.stop()
        self._anim_out.start()

    def _finalize_close(self) -> None:
        manager = self._manager
        if manager:
            manager.detach(self)
        self.deleteLater()


class ToastManager(QObject):
    """Stacks toasts bottom-right of ``parent`` and keeps at most ``max_visible``."""

    def __init__(self, parent: QWidget, *, max_visible: int = 4) -> None:
        super().__init__(parent)
        self.parent_widget = parent
        self.max_visible = max(1, max_visible)
        self.toasts: list[Toast] = []
        self.parent_widget.installEventFilter(self)

    def show(self, text: str, *, level: str = "info", timeout_ms: int | None = None) -> Toast:
        if self.toasts and self.toasts[-1].matches(text, level):
            newest = self.toasts[-1]
            newest.repeat()
            self._layout_toasts()
            return newest
        toast = Toast(self.parent_widget, text=text, level=level, timeout_ms=timeout_ms)
        toast._manager = self
        self.toasts.append(toast)
        while len(self.toasts) > self.max_visible:
            oldest = self.toasts.pop(0)
            oldest._manager = None
            oldest.dismiss()
        self._layout_toasts()
        toast.show()
        return toast

    def detach(self, toast: Toast) -> None:
        if toast in self.toasts:
            self.toasts.remove(toast)
            self._layout_toasts()

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # noqa: N802
        if watched is getattr(self, "parent_widget", None) and event.type() in (QEvent.Type.Resize, QEvent.Type.Move):
            self._layout_toasts()
        return super().eventFilter(watched, event)

    def _layout_toasts(self) -> None:
        if not hasattr(self, "parent_widget"):
            return
        right = self.parent_widget.width() - MARGIN
        bottom = self.parent_widget.height() - MARGIN
        for toast in reversed(self.toasts):
            toast.adjustSize()
            bottom -= toast.height()
            toast.move(max(MARGIN, right - toast.width()), bottom)
            bottom -= SPACING


_MANAGERS: WeakKeyDictionary[QWidget, ToastManager] = WeakKeyDictionary()


def show_toast(parent: QWidget | None, text: str, level: str = "info") -> Toast | None:
    """Show ``text`` on the window hosting ``parent``; ``None`` when there is no host."""
    if parent is None:
        return None
    host = parent.window() or parent

    manager = _MANAGERS.get(host)
    if manager is None:
        manager = ToastManager(host)
        _MANAGERS[host] = manager
    return manager.show(text=text, level=level)
