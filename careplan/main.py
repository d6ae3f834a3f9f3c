from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6.QtCore import QtMsgType, qInstallMessageHandler
from PySide6.QtWidgets import QApplication, QMessageBox

from careplan.bootstrap.startup import initialize_database, setup_logging
from careplan.config import DB_FILE, LOG_DIR, settings
from careplan.container import build_container
from careplan.ui.main_window import MainWindow

# alembic.ini and the migrations sit next to the package when bundled or run from a checkout.
_MEIPASS = getattr(sys, "_MEIPASS", None)
ROOT_DIR = Path(_MEIPASS) if _MEIPASS else Path(__file__).resolve().parent.parent


def _install_exception_hook(log_path: Path) -> None:
    def _handle_exception(exc_type, exc, tb) -> None:
        logging.getLogger(__name__).error("Unhandled exception", exc_info=(exc_type, exc, tb))
        if QApplication.instance() is not None:
            QMessageBox.critical(
                None,
                "Error",
                f"An unexpected error occurred.\nDetails: {log_path}",
            )
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _handle_exception


def _install_qt_message_handler() -> None:
    def _handle_qt_message(msg_type: QtMsgType, _context, message: str) -> None:
        logger = logging.getLogger("qt")
        if msg_type == QtMsgType.QtCriticalMsg:
            logger.error("Qt: %s", message)
        elif msg_type == QtMsgType.QtWarningMsg:
            logger.warning("Qt: %s", message)
        else:
            logger.info("Qt: %s", message)

    qInstallMessageHandler(_handle_qt_message)


def _create_application() -> QApplication:
    app = QApplication(sys.argv)
    app.setApplicationName("Care plan records")
    return app


def main() -> int:
    log_path = setup_logging(LOG_DIR)
    _install_exception_hook(log_path)
    _install_qt_message_handler()
    # Startup failures are reported with message boxes, so the application comes first.
    app = _create_application()
    if not initialize_database(
        root_dir=ROOT_DIR,
        db_file=DB_FILE,
        database_url=settings.database_url,
        log_dir=LOG_DIR,
    ):
        return 1
    container = build_container()

    window = MainWindow(container=container)
    window.resize(960, 640)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
