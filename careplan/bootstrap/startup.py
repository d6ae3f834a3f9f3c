from __future__ import annotations

import logging
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path

from alembic import command
from alembic.config import Config
from PySide6.QtWidgets import QMessageBox

MIGRATIONS_SUBDIR = Path("careplan") / "infrastructure" / "db" / "migrations"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(log_dir: Path, level: int = logging.INFO) -> Path:
    log_path = log_dir / "careplan.log"
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_path, maxBytes=2_000_000, backupCount=3, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    return log_path


def check_startup_prerequisites(root_dir: Path, db_file: Path) -> bool:
    if not (root_dir / "alembic.ini").exists():
        QMessageBox.critical(None, "Error", "alembic.ini is missing. Check the installation.")
        return False
    if not (root_dir / MIGRATIONS_SUBDIR).exists():
        QMessageBox.critical(None, "Error", "The migrations directory is missing. Check the installation.")
        return False
    try:
        test_file = db_file.parent / ".write_test"
        test_file.write_text("ok", encoding="utf-8")
        test_file.unlink(missing_ok=True)
    except OSError:
        QMessageBox.critical(None, "Error", f"The database directory is not writable: {db_file.parent}")
        return False
    return True


def run_migrations(root_dir: Path, database_url: str, log_dir: Path, db_file: Path) -> bool:
    logger = logging.getLogger(__name__)
    try:
        cfg = Config(str(root_dir / "alembic.ini"))
        cfg.set_main_option("script_location", str(root_dir / MIGRATIONS_SUBDIR))
        cfg.set_main_option("sqlalchemy.url", database_url)
        command.upgrade(cfg, "head")
        return True
    except Exception:  # noqa: BLE001
        logger.exception("Failed to run migrations")
        error_path = log_dir / "migration_error.log"
        try:
            error_path.parent.mkdir(parents=True, exist_ok=True)
            with error_path.open("a", encoding="utf-8") as handle:
                handle.write("\n--- Migration error ---\n")
                handle.write(f"DB: {db_file}\n")
                handle.write(traceback.format_exc())
        except OSError:
            logger.exception("Failed to write migration error log")
        QMessageBox.critical(
            None,
            "Error",
            f"Database migrations could not be applied.\nDetails: {error_path}",
        )
        return False


def initialize_database(*, root_dir: Path, db_file: Path, database_url: str, log_dir: Path) -> bool:
    if not check_startup_prerequisites(root_dir, db_file):
        return False
    return run_migrations(root_dir, database_url, log_dir, db_file)
