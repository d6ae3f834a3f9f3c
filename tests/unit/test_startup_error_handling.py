from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from alembic.util.exc import CommandError

from careplan.bootstrap import startup


def _make_root(root_dir: Path) -> None:
    (root_dir / "alembic.ini").write_text("[alembic]\n", encoding="utf-8")
    (root_dir / startup.MIGRATIONS_SUBDIR).mkdir(parents=True)


def test_check_startup_prerequisites_requires_alembic_ini(tmp_path: Path, monkeypatch) -> None:
    critical_calls: list[tuple] = []
    monkeypatch.setattr(startup.QMessageBox, "critical", lambda *args, **kwargs: critical_calls.append(args))

    assert startup.check_startup_prerequisites(tmp_path, tmp_path / "careplan.db") is False
    assert len(critical_calls) == 1


def test_check_startup_prerequisites_handles_write_error(tmp_path: Path, monkeypatch) -> None:
    _make_root(tmp_path)
    db_file = tmp_path / "data" / "careplan.db"
    db_file.parent.mkdir(parents=True, exist_ok=True)

    critical_calls: list[tuple] = []
    monkeypatch.setattr(startup.QMessageBox, "critical", lambda *args, **kwargs: critical_calls.append(args))

    original_write_text = Path.write_text

    def _failing_write(self: Path, data: str, encoding: str = "utf-8", errors: str | None = None) -> int:
        if self.name == ".write_test":
            raise OSError("permission denied")
        kwargs = {"encoding": encoding}
        if errors is not None:
            kwargs["errors"] = errors
        return original_write_text(self, data, **kwargs)

    monkeypatch.setattr(Path, "write_text", _failing_write)

    assert startup.check_startup_prerequisites(tmp_path, db_file) is False
    assert len(critical_calls) == 1


def test_run_migrations_upgrades_to_head(tmp_path: Path, monkeypatch) -> None:
    _make_root(tmp_path)
    calls: list[tuple[str, str | None]] = []

    def _upgrade(cfg, target: str) -> None:  # noqa: ANN001
        calls.append((target, cfg.get_main_option("sqlalchemy.url")))

    monkeypatch.setattr(startup.command, "upgrade", _upgrade)

    assert startup.run_migrations(tmp_path, "sqlite:///tmp.db", tmp_path / "logs", tmp_path / "tmp.db") is True
    assert calls == [("head", "sqlite:///tmp.db")]


def test_run_migrations_writes_error_log_when_upgrade_fails(tmp_path: Path, monkeypatch) -> None:
    _make_root(tmp_path)
    log_dir = tmp_path / "logs"

    critical_calls: list[tuple] = []
    monkeypatch.setattr(startup.QMessageBox, "critical", lambda *args, **kwargs: critical_calls.append(args))

    def _raise_upgrade(_cfg, _target: str) -> None:  # noqa: ANN001
        raise CommandError("boom")

    monkeypatch.setattr(startup.command, "upgrade", _raise_upgrade)

    assert startup.run_migrations(tmp_path, "sqlite:///tmp.db", log_dir, tmp_path / "tmp.db") is False
    assert len(critical_calls) == 1
    assert "boom" in (log_dir / "migration_error.log").read_text(encoding="utf-8")


def test_setup_logging_installs_rotating_file_handler(tmp_path: Path) -> None:
    root_logger = logging.getLogger()
    before = list(root_logger.handlers)
    try:
        log_path = startup.setup_logging(tmp_path / "logs")
        added = [handler for handler in root_logger.handlers if handler not in before]

        assert log_path.name == "careplan.log"
        assert len(added) == 1
        assert isinstance(added[0], RotatingFileHandler)
        assert added[0].maxBytes == 2_000_000
    finally:
        for handler in root_logger.handlers[:]:
            if handler not in before:
                root_logger.removeHandler(handler)
                handler.close()
