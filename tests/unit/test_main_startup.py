from __future__ import annotations

from pathlib import Path

from careplan import main as main_module


class _FakeApp:
    def __init__(self, calls: list[str]) -> None:
        self.calls = calls

    def exec(self) -> int:
        self.calls.append("exec")
        return 0


class _FakeWindow:
    def __init__(self, calls: list[str], container: object) -> None:
        self.calls = calls
        self.container = container

    def resize(self, width: int, height: int) -> None:
        pass

    def show(self) -> None:
        self.calls.append("show")


def _patch_startup(monkeypatch, tmp_path: Path, *, database_ready: bool) -> tuple[list[str], dict]:
    calls: list[str] = []
    seen: dict = {}

    def _setup_logging(log_dir: Path) -> Path:
        calls.append("logging")
        return tmp_path / "careplan.log"

    def _initialize_database(**kwargs) -> bool:
        calls.append("database")
        seen.update(kwargs)
        return database_ready

    def _build_container() -> object:
        calls.append("container")
        return "container"

    def _create_application() -> _FakeApp:
        calls.append("application")
        return _FakeApp(calls)

    def _main_window(container: object) -> _FakeWindow:
        calls.append("window")
        seen["container"] = container
        return _FakeWindow(calls, container)

    monkeypatch.setattr(main_module, "setup_logging", _setup_logging)
    monkeypatch.setattr(main_module, "_install_exception_hook", lambda _path: calls.append("excepthook"))
    monkeypatch.setattr(main_module, "_install_qt_message_handler", lambda: None)
    monkeypatch.setattr(main_module, "_create_application", _create_application)
    monkeypatch.setattr(main_module, "initialize_database", _initialize_database)
    monkeypatch.setattr(main_module, "build_container", _build_container)
    monkeypatch.setattr(main_module, "MainWindow", _main_window)
    return calls, seen


def test_main_wires_logging_database_container_and_window(tmp_path: Path, monkeypatch) -> None:
    calls, seen = _patch_startup(monkeypatch, tmp_path, database_ready=True)

    assert main_module.main() == 0

    assert calls == ["logging", "excepthook", "application", "database", "container", "window", "show", "exec"]
    assert seen["root_dir"] == main_module.ROOT_DIR
    assert seen["db_file"] == main_module.DB_FILE
    assert seen["database_url"] == main_module.settings.database_url
    assert seen["container"] == "container"


def test_main_stops_when_database_cannot_be_prepared(tmp_path: Path, monkeypatch) -> None:
    calls, _ = _patch_startup(monkeypatch, tmp_path, database_ready=False)

    assert main_module.main() == 1

    assert "container" not in calls
    assert "window" not in calls


def test_root_dir_holds_alembic_config() -> None:
    assert (main_module.ROOT_DIR / "alembic.ini").exists()
    assert (main_module.ROOT_DIR / "careplan" / "main.py").exists()
