from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, cast

from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect, text

from careplan.infrastructure.db.models_sqlalchemy import Base

MIGRATION_MODULES = (
    "careplan.infrastructure.db.migrations.versions.0001_initial_client_records",
    "careplan.infrastructure.db.migrations.versions.0002_dietary_assessment_fields",
)


def _run_migration(connection, module_name: str, *, fn_name: str) -> None:
    module = cast(Any, importlib.import_module(module_name))
    context = MigrationContext.configure(connection)
    operations = Operations(context)
    original_op = module.op
    try:
        module.op = operations
        getattr(module, fn_name)()
    finally:
        module.op = original_op


def _upgrade_all(connection) -> None:
    for name in MIGRATION_MODULES:
        _run_migration(connection, name, fn_name="upgrade")


def _downgrade_all(connection) -> None:
    for name in reversed(MIGRATION_MODULES):
        _run_migration(connection, name, fn_name="downgrade")


def _table_names(connection) -> set[str]:
    rows = connection.execute(text("SELECT name FROM sqlite_master WHERE type='table'")).fetchall()
    return {str(row[0]) for row in rows}


def _columns(connection, table: str) -> set[str]:
    return {column["name"] for column in inspect(connection).get_columns(table)}


def test_migration_chain_is_linear() -> None:
    modules = [importlib.import_module(name) for name in MIGRATION_MODULES]
    assert modules[0].down_revision is None
    for previous, current in zip(modules, modules[1:]):
        assert current.down_revision == previous.revision


def test_migrations_match_models_and_downgrade(tmp_path: Path) -> None:
    engine = create_engine(f"sqlite:///{(tmp_path / 'migration.db').as_posix()}", future=True)

    with engine.begin() as connection:
        _upgrade_all(connection)

        assert set(Base.metadata.tables) <= _table_names(connection)
        for name, table in Base.metadata.tables.items():
            assert _columns(connection, name) == set(table.columns.keys()), name

        _downgrade_all(connection)

        assert not set(Base.metadata.tables) & _table_names(connection)


def test_dietary_assessment_downgrade_keeps_initial_columns(tmp_path: Path) -> None:
    engine = create_engine(f"sqlite:///{(tmp_path / 'dietary.db').as_posix()}", future=True)

    with engine.begin() as connection:
        _upgrade_all(connection)
        assert {"at_risk_malnutrition", "hydration_details", "has_allergies"} <= _columns(
            connection, "client_dietary_requirements"
        )

        _run_migration(connection, MIGRATION_MODULES[1], fn_name="downgrade")

        remaining = _columns(connection, "client_dietary_requirements")
        assert "at_risk_malnutrition" not in remaining
        assert "hydration_details" not in remaining
        assert {"client_id", "meal_schedule", "special_equipment_needed"} <= remaining
