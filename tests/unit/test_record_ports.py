from __future__ import annotations

from typing import Any

import pytest

from careplan.application.services.record_ports import RecordPorts
from careplan.domain.constants import ActionKind, EntityKind


class _FakeService:
    def __init__(self) -> None:
        self.calls: list[tuple[str, Any, Any]] = []

    def update_section(self, kind: EntityKind, client_id: str, fields: dict[str, Any]) -> None:
        self.calls.append(("update", kind, (client_id, fields)))

    def create_record(self, action: ActionKind, fields: dict[str, Any]) -> str:
        self.calls.append(("create", action, fields))
        return "new-id"


@pytest.mark.asyncio
async def test_update_port_forwards_to_service() -> None:
    service = _FakeService()
    port = RecordPorts(service).update_port(EntityKind.PERSONAL_CARE)  # type: ignore[arg-type]

    assert port is not None
    await port("C1", {"bathing_preferences": "shower", "client_id": "C1"})

    assert service.calls == [
        ("update", EntityKind.PERSONAL_CARE, ("C1", {"bathing_preferences": "shower", "client_id": "C1"}))
    ]


@pytest.mark.asyncio
async def test_create_port_forwards_to_service() -> None:
    service = _FakeService()
    port = RecordPorts(service).create_port(ActionKind.ADD_ASSESSMENT)  # type: ignore[arg-type]

    assert port is not None
    await port({"client_id": "C1", "assessment_name": "Waterlow"})

    assert service.calls == [("create", ActionKind.ADD_ASSESSMENT, {"client_id": "C1", "assessment_name": "Waterlow"})]


def test_edit_actions_have_no_create_port() -> None:
    ports = RecordPorts(_FakeService())  # type: ignore[arg-type]

    assert ports.create_port(ActionKind.EDIT_DIETARY) is None
