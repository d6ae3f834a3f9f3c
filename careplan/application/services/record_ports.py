from __future__ import annotations

import asyncio
from typing import Any

from careplan.application.ports import EntityUpdatePort, RecordCreatePort
from careplan.application.services.client_record_service import ClientRecordService
from careplan.domain.constants import STATIC_ACTIONS, ActionKind, EntityKind


class RecordPorts:
    """Async update/create ports backed by the synchronous record service.

    Each call runs the blocking database write on a worker thread.
    """

    def __init__(self, service: ClientRecordService) -> None:
        self.service = service

    def update_port(self, kind: EntityKind) -> EntityUpdatePort | None:
        if kind not in tuple(EntityKind):
            return None

        async def _update(client_id: str, fields: dict[str, Any]) -> None:
            await asyncio.to_thread(self.service.update_section, kind, client_id, fields)

        return _update

    def create_port(self, action: ActionKind) -> RecordCreatePort | None:
        if action not in STATIC_ACTIONS:
            return None

        async def _create(fields: dict[str, Any]) -> None:
            await asyncio.to_thread(self.service.create_record, action, fields)

        return _create
