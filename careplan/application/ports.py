from __future__ import annotations

from typing import Any, Protocol

from careplan.domain.constants import ActionKind, EntityKind, PortFailureKind


class PortError(Exception):
    """Structured failure raised by a record port for one write attempt."""

    def __init__(self, message: str, *, kind: PortFailureKind = PortFailureKind.VALIDATION) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind

    @property
    def is_transient(self) -> bool:
        return self.kind is PortFailureKind.TRANSIENT

    @classmethod
    def validation(cls, message: str) -> PortError:
        return cls(message, kind=PortFailureKind.VALIDATION)

    @classmethod
    def transient(cls, message: str) -> PortError:
        return cls(message, kind=PortFailureKind.TRANSIENT)


class UnknownActionError(LookupError):
    pass


class EntityUpdatePort(Protocol):
    async def __call__(self, client_id: str, fields: dict[str, Any]) -> None: ...


class RecordCreatePort(Protocol):
    async def __call__(self, fields: dict[str, Any]) -> None: ...


class Notifier(Protocol):
    def notify(self, message: str, level: str = "info") -> None: ...


class RecordPortRegistry(Protocol):
    def update_port(self, kind: EntityKind) -> EntityUpdatePort | None: ...

    def create_port(self, action: ActionKind) -> RecordCreatePort | None: ...
