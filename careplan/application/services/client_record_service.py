from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any, cast

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError

from careplan.application.dto.client_record_dto import (
    RISK_DETAIL_FIELDS,
    ActivityCreateRequest,
    AssessmentCreateRequest,
    ClientProfileUpdate,
    DietaryRequirementsUpdate,
    EquipmentCreateRequest,
    EventCreateRequest,
    GoalCreateRequest,
    MedicalInfoUpdate,
    NoteCreateRequest,
    PersonalCareUpdate,
    PersonalInfoUpdate,
    RecordResponse,
    RiskAssessmentCreateRequest,
    ServiceActionCreateRequest,
    ServicePlanCreateRequest,
)
from careplan.application.ports import PortError
from careplan.config import settings
from careplan.domain.constants import STATIC_ACTIONS, ActionKind, EntityKind
from careplan.infrastructure.db.repositories.audit_repo import AuditLogRepository
from careplan.infrastructure.db.repositories.client_record_repo import ClientRecordRepository
from careplan.infrastructure.db.session import session_scope

SECTION_REQUESTS: dict[EntityKind, type[BaseModel]] = {
    EntityKind.CLIENT_PROFILE: ClientProfileUpdate,
    EntityKind.PERSONAL_INFO: PersonalInfoUpdate,
    EntityKind.MEDICAL_INFO: MedicalInfoUpdate,
    EntityKind.DIETARY: DietaryRequirementsUpdate,
    EntityKind.PERSONAL_CARE: PersonalCareUpdate,
}

RECORD_REQUESTS: dict[ActionKind, type[BaseModel]] = {
    ActionKind.ADD_NOTE: NoteCreateRequest,
    ActionKind.ADD_EVENT: EventCreateRequest,
    ActionKind.ADD_GOAL: GoalCreateRequest,
    ActionKind.ADD_ACTIVITY: ActivityCreateRequest,
    ActionKind.ADD_ASSESSMENT: AssessmentCreateRequest,
    ActionKind.ADD_EQUIPMENT: EquipmentCreateRequest,
    ActionKind.ADD_RISK_ASSESSMENT: RiskAssessmentCreateRequest,
    ActionKind.ADD_SERVICE_ACTION: ServiceActionCreateRequest,
    ActionKind.ADD_SERVICE_PLAN: ServicePlanCreateRequest,
}


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid data"


def _row_fields(row: Any) -> dict[str, Any]:
    return {column.name: getattr(row, column.name) for column in row.__table__.columns}


class ClientRecordService:
    def __init__(
        self,
        repo: ClientRecordRepository | None = None,
        audit_repo: AuditLogRepository | None = None,
        session_factory: Callable = session_scope,
        note_author: str | None = None,
    ) -> None:
        self.repo = repo or ClientRecordRepository()
        self.audit_repo = audit_repo or AuditLogRepository()
        self.session_factory = session_factory
        self.note_author = note_author or settings.default_note_author

    def create_client(self, *, first_name: str, last_name: str, **fields: Any) -> RecordResponse:
        with self.session_factory() as session:
            client = self.repo.create_client(session, first_name=first_name, last_name=last_name, **fields)
            client_id = cast(str, client.id)
            self.audit_repo.add_event(
                session,
                entity_type=EntityKind.CLIENT_PROFILE.value,
                entity_id=client_id,
                action="create_client",
            )
            return RecordResponse(id=client_id, client_id=client_id, fields=_row_fields(client))

    def update_section(self, kind: EntityKind, client_id: str, fields: Mapping[str, Any]) -> None:
        request = self._validate(SECTION_REQUESTS[kind], {**fields, "client_id": client_id})
        values = request.model_dump(exclude_unset=True, exclude={"client_id"})
        try:
            with self.session_factory() as session:
                if self.repo.get_client(session, client_id) is None:
                    raise PortError.validation("Client not found")
                if kind is EntityKind.CLIENT_PROFILE:
                    self.repo.update_client(session, client_id, values)
                else:
                    self.repo.upsert_section(session, kind, client_id, values)
                self.audit_repo.add_event(
                    session,
                    entity_type=kind.value,
                    entity_id=client_id,
                    action=f"update_{kind.value}",
                    payload_json=json.dumps({"fields": sorted(values)}),
                )
        except IntegrityError as exc:
            logging.getLogger(__name__).warning("Update %s rejected: %s", kind, exc)
            raise PortError.validation("The record was rejected by the database") from exc
        except OperationalError as exc:
            logging.getLogger(__name__).warning("Update %s failed: %s", kind, exc)
            raise PortError.transient("The database is temporarily unavailable") from exc

    def create_record(self, action: ActionKind, fields: Mapping[str, Any]) -> str:
        if action not in RECORD_REQUESTS:
            raise ValueError(f"{action} does not create a care plan record")
        request = self._validate(RECORD_REQUESTS[action], fields)
        values = request.model_dump()
        if action is ActionKind.ADD_NOTE and not values.get("author"):
            values["author"] = self.note_author
        if action is ActionKind.ADD_RISK_ASSESSMENT:
            values["details"] = {name: values.pop(name) for name in RISK_DETAIL_FIELDS}
        try:
            with self.session_factory() as session:
                if self.repo.get_client(session, values["client_id"]) is None:
                    raise PortError.validation("Client not found")
                row = self.repo.add_record(session, action, values)
                record_id = cast(str, row.id)
                self.audit_repo.add_event(
                    session,
                    entity_type=action.value,
                    entity_id=record_id,
                    action=action.value,
                    payload_json=json.dumps({"client_id": values["client_id"]}),
                )
                return record_id
        except IntegrityError as exc:
            logging.getLogger(__name__).warning("Create %s rejected: %s", action, exc)
            raise PortError.validation("The record was rejected by the database") from exc
        except OperationalError as exc:
            logging.getLogger(__name__).warning("Create %s failed: %s", action, exc)
            raise PortError.transient("The database is temporarily unavailable") from exc

    def get_section(self, kind: EntityKind, client_id: str) -> RecordResponse | None:
        with self.session_factory() as session:
            if kind is EntityKind.CLIENT_PROFILE:
                row = self.repo.get_client(session, client_id)
            else:
                row = self.repo.get_section(session, kind, client_id)
            if row is None:
                return None
            return RecordResponse(id=cast(str, row.id), client_id=client_id, fields=_row_fields(row))

    def list_records(self, action: ActionKind, client_id: str) -> list[RecordResponse]:
        if action not in STATIC_ACTIONS:
            raise ValueError(f"{action} does not create a care plan record")
        with self.session_factory() as session:
            rows = self.repo.list_records(session, action, client_id)
            return [
                RecordResponse(id=cast(str, row.id), client_id=client_id, fields=_row_fields(row)) for row in rows
            ]

    def _validate(self, request_type: type[BaseModel], data: Mapping[str, Any]) -> Any:
        try:
            return request_type.model_validate(dict(data))
        except ValidationError as exc:
            raise PortError.validation(_format_validation_error(exc)) from exc
