from __future__ import annotations

from dataclasses import dataclass

from careplan.application.ports import Notifier
from careplan.application.services.client_record_service import ClientRecordService
from careplan.application.services.edit_session import EditSessionState
from careplan.application.services.record_ports import RecordPorts
from careplan.application.services.save_dispatcher import SaveDispatcher
from careplan.infrastructure.db.repositories.audit_repo import AuditLogRepository
from careplan.infrastructure.db.repositories.client_record_repo import ClientRecordRepository
from careplan.infrastructure.db.session import SessionFactory, session_scope


@dataclass
class CarePlanSession:
    session_state: EditSessionState
    dispatcher: SaveDispatcher


@dataclass
class Container:
    record_repo: ClientRecordRepository
    audit_repo: AuditLogRepository

    record_service: ClientRecordService
    record_ports: RecordPorts

    def new_care_plan_session(self, care_plan_id: str | None, notifier: Notifier) -> CarePlanSession:
        # One per mounted care plan view; flags never leak between views.
        session_state = EditSessionState()
        dispatcher = SaveDispatcher(
            ports=self.record_ports,
            session_state=session_state,
            notifier=notifier,
            care_plan_id=care_plan_id,
        )
        return CarePlanSession(session_state=session_state, dispatcher=dispatcher)


def build_container(session_factory: SessionFactory = session_scope) -> Container:
    record_repo = ClientRecordRepository()
    audit_repo = AuditLogRepository()

    record_service = ClientRecordService(
        repo=record_repo,
        audit_repo=audit_repo,
        session_factory=session_factory,
    )
    record_ports = RecordPorts(record_service)

    return Container(
        record_repo=record_repo,
        audit_repo=audit_repo,
        record_service=record_service,
        record_ports=record_ports,
    )
