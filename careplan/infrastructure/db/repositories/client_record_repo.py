from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from careplan.domain.constants import ActionKind, EntityKind
from careplan.infrastructure.db.models_sqlalchemy import (
    Base,
    Client,
    ClientActivity,
    ClientAssessment,
    ClientCarePlanGoal,
    ClientDietaryRequirements,
    ClientEquipment,
    ClientEventLog,
    ClientMedicalInfo,
    ClientNote,
    ClientPersonalCare,
    ClientPersonalInfo,
    ClientRiskAssessment,
    ClientServiceAction,
    ClientServicePlan,
)

SECTION_MODELS: dict[EntityKind, type[Base]] = {
    EntityKind.PERSONAL_INFO: ClientPersonalInfo,
    EntityKind.MEDICAL_INFO: ClientMedicalInfo,
    EntityKind.DIETARY: ClientDietaryRequirements,
    EntityKind.PERSONAL_CARE: ClientPersonalCare,
}

RECORD_MODELS: dict[ActionKind, type[Base]] = {
    ActionKind.ADD_NOTE: ClientNote,
    ActionKind.ADD_EVENT: ClientEventLog,
    ActionKind.ADD_GOAL: ClientCarePlanGoal,
    ActionKind.ADD_ACTIVITY: ClientActivity,
    ActionKind.ADD_ASSESSMENT: ClientAssessment,
    ActionKind.ADD_EQUIPMENT: ClientEquipment,
    ActionKind.ADD_RISK_ASSESSMENT: ClientRiskAssessment,
    ActionKind.ADD_SERVICE_ACTION: ClientServiceAction,
    ActionKind.ADD_SERVICE_PLAN: ClientServicePlan,
}


class ClientRecordRepository:
    def get_client(self, session: Session, client_id: str) -> Client | None:
        return session.get(Client, client_id)

    def create_client(self, session: Session, *, first_name: str, last_name: str, **fields: Any) -> Client:
        client = Client(first_name=first_name, last_name=last_name, **fields)
        session.add(client)
        session.flush()
        return client

    def update_client(self, session: Session, client_id: str, values: Mapping[str, Any]) -> Client:
        client = session.get(Client, client_id)
        if client is None:
            raise ValueError("Client not found")
        for name, value in values.items():
            setattr(client, name, value)
        session.flush()
        return client

    def get_section(self, session: Session, kind: EntityKind, client_id: str) -> Any | None:
        model = SECTION_MODELS[kind]
        stmt = select(model).where(model.client_id == client_id)  # type: ignore[attr-defined]
        return session.execute(stmt).scalar_one_or_none()

    def upsert_section(
        self,
        session: Session,
        kind: EntityKind,
        client_id: str,
        values: Mapping[str, Any],
    ) -> Any:
        row = self.get_section(session, kind, client_id)
        if row is None:
            row = SECTION_MODELS[kind](client_id=client_id)
            session.add(row)
        for name, value in values.items():
            setattr(row, name, value)
        session.flush()
        return row

    def add_record(self, session: Session, action: ActionKind, values: Mapping[str, Any]) -> Any:
        row = RECORD_MODELS[action](**values)
        session.add(row)
        session.flush()
        return row

    def list_records(self, session: Session, action: ActionKind, client_id: str) -> list[Any]:
        model = RECORD_MODELS[action]
        stmt = (
            select(model)
            .where(model.client_id == client_id)  # type: ignore[attr-defined]
            .order_by(model.created_at)  # type: ignore[attr-defined]
        )
        return list(session.execute(stmt).scalars())
