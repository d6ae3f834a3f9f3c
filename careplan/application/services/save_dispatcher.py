from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from careplan.application.ports import (
    Notifier,
    PortError,
    RecordPortRegistry,
    UnknownActionError,
)
from careplan.application.services.edit_session import EditSessionState, SaveTicket
from careplan.config import LateResultPolicy, settings
from careplan.domain.constants import (
    ACTION_LABELS,
    EDIT_ACTION_FOR_KIND,
    EDIT_DIALOGS,
    ActionKind,
    DialogKind,
    EntityKind,
)
from careplan.domain.rules.payload_classifier import classify, matching_kinds
from careplan.domain.rules.save_defaults import apply_save_defaults

logger = logging.getLogger(__name__)

SUCCESS_MESSAGES: dict[ActionKind, str] = {
    action: (
        "Information updated successfully"
        if action.is_classifier_routed
        else f"{ACTION_LABELS[action].capitalize()} saved successfully"
    )
    for action in ActionKind
}

FAILURE_MESSAGES: dict[ActionKind, str] = {
    action: (
        "Failed to update information"
        if action.is_classifier_routed
        else f"Failed to save {ACTION_LABELS[action]}"
    )
    for action in ActionKind
}


@dataclass(frozen=True)
class SaveOutcome:
    action: ActionKind
    target: EntityKind | ActionKind
    succeeded: bool
    failure: Exception | None = None
    delivered: bool = True


class SaveDispatcher:
    """Single save entry point for every add/edit dialog of a care plan view."""

    def __init__(
        self,
        *,
        ports: RecordPortRegistry,
        session_state: EditSessionState,
        notifier: Notifier,
        care_plan_id: str | None = None,
        late_result_policy: LateResultPolicy | None = None,
        transient_retry_attempts: int | None = None,
    ) -> None:
        self.ports = ports
        self.session_state = session_state
        self.notifier = notifier
        self.care_plan_id = care_plan_id
        self.late_result_policy: LateResultPolicy = late_result_policy or settings.late_result_policy
        self.transient_retry_attempts = (
            settings.transient_retry_attempts if transient_retry_attempts is None else max(0, transient_retry_attempts)
        )

    async def dispatch(self, action: ActionKind | str, payload: Mapping[str, Any], client_id: str) -> SaveOutcome:
        action_kind = self._resolve_action(action)
        if action_kind.is_classifier_routed:
            kind = classify(payload)
            candidates = matching_kinds(payload)
            if len(candidates) > 1:
                logger.debug(
                    "Payload for %s matches %s; routing to %s",
                    action_kind,
                    ", ".join(candidates),
                    kind,
                )
            return await self._dispatch_update(action_kind, kind, payload, client_id)
        return await self._dispatch_create(action_kind, payload, client_id)

    async def dispatch_tagged(
        self,
        kind: EntityKind,
        payload: Mapping[str, Any],
        client_id: str,
        *,
        action: ActionKind | str | None = None,
    ) -> SaveOutcome:
        try:
            entity_kind = EntityKind(kind)
        except ValueError:
            raise UnknownActionError(f"Unknown record section: {kind!r}") from None
        action_kind = EDIT_ACTION_FOR_KIND[entity_kind] if action is None else self._resolve_action(action)
        if not action_kind.is_classifier_routed:
            raise UnknownActionError(f"{action_kind} does not update a client record section")
        return await self._dispatch_update(action_kind, entity_kind, payload, client_id)

    async def _dispatch_update(
        self,
        action: ActionKind,
        kind: EntityKind,
        payload: Mapping[str, Any],
        client_id: str,
    ) -> SaveOutcome:
        port = self.ports.update_port(kind)
        if port is None:
            logger.error("No update port registered for %s", kind)
            raise UnknownActionError(f"No update port registered for {kind}")
        fields = {**payload, "client_id": client_id}
        logger.info("Saving %s for client %s via %s", kind, client_id, action)

        async def _call() -> None:
            await port(client_id, fields)

        return await self._run(action, kind, EDIT_DIALOGS, _call)

    async def _dispatch_create(self, action: ActionKind, payload: Mapping[str, Any], client_id: str) -> SaveOutcome:
        port = self.ports.create_port(action)
        if port is None:
            logger.error("No create port registered for %s", action)
            raise UnknownActionError(f"No create port registered for {action}")
        fields = apply_save_defaults(action, payload, client_id=client_id, care_plan_id=self.care_plan_id)
        logger.info("Saving %s for client %s", action, client_id)

        async def _call() -> None:
            await port(fields)

        return await self._run(action, action, (action.dialog,), _call)

    async def _run(
        self,
        action: ActionKind,
        target: EntityKind | ActionKind,
        close_on_success: tuple[DialogKind, ...],
        call: Callable[[], Awaitable[None]],
    ) -> SaveOutcome:
        ticket = self.session_state.begin_save(action.dialog)
        try:
            await self._call_with_retry(action, call)
        except PortError as exc:
            logger.warning("Save %s failed (%s): %s", action, exc.kind, exc.message)
            message = f"{FAILURE_MESSAGES[action]}: {exc.message}"
            return self._finish_failure(ticket, action, target, exc, message)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Save %s failed", action)
            return self._finish_failure(ticket, action, target, exc, FAILURE_MESSAGES[action])

        self.session_state.end_save(ticket)
        if self._discard_late_result(ticket):
            logger.info("Save %s completed after its dialog was closed; result discarded", action)
            return SaveOutcome(action=action, target=target, succeeded=True, delivered=False)
        self.session_state.close_many(close_on_success)
        self.notifier.notify(SUCCESS_MESSAGES[action], "success")
        return SaveOutcome(action=action, target=target, succeeded=True)

    async def _call_with_retry(self, action: ActionKind, call: Callable[[], Awaitable[None]]) -> None:
        attempts_left = self.transient_retry_attempts
        while True:
            try:
                await call()
                return
            except PortError as exc:
                if not exc.is_transient or attempts_left <= 0:
                    raise
                attempts_left -= 1
                logger.warning("Transient failure saving %s, retrying: %s", action, exc.message)

    def _finish_failure(
        self,
        ticket: SaveTicket,
        action: ActionKind,
        target: EntityKind | ActionKind,
        exc: Exception,
        message: str,
    ) -> SaveOutcome:
        self.session_state.end_save(ticket)
        if self._discard_late_result(ticket):
            logger.info("Save %s failed after its dialog was closed; notification discarded", action)
            return SaveOutcome(action=action, target=target, succeeded=False, failure=exc, delivered=False)
        self.notifier.notify(message, "error")
        return SaveOutcome(action=action, target=target, succeeded=False, failure=exc)

    def _discard_late_result(self, ticket: SaveTicket) -> bool:
        return self.late_result_policy == "discard" and self.session_state.is_stale(ticket)

    def _resolve_action(self, action: ActionKind | str) -> ActionKind:
        try:
            return ActionKind(action)
        except ValueError:
            logger.error("Dispatch called with unknown action %r", action)
            raise UnknownActionError(f"Unknown save action: {action!r}") from None
