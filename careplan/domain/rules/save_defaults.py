from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from careplan.domain.constants import ActionKind

# (field, default) pairs applied when the dialog left the field out.
_SCALAR_DEFAULTS: dict[ActionKind, tuple[tuple[str, str], ...]] = {
    ActionKind.ADD_EVENT: (("status", "open"),),
    ActionKind.ADD_GOAL: (("status", "active"),),
    ActionKind.ADD_ACTIVITY: (("status", "active"),),
    ActionKind.ADD_ASSESSMENT: (("status", "completed"),),
    ActionKind.ADD_EQUIPMENT: (("status", "active"),),
    ActionKind.ADD_RISK_ASSESSMENT: (("status", "active"),),
    ActionKind.ADD_SERVICE_ACTION: (("progress_status", "active"),),
    ActionKind.ADD_SERVICE_PLAN: (("status", "active"),),
}

_LIST_FIELDS: dict[ActionKind, tuple[str, ...]] = {
    ActionKind.ADD_RISK_ASSESSMENT: ("risk_factors", "mitigation_strategies", "risk_to_staff"),
    ActionKind.ADD_SERVICE_ACTION: ("goals",),
    ActionKind.ADD_SERVICE_PLAN: ("selected_days",),
}

CARE_PLAN_SCOPED_ACTIONS: frozenset[ActionKind] = frozenset(
    {
        ActionKind.ADD_GOAL,
        ActionKind.ADD_ACTIVITY,
        ActionKind.ADD_SERVICE_ACTION,
        ActionKind.ADD_SERVICE_PLAN,
    }
)


def apply_save_defaults(
    action: ActionKind,
    payload: Mapping[str, Any],
    *,
    client_id: str,
    care_plan_id: str | None = None,
) -> dict[str, Any]:
    fields = dict(payload)
    for name, default in _SCALAR_DEFAULTS.get(action, ()):
        if fields.get(name) in (None, ""):
            fields[name] = default
    for name in _LIST_FIELDS.get(action, ()):
        if fields.get(name) is None:
            fields[name] = []
    if care_plan_id and action in CARE_PLAN_SCOPED_ACTIONS and not fields.get("care_plan_id"):
        fields["care_plan_id"] = care_plan_id
    fields["client_id"] = client_id
    return fields
