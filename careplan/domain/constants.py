from __future__ import annotations

from enum import StrEnum


class EntityKind(StrEnum):
    PERSONAL_INFO = "personal_info"
    MEDICAL_INFO = "medical_info"
    DIETARY = "dietary"
    PERSONAL_CARE = "personal_care"
    CLIENT_PROFILE = "client_profile"


class DialogKind(StrEnum):
    ADD_NOTE = "add_note"
    ADD_EVENT = "add_event"
    ADD_GOAL = "add_goal"
    ADD_ACTIVITY = "add_activity"
    ADD_ASSESSMENT = "add_assessment"
    ADD_EQUIPMENT = "add_equipment"
    ADD_RISK_ASSESSMENT = "add_risk_assessment"
    ADD_SERVICE_PLAN = "add_service_plan"
    ADD_SERVICE_ACTION = "add_service_action"
    EDIT_PERSONAL_INFO = "edit_personal_info"
    EDIT_MEDICAL_INFO = "edit_medical_info"
    EDIT_ABOUT_ME = "edit_about_me"
    EDIT_DIETARY = "edit_dietary"
    EDIT_PERSONAL_CARE = "edit_personal_care"


EDIT_DIALOGS: tuple[DialogKind, ...] = (
    DialogKind.EDIT_PERSONAL_INFO,
    DialogKind.EDIT_MEDICAL_INFO,
    DialogKind.EDIT_ABOUT_ME,
    DialogKind.EDIT_DIETARY,
    DialogKind.EDIT_PERSONAL_CARE,
)


class ActionKind(StrEnum):
    ADD_NOTE = "add_note"
    ADD_EVENT = "add_event"
    ADD_GOAL = "add_goal"
    ADD_ACTIVITY = "add_activity"
    ADD_ASSESSMENT = "add_assessment"
    ADD_EQUIPMENT = "add_equipment"
    ADD_RISK_ASSESSMENT = "add_risk_assessment"
    ADD_SERVICE_ACTION = "add_service_action"
    ADD_SERVICE_PLAN = "add_service_plan"
    EDIT_PERSONAL_INFO = "edit_personal_info"
    EDIT_MEDICAL_INFO = "edit_medical_info"
    EDIT_ABOUT_ME = "edit_about_me"
    EDIT_DIETARY = "edit_dietary"
    EDIT_PERSONAL_CARE = "edit_personal_care"

    @property
    def is_classifier_routed(self) -> bool:
        return self in CLASSIFIER_ROUTED_ACTIONS

    @property
    def dialog(self) -> DialogKind:
        # Every action is launched from the dialog of the same name.
        return DialogKind(self.value)


CLASSIFIER_ROUTED_ACTIONS: frozenset[ActionKind] = frozenset(
    {
        ActionKind.EDIT_PERSONAL_INFO,
        ActionKind.EDIT_MEDICAL_INFO,
        ActionKind.EDIT_ABOUT_ME,
        ActionKind.EDIT_DIETARY,
        ActionKind.EDIT_PERSONAL_CARE,
    }
)

STATIC_ACTIONS: tuple[ActionKind, ...] = tuple(
    action for action in ActionKind if action not in CLASSIFIER_ROUTED_ACTIONS
)


class PortFailureKind(StrEnum):
    VALIDATION = "validation"
    TRANSIENT = "transient"


ACTION_LABELS: dict[ActionKind, str] = {
    ActionKind.ADD_NOTE: "note",
    ActionKind.ADD_EVENT: "event",
    ActionKind.ADD_GOAL: "goal",
    ActionKind.ADD_ACTIVITY: "activity",
    ActionKind.ADD_ASSESSMENT: "assessment",
    ActionKind.ADD_EQUIPMENT: "equipment",
    ActionKind.ADD_RISK_ASSESSMENT: "risk assessment",
    ActionKind.ADD_SERVICE_ACTION: "service action",
    ActionKind.ADD_SERVICE_PLAN: "service plan",
    ActionKind.EDIT_PERSONAL_INFO: "information",
    ActionKind.EDIT_MEDICAL_INFO: "information",
    ActionKind.EDIT_ABOUT_ME: "information",
    ActionKind.EDIT_DIETARY: "information",
    ActionKind.EDIT_PERSONAL_CARE: "information",
}

# Dialog that edits each record section when the caller tags its payload.
EDIT_ACTION_FOR_KIND: dict[EntityKind, ActionKind] = {
    EntityKind.PERSONAL_INFO: ActionKind.EDIT_ABOUT_ME,
    EntityKind.MEDICAL_INFO: ActionKind.EDIT_MEDICAL_INFO,
    EntityKind.DIETARY: ActionKind.EDIT_DIETARY,
    EntityKind.PERSONAL_CARE: ActionKind.EDIT_PERSONAL_CARE,
    EntityKind.CLIENT_PROFILE: ActionKind.EDIT_PERSONAL_INFO,
}
