"""Routing of untyped edit-dialog field bags to the record section they update.

Edit dialogs that do not tag their payload are routed by key presence: the
first entity kind (in ``SIGNATURE_PRIORITY`` order) whose signature keys
intersect the bag's keys wins. A key counts as present whatever its value,
so ``False``, ``""``, ``None`` and ``[]`` all count. Bags matching no
signature go to the client profile.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from careplan.domain.constants import EntityKind

SIGNATURE_PRIORITY: Final[tuple[tuple[EntityKind, tuple[str, ...]], ...]] = (
    (EntityKind.DIETARY, ("dietary_restrictions", "food_allergies", "food_preferences")),
    (EntityKind.PERSONAL_CARE, ("personal_hygiene_needs", "bathing_preferences", "dressing_assistance_level")),
    (EntityKind.MEDICAL_INFO, ("allergies", "current_medications", "medical_conditions")),
    (EntityKind.PERSONAL_INFO, ("cultural_preferences", "language_preferences", "emergency_contact_name")),
)

DEFAULT_KIND: Final[EntityKind] = EntityKind.CLIENT_PROFILE


def signature_keys(kind: EntityKind) -> tuple[str, ...]:
    for candidate, keys in SIGNATURE_PRIORITY:
        if candidate is kind:
            return keys
    return ()


def matching_kinds(bag: Mapping[str, Any]) -> list[EntityKind]:
    present = set(bag.keys())
    return [kind for kind, keys in SIGNATURE_PRIORITY if present.intersection(keys)]


def classify(bag: Mapping[str, Any]) -> EntityKind:
    present = set(bag.keys())
    for kind, keys in SIGNATURE_PRIORITY:
        if present.intersection(keys):
            return kind
    return DEFAULT_KIND
