"""Snapshot codec — the persisted record, one JSON document.

Decoding never raises: a missing, corrupt or partially invalid payload
degrades to fresh-install defaults field by field.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from zenfit.kernel.models import ActivityLogEntry, AppSnapshot

logger = logging.getLogger(__name__)

# Keys written by the original mobile app → current wire names
LEGACY_KEYS: dict[str, str] = {
    "lastWorkoutDate": "lastActivityDate",
    "workoutLogs": "activityLog",
}

# Wire name → attribute name, e.g. "bestStreak" → "best_streak"
_FIELDS: dict[str, str] = {
    (field.alias or name): name for name, field in AppSnapshot.model_fields.items()
}


def dump_snapshot(snapshot: AppSnapshot) -> str:
    return json.dumps(snapshot.model_dump(mode="json", by_alias=True), ensure_ascii=False)


def _upgrade_keys(raw: dict[str, Any]) -> dict[str, Any]:
    upgraded = dict(raw)
    for old, new in LEGACY_KEYS.items():
        if old in upgraded and new not in upgraded:
            upgraded[new] = upgraded.pop(old)
    return upgraded


def _entries(value: Any) -> list[ActivityLogEntry]:
    if not isinstance(value, list):
        logger.warning("Discarding activity log of type %s", type(value).__name__)
        return []
    entries: list[ActivityLogEntry] = []
    for index, item in enumerate(value):
        try:
            entries.append(ActivityLogEntry.model_validate(item))
        except ValidationError:
            logger.warning("Dropping invalid activity log entry at index %d", index)
    return entries


def _single_field(wire_name: str, attr: str, value: Any) -> Any:
    """Validate one field in isolation. Raises ValidationError."""
    probe = AppSnapshot.model_validate({wire_name: value})
    return getattr(probe, attr)


def load_snapshot(payload: str | bytes | None) -> AppSnapshot:
    """Decode a stored payload. Returns defaults for anything unusable."""
    if not payload:
        return AppSnapshot()

    try:
        raw = json.loads(payload)
    except (TypeError, ValueError) as exc:
        logger.error("Stored snapshot is not valid JSON, using defaults: %s", exc)
        return AppSnapshot()

    if not isinstance(raw, dict):
        logger.error("Stored snapshot is a %s, expected an object; using defaults", type(raw).__name__)
        return AppSnapshot()

    raw = _upgrade_keys(raw)
    dropped = sorted(set(raw) - set(_FIELDS))
    if dropped:
        logger.warning("Stored snapshot keys not carried over and lost on next save: %s", ", ".join(dropped))
    values: dict[str, Any] = {}
    for wire_name, attr in _FIELDS.items():
        value = raw.get(wire_name)
        if value is None:
            continue
        if attr == "activity_log":
            values[attr] = _entries(value)
            continue
        try:
            values[attr] = _single_field(wire_name, attr, value)
        except ValidationError as exc:
            logger.warning("Discarding invalid snapshot field %s: %s", wire_name, exc.errors()[0]["msg"])

    return AppSnapshot(**values)
