"""Deterministic mapping of legacy document ids to UUIDs."""

from __future__ import annotations

import uuid
from typing import Any


NAMESPACE = uuid.UUID("6ba7b810-9dad-11d1-80b4-00c04fd430c8")


def legacy_id(value: str | dict[str, Any]) -> str:
    """Extract the raw id from a plain string or an ``{"$oid": ...}`` wrapper."""
    if isinstance(value, dict):
        oid = value.get("$oid")
        if not isinstance(oid, str):
            msg = f"Unsupported legacy id: {value!r}"
            raise ValueError(msg)
        return oid
    return value


def mongo_id_to_uuid(value: str | dict[str, Any]) -> uuid.UUID:
    """Map a legacy id to a stable UUID (version 5, fixed namespace).

    The same input always yields the same UUID, so cross references in
    seed data (recipe owner, testimonial author) resolve to the ids that
    were assigned when the referenced rows were seeded.
    """
    return uuid.uuid5(NAMESPACE, legacy_id(value))
