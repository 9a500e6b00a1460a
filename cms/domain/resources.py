"""Resource registry: which top-level document fields are collections and which are singletons."""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping


@dataclass(frozen=True)
class CollectionResource:
    """Ordered list of records, each carrying a unique `id` and a `created_at` stamp."""

    name: str

    def empty(self) -> list:
        return []


@dataclass(frozen=True)
class SingletonResource:
    """Single object replaced or shallow-merged as a whole; no id, no timestamp."""

    name: str

    def empty(self) -> dict:
        return {}


Resource = CollectionResource | SingletonResource

COLLECTIONS = ("posts", "services", "metrics", "process", "messages")
SINGLETONS = ("hero",)

RESOURCES: dict[str, Resource] = {
    **{name: CollectionResource(name) for name in COLLECTIONS},
    **{name: SingletonResource(name) for name in SINGLETONS},
}


def get_resource(name: str) -> Resource | None:
    return RESOURCES.get((name or "").strip())


def new_record_id() -> str:
    return uuid.uuid4().hex


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_record(fields: Mapping[str, Any]) -> dict:
    """Return the caller fields plus a fresh `id` and `created_at`."""
    return {**fields, "id": new_record_id(), "created_at": utc_timestamp()}


def shallow_merge(current: Mapping[str, Any] | None, changes: Mapping[str, Any]) -> dict:
    return {**(current or {}), **changes}
