"""Generic CRUD over the collection and singleton resources of the document."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from cms.domain.resources import (
    CollectionResource,
    Resource,
    SingletonResource,
    get_resource,
    new_record,
    shallow_merge,
)
from cms.repositories.json_storage import JsonDocumentStore

logger = logging.getLogger(__name__)


class ResourceError(Exception):
    """Base exception for resource operations."""


class UnknownResourceError(ResourceError):
    """Raised when the name is not a registered resource."""


class RecordNotFoundError(ResourceError):
    """Raised when no record in the collection has the requested id."""


class ResourceService:
    """Load-mutate-save operations over named top-level fields of the document."""

    def __init__(self, store: JsonDocumentStore) -> None:
        self.store = store

    def _resource(self, name: str, kind: type) -> Resource:
        resource = get_resource(name)
        if not isinstance(resource, kind):
            raise UnknownResourceError(name)
        return resource

    def _collection(self, db: dict, resource: CollectionResource) -> list:
        items = db.get(resource.name)
        if not isinstance(items, list):
            items = resource.empty()
            db[resource.name] = items
        return items

    # ------------------------------ collections ------------------------------
    def list_items(self, name: str) -> list:
        resource = self._resource(name, CollectionResource)
        items = self.store.read().get(resource.name)
        return items if isinstance(items, list) else resource.empty()

    def create(self, name: str, fields: Mapping[str, Any]) -> dict:
        resource = get_resource(name)
        if isinstance(resource, SingletonResource):
            return self.replace(name, fields)
        resource = self._resource(name, CollectionResource)
        record = new_record(fields)
        with self.store.transaction() as db:
            self._collection(db, resource).append(record)
        logger.info("Created %s record %s", resource.name, record["id"])
        return record

    def update(self, name: str, record_id: str, fields: Mapping[str, Any]) -> dict:
        resource = self._resource(name, CollectionResource)
        with self.store.transaction() as db:
            items = self._collection(db, resource)
            for index, item in enumerate(items):
                if isinstance(item, dict) and item.get("id") == record_id:
                    items[index] = shallow_merge(item, fields)
                    updated = items[index]
                    break
            else:
                raise RecordNotFoundError(f"{resource.name}/{record_id}")
        logger.info("Updated %s record %s", resource.name, record_id)
        return updated

    def delete(self, name: str, record_id: str) -> bool:
        resource = self._resource(name, CollectionResource)
        with self.store.transaction() as db:
            items = self._collection(db, resource)
            remaining = [item for item in items if not (isinstance(item, dict) and item.get("id") == record_id)]
            removed = len(items) - len(remaining)
            db[resource.name] = remaining
        if removed:
            logger.info("Deleted %s record %s", resource.name, record_id)
        return True

    # ------------------------------ singletons ------------------------------
    def read_singleton(self, name: str) -> dict:
        resource = self._resource(name, SingletonResource)
        value = self.store.read().get(resource.name)
        return value if isinstance(value, dict) else resource.empty()

    def update_singleton(self, name: str, fields: Mapping[str, Any]) -> dict:
        resource = self._resource(name, SingletonResource)
        with self.store.transaction() as db:
            current = db.get(resource.name)
            merged = shallow_merge(current if isinstance(current, dict) else None, fields)
            db[resource.name] = merged
        logger.info("Updated %s", resource.name)
        return merged

    def replace(self, name: str, fields: Mapping[str, Any]) -> dict:
        resource = self._resource(name, SingletonResource)
        value = dict(fields)
        with self.store.transaction() as db:
            db[resource.name] = value
        logger.info("Replaced %s", resource.name)
        return value
