"""
Admin login check against the credential pair stored in the document.
"""

from __future__ import annotations

import logging
import secrets

from cms.core.security import hash_password, is_hashed, needs_rehash, verify_password
from cms.repositories.json_storage import JsonDocumentStore, StoreError

logger = logging.getLogger(__name__)


class AuthService:
    """Compares credentials; issues no session or token."""

    def __init__(self, store: JsonDocumentStore) -> None:
        self.store = store

    def _username_matches(self, stored: str | None, supplied: str | None) -> bool:
        if not isinstance(stored, str) or not isinstance(supplied, str) or not stored:
            return False
        return secrets.compare_digest(stored.encode("utf-8"), supplied.encode("utf-8"))

    def login(self, username: str | None, password: str | None) -> bool:
        admin = self.store.read().get("admin") or {}
        stored_hash = admin.get("password")
        if not self._username_matches(admin.get("username"), username):
            return False
        if not isinstance(password, str) or not verify_password(password, stored_hash):
            return False
        if needs_rehash(stored_hash):
            try:
                self._upgrade(password, legacy=not is_hashed(stored_hash))
            except StoreError:
                logger.exception("Could not store the rehashed admin password")
        return True

    def set_credentials(self, username: str, password: str) -> None:
        with self.store.transaction() as db:
            db["admin"] = {"username": username, "password": hash_password(password)}

    def _upgrade(self, password: str, *, legacy: bool) -> None:
        if legacy:
            logger.warning("Admin password was stored in plaintext; replacing it with an Argon2 hash")
        with self.store.transaction() as db:
            admin = dict(db.get("admin") or {})
            admin["password"] = hash_password(password)
            db["admin"] = admin
