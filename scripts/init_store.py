#!/usr/bin/env python3
"""
Create the JSON data file and/or set the admin credentials.

Usage:
  python scripts/init_store.py [--data-file server/database.json] [--username admin] [--password secret]

When --password is omitted it is asked interactively. An existing document
keeps its content; only the admin pair is replaced.
"""
from __future__ import annotations

import argparse
import getpass
import sys
from pathlib import Path

from cms.core.config import get_settings
from cms.repositories.json_storage import JsonDocumentStore
from cms.services.auth_service import AuthService


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Initialize the CMS data file")
    ap.add_argument("--data-file", help="Path of the JSON document (default: DATA_FILE)")
    ap.add_argument("--username", default="admin", help="Admin username (default: admin)")
    ap.add_argument("--password", help="Admin password (prompted when omitted)")
    args = ap.parse_args(argv)

    path = Path(args.data_file) if args.data_file else get_settings().data_file
    store = JsonDocumentStore(path)
    created = store.initialize()

    username = (args.username or "").strip()
    if not username:
        raise SystemExit("Invalid username")
    password = args.password or getpass.getpass("Admin password: ")
    if not password:
        raise SystemExit("Password must not be empty")

    AuthService(store).set_credentials(username, password)
    print(f"OK: {'created' if created else 'updated'} {path}")
    print(f"  Admin: {username}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
