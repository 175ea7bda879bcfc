#!/usr/bin/env python3
"""
Reset a user's password in the Taskboard SQLite database.

This script does not read or reveal any existing password.  It sets a
new PBKDF2 hash (format "salthex$hashhex") for the given username.

Usage:
    python reset_password.py --db ./taskboard_api/taskboard.db --username alice --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import os
import sys

from taskboard_api.app.core.security import hash_password
from taskboard_api.app.storage import RecordNotFoundError, SQLiteStorage


def main() -> None:
    ap = argparse.ArgumentParser(description="Reset a Taskboard user password (SQLite).")
    ap.add_argument("--db", required=True, help="Path to SQLite DB file (e.g., ./taskboard_api/taskboard.db)")
    ap.add_argument("--username", required=True, help="Username to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args()

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        sys.exit(1)

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if not new_password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        sys.exit(1)

    storage = SQLiteStorage(args.db)
    user = storage.find_user_by_username(args.username)
    if user is None:
        print(f"[!] No user found with username: {args.username}", file=sys.stderr)
        sys.exit(2)
    try:
        storage.update_user(user.id, {"password": hash_password(new_password)})
    except RecordNotFoundError:
        print(f"[!] User {args.username} was removed concurrently", file=sys.stderr)
        sys.exit(2)
    print(f"[+] Password updated for user: {args.username}")


if __name__ == "__main__":
    main()
