#!/usr/bin/env python3
"""
Mint a bearer token for an existing user, e.g. for scripted API access.

Usage:
    python create_token.py --username alice --days 7
"""

import argparse
import sys

from taskboard_api.app.core.config import settings
from taskboard_api.app.core.security import create_access_token
from taskboard_api.app.storage import build_storage


def main() -> None:
    ap = argparse.ArgumentParser(description="Create a Taskboard API bearer token.")
    ap.add_argument("--username", required=True, help="User the token is issued for")
    ap.add_argument("--days", type=int, default=1, help="Token lifetime in days (default: 1)")
    args = ap.parse_args()

    storage = build_storage(settings)
    storage.init_schema()
    user = storage.find_user_by_username(args.username)
    if user is None:
        print(f"[!] No user found with username: {args.username}", file=sys.stderr)
        sys.exit(2)

    token = create_access_token(
        {"sub": str(user.id), "username": user.username},
        expires_delta=args.days * 24 * 60 * 60,
    )
    print(token)


if __name__ == "__main__":
    main()
