"""Command-line maintenance tasks for the Inkwell database.

Usage:
    python -m inkwell.scripts.manage init-db
    python -m inkwell.scripts.manage promote <username> [--role admin]
"""
from __future__ import annotations

import argparse
import sys

from inkwell.core.errors import InkwellError
from inkwell.db.session import SessionLocal, create_tables
from inkwell.models.user import ROLE_ADMIN, USER_ROLES
from inkwell.services import user_service


def promote(username: str, role: str = ROLE_ADMIN) -> int:
    """Assign `role` to the account named `username`."""
    db = SessionLocal()
    try:
        user = user_service.get_user_by_username(db, username)
        if user is None:
            print(f"User not found: {username}", file=sys.stderr)
            return 1
        user_service.set_role(db, user, role)
        print(f"{username} now has role {role}")
        return 0
    except InkwellError as err:
        print(err.message, file=sys.stderr)
        return 1
    finally:
        db.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Inkwell database maintenance")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create all database tables")

    promote_parser = sub.add_parser("promote", help="Change the role of an account")
    promote_parser.add_argument("username")
    promote_parser.add_argument("--role", default=ROLE_ADMIN, choices=USER_ROLES)

    args = parser.parse_args(argv)
    if args.command == "init-db":
        create_tables()
        print("Database initialized.")
        return 0
    return promote(args.username, args.role)


if __name__ == "__main__":
    sys.exit(main())
