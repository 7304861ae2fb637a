"""Promote an existing account to admin.

Usage:
    python -m backend.create_admin ann@example.com
"""
import argparse
import sys

from backend.auth.credentials import CredentialStore
from backend.core.errors import AppError
from backend.database import SessionLocal
from backend.models.user import Role


def main(argv: list[str] | None = None, store: CredentialStore | None = None) -> int:
    parser = argparse.ArgumentParser(description="Promote an existing account to admin.")
    parser.add_argument("email", help="email address of a registered account")
    args = parser.parse_args(argv)

    store = store or CredentialStore(SessionLocal)
    try:
        updated = store.set_role(args.email, Role.ADMIN)
    except AppError as exc:
        print(exc.message, file=sys.stderr)
        return 1

    if not updated:
        print(f"No account registered for {args.email}.", file=sys.stderr)
        return 1

    print(f"{args.email} is now an admin.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
