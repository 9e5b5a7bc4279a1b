"""
Provision a user (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user EMAIL NAME [--password PASSWORD] [--admin]
Example:
  python -m app.scripts.create_user exec@socis.ca "Club Exec" --admin

The generated secret is printed once; clients send it as accessToken.
"""
import argparse
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.logging import configure_logging
from app.core.permissions import Permission
from app.core.security import generate_secret, hash_password
from app.repositories.table import Table, TableAccessor
from app.services.users import normalize_email

EMAIL_MAX_LEN = 255
NAME_MAX_LEN = 255


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an initiatives user (no registration UI).")
    parser.add_argument("email", help="Email (unique)")
    parser.add_argument("name", help="Display name")
    parser.add_argument("--password", default=None, help="Optional password for email sign-in")
    parser.add_argument("--image", default=None, help="Optional avatar URL")
    parser.add_argument("--admin", action="store_true", help="Grant the ADMIN permission")
    args = parser.parse_args(argv)

    configure_logging(get_settings().LOG_LEVEL)

    email = normalize_email(args.email)
    if not email or "@" not in email or len(email) > EMAIL_MAX_LEN:
        print("Invalid email.", file=sys.stderr)
        return 1
    name = args.name.strip()
    if not name or len(name) > NAME_MAX_LEN:
        print("Invalid name length.", file=sys.stderr)
        return 1

    permission = Permission.ADMIN if args.admin else Permission.DEFAULT
    db = SessionLocal()
    try:
        accessor = TableAccessor(db)
        if accessor.find_one(Table.USER, {"where": {"email": email}}) is not None:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        secret = generate_secret()
        created = accessor.create(
            Table.USER,
            {
                "data": {
                    "email": email,
                    "name": name,
                    "secret": secret,
                    "password": hash_password(args.password) if args.password else None,
                    "image": args.image,
                    "roles": [permission.value],
                    "permissions": [permission.value],
                },
                "select": {"id": True},
            },
        )
        if created is None:
            error = accessor.last_error
            print(
                f"Failed to create user '{email}': {error.message if error else 'unknown error'}",
                file=sys.stderr,
            )
            return 1
        print(f"Created user '{email}' ({created['id']}) with permission '{permission.value}'.")
        print(f"Secret (shown once): {secret}")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
