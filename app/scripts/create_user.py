"""
Create an account out-of-band (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m app.scripts.create_user admin your-secure-password admin
"""
import argparse
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.errors import AppError
from app.core.security import ROLES, ROLE_USER
from app.services.users import register_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Film API account.")
    parser.add_argument("username", help="Username (case-insensitive, max 255 chars)")
    parser.add_argument("password", help="Password (min 6 chars)")
    parser.add_argument("role", nargs="?", default=ROLE_USER, choices=list(ROLES))
    args = parser.parse_args(argv)

    settings = get_settings()
    db = SessionLocal()
    try:
        user = register_user(
            db,
            args.username,
            args.password,
            role=args.role,
            rounds=settings.BCRYPT_ROUNDS,
        )
    except AppError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
