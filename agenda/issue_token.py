"""Print a bearer token for an existing user to stdout.

Usage:
    python -m agenda.issue_token user@example.com [--minutes 60]
"""
import argparse
import sys

from agenda.auth.jwt_handler import create_access_token
from agenda.database import SessionLocal
from agenda.models.user import User


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("email")
    parser.add_argument("--minutes", type=int, default=None)
    args = parser.parse_args(argv)

    email = args.email.strip().lower()
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == email).first()
    finally:
        db.close()
    if user is None:
        print(f"No user with email {email}", file=sys.stderr)
        sys.exit(1)

    print(create_access_token(subject=user.email, expires_minutes=args.minutes))


if __name__ == "__main__":
    main()
