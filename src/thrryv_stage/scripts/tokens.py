"""
Issue access tokens for local development.

Production tokens come from the hosting application's auth provider; this
helper signs a token with the local SECRET_KEY so the API can be exercised
by hand, optionally creating the user row first.
"""

import argparse

from thrryv_stage.core.security import create_access_token
from thrryv_stage.db.session import SessionLocal
from thrryv_stage.models import User


def ensure_user(user_id: str, *, username: str | None, is_admin: bool) -> User:
    """Create the user if missing and return it."""
    db = SessionLocal()
    try:
        user = db.get(User, user_id)
        if user is None:
            user = User(id=user_id, username=username, is_admin=is_admin)
            db.add(user)
        elif is_admin and not user.is_admin:
            user.is_admin = True
        db.commit()
        db.refresh(user)
        return user
    finally:
        db.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Mint a development access token")
    parser.add_argument("user_id", help="User id to place in the token subject")
    parser.add_argument("--username", default=None)
    parser.add_argument("--admin", action="store_true", help="Mark the user as administrator")
    parser.add_argument(
        "--create",
        action="store_true",
        help="Create the user row if it does not exist yet",
    )
    args = parser.parse_args()

    if args.create or args.admin:
        ensure_user(args.user_id, username=args.username, is_admin=args.admin)
    print(create_access_token(args.user_id))


if __name__ == "__main__":
    main()
