"""
Create a user (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user admin admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from dotenv import load_dotenv

from app.core.config import get_settings
from app.core.database import build_engine, build_session_factory
from app.core.exceptions import InternalError
from app.core.security import PASSWORD_MIN_LEN, hash_password
from app.models.user import USERNAME_MAX_LEN, Role
from app.services.user_store import DuplicateIdentityError, UserStore

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user account, optionally with the admin role.")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address (stored lowercased)")
    parser.add_argument("password", help=f"Password (at least {PASSWORD_MIN_LEN} chars)")
    parser.add_argument(
        "role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role]
    )
    args = parser.parse_args(argv)

    username = args.username.strip()
    email = args.email.strip().lower()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not email:
        print("Email must not be empty.", file=sys.stderr)
        return 1
    if len(args.password) < PASSWORD_MIN_LEN:
        print(f"Password must be at least {PASSWORD_MIN_LEN} characters.", file=sys.stderr)
        return 1

    settings = get_settings()
    engine = build_engine(settings)
    db = build_session_factory(engine)()
    try:
        store = UserStore(db)
        if store.find_by_username_or_email(username, email) is not None:
            print("Username or email is already registered.", file=sys.stderr)
            return 1
        try:
            store.create(username, email, hash_password(args.password), Role(args.role))
        except DuplicateIdentityError:
            print("Username or email is already registered.", file=sys.stderr)
            return 1
        except InternalError as e:
            logger.exception("Failed to create user: %s", e.message)
            return 1
        print(f"Created user '{username}' with role '{args.role}'.")
        return 0
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    load_dotenv()
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    sys.exit(main())
