"""
Create a user (e.g. first admin) without going through the HTTP API. Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user "Ada Admin" admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.database import session_scope
from app.core.exceptions import AuthErrorKind, AuthServiceError
from app.core.security import PasswordHasher
from app.repositories.users import SqlAlchemyUserRepository
from app.schemas.auth import SignUpRequest
from app.services.auth import AuthService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create an Authgate user.")
    parser.add_argument("name", help="Display name (2-255 chars)")
    parser.add_argument("email", help="Email address (unique, case-insensitive)")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    return parser


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    args = build_parser().parse_args(argv)

    try:
        body = SignUpRequest(
            name=args.name, email=args.email, password=args.password, role=args.role
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"Invalid {field}: {err['msg']}", file=sys.stderr)
        return 1

    with session_scope() as db:
        service = AuthService(
            SqlAlchemyUserRepository(db), PasswordHasher.from_settings(settings)
        )
        try:
            user = service.create_user(body.name, body.email, body.password, body.role)
        except AuthServiceError as e:
            if e.kind is AuthErrorKind.DUPLICATE_EMAIL:
                print(f"User '{body.email}' already exists.", file=sys.stderr)
            else:
                print(f"Could not create user: {e.message}", file=sys.stderr)
            return 1

    print(f"Created user '{user.email}' (id={user.id}) with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
