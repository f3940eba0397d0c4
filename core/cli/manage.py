"""
Domain Registry operator CLI.

Bootstraps the schema and the first administrator account. Accounts are
created with the same normalization, hashing and duplicate rules as the API.
"""

import argparse
import sys

from dotenv import load_dotenv
from sqlalchemy.exc import IntegrityError

from core.config import get_settings
from core.constants import ROLE_ADMIN
from core.db import db
from core.exceptions import AppError, ConflictError, ValidationError
from core.logging import LogContext, cli_logger, configure_logging
from core.normalization import normalize_email, normalize_name, validate_password
from core.repositories import UserRepository
from core.security import hash_password

load_dotenv()


def _init_database():
    """Initialize the database connection and create tables."""
    settings = get_settings()
    if not db.is_initialized:
        db.initialize(settings.database_url)
    db.create_all_tables()


def cmd_init_db(args):
    """Create all tables."""
    _init_database()
    cli_logger.info("schema_created")
    print("Database tables created.")


def cmd_create_admin(args):
    """Create an administrator account."""
    _init_database()

    name = normalize_name(args.name or "")
    email = normalize_email(args.email or "")
    if not name or not email:
        raise ValidationError("name, email and password are required")
    password = validate_password(args.password)

    with LogContext(command="create-admin"):
        try:
            with db.session() as session:
                repo = UserRepository(session)
                if repo.get_by_email(email) is not None:
                    raise ConflictError("email already registered")
                user = repo.create(
                    name=name,
                    email=email,
                    password_hash=hash_password(password),
                    role=ROLE_ADMIN,
                )
                user_id = str(user.id)
        except IntegrityError:
            raise ConflictError("email already registered") from None

        cli_logger.info("admin_created", user_id=user_id)

    print(f"Administrator created: {email} ({user_id})")


def main(argv=None):
    """Main entry point with CLI interface."""
    configure_logging(level="DEBUG" if get_settings().debug else "INFO")

    parser = argparse.ArgumentParser(description="Domain Registry - operator commands")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("init-db", help="Create database tables")

    create_admin_parser = subparsers.add_parser(
        "create-admin", help="Create an administrator account"
    )
    create_admin_parser.add_argument("--name", required=True, help="Display name")
    create_admin_parser.add_argument("--email", required=True, help="Login email")
    create_admin_parser.add_argument("--password", required=True, help="Initial password")

    args = parser.parse_args(argv)

    commands = {
        "init-db": cmd_init_db,
        "create-admin": cmd_create_admin,
    }

    if args.command not in commands:
        parser.print_help()
        return 1

    try:
        commands[args.command](args)
    except AppError as e:
        cli_logger.warning("command_failed", command=args.command, error=e.message)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
