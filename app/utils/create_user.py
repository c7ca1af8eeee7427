"""
Create a staff user.

    python -m app.utils.create_user --email jane@example.com --first-name Jane --last-name Doe --role admin
"""
import argparse
import asyncio
import sys

from app.core.repositories.user_repository import UserRepository
from app.infrastructure.database.adapters.pg_connection import DatabaseConnection
from app.infrastructure.database.models.user import User
from app.infrastructure.logging.logger import configure_logging, get_logger
from app.utils.enums import UserRoleEnum


logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a staff user")
    parser.add_argument("--email", required=True)
    parser.add_argument("--first-name", required=True)
    parser.add_argument("--last-name", required=True)
    parser.add_argument(
        "--role",
        choices=[role.value for role in UserRoleEnum],
        default=UserRoleEnum.EDITOR.value,
    )
    parser.add_argument("--db-url", default=None, help="Overrides DB_URL / DB_* settings")
    parser.add_argument("--create-tables", action="store_true", help="Create missing tables first")
    return parser.parse_args(argv)


async def create_user(args: argparse.Namespace) -> User | None:
    connection = DatabaseConnection(url=args.db_url)
    try:
        if args.create_tables:
            await connection.create_tables()

        session = await connection.get_session()
        try:
            repository = UserRepository(session=session)
            email = args.email.strip().lower()
            if await repository.get_by_filter(email=email, one_or_none=True):
                logger.warning("user_already_exists", email=email)
                return None

            user = await repository.add_item(User(
                email=email,
                first_name=args.first_name,
                last_name=args.last_name,
                role=UserRoleEnum(args.role),
            ))
            logger.info("user_created", user_id=str(user.id), email=user.email, role=user.role.value)
            return user
        finally:
            await session.close()
    finally:
        await connection.dispose()


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    user = asyncio.run(create_user(parse_args(argv)))
    return 0 if user else 1


if __name__ == "__main__":
    sys.exit(main())
