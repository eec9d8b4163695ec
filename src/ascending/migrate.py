"""One-time copy of the legacy SQLite database into the relational server.

Users are inserted with their original ids and skipped when the email already
exists; existing rows are never overwritten. A user whose id belongs to a
different account in the target gets a new id. Profiles are upserted by
``user_id`` with every field overwritten by the legacy value, and are only
copied onto the account (same email) they belonged to in the legacy store.

Usage:
    ascending-migrate --legacy-db backend/database/clients.db
    ascending-migrate --legacy-db clients.db --db-url postgresql+asyncpg://...
"""

import argparse
import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic.alias_generators import to_camel
from sqlalchemy import select, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncSession, create_async_engine

import ascending.models  # noqa: F401  register all models with Base.metadata
from ascending.config import get_settings
from ascending.database import Base
from ascending.models.profile import PROFILE_FIELDS, Profile
from ascending.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_LEGACY_DB = "./backend/database/clients.db"


@dataclass
class MigrationResult:
    """Counts of rows copied and skipped per table."""

    users_migrated: int = 0
    users_skipped: int = 0
    profiles_migrated: int = 0
    profiles_skipped: int = 0


def _insert_for(session: AsyncSession, entity: type[Base]) -> Any:
    """Return a dialect-specific INSERT supporting ON CONFLICT."""
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(entity)
    if dialect == "sqlite":
        return sqlite.insert(entity)
    raise RuntimeError(f"Unsupported target database dialect: {dialect}")


def _parse_timestamp(value: Any) -> datetime:
    """Legacy timestamps are ISO strings or NULL. Stored as naive UTC."""
    if value is None or value == "":
        return datetime.utcnow()
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            logger.warning("Unparseable legacy timestamp %r, using now", value)
            return datetime.utcnow()
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _lower_keys(row: Mapping[str, Any]) -> dict[str, Any]:
    # SQLite column names are case-insensitive; the legacy schema uses camelCase
    return {key.lower(): value for key, value in row.items()}


def legacy_profile_values(row: Mapping[str, Any]) -> dict[str, Any]:
    """Map a legacy ``profiles`` row (camelCase columns) onto profile attributes."""
    columns = _lower_keys(row)
    values = {"user_id": columns["user_id"]}
    for field in PROFILE_FIELDS:
        values[field] = columns.get(to_camel(field).lower())
    return values


def _user_insert(session: AsyncSession, row: Mapping[str, Any], keep_id: bool = True) -> Any:
    values = {
        "name": row["name"],
        "email": row["email"],
        "password_hash": row["password"],
        "role": row.get("role") or "client",
        "phone": row.get("phone"),
        "created_at": _parse_timestamp(row.get("created_at")),
        "updated_at": _parse_timestamp(row.get("updated_at")),
    }
    if keep_id:
        values["id"] = row["id"]
    return _insert_for(session, User).values(**values).on_conflict_do_nothing()


async def migrate_users(
    legacy: AsyncConnection, session: AsyncSession
) -> tuple[int, int, dict[int, int]]:
    """Copy legacy users, never touching existing target rows.

    A user whose email is already registered is skipped. A user whose id is
    taken by a different account is inserted under a fresh id, after every
    user that keeps its original id.

    Returns:
        (migrated, skipped, {legacy id: target id} for every migrated user)
    """
    logger.info("Starting users migration...")
    rows = (await legacy.execute(text("SELECT * FROM users"))).mappings().all()
    logger.info("Found %d users to migrate", len(rows))

    existing_ids = set((await session.scalars(select(User.id))).all())
    existing_emails = set((await session.scalars(select(User.email))).all())

    migrated = skipped = 0
    id_map: dict[int, int] = {}
    renumbered = []
    for raw in rows:
        row = _lower_keys(raw)
        if row["email"] in existing_emails:
            logger.info("Skipping user %s: email already registered", row["id"])
            skipped += 1
            continue
        existing_emails.add(row["email"])
        if row["id"] in existing_ids:
            renumbered.append(row)
            continue

        await session.execute(_user_insert(session, row))
        existing_ids.add(row["id"])
        id_map[row["id"]] = row["id"]
        migrated += 1

    if renumbered:
        await _reset_user_sequence(session)
    for row in renumbered:
        await session.execute(_user_insert(session, row, keep_id=False))
        new_id = await session.scalar(select(User.id).where(User.email == row["email"]))
        if new_id is None:
            logger.warning("Skipping user %s: insert under a new id failed", row["id"])
            skipped += 1
            continue
        logger.warning(
            "User %s: id already taken in target, migrated as user %s", row["id"], new_id
        )
        id_map[row["id"]] = new_id
        migrated += 1

    await session.commit()
    logger.info("Users migration completed: %d migrated, %d skipped", migrated, skipped)
    return migrated, skipped, id_map


async def migrate_profiles(
    legacy: AsyncConnection,
    session: AsyncSession,
    id_map: Mapping[int, int] | None = None,
) -> tuple[int, int]:
    """Upsert legacy profiles, overwriting every field on ``user_id`` conflict.

    ``id_map`` translates legacy user ids for users renumbered by
    ``migrate_users``; other profiles keep their legacy ``user_id``.

    Returns:
        (migrated, skipped)
    """
    logger.info("Starting profiles migration...")
    id_map = id_map or {}
    legacy_users = (await legacy.execute(text("SELECT id, email FROM users"))).all()
    legacy_emails = {user_id: email for user_id, email in legacy_users}
    target_emails = dict((await session.execute(select(User.id, User.email))).all())
    columns = Profile.__mapper__.columns

    rows = (await legacy.execute(text("SELECT * FROM profiles"))).mappings().all()
    logger.info("Found %d profiles to migrate", len(rows))

    migrated = skipped = 0
    for raw in rows:
        values = legacy_profile_values(raw)
        legacy_id = values["user_id"]
        user_id = values["user_id"] = id_map.get(legacy_id, legacy_id)
        target_email = target_emails.get(user_id)
        if target_email is None or target_email != legacy_emails.get(legacy_id):
            logger.warning("Skipping profile for user %s: no matching target user", legacy_id)
            skipped += 1
            continue

        stmt = _insert_for(session, Profile).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id"],
            set_={columns[field]: stmt.excluded[columns[field].key] for field in PROFILE_FIELDS},
        )
        await session.execute(stmt)
        migrated += 1

    await session.commit()
    logger.info("Profiles migration completed: %d migrated, %d skipped", migrated, skipped)
    return migrated, skipped


async def _reset_user_sequence(session: AsyncSession) -> None:
    # Explicit ids leave the SERIAL sequence behind; move it past the max id
    if session.get_bind().dialect.name != "postgresql":
        return
    await session.execute(
        text(
            "SELECT setval(pg_get_serial_sequence('users', 'id'), "
            "COALESCE((SELECT MAX(id) FROM users), 1))"
        )
    )


async def run_migration(legacy_url: str, target_url: str) -> MigrationResult:
    """Create target tables if needed, then copy users and profiles."""
    logger.info("Starting SQLite to %s migration...", target_url.split(":", 1)[0])
    legacy_engine = create_async_engine(legacy_url)
    target_engine = create_async_engine(target_url)
    result = MigrationResult()

    try:
        async with target_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async with legacy_engine.connect() as legacy, AsyncSession(
            target_engine, expire_on_commit=False
        ) as session:
            result.users_migrated, result.users_skipped, id_map = await migrate_users(
                legacy, session
            )
            result.profiles_migrated, result.profiles_skipped = await migrate_profiles(
                legacy, session, id_map
            )
            await _reset_user_sequence(session)
            await session.commit()
    finally:
        await legacy_engine.dispose()
        await target_engine.dispose()

    logger.info("Migration completed successfully: %s", result)
    return result


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Copy users and profiles from the legacy SQLite database.",
    )
    parser.add_argument(
        "--legacy-db",
        default=DEFAULT_LEGACY_DB,
        help=f"Path to the legacy SQLite file (default: {DEFAULT_LEGACY_DB}).",
    )
    parser.add_argument(
        "--db-url",
        default=None,
        help="Target database URL (default: ASCENDING_DB_URL).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s:%(message)s",
    )

    if not Path(args.legacy_db).is_file():
        # aiosqlite would create an empty database file at this path
        logger.error("Legacy database not found: %s", args.legacy_db)
        return 1

    if args.db_url is None:
        args.db_url = get_settings().db_url

    try:
        asyncio.run(run_migration(f"sqlite+aiosqlite:///{args.legacy_db}", args.db_url))
    except Exception:
        logger.exception("Migration failed")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
