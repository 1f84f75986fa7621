"""Translate Supabase client failures into application errors."""

from datetime import UTC, datetime

import httpx
from supabase import PostgrestAPIError

from photo_studio.errors import SchemaMissingError, StoreReadError, StoreWriteError

# Postgres undefined_table and PostgREST's schema-cache miss.
_MISSING_RELATION_CODES = {"42P01", "PGRST205"}


def is_missing_relation(exc: PostgrestAPIError) -> bool:
    """Return True when the error means the table does not exist."""
    if exc.code in _MISSING_RELATION_CODES:
        return True
    message = (exc.message or "").lower()
    return "relation" in message and "does not exist" in message


def read_error(
    exc: PostgrestAPIError | httpx.HTTPError, table: str
) -> SchemaMissingError | StoreReadError:
    """Build the error raised for a failed listing."""
    if isinstance(exc, PostgrestAPIError) and is_missing_relation(exc):
        return SchemaMissingError(
            f"Table {table} does not exist", details={"table": table}
        )
    return StoreReadError(f"Could not load {table}: {exc}", details={"table": table})


def write_error(exc: Exception, target: str) -> StoreWriteError:
    """Build the error raised for a rejected write."""
    return StoreWriteError(
        f"Could not write {target}: {exc}", details={"target": target}
    )


def parse_timestamp(value: object) -> datetime:
    """Parse a store timestamp, falling back to now for missing values."""
    if isinstance(value, str) and value:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return datetime.now(tz=UTC)
