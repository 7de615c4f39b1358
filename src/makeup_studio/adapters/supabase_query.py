"""Shared helpers for Supabase table queries."""

from datetime import datetime

import httpx
from postgrest.exceptions import APIError

from makeup_studio.errors import RepositoryError

# 22P02: an id that is not a valid uuid cannot match any row.
_NOT_FOUND_CODES = {"PGRST116", "22P02"}
_UNIQUE_VIOLATION_CODE = "23505"


def run_query(query, description: str) -> list[dict[str, object]]:  # type: ignore[no-untyped-def]
    """Execute a PostgREST query and return its rows.

    Backend failures are raised as ``RepositoryError`` carrying the cause.
    """
    try:
        response = query.execute()
    except APIError as exc:
        code = str(exc.code or "")
        raise RepositoryError(
            f"{description}: {exc.message or exc}",
            exc,
            not_found=code in _NOT_FOUND_CODES,
            unique_violation=code == _UNIQUE_VIOLATION_CODE,
        ) from exc
    except httpx.HTTPError as exc:
        raise RepositoryError(f"{description}: backend unavailable", exc) from exc
    return response.data or []


def fetch_optional(query, description: str) -> dict[str, object] | None:  # type: ignore[no-untyped-def]
    """Return the single row a lookup matches, or None when nothing can match."""
    try:
        rows = run_query(query, description)
    except RepositoryError as exc:
        if exc.not_found:
            return None
        raise
    return rows[0] if rows else None


def first_row(
    rows: list[dict[str, object]], description: str
) -> dict[str, object]:
    """Return the first row or raise a not-found ``RepositoryError``."""
    if not rows:
        raise RepositoryError(f"{description}: no matching row", not_found=True)
    return rows[0]


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO timestamp column, tolerating empty values."""
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def optional_text(raw: object) -> str | None:
    """Return a stripped string or None for empty columns."""
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None
