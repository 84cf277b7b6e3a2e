"""Common types and helpers shared across models."""

from datetime import UTC, datetime
from typing import TypeAlias

City: TypeAlias = str


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()
