"""Pure presentation logic for statistics snapshots.

No HTTP, no Streamlit — only turns a snapshot mapping into sorted rows and
formats counts and timestamps for display.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
import math
from numbers import Integral, Real
from typing import Any, Callable, Iterable, Mapping
from zoneinfo import ZoneInfo

UNAVAILABLE = "N/A"
UNKNOWN_TIMESTAMP = "Unknown"


@dataclass(frozen=True)
class CategoryRow:
    name: str
    count: int | None

    @property
    def display_count(self) -> str:
        return format_count(self.count)


@dataclass(frozen=True)
class Category:
    key: str
    title: str
    name_label: str
    count_label: str
    accessor: Callable[[Mapping[str, Any]], Mapping[str, Any]]


# ---------------------------------------------------------------------------
# Count handling
# ---------------------------------------------------------------------------

def coerce_count(value: Any) -> int | None:
    """Return *value* as an int, or None when it is missing or non-numeric.

    Booleans are not counts. Floats are truncated; NaN and infinities are unavailable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, Real):
        if not math.isfinite(value):
            return None
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def format_count(count: int | None) -> str:
    if count is None:
        return UNAVAILABLE
    return str(count)


# ---------------------------------------------------------------------------
# Category accessors
# ---------------------------------------------------------------------------

def _section(stats: Mapping[str, Any], key: str, nested: bool = True) -> Mapping[str, Any]:
    section = stats.get(key) if isinstance(stats, Mapping) else None
    if not isinstance(section, Mapping):
        return {}
    if not nested:
        return section
    # The backend nests conda/bioconductor counts one level under their own key.
    inner = section.get(key)
    if isinstance(inner, Mapping):
        return inner
    return section


def _docker_counts(stats: Mapping[str, Any]) -> Mapping[str, Any]:
    counts = {}
    for repo, data in _section(stats, "docker", nested=False).items():
        counts[repo] = data.get("pull_count") if isinstance(data, Mapping) else data
    return counts


def _conda_counts(stats: Mapping[str, Any]) -> Mapping[str, Any]:
    return _section(stats, "conda")


def _bioconductor_counts(stats: Mapping[str, Any]) -> Mapping[str, Any]:
    return _section(stats, "bioconductor")


CATEGORIES: tuple[Category, ...] = (
    Category("docker", "DockerHub", "Repository", "Pull Count", _docker_counts),
    Category("conda", "Conda", "Package", "Downloads", _conda_counts),
    Category("bioconductor", "Bioconductor", "Package", "Downloads", _bioconductor_counts),
)


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------

def sort_by_count(counts: Mapping[str, Any]) -> list[CategoryRow]:
    """Rows sorted by count descending, then name ascending.

    Unavailable counts sort after every numeric count.
    """
    rows = [CategoryRow(str(name), coerce_count(value)) for name, value in counts.items()]
    return sorted(
        rows,
        key=lambda row: (row.count is None, -(row.count or 0), row.name),
    )


def category_rows(stats: Mapping[str, Any] | None) -> list[tuple[Category, list[CategoryRow]]]:
    """Return ``(category, sorted rows)`` for every category, in display order."""
    stats = stats or {}
    return [(category, sort_by_count(category.accessor(stats))) for category in CATEGORIES]


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------

def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 string (``Z`` suffix allowed). Naive values are UTC.

    Anything that is not a datetime or a parsable string gives None.
    """
    if isinstance(value, datetime):
        parsed = value
    elif not isinstance(value, str):
        return None
    else:
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: str | datetime | None, tz: tzinfo | str = "UTC") -> str:
    """Render e.g. ``Jan 15, 2024, 10:30:00 AM``; ``Unknown`` when absent."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return UNKNOWN_TIMESTAMP
    if isinstance(tz, str):
        tz = ZoneInfo(tz)
    local = parsed.astimezone(tz)
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{local:%b} {local.day}, {local.year}, "
        f"{hour:02d}:{local:%M}:{local:%S} {meridiem}"
    )


def total_count(rows: Iterable[CategoryRow]) -> int:
    return sum(row.count for row in rows if row.count is not None)
