"""Standings computation for poule tables."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from portail.core.constants import (
    DEFAULT_QUALIFIED_COUNT,
    LEGACY_QUALIFIED_COUNT,
    LEGACY_THREE_QUALIFIER_POULES,
    PREVIEW_STANDINGS_LIMIT,
)

from .models import Poule, PouleTeamRecord, StandingRow


def qualified_count_for(poule: Poule, default: Optional[int] = None) -> int:
    """Return how many teams of a poule qualify.

    An explicit ``qualifiedCount`` on the poule wins. Poules without one keep
    the historical rule: three qualifiers for "Poule A" and "Poule B", the
    configured default for every other poule.
    """
    explicit = poule.get("qualifiedCount")
    if explicit is not None:
        return max(int(explicit), 0)
    if poule.get("name") in LEGACY_THREE_QUALIFIER_POULES:
        return LEGACY_QUALIFIED_COUNT
    return DEFAULT_QUALIFIED_COUNT if default is None else default


def compute_standings(
    records: Iterable[PouleTeamRecord], qualified_count: int
) -> list[StandingRow]:
    """Rank poule records by points, highest first.

    The sort is stable, so teams level on points keep their stored order.
    Returns new rows; the input records are not modified.
    """
    ranked = sorted(records, key=lambda r: -(r.get("pts") or 0))
    rows: list[StandingRow] = []
    for index, record in enumerate(ranked, start=1):
        row: dict[str, Any] = dict(record)
        row["rank"] = index
        row["qualified"] = index <= qualified_count
        rows.append(row)  # type: ignore[arg-type]
    return rows


def poule_standings(poule: Poule, default_qualified: Optional[int] = None) -> dict[str, Any]:
    """Return a poule with its ranked table for display."""
    qualified = qualified_count_for(poule, default_qualified)
    return {
        "id": poule.get("id"),
        "name": poule.get("name", ""),
        "qualifiedCount": qualified,
        "standings": compute_standings(poule.get("teams") or [], qualified),
    }


def preview_standings(
    poule: Poule,
    limit: int = PREVIEW_STANDINGS_LIMIT,
    default_qualified: Optional[int] = None,
) -> list[StandingRow]:
    """Return the top of a poule table for the home page card."""
    qualified = qualified_count_for(poule, default_qualified)
    return compute_standings(poule.get("teams") or [], qualified)[:limit]
