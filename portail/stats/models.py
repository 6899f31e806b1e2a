"""Data models for the Navetane statistics page."""

from __future__ import annotations

from typing import Any, Optional, TypedDict

from portail.core.constants import MATCH_LISTS, PLAYER_RANKINGS
from portail.core.types import PublicView
from portail.navetane.models import PreliminaryMatch

MATCH_TEXT_FIELDS = ("date", "poule", "stadium", "time1", "time2")


class PlayerRank(TypedDict, total=False):
    """One line of a player ranking. The team is referenced by id."""

    rank: int
    name: str
    teamId: str
    points: int

    # Filled in by the publish
    teamName: Optional[str]
    teamLogoUrl: Optional[str]


class StatsMatch(TypedDict, total=False):
    """A played or upcoming fixture, with teams referenced by name."""

    teamA: str
    teamB: str
    scoreA: int
    scoreB: int
    date: str
    poule: str
    stadium: str
    time1: str
    time2: str

    # Filled in by the publish
    teamALogoUrl: str
    teamBLogoUrl: str


class NavetaneStats(TypedDict):
    """Player rankings and fixture lists edited from the admin."""

    ballonDor: list[PlayerRank]
    goldenBoy: list[PlayerRank]
    topScorersChampionnat: list[PlayerRank]
    topScorersCoupe: list[PlayerRank]
    lastResults: list[StatsMatch]
    upcomingMatches: list[StatsMatch]


class StatsPublicView(PublicView, total=False):
    """The snapshot read by the public statistics page."""

    ballonDor: list[PlayerRank]
    goldenBoy: list[PlayerRank]
    topScorersChampionnat: list[PlayerRank]
    topScorersCoupe: list[PlayerRank]
    lastResults: list[StatsMatch]
    upcomingMatches: list[StatsMatch]
    preliminaryMatch: Optional[PreliminaryMatch]


def empty_stats() -> NavetaneStats:
    """Return statistics with every list empty."""
    return {key: [] for key in PLAYER_RANKINGS + MATCH_LISTS}  # type: ignore[return-value]


def normalize_stats(data: Optional[dict[str, Any]]) -> NavetaneStats:
    """Coerce a stored document into complete statistics; bad lists read as empty."""
    data = data or {}
    stats = empty_stats()
    for key in PLAYER_RANKINGS + MATCH_LISTS:
        entries = data.get(key)
        if isinstance(entries, list):
            stats[key] = [dict(e) for e in entries if isinstance(e, dict)]  # type: ignore[literal-required]
    return stats


def renumber(ranks: list[PlayerRank]) -> list[PlayerRank]:
    """Return the ranking with ``rank`` set from list order, starting at 1."""
    return [{**r, "rank": i} for i, r in enumerate(ranks, start=1)]  # type: ignore[typeddict-item]


def make_player_rank(name: str, team_id: str = "", points: int = 0) -> PlayerRank:
    """Build a ranking line; its rank is set when it joins a list."""
    return {"rank": 0, "name": name.strip(), "teamId": team_id or "", "points": int(points or 0)}


def make_stats_match(
    team_a: str,
    team_b: str,
    score_a: Optional[int] = None,
    score_b: Optional[int] = None,
    **details: Optional[str],
) -> StatsMatch:
    """Build a fixture from its teams, optional scores and free-text details."""
    match: dict[str, Any] = {"teamA": team_a.strip(), "teamB": team_b.strip()}
    if score_a is not None:
        match["scoreA"] = int(score_a)
    if score_b is not None:
        match["scoreB"] = int(score_b)
    for key in MATCH_TEXT_FIELDS:
        value = (details.get(key) or "").strip()
        if value:
            match[key] = value
    return match  # type: ignore[return-value]
