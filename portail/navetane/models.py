"""Data models for the Navetane league."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, TypedDict

from portail.core.types import UNSET, FirestoreDocument, PublicView, TeamData

STAT_FIELDS = ("pts", "mj", "g", "n", "p", "bp", "bc", "diff")


class PouleTeamRecord(TypedDict, total=False):
    """A team's line in a poule table, with a snapshot of its registry entry."""

    id: str
    team: str
    logoUrl: str
    pts: int
    mj: int
    g: int
    n: int
    p: int
    bp: int
    bc: int
    diff: int


class StandingRow(PouleTeamRecord, total=False):
    """A ranked record. ``rank`` and ``qualified`` are display-only."""

    rank: int
    qualified: bool


class Poule(FirestoreDocument, total=False):
    """A round-robin group."""

    name: str
    teams: list[PouleTeamRecord]
    qualifiedCount: Optional[int]


class CoupeMatch(FirestoreDocument, total=False):
    """A cup fixture referencing its teams by name."""

    teamA: str
    teamB: str
    teamAData: TeamData
    teamBData: TeamData


class PreliminaryMatch(TypedDict, total=False):
    """The play-in fixture and the opponent awaiting its winner."""

    teamA: str
    teamB: str
    winnerPlaysAgainst: str
    teamAData: TeamData
    teamBData: TeamData
    winnerPlaysAgainstData: TeamData


class NavetaneDraft(TypedDict):
    """Everything the league publish reads from the admin collections."""

    poules: list[Poule]
    coupeMatches: list[CoupeMatch]
    preliminaryMatch: Optional[PreliminaryMatch]


class NavetanePublicView(PublicView, total=False):
    """The snapshot read by the public league page."""

    poules: list[Poule]
    coupeMatches: list[CoupeMatch]
    preliminaryMatch: Optional[PreliminaryMatch]


def make_team_record(team: dict[str, Any], stats: PouleStats | None = None) -> PouleTeamRecord:
    """Build a poule record from a registry team and optional stats."""
    record: PouleTeamRecord = {
        "id": team["id"],
        "team": team.get("name", ""),
        "logoUrl": team.get("logoUrl", ""),
        "pts": 0,
        "mj": 0,
        "g": 0,
        "n": 0,
        "p": 0,
        "bp": 0,
        "bc": 0,
        "diff": 0,
    }
    if stats is not None:
        record.update(stats.to_update())  # type: ignore[typeddict-item]
    return record


@dataclass
class PouleStats:
    """The editable statistics of a team inside a poule."""

    pts: Optional[int] = None
    mj: Optional[int] = None
    g: Optional[int] = None
    n: Optional[int] = None
    p: Optional[int] = None
    bp: Optional[int] = None
    bc: Optional[int] = None
    diff: Optional[int] = None

    def to_update(self) -> dict[str, int]:
        """Return the stat fields that are set.

        The goal balance is derived from goals for and against when those are
        given without an explicit balance.
        """
        fields = {name: getattr(self, name) for name in STAT_FIELDS}
        fields = {k: int(v) for k, v in fields.items() if v is not None}
        if "diff" not in fields and "bp" in fields and "bc" in fields:
            fields["diff"] = fields["bp"] - fields["bc"]
        return fields


@dataclass
class PoulePatch:
    """The mutable fields of a poule.

    ``qualified_count`` left as UNSET is not touched; None clears it so the
    poule falls back to the default qualification rule.
    """

    name: Optional[str] = None
    teams: Optional[list[PouleTeamRecord]] = None
    qualified_count: Any = UNSET

    def to_update(self) -> dict[str, Any]:
        """Return the Firestore field updates for the fields that are set."""
        fields: dict[str, Any] = {}
        if self.name is not None:
            fields["name"] = self.name.strip()
        if self.teams is not None:
            fields["teams"] = list(self.teams)
        if self.qualified_count is not UNSET:
            fields["qualifiedCount"] = (
                None if self.qualified_count is None else int(self.qualified_count)
            )
        return fields


@dataclass
class CoupeMatchPatch:
    """The mutable fields of a cup fixture."""

    team_a: Optional[str] = None
    team_b: Optional[str] = None

    def to_update(self) -> dict[str, Any]:
        """Return the Firestore field updates for the fields that are set."""
        fields: dict[str, Any] = {}
        if self.team_a is not None:
            fields["teamA"] = self.team_a.strip()
        if self.team_b is not None:
            fields["teamB"] = self.team_b.strip()
        return fields


@dataclass
class PreliminaryMatchPatch:
    """The mutable fields of the preliminary match."""

    team_a: Optional[str] = None
    team_b: Optional[str] = None
    winner_plays_against: Optional[str] = None

    def to_update(self) -> dict[str, Any]:
        """Return the Firestore field updates for the fields that are set."""
        fields: dict[str, Any] = {}
        if self.team_a is not None:
            fields["teamA"] = self.team_a.strip()
        if self.team_b is not None:
            fields["teamB"] = self.team_b.strip()
        if self.winner_plays_against is not None:
            fields["winnerPlaysAgainst"] = self.winner_plays_against.strip()
        return fields
