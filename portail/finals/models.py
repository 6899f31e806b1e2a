"""Data models for the knockout brackets."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Optional, TypedDict

from portail.core.constants import BRACKET_STAGES, COMPETITIONS
from portail.core.types import UNSET


class BracketMatch(TypedDict, total=False):
    """One knockout fixture. Teams may be unassigned ("to be determined")."""

    id: str
    teamAId: Optional[str]
    teamBId: Optional[str]
    scoreA: Optional[int]
    scoreB: Optional[int]
    date: Optional[str]
    status: str

    # Filled in by the publish
    teamAName: Optional[str]
    teamALogoUrl: Optional[str]
    teamBName: Optional[str]
    teamBLogoUrl: Optional[str]


class FinalsBracket(TypedDict):
    """The three knockout stages of one competition."""

    quarters: list[BracketMatch]
    semis: list[BracketMatch]
    final: list[BracketMatch]


class CompetitionFinals(TypedDict):
    """Brackets of the league and of the cup."""

    championnat: FinalsBracket
    coupe: FinalsBracket


def empty_bracket() -> FinalsBracket:
    """Return a bracket with no matches."""
    return {"quarters": [], "semis": [], "final": []}


def empty_finals() -> CompetitionFinals:
    """Return brackets with no matches for both competitions."""
    return {competition: empty_bracket() for competition in COMPETITIONS}  # type: ignore[return-value]


def normalize_finals(data: Optional[dict[str, Any]]) -> CompetitionFinals:
    """Coerce a stored document into a complete CompetitionFinals.

    Missing competitions or stages, and stages that are not lists, become
    empty lists.
    """
    data = data or {}
    finals = empty_finals()
    for competition in COMPETITIONS:
        bracket = data.get(competition) or {}
        if not isinstance(bracket, dict):
            continue
        for stage in BRACKET_STAGES:
            matches = bracket.get(stage)
            if isinstance(matches, list):
                finals[competition][stage] = [dict(m) for m in matches if isinstance(m, dict)]  # type: ignore[literal-required]
    return finals


@dataclass
class BracketMatchPatch:
    """The editable fields of a bracket match.

    Fields left as UNSET are not touched; None clears a field.
    """

    teamAId: Any = UNSET
    teamBId: Any = UNSET
    scoreA: Any = UNSET
    scoreB: Any = UNSET
    date: Any = UNSET
    status: Any = UNSET

    def to_update(self) -> dict[str, Any]:
        """Return the fields that are set."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }
