"""Service layer for the Navetane statistics and their publication.

Rankings reference teams by id and fixtures reference them by name, the same
split as brackets and cup matches.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from portail.core.constants import (
    MATCH_LISTS,
    PLAYER_RANKINGS,
    STATS_ADMIN_DOC_ID,
    STATS_COLLECTION,
    STATS_PUBLIC_DOC_ID,
)
from portail.core.publishable import Publishable
from portail.errors import NotFoundError, ValidationError
from portail.navetane.models import NavetanePublicView
from portail.navetane.services import NAVETANE_VIEW, format_timestamp
from portail.teams.services import TeamDirectory, TeamService

from .models import (
    NavetaneStats,
    PlayerRank,
    StatsMatch,
    StatsPublicView,
    empty_stats,
    normalize_stats,
    renumber,
)

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference


def _check_ranking(ranking: str) -> None:
    if ranking not in PLAYER_RANKINGS:
        raise ValidationError(f"Unknown ranking: {ranking}.")


def _check_match_list(section: str) -> None:
    if section not in MATCH_LISTS:
        raise ValidationError(f"Unknown match list: {section}.")


class StatsService:
    """Reads and writes the admin (draft) statistics document."""

    @staticmethod
    def _admin_ref(db: Client) -> DocumentReference:
        return db.collection(STATS_COLLECTION).document(STATS_ADMIN_DOC_ID)

    @staticmethod
    def get_admin_stats(db: Client) -> NavetaneStats:
        """Fetch the draft statistics; a missing document reads as empty lists."""
        doc = cast("DocumentSnapshot", StatsService._admin_ref(db).get())
        if not doc.exists:
            return empty_stats()
        return normalize_stats(doc.to_dict())

    @staticmethod
    def save_stats(db: Client, stats: NavetaneStats) -> None:
        """Overwrite the whole draft, renumbering every ranking."""
        stats = normalize_stats(cast(dict, stats))
        for ranking in PLAYER_RANKINGS:
            stats[ranking] = renumber(stats[ranking])  # type: ignore[literal-required]
        StatsService._admin_ref(db).set(cast(dict, stats))

    @staticmethod
    def replace_ranking(db: Client, ranking: str, ranks: list[PlayerRank]) -> None:
        """Replace one ranking; ranks follow list order."""
        _check_ranking(ranking)
        stats = StatsService.get_admin_stats(db)
        stats[ranking] = renumber(ranks)  # type: ignore[literal-required]
        StatsService._admin_ref(db).set(cast(dict, stats))

    @staticmethod
    def add_player(db: Client, ranking: str, player: PlayerRank) -> PlayerRank:
        """Append a player at the bottom of a ranking."""
        _check_ranking(ranking)
        if not player.get("name"):
            raise ValidationError("A player needs a name.")
        if player.get("points", 0) < 0:
            raise ValidationError("Points cannot be negative.")
        ranks = StatsService.get_admin_stats(db)[ranking]  # type: ignore[literal-required]
        StatsService.replace_ranking(db, ranking, ranks + [player])
        return cast(PlayerRank, {**player, "rank": len(ranks) + 1})

    @staticmethod
    def remove_player(db: Client, ranking: str, rank: int) -> None:
        """Drop the player holding ``rank``; the players below move up."""
        _check_ranking(ranking)
        ranks = StatsService.get_admin_stats(db)[ranking]  # type: ignore[literal-required]
        if not 1 <= rank <= len(ranks):
            raise NotFoundError("Player not found in this ranking.")
        StatsService.replace_ranking(db, ranking, ranks[: rank - 1] + ranks[rank:])

    @staticmethod
    def add_match(db: Client, section: str, match: StatsMatch) -> None:
        """Append a fixture to the last results or the upcoming matches."""
        _check_match_list(section)
        if not match.get("teamA") or not match.get("teamB"):
            raise ValidationError("Both teams are required.")
        for key in ("scoreA", "scoreB"):
            if match.get(key, 0) < 0:  # type: ignore[operator]
                raise ValidationError("Scores cannot be negative.")
        stats = StatsService.get_admin_stats(db)
        stats[section] = stats[section] + [dict(match)]  # type: ignore[literal-required]
        StatsService._admin_ref(db).set(cast(dict, stats))

    @staticmethod
    def remove_match(db: Client, section: str, index: int) -> None:
        """Drop the fixture at ``index`` (0-based) from a list."""
        _check_match_list(section)
        stats = StatsService.get_admin_stats(db)
        matches = stats[section]  # type: ignore[literal-required]
        if not 0 <= index < len(matches):
            raise NotFoundError("Match not found.")
        stats[section] = matches[:index] + matches[index + 1 :]  # type: ignore[literal-required]
        StatsService._admin_ref(db).set(cast(dict, stats))


# --- Publication ---


def enrich_player_rank(directory: TeamDirectory, player: PlayerRank) -> dict[str, Any]:
    """Attach the team's display data, resolving it by id.

    Unset or unknown ids publish None for the name and logo.
    """
    team = directory.resolve_id(player.get("teamId"))
    enriched: dict[str, Any] = dict(player)
    enriched["teamName"] = team.get("name") if team else None
    enriched["teamLogoUrl"] = team.get("logoUrl") if team else None
    return enriched


def enrich_stats_match(directory: TeamDirectory, match: StatsMatch) -> dict[str, Any]:
    """Attach both team logos, resolving the teams by name."""
    enriched: dict[str, Any] = dict(match)
    enriched["teamALogoUrl"] = directory.resolve_name(match.get("teamA"))["logoUrl"]
    enriched["teamBLogoUrl"] = directory.resolve_name(match.get("teamB"))["logoUrl"]
    return enriched


def enrich_stats(db: Client, stats: NavetaneStats) -> dict[str, Any]:
    """Turn the draft statistics into the public snapshot."""
    directory = TeamService.get_directory(db)
    snapshot: dict[str, Any] = {}
    for ranking in PLAYER_RANKINGS:
        snapshot[ranking] = [
            enrich_player_rank(directory, p) for p in stats[ranking]  # type: ignore[literal-required]
        ]
    for section in MATCH_LISTS:
        snapshot[section] = [
            enrich_stats_match(directory, m) for m in stats[section]  # type: ignore[literal-required]
        ]
    return snapshot


STATS_VIEW: Publishable[NavetaneStats] = Publishable(
    name="stats",
    public_collection=STATS_COLLECTION,
    public_doc_id=STATS_PUBLIC_DOC_ID,
    load_draft=StatsService.get_admin_stats,
    enrich=enrich_stats,
    default_view=lambda: cast(dict, empty_stats()),
)


def publish_stats(db: Client) -> dict[str, Any]:
    """Publish the statistics to ``navetane_stats/public_view``."""
    return STATS_VIEW.publish(db)


def get_stats_page_data(db: Client) -> dict[str, Any]:
    """Assemble the public statistics page from the published snapshots only.

    The preliminary match comes from the published league view.
    """
    stats = cast(StatsPublicView, STATS_VIEW.public(db))
    navetane = cast(NavetanePublicView, NAVETANE_VIEW.public(db))
    data: dict[str, Any] = {key: stats[key] for key in PLAYER_RANKINGS + MATCH_LISTS}  # type: ignore[literal-required]
    data["preliminaryMatch"] = navetane["preliminaryMatch"]
    data["lastPublished"] = format_timestamp(stats.get("lastPublished"))
    return data
