"""Global constants for the portail application."""

# Accounts
USERS_COLLECTION = "users"

# Registry
TEAMS_COLLECTION = "teams"
TEAMS_PUBLIC_COLLECTION = "teams_public_view"

# Navetane draft state
POULES_COLLECTION = "navetane_poules"
COUPE_MATCHES_COLLECTION = "navetane_coupe_matches"
PRELIMINARY_MATCH_COLLECTION = "navetane_preliminary_match"
PRELIMINARY_MATCH_DOC_ID = "main_prelim"

# Navetane public view
NAVETANE_PUBLIC_COLLECTION = "navetane_public_views"

# Finals brackets
FINALS_ADMIN_COLLECTION = "finals_admin_data"
FINALS_ADMIN_DOC_ID = "current"
FINALS_PUBLIC_COLLECTION = "finals_public_view"

# Navetane statistics: the draft and the public view share a collection
STATS_COLLECTION = "navetane_stats"
STATS_ADMIN_DOC_ID = "admin_data"
STATS_PUBLIC_DOC_ID = "public_view"
PLAYER_RANKINGS = ("ballonDor", "goldenBoy", "topScorersChampionnat", "topScorersCoupe")
MATCH_LISTS = ("lastResults", "upcomingMatches")

# Sponsors
SPONSORS_COLLECTION = "sponsors"
SPONSORS_PUBLIC_COLLECTION = "sponsors_public_view"

# Articles and polls
ARTICLES_COLLECTION = "articles"
POLLS_COLLECTION = "polls"

# Every published snapshot lives in a single document with this id
PUBLIC_VIEW_DOC_ID = "live"

# Standings
DEFAULT_QUALIFIED_COUNT = 2
LEGACY_QUALIFIED_COUNT = 3
LEGACY_THREE_QUALIFIER_POULES = ("Poule A", "Poule B")
PREVIEW_STANDINGS_LIMIT = 4

# Brackets
COMPETITIONS = ("championnat", "coupe")
BRACKET_STAGES = ("quarters", "semis", "final")
MATCH_STATUS_PENDING = "pending"
MATCH_STATUS_PLAYED = "played"
MATCH_STATUSES = (MATCH_STATUS_PENDING, MATCH_STATUS_PLAYED)
BRACKET_MATCH_ID_LENGTH = 8
