"""
Format Rules: single source of truth for format names, stage labels and defaults.

All other modules import these constants. Do NOT duplicate them elsewhere.
"""

from typing import FrozenSet

# =============================================================================
# Formats
# =============================================================================

FORMAT_SINGLE_ELIMINATION = "single_elimination"
FORMAT_DOUBLE_ELIMINATION = "double_elimination"
FORMAT_ROUND_ROBIN = "round_robin"
FORMAT_GROUP_TO_KNOCKOUT = "group_to_knockout"
FORMAT_SWISS = "swiss"

SUPPORTED_FORMATS: FrozenSet[str] = frozenset(
    {
        FORMAT_SINGLE_ELIMINATION,
        FORMAT_DOUBLE_ELIMINATION,
        FORMAT_ROUND_ROBIN,
        FORMAT_GROUP_TO_KNOCKOUT,
        FORMAT_SWISS,
    }
)

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_SWISS_ROUNDS = 5
DEFAULT_GROUP_SIZE = 4
ADVANCERS_PER_GROUP = 2
MIN_PARTICIPANTS = 2

# =============================================================================
# Stage labels
# =============================================================================

STAGE_MAIN = "main"
STAGE_THIRD_PLACE = "third_place"
STAGE_WINNERS = "winners"
STAGE_LOSERS = "losers"
STAGE_GRAND_FINAL = "grand_final"
STAGE_GROUP = "group"
STAGE_KNOCKOUT = "knockout"
STAGE_SWISS = "swiss"

# =============================================================================
# Seeding methods
# =============================================================================

SEEDING_MANUAL = "manual"
SEEDING_RANDOM = "random"
SEEDING_SKILL = "skill"

# =============================================================================
# Statuses
# =============================================================================

MATCH_PENDING = "pending"

STATUS_REGISTRATION_OPEN = "registration_open"
STATUS_REGISTRATION_CLOSED = "registration_closed"
STATUS_IN_PROGRESS = "in_progress"


def rr_match_count(n: int) -> int:
    """Round robin match count: C(n, 2) = n*(n-1)/2."""
    return (n * (n - 1)) // 2


def group_label(group_index: int) -> str:
    """0 -> "A", 1 -> "B", ... 25 -> "Z", then "G27", "G28", ..."""
    if group_index < 26:
        return chr(ord("A") + group_index)
    return f"G{group_index + 1}"
