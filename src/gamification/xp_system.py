"""
XP and Leveling System

Converts total XP into a level (1-100) and a rank letter.

Leveling Curve (tiers of 10 levels):
- Level 1-10: 100 XP per level
- Level 11-20: 200 XP per level
- ...
- Level 91-100: 1000 XP per level

Reaching level 100 takes 54,000 XP (levels 1-99). Completing level 100
as well would be 55,000, but level 100 is the cap.

Ranks:
- E: level 1-9
- D: level 10-24
- C: level 25-44
- B: level 45-64
- A: level 65-84
- S: level 85+
"""

import logging
import math
from typing import List

from src.models.progression import ProgressionState, Rank, XpTableRow

logger = logging.getLogger(__name__)

MAX_LEVEL = 100
LEVELS_PER_TIER = 10
XP_PER_TIER_STEP = 100

# (minimum level, rank), checked highest first
RANK_THRESHOLDS = [
    (85, Rank.S),
    (65, Rank.A),
    (45, Rank.B),
    (25, Rank.C),
    (10, Rank.D),
    (1, Rank.E),
]


def get_xp_for_level(level: int) -> int:
    """
    XP required to complete `level` and advance to the next one

    Levels below 1 cost the same as level 1; levels past the cap cost nothing.
    """
    if level < 1:
        return XP_PER_TIER_STEP
    if level > MAX_LEVEL:
        return 0

    tier = (level - 1) // LEVELS_PER_TIER + 1
    return tier * XP_PER_TIER_STEP


def get_total_xp_for_level(level: int) -> int:
    """Cumulative XP needed to reach the start of `level`"""
    level = max(1, min(level, MAX_LEVEL))
    return sum(get_xp_for_level(lvl) for lvl in range(1, level))


def get_rank_from_level(level: int) -> Rank:
    """Map a level to its rank letter"""
    for min_level, rank in RANK_THRESHOLDS:
        if level >= min_level:
            return rank
    return Rank.E


def calculate_level_from_xp(total_xp: float) -> ProgressionState:
    """
    Calculate level, in-level progress and rank from total XP

    Negative or non-finite totals are treated as 0. At MAX_LEVEL, progress
    is pinned: current_xp and next_level_xp are both 0 while total_xp keeps
    the full amount.

    Returns:
        ProgressionState(total_xp, level, current_xp, next_level_xp, rank)
    """
    if total_xp is None or not math.isfinite(total_xp) or total_xp < 0:
        total_xp = 0

    level = 1
    xp_used = 0

    while level < MAX_LEVEL:
        xp_needed = get_xp_for_level(level)
        if xp_used + xp_needed > total_xp:
            break
        xp_used += xp_needed
        level += 1

    if level >= MAX_LEVEL:
        current_xp = 0
        next_level_xp = 0
    else:
        current_xp = max(0, math.floor(total_xp - xp_used))
        next_level_xp = get_xp_for_level(level)

    return ProgressionState(
        total_xp=math.floor(total_xp),
        level=level,
        current_xp=current_xp,
        next_level_xp=next_level_xp,
        rank=get_rank_from_level(level),
    )


def generate_xp_table() -> List[XpTableRow]:
    """Full level table: per-level cost and cumulative XP to reach each level"""
    table = []
    running_total = 0

    for level in range(1, MAX_LEVEL + 1):
        xp = get_xp_for_level(level)
        table.append(XpTableRow(level=level, xp_per_level=xp, total_xp_required=running_total))
        running_total += xp

    return table
