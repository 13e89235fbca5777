"""
Progression system for the Monarch life dashboard

This module turns the user's content (skills, projects, certifications,
experiences, achievements, courses, habits) into:
- Total XP and a per-source breakdown
- A level on a 100-level tiered curve
- A rank letter (E through S)
"""

from src.gamification.xp_system import (
    MAX_LEVEL,
    calculate_level_from_xp,
    generate_xp_table,
    get_rank_from_level,
    get_total_xp_for_level,
    get_xp_for_level,
)
from src.gamification.aggregator import XP_SOURCES, calculate_total_xp
from src.gamification.skill_icons import SKILL_CATEGORIES, SKILL_ICONS, get_skill_icon

__all__ = [
    "MAX_LEVEL",
    "calculate_level_from_xp",
    "generate_xp_table",
    "get_rank_from_level",
    "get_total_xp_for_level",
    "get_xp_for_level",
    "XP_SOURCES",
    "calculate_total_xp",
    "SKILL_CATEGORIES",
    "SKILL_ICONS",
    "get_skill_icon",
]
