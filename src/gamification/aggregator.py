"""
XP Aggregator

Reads every XP source collection and reduces it to a weighted contribution.

XP Award Rules:
- Skill: skill level (0-100) x 5, so an 80% skill is worth 400 XP
- Project: 50 XP, 75 XP when featured
- Certification: 100 XP each
- Experience: 75 XP each
- Achievement: 100 XP each (published and not archived only)
- Course: floor(progress x 0.5)
- Habit: 2 XP per streak day

Each source is read independently. A source whose read fails (including
a table that does not exist yet) contributes 0 and the rest still count.
"""

import asyncio
import logging
import math
from typing import Any, Awaitable, Callable, Dict, List, Tuple

from src.models.progression import (
    CourseRecord,
    HabitRecord,
    ProjectRecord,
    SkillRecord,
    XpBreakdown,
)

logger = logging.getLogger(__name__)

XP_PER_SKILL_PERCENT = 5
XP_PER_PROJECT = 50
XP_PER_FEATURED_PROJECT = 75
XP_PER_CERTIFICATION = 100
XP_PER_EXPERIENCE = 75
XP_PER_ACHIEVEMENT = 100
XP_PER_COURSE_PROGRESS = 0.5
XP_PER_HABIT_STREAK = 2


def _as_row(row: Any) -> Dict[str, Any]:
    return row if isinstance(row, dict) else {}


def _safe_xp(value: float) -> int:
    """Floor a contribution to an int, NaN/inf/negative become 0"""
    if value is None or not math.isfinite(value) or value < 0:
        return 0
    return math.floor(value)


def skills_xp(rows: List[Dict[str, Any]]) -> int:
    return _safe_xp(sum(SkillRecord.model_validate(_as_row(row)).level * XP_PER_SKILL_PERCENT for row in rows))


def projects_xp(rows: List[Dict[str, Any]]) -> int:
    return _safe_xp(sum(
        XP_PER_FEATURED_PROJECT if ProjectRecord.model_validate(_as_row(row)).is_featured else XP_PER_PROJECT
        for row in rows
    ))


def certifications_xp(rows: List[Dict[str, Any]]) -> int:
    return len(rows) * XP_PER_CERTIFICATION


def experiences_xp(rows: List[Dict[str, Any]]) -> int:
    return len(rows) * XP_PER_EXPERIENCE


def achievements_xp(rows: List[Dict[str, Any]]) -> int:
    return len(rows) * XP_PER_ACHIEVEMENT


def courses_xp(rows: List[Dict[str, Any]]) -> int:
    return _safe_xp(sum(
        math.floor(CourseRecord.model_validate(_as_row(row)).progress * XP_PER_COURSE_PROGRESS)
        for row in rows
    ))


def habits_xp(rows: List[Dict[str, Any]]) -> int:
    return _safe_xp(sum(HabitRecord.model_validate(_as_row(row)).streak * XP_PER_HABIT_STREAK for row in rows))


# source name -> (collection read kwargs, reducer)
XP_SOURCES: Dict[str, Tuple[Dict[str, Any], Callable[[List[Dict[str, Any]]], int]]] = {
    "skills": ({"columns": ["level"]}, skills_xp),
    "projects": ({"columns": ["is_featured"]}, projects_xp),
    "certifications": ({"columns": ["id"]}, certifications_xp),
    "experiences": ({"columns": ["id"]}, experiences_xp),
    "achievements": (
        {"columns": ["id"], "filters": {"archived_at": None, "is_published": True}},
        achievements_xp,
    ),
    "courses": ({"columns": ["progress"]}, courses_xp),
    "habits": ({"columns": ["streak"]}, habits_xp),
}


async def _fetch_source(store, name: str, query_kwargs: Dict[str, Any]) -> List[Dict[str, Any]]:
    rows = await store.query_collection(name, **query_kwargs)
    return rows or []


async def calculate_total_xp(store) -> Tuple[int, XpBreakdown]:
    """
    Calculate total XP from all sources

    Args:
        store: Record store (RecordStore or InMemoryStore)

    Returns:
        (total_xp, breakdown) where total_xp == breakdown.total
    """
    names = list(XP_SOURCES)
    reads: List[Awaitable[List[Dict[str, Any]]]] = [
        _fetch_source(store, name, XP_SOURCES[name][0]) for name in names
    ]
    results = await asyncio.gather(*reads, return_exceptions=True)

    contributions: Dict[str, int] = {}
    for name, result in zip(names, results):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.warning(f"XP source {name} unavailable, counting 0: {result}")
            contributions[name] = 0
            continue

        reducer = XP_SOURCES[name][1]
        try:
            contributions[name] = reducer(result)
        except Exception as e:
            logger.warning(f"XP source {name} could not be reduced, counting 0: {e}")
            contributions[name] = 0

    breakdown = XpBreakdown(**contributions)
    total_xp = max(0, breakdown.total)

    logger.debug(f"Calculated total XP {total_xp}: {breakdown.model_dump()}")
    return total_xp, breakdown
