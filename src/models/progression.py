"""Progression models: XP sources, breakdown and computed level state"""
import math
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


def coerce_number(value: Any) -> float:
    """Coerce a raw column value to a finite number, 0 when missing or malformed"""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return number


class Rank(str, Enum):
    """Rank letters, lowest to highest"""
    E = "E"
    D = "D"
    C = "C"
    B = "B"
    A = "A"
    S = "S"


# ============================================================================
# Contributing records (one model per source collection)
# ============================================================================

class SkillRecord(BaseModel):
    """Skill row; level is a 0-100 proficiency percentage"""
    level: float = 0

    @field_validator('level', mode='before')
    @classmethod
    def coerce_level(cls, v: Any) -> float:
        return coerce_number(v)


class ProjectRecord(BaseModel):
    """Project row"""
    is_featured: bool = False

    @field_validator('is_featured', mode='before')
    @classmethod
    def coerce_featured(cls, v: Any) -> bool:
        # Truthiness, so null and 0 read as not featured
        return bool(v)


class CourseRecord(BaseModel):
    """Course row; progress is a 0-100 completion percentage"""
    progress: float = 0

    @field_validator('progress', mode='before')
    @classmethod
    def coerce_progress(cls, v: Any) -> float:
        return coerce_number(v)


class HabitRecord(BaseModel):
    """Habit row; streak is consecutive days"""
    streak: float = 0

    @field_validator('streak', mode='before')
    @classmethod
    def coerce_streak(cls, v: Any) -> float:
        return coerce_number(v)


# ============================================================================
# Computed values
# ============================================================================

class XpBreakdown(BaseModel):
    """Per-source XP contributions"""
    skills: int = 0
    projects: int = 0
    certifications: int = 0
    experiences: int = 0
    achievements: int = 0
    courses: int = 0
    habits: int = 0

    @property
    def total(self) -> int:
        return sum(self.model_dump().values())


class ProgressionState(BaseModel):
    """Level, in-level progress and rank derived from total XP"""
    total_xp: int = Field(0, ge=0)
    level: int = Field(1, ge=1, le=100)
    current_xp: int = Field(0, ge=0)
    next_level_xp: int = Field(100, ge=0)
    rank: Rank = Rank.E

    def to_profile_fields(self) -> dict[str, Any]:
        """Columns written back to the profile row"""
        return {
            "level": self.level,
            "xp": self.current_xp,
            "rank": self.rank.value,
            "total_xp": self.total_xp,
        }


class XpTableRow(BaseModel):
    """One row of the level cost table"""
    level: int
    xp_per_level: int
    total_xp_required: int  # XP needed to reach the start of this level


class ProfileSyncResult(BaseModel):
    """Outcome of a profile sync; state is valid even when persisting failed"""
    model_config = {"arbitrary_types_allowed": True}

    profile_id: Optional[str] = None
    state: ProgressionState
    breakdown: XpBreakdown
    persisted: bool = False
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.persisted and self.error is None
