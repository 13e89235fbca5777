"""Unit tests for the XP Aggregator (src/gamification/aggregator.py)"""
import asyncio
import pytest
from unittest.mock import AsyncMock

from src.gamification.aggregator import (
    XP_SOURCES,
    calculate_total_xp,
    courses_xp,
    habits_xp,
    projects_xp,
    skills_xp,
)
from src.exceptions import ConnectionError


# ============================================================================
# Per-source reducers
# ============================================================================

def test_skills_xp():
    """An 80% skill is worth 400 XP"""
    assert skills_xp([{"level": 80}]) == 400
    assert skills_xp([{"level": 80}, {"level": 20}]) == 500


def test_skills_xp_oversized_level_counts_zero():
    """An integer too large for a float contributes nothing"""
    assert skills_xp([{"level": 10**400}, {"level": 80}]) == 400


def test_projects_xp_featured_bonus():
    """One featured + one regular project is 75 + 50"""
    assert projects_xp([{"is_featured": True}, {"is_featured": False}]) == 125


def test_courses_xp_floors_each_course():
    """Each course is floored separately"""
    assert courses_xp([{"progress": 40}]) == 20
    assert courses_xp([{"progress": 33}, {"progress": 33}]) == 32


def test_habits_xp():
    assert habits_xp([{"streak": 10}, {"streak": 3}]) == 26


def test_reducers_coerce_malformed_fields():
    """Missing, null and non-numeric fields count as 0"""
    assert skills_xp([{"level": None}, {}, {"level": "abc"}, {"level": "30"}]) == 150
    assert courses_xp([{"progress": None}, {"progress": float("nan")}]) == 0
    assert habits_xp([{"streak": "x"}, None, "not-a-row"]) == 0
    assert projects_xp([{"is_featured": None}, {}]) == 100


# ============================================================================
# Aggregation
# ============================================================================

@pytest.mark.asyncio
async def test_calculate_total_xp_empty(empty_store):
    """No records means 0 XP everywhere"""
    total_xp, breakdown = await calculate_total_xp(empty_store)

    assert total_xp == 0
    assert all(value == 0 for value in breakdown.model_dump().values())


@pytest.mark.asyncio
async def test_calculate_total_xp_reference_dataset(sample_store):
    """Reference dataset sums to 640 XP"""
    total_xp, breakdown = await calculate_total_xp(sample_store)

    assert breakdown.model_dump() == {
        "skills": 250,
        "projects": 75,
        "certifications": 200,
        "experiences": 75,
        "achievements": 0,
        "courses": 20,
        "habits": 20,
    }
    assert total_xp == 640
    assert breakdown.total == total_xp


@pytest.mark.asyncio
async def test_calculate_total_xp_only_published_unarchived_achievements(empty_store):
    """Archived or unpublished achievements are ignored"""
    empty_store.create_collection("achievements", [
        {"id": "a1", "is_published": True, "archived_at": None},
        {"id": "a2", "is_published": False, "archived_at": None},
        {"id": "a3", "is_published": True, "archived_at": "2025-01-01T00:00:00Z"},
    ])

    total_xp, breakdown = await calculate_total_xp(empty_store)

    assert breakdown.achievements == 100
    assert total_xp == 100


@pytest.mark.asyncio
async def test_calculate_total_xp_missing_collection(sample_store):
    """An unprovisioned collection counts 0 and the rest still add up"""
    sample_store.drop_collection("experiences")

    total_xp, breakdown = await calculate_total_xp(sample_store)

    assert breakdown.experiences == 0
    assert total_xp == 640 - 75


@pytest.mark.asyncio
async def test_calculate_total_xp_failing_read(sample_store):
    """A read error on one source counts 0 and does not raise"""
    sample_store.fail_on("experiences", ConnectionError())

    total_xp, breakdown = await calculate_total_xp(sample_store)

    assert breakdown.experiences == 0
    assert breakdown.skills == 250
    assert total_xp == 565


@pytest.mark.asyncio
async def test_calculate_total_xp_every_source_failing():
    """Total is 0 when nothing can be read"""
    store = AsyncMock()
    store.query_collection = AsyncMock(side_effect=RuntimeError("store offline"))

    total_xp, breakdown = await calculate_total_xp(store)

    assert total_xp == 0
    assert breakdown.total == 0
    assert store.query_collection.await_count == len(XP_SOURCES)


@pytest.mark.asyncio
async def test_calculate_total_xp_none_result():
    """A store returning None for a collection is treated as empty"""
    store = AsyncMock()
    store.query_collection = AsyncMock(return_value=None)

    total_xp, _ = await calculate_total_xp(store)

    assert total_xp == 0


@pytest.mark.asyncio
async def test_calculate_total_xp_reads_with_source_filters():
    """Achievements are read with the published/not-archived filter"""
    store = AsyncMock()
    store.query_collection = AsyncMock(return_value=[])

    await calculate_total_xp(store)

    calls = {call.args[0]: call.kwargs for call in store.query_collection.await_args_list}
    assert set(calls) == set(XP_SOURCES)
    assert calls["achievements"]["filters"] == {"archived_at": None, "is_published": True}
    assert calls["skills"]["columns"] == ["level"]


@pytest.mark.asyncio
async def test_calculate_total_xp_reads_concurrently():
    """All sources are in flight before any finishes"""
    in_flight = 0
    peak = 0

    async def slow_query(name, **kwargs):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return []

    store = AsyncMock()
    store.query_collection = slow_query

    await calculate_total_xp(store)

    assert peak == len(XP_SOURCES)
