"""
Database queries

Module organization:
- records.py: Content collections (skills, projects, ...) and the profile row
"""

from src.db.queries.records import (
    ALLOWED_COLLECTIONS,
    XP_COLLECTIONS,
    RecordStore,
    build_select,
)

__all__ = [
    "ALLOWED_COLLECTIONS",
    "XP_COLLECTIONS",
    "RecordStore",
    "build_select",
]
