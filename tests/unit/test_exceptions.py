"""Unit tests for custom exception hierarchy"""
import pytest
from datetime import datetime
import psycopg
from psycopg import errors as pg_errors
from psycopg_pool import PoolTimeout

from src.exceptions import (
    MonarchError,
    ValidationError,
    DatabaseError,
    ConnectionError,
    QueryError,
    MissingCollectionError,
    ConfigurationError,
    ProgressionError,
    ProfileNotFoundError,
    ProfileWriteError,
    wrap_external_exception
)


class TestMonarchError:
    """Test base exception class"""

    def test_basic_exception(self):
        """Test basic exception creation"""
        error = MonarchError("Test error")
        assert error.message == "Test error"
        assert error.user_message == "An error occurred. Please try again."
        assert error.request_id is not None
        assert isinstance(error.timestamp, datetime)

    def test_exception_with_context(self):
        """Test exception with full context"""
        error = MonarchError(
            message="Sync failed",
            profile_id="p1",
            operation="sync_profile",
            context={"level": 7},
            user_message="Could not save your level"
        )
        assert error.profile_id == "p1"
        assert error.operation == "sync_profile"
        assert error.context["level"] == 7
        assert error.user_message == "Could not save your level"

    def test_exception_with_cause(self):
        """Test exception wrapping another exception"""
        original_error = ValueError("Invalid value")
        error = MonarchError(message="Validation failed", cause=original_error)
        assert error.cause == original_error

    def test_auto_logging(self, caplog):
        """Errors log themselves on creation"""
        with caplog.at_level("ERROR"):
            MonarchError("Logged error")
        assert "MonarchError: Logged error" in caplog.text


class TestSubclasses:
    """Test specific error types"""

    def test_validation_error(self):
        error = ValidationError("must be whitelisted", field="collection", value="pg_user")
        assert error.field == "collection"
        assert error.value == "pg_user"
        assert "collection" in error.user_message
        assert isinstance(error, MonarchError)

    def test_database_errors(self):
        assert isinstance(ConnectionError(), DatabaseError)
        assert isinstance(QueryError("failed", query="SELECT 1"), DatabaseError)

    def test_caller_context_is_merged(self):
        """Caller context and subclass fields end up in one dict"""
        error = QueryError("failed", query="SELECT 1", context={"collection": "profiles"})
        assert error.context == {"collection": "profiles", "query": "SELECT 1"}

        error = ValidationError("bad", field="level", value=-1, context={"collection": "skills"})
        assert error.context == {"collection": "skills", "field": "level", "value": -1}

        error = MissingCollectionError("gone", collection="habits", context={"record_id": "h1"})
        assert error.context == {"record_id": "h1", "collection": "habits"}

    def test_subclass_fields_win_over_caller_context(self):
        error = ConfigurationError("bad", config_key="LOG_LEVEL", context={"config_key": "other"})
        assert error.context == {"config_key": "LOG_LEVEL"}

    def test_user_message_override(self):
        error = QueryError("failed", user_message="Try again later")
        assert error.user_message == "Try again later"
        assert ProfileWriteError("x").user_message.startswith("Your level was calculated")

    def test_missing_collection_error(self):
        error = MissingCollectionError("not provisioned", collection="experiences")
        assert error.collection == "experiences"
        assert error.context == {"collection": "experiences"}
        assert isinstance(error, DatabaseError)

    def test_configuration_error(self):
        error = ConfigurationError("missing", config_key="DATABASE_URL")
        assert error.context["config_key"] == "DATABASE_URL"

    def test_progression_errors(self):
        assert isinstance(ProfileNotFoundError(), ProgressionError)
        write_error = ProfileWriteError("write failed", profile_id="p1")
        assert isinstance(write_error, ProgressionError)
        assert write_error.profile_id == "p1"


class TestWrapExternalException:
    """Test wrapping of driver exceptions"""

    def test_wrap_undefined_table(self):
        error = wrap_external_exception(
            pg_errors.UndefinedTable("no such table"),
            operation="query_collection",
            context={"collection": "experiences"}
        )
        assert isinstance(error, MissingCollectionError)
        assert error.collection == "experiences"

    def test_wrap_operational_error(self):
        error = wrap_external_exception(psycopg.OperationalError("down"), operation="read_record")
        assert isinstance(error, ConnectionError)
        assert error.operation == "read_record"

    def test_wrap_pool_timeout(self):
        error = wrap_external_exception(PoolTimeout("timed out"), operation="read_record")
        assert isinstance(error, ConnectionError)

    def test_wrap_query_error(self):
        error = wrap_external_exception(psycopg.DataError("bad"), operation="update_record")
        assert isinstance(error, QueryError)

    def test_wrap_query_error_keeps_caller_context(self):
        error = wrap_external_exception(
            psycopg.DataError("value out of range"),
            operation="update_record",
            context={"collection": "profiles", "record_id": "p1"}
        )
        assert isinstance(error, QueryError)
        assert error.context == {"collection": "profiles", "record_id": "p1", "query": None}

    def test_wrap_undefined_table_keeps_caller_context(self):
        error = wrap_external_exception(
            pg_errors.UndefinedTable("no such table"),
            operation="read_record",
            context={"collection": "profiles", "record_id": "p1"}
        )
        assert error.context == {"collection": "profiles", "record_id": "p1"}

    def test_wrap_generic(self):
        original = RuntimeError("boom")
        error = wrap_external_exception(original, operation="sync_profile", profile_id="p1")
        assert type(error) is MonarchError
        assert error.cause is original
        assert error.profile_id == "p1"

    def test_wrap_passes_through_own_errors(self):
        original = QueryError("already wrapped")
        assert wrap_external_exception(original, operation="x") is original
