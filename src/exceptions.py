"""
Standardized exception hierarchy for the progression service
Provides rich context, consistent logging, and user-friendly error messages
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)


def _merge_context(kwargs: Dict[str, Any], **fields: Any) -> Dict[str, Any]:
    """Pop caller context from kwargs and merge the subclass fields over it"""
    return {**(kwargs.pop("context", None) or {}), **fields}


class MonarchError(Exception):
    """
    Base exception for all progression service errors

    Provides:
    - Automatic timestamping
    - Request ID for tracing
    - User-friendly messages
    - Structured context
    - Automatic logging

    Example:
        raise MonarchError(
            message="Failed to persist progression",
            profile_id="8c1f...",
            operation="sync_profile",
            context={"level": 7}
        )
    """

    def __init__(
        self,
        message: str,
        profile_id: Optional[str] = None,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.profile_id = profile_id
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "An error occurred. Please try again."
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # Avoid conflict with logging's 'message' field
            "request_id": self.request_id,
            "profile_id": self.profile_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data)


# ==========================================
# Validation Errors
# ==========================================

class ValidationError(MonarchError):
    """
    Raised when a value fails validation

    Example:
        raise ValidationError(
            message="Collection name is not allowed",
            field="collection",
            value="pg_user"
        )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        kwargs.setdefault("user_message", f"Invalid {field}: {message}" if field else message)
        super().__init__(
            message=message,
            context=_merge_context(kwargs, field=field, value=value),
            **kwargs
        )


# ==========================================
# Database Errors
# ==========================================

class DatabaseError(MonarchError):
    """
    Base class for database-related errors
    """
    pass


class ConnectionError(DatabaseError):
    """Database connection failed"""

    def __init__(self, message: str = "Database connection failed", **kwargs):
        kwargs.setdefault(
            "user_message",
            "We're having trouble connecting to the database. Please try again in a moment."
        )
        super().__init__(message=message, **kwargs)


class QueryError(DatabaseError):
    """Database query execution failed"""

    def __init__(
        self,
        message: str,
        query: Optional[str] = None,
        **kwargs
    ):
        self.query = query
        kwargs.setdefault(
            "user_message",
            "We encountered an issue reading or saving your data. Please try again."
        )
        super().__init__(
            message=message,
            context=_merge_context(kwargs, query=query),
            **kwargs
        )


class MissingCollectionError(DatabaseError):
    """A content collection is not provisioned in the store"""

    def __init__(
        self,
        message: str,
        collection: Optional[str] = None,
        **kwargs
    ):
        self.collection = collection
        kwargs.setdefault("user_message", f"{collection or 'This section'} is not set up yet.")
        super().__init__(
            message=message,
            context=_merge_context(kwargs, collection=collection),
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(MonarchError):
    """System configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        kwargs.setdefault(
            "user_message",
            "The system is not properly configured. Please contact support."
        )
        super().__init__(
            message=message,
            context=_merge_context(kwargs, config_key=config_key),
            **kwargs
        )


# ==========================================
# Progression Errors
# ==========================================

class ProgressionError(MonarchError):
    """Profile progression could not be synced"""
    pass


class ProfileNotFoundError(ProgressionError):
    """No profile row to write progression into"""

    def __init__(self, message: str = "No profile record found", **kwargs):
        kwargs.setdefault("user_message", "No profile exists yet, so your level was not saved.")
        super().__init__(message=message, **kwargs)


class ProfileWriteError(ProgressionError):
    """Persisting computed progression to the profile failed"""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault(
            "user_message",
            "Your level was calculated but could not be saved. It will be retried on the next change."
        )
        super().__init__(message=message, **kwargs)


# ==========================================
# Helper Functions
# ==========================================

def wrap_external_exception(
    error: Exception,
    operation: str,
    profile_id: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None
) -> MonarchError:
    """
    Wrap driver exceptions (psycopg, psycopg_pool) into our exception hierarchy

    Args:
        error: Original exception
        operation: What operation was being performed
        profile_id: Profile ID if applicable
        context: Additional context

    Returns:
        Appropriate MonarchError subclass

    Example:
        try:
            await cur.execute(query)
        except psycopg.Error as e:
            raise wrap_external_exception(
                e,
                operation="query_collection",
                context={"collection": "skills"}
            )
    """
    if isinstance(error, MonarchError):
        return error

    # Import here to avoid circular dependencies
    import psycopg
    from psycopg import errors as pg_errors
    from psycopg_pool import PoolTimeout

    if isinstance(error, pg_errors.UndefinedTable):
        collection = (context or {}).get("collection")
        return MissingCollectionError(
            message=f"Collection is not provisioned: {str(error)}",
            collection=collection,
            profile_id=profile_id,
            operation=operation,
            context=context,
            cause=error
        )
    elif isinstance(error, (psycopg.OperationalError, PoolTimeout)):
        return ConnectionError(
            message=f"Database connection failed: {str(error)}",
            profile_id=profile_id,
            operation=operation,
            context=context,
            cause=error
        )
    elif isinstance(error, psycopg.Error):
        return QueryError(
            message=f"Database query failed: {str(error)}",
            profile_id=profile_id,
            operation=operation,
            context=context,
            cause=error
        )

    # Generic fallback
    return MonarchError(
        message=f"{operation} failed: {str(error)}",
        profile_id=profile_id,
        operation=operation,
        context=context,
        cause=error
    )
