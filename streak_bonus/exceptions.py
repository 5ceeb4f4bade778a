"""
Standardized exception hierarchy for streak-bonus
Provides rich context and consistent logging for every degraded code path.

Nothing raised here is meant to reach a caller's point-awarding flow: store
adapters raise these errors, and the services catch them at the boundary and
fall back to a safe default (empty history, default settings, single-identity
scope).
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)


class StreakBonusError(Exception):
    """
    Base exception for all streak-bonus errors

    Provides:
    - Automatic timestamping
    - Request ID for tracing
    - Structured context
    - Automatic logging at a per-class level

    Example:
        raise StreakBonusError(
            message="Failed to read activity log",
            identity="someone@example.com",
            operation="read_recent",
            context={"limit": 90}
        )
    """

    log_level: int = logging.ERROR

    def __init__(
        self,
        message: str,
        identity: Optional[str] = None,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.identity = identity
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # Avoid conflict with logging's 'message' field
            "request_id": self.request_id,
            "identity": self.identity,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.log(
                self.log_level,
                f"{self.__class__.__name__}: {self.message}",
                extra=log_data,
                exc_info=self.cause,
            )
        else:
            logger.log(self.log_level, f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for diagnostics"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "operation": self.operation,
            "context": self.context,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


# ==========================================
# Validation Errors (Admin Input)
# ==========================================

class ValidationError(StreakBonusError):
    """
    Raised when submitted settings fail validation

    Example:
        raise ValidationError(
            message="Threshold must be a positive integer",
            field="thresholds.BONUS_1",
            value="abc"
        )
    """

    log_level = logging.WARNING

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        super().__init__(
            message=message,
            context={"field": field, "value": value},
            **kwargs
        )


# ==========================================
# Log Data Errors
# ==========================================

class LogSourceUnavailableError(StreakBonusError):
    """The activity log store is missing or unreachable"""

    log_level = logging.WARNING

    def __init__(self, message: str = "Activity log source unavailable", **kwargs):
        super().__init__(message=message, **kwargs)


class InvalidRowError(StreakBonusError):
    """A log row has a missing or unparseable date"""

    log_level = logging.DEBUG

    def __init__(self, message: str, raw_date: Optional[Any] = None, **kwargs):
        self.raw_date = raw_date
        super().__init__(
            message=message,
            context={"raw_date": repr(raw_date)},
            **kwargs
        )


class MalformedEntryError(StreakBonusError):
    """An activity entry does not follow the marker/name/points grammar"""

    log_level = logging.DEBUG

    def __init__(self, message: str, entry: Optional[str] = None, **kwargs):
        self.entry = entry
        super().__init__(
            message=message,
            context={"entry": entry},
            **kwargs
        )


# ==========================================
# Settings & Scope Errors
# ==========================================

class SettingsCorruptError(StreakBonusError):
    """Persisted streak settings could not be read"""

    log_level = logging.WARNING

    def __init__(self, message: str, setting_key: Optional[str] = None, **kwargs):
        self.setting_key = setting_key
        super().__init__(
            message=message,
            context={"setting_key": setting_key},
            **kwargs
        )


class ScopeResolutionError(StreakBonusError):
    """Household lookup for an identity failed"""

    log_level = logging.WARNING

    def __init__(self, message: str, household_id: Optional[str] = None, **kwargs):
        self.household_id = household_id
        super().__init__(
            message=message,
            context={"household_id": household_id},
            **kwargs
        )


# ==========================================
# Database Errors
# ==========================================

class DatabaseError(StreakBonusError):
    """
    Base class for database-related errors
    """
    pass


class QueryError(DatabaseError):
    """Database query execution failed"""

    def __init__(
        self,
        message: str,
        query: Optional[str] = None,
        **kwargs
    ):
        self.query = query
        super().__init__(
            message=message,
            context={"query": query},
            **kwargs
        )


# ==========================================
# Helper Functions
# ==========================================

def wrap_database_exception(
    error: Exception,
    operation: str,
    identity: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None
) -> StreakBonusError:
    """
    Wrap psycopg exceptions into our exception hierarchy

    Connection-level failures become LogSourceUnavailableError so callers can
    treat them as "no history"; everything else becomes a QueryError.

    Example:
        try:
            await cur.execute(query)
        except psycopg.Error as e:
            raise wrap_database_exception(e, operation="get_recent_log_rows")
    """
    import psycopg

    if isinstance(error, StreakBonusError):
        return error

    if isinstance(error, (psycopg.OperationalError, psycopg.InterfaceError)):
        return LogSourceUnavailableError(
            message=f"Database unavailable during {operation}: {error}",
            identity=identity,
            operation=operation,
            context=context,
            cause=error
        )

    return QueryError(
        message=f"Database query failed during {operation}: {error}",
        identity=identity,
        operation=operation,
        cause=error
    )
