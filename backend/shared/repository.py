"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and the translation of transport and PostgREST
failures into StoreUnavailableError.
"""

import logging
from typing import Any, TypeVar, Generic

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import DuplicateRecordError, StoreUnavailableError

logger = logging.getLogger(__name__)

# Postgres SQLSTATEs
UNIQUE_VIOLATION = "23505"
INVALID_TEXT_REPRESENTATION = "22P02"

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - _execute() to run a query builder and normalize failures
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally. "Not found"
    is always expressed as None or an empty list, never as an exception.

    Example:
        class UserRepository(BaseRepository[UserRecord]):
            def get_user_by_id(self, user_id: str) -> Optional[UserRecord]:
                rows = self._execute(
                    "get_user_by_id",
                    self._db.table("users").select("*").eq("id", user_id).limit(1),
                )
                return UserRecord(**rows[0]) if rows else None
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(self, operation: str, query: Any) -> list[dict[str, Any]]:
        rows, _ = self._execute_counted(operation, query)
        return rows

    def _execute_counted(self, operation: str, query: Any) -> tuple[list[dict[str, Any]], int]:
        """
        Execute a PostgREST query and return its rows with the total count.

        Args:
            operation: Name used in logs and in the raised error.
            query: A query builder with an execute() method.

        Returns:
            The returned rows (possibly empty) and the count PostgREST
            reported for a counted select, else the number of rows. A
            filter value the column cannot represent, such as a malformed
            UUID, yields no rows.

        Raises:
            DuplicateRecordError: When an insert violates a unique constraint.
            StoreUnavailableError: On any other transport or PostgREST error.
        """
        try:
            result = query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                logger.info(f"Store query {operation} hit a unique constraint")
                raise DuplicateRecordError(operation) from e
            if e.code == INVALID_TEXT_REPRESENTATION:
                logger.info(f"Store query {operation} got a malformed key: {e.message}")
                return [], 0
            logger.error(f"Store query {operation} failed: {e.code} {e.message}")
            raise StoreUnavailableError(operation) from e
        except httpx.HTTPError as e:
            logger.error(f"Store unreachable during {operation}: {e}")
            raise StoreUnavailableError(operation) from e
        rows = result.data or []
        count = getattr(result, "count", None)
        return rows, count if isinstance(count, int) else len(rows)
