"""SQLAlchemy implementation of QueryExecutorProtocol.

Runs handler queries against the backend through ``text()`` with bound
parameters. Placeholders ``:p1..:pN`` map to ``positional_args`` in order.

Architecture:
- Implements QueryExecutorProtocol without inheritance (structural typing)
- Maps SQLAlchemy exceptions to DatabaseError
- Returns Result types for all operations
"""

import re
from collections.abc import Sequence
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError

from capgate.core.enums import ErrorCode
from capgate.core.errors import DomainError
from capgate.core.result import Failure, Result, Success
from capgate.domain.protocols.query_executor_protocol import Row
from capgate.infrastructure.enums import InfrastructureErrorCode
from capgate.infrastructure.errors import DatabaseError
from capgate.infrastructure.persistence.database import Database

# Matches SQLAlchemy's own bind syntax; "::" casts are not placeholders.
_PLACEHOLDER = re.compile(r"(?<![:\w]):p(\d+)\b")


def placeholder_indices(query_template: str) -> set[int]:
    """Return the set of ``N`` for every ``:pN`` placeholder in a template."""
    return {int(match) for match in _PLACEHOLDER.findall(query_template)}


class SqlQueryExecutor:
    """Backend query executor over a SQLAlchemy async engine.

    Attributes:
        _database: Engine/session manager for the backend.
    """

    def __init__(self, database: Database) -> None:
        """Initialize executor.

        Args:
            database: Backend database.
        """
        self._database = database

    async def execute(
        self,
        query_template: str,
        positional_args: Sequence[Any] = (),
    ) -> Result[list[Row], DomainError]:
        """Execute a parameterized query and return its rows.

        Args:
            query_template: Query text with ``:p1..:pN`` placeholders.
            positional_args: Values bound to the placeholders, in order.

        Returns:
            Success(list of row tuples in backend order), or
            Failure(DatabaseError) on a placeholder/argument mismatch or a
            backend failure.
        """
        expected = set(range(1, len(positional_args) + 1))
        found = placeholder_indices(query_template)
        if found != expected:
            return Failure(
                error=DatabaseError(
                    code=ErrorCode.VALIDATION_FAILED,
                    infrastructure_code=InfrastructureErrorCode.DATABASE_BIND_MISMATCH,
                    message="Query placeholders do not match supplied arguments",
                    details={
                        "placeholders": sorted(found),
                        "argument_count": len(positional_args),
                    },
                )
            )

        binds = {f"p{i}": value for i, value in enumerate(positional_args, start=1)}

        try:
            async with self._database.get_session() as session:
                result = await session.execute(text(query_template), binds)
                if not result.returns_rows:
                    return Success(value=[])
                return Success(value=[tuple(row) for row in result.all()])
        except OperationalError as e:
            return Failure(
                error=DatabaseError(
                    code=ErrorCode.DATABASE_ERROR,
                    infrastructure_code=InfrastructureErrorCode.DATABASE_CONNECTION_FAILED,
                    message="Backend database unavailable",
                    details={"error": str(e.orig) if e.orig else str(e)},
                )
            )
        except DBAPIError as e:
            return Failure(
                error=DatabaseError(
                    code=ErrorCode.DATABASE_ERROR,
                    infrastructure_code=InfrastructureErrorCode.DATABASE_DATA_ERROR,
                    message="Backend query failed",
                    details={"error": str(e.orig) if e.orig else str(e)},
                )
            )
        except SQLAlchemyError as e:
            return Failure(
                error=DatabaseError(
                    code=ErrorCode.DATABASE_ERROR,
                    infrastructure_code=InfrastructureErrorCode.DATABASE_ERROR,
                    message="Backend query failed",
                    details={"error": str(e), "type": type(e).__name__},
                )
            )
