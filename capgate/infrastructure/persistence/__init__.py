"""Backend database access."""

from capgate.infrastructure.persistence.database import Database
from capgate.infrastructure.persistence.sql_query_executor import SqlQueryExecutor

__all__ = ["Database", "SqlQueryExecutor"]
