"""Domain protocols (ports).

Infrastructure adapters implement these via structural typing.
"""

from capgate.domain.protocols.logger_protocol import LoggerProtocol
from capgate.domain.protocols.query_executor_protocol import (
    QueryExecutorProtocol,
    Row,
)
from capgate.domain.protocols.resource_store_protocol import (
    ResourceMutator,
    ResourceStoreProtocol,
)

__all__ = [
    "LoggerProtocol",
    "QueryExecutorProtocol",
    "ResourceMutator",
    "ResourceStoreProtocol",
    "Row",
]
