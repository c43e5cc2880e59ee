# data_access/__init__.py
from .cypher_builders import (
    Neo4jQueryBuilder,
    QueryBuilderConfigurationError,
    QueryResultError,
)

__all__ = [
    "Neo4jQueryBuilder",
    "QueryBuilderConfigurationError",
    "QueryResultError",
]
