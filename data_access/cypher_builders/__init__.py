"""Utilities for constructing Cypher queries."""

from .query_builder import (
    Neo4jQueryBuilder,
    QueryBuilderConfigurationError,
    QueryResultError,
)

__all__ = [
    "Neo4jQueryBuilder",
    "QueryBuilderConfigurationError",
    "QueryResultError",
]
