# data_access/cypher_builders/query_builder.py
"""Fluent builder that assembles Cypher text and parameters and runs them.

Clause text is concatenated exactly as written: no separators are inserted,
so callers supply their own whitespace. Labels and conditions are inserted
verbatim and must be trusted input; only values passed as parameters are
sent to the database separately from the query text.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import structlog
from config import QueryBuilderSettings
from config import settings as default_settings
from core.db_manager import Neo4jDriverHandle

from models.cypher_values import (
    CompiledQuery,
    CypherValue,
    Parameters,
    validate_parameters,
)

logger = structlog.get_logger(__name__)

DEFAULT_RESULT_VARIABLE = "n"


class QueryBuilderConfigurationError(RuntimeError):
    """Raised when a builder without a driver is asked to execute or close."""


class QueryResultError(LookupError):
    """Raised when a result record lacks the requested variable."""


class Neo4jQueryBuilder:
    """Accumulates ``RETURN``, ``MATCH``, ``WHERE`` and ``FOREACH`` clauses."""

    def __init__(
        self,
        uri: str,
        username: str,
        password: str,
        detached: bool = False,
        database: str | None = None,
    ) -> None:
        self.uri = uri
        self.username = username
        self._password = password
        self.database = database
        self._driver: Neo4jDriverHandle | None = None
        if not detached:
            self._driver = Neo4jDriverHandle(uri, username, password, database)

        self._query = ""
        self._parameters: Parameters = {}

    @classmethod
    def from_settings(
        cls, settings: QueryBuilderSettings | None = None, detached: bool = False
    ) -> Neo4jQueryBuilder:
        """Create a builder from the configured settings."""
        settings = settings or default_settings
        return cls(
            settings.NEO4J_URI,
            settings.NEO4J_USER,
            settings.NEO4J_PASSWORD,
            detached=detached,
            database=settings.NEO4J_DATABASE,
        )

    async def __aenter__(self) -> Neo4jQueryBuilder:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._driver is not None:
            await self.close()

    @property
    def detached(self) -> bool:
        return self._driver is None

    def _clear_query(self) -> None:
        self._query = ""
        self._parameters = {}

    def _add_query_part(
        self, query_part: str, parameters: Mapping[str, Any] | None = None
    ) -> Neo4jQueryBuilder:
        return self._append(query_part, validate_parameters(parameters))

    def _append(self, query_part: str, parameters: Parameters) -> Neo4jQueryBuilder:
        self._query += query_part
        self._parameters = {**self._parameters, **parameters}
        return self

    def select(self, *fields: str) -> Neo4jQueryBuilder:
        """Start a new query with a ``RETURN`` projection, discarding prior state."""
        self._clear_query()
        fields_string = ", ".join(fields) if fields else "*"
        return self._add_query_part(f"RETURN {fields_string}")

    def from_(self, label: str) -> Neo4jQueryBuilder:
        return self._add_query_part(f"MATCH (n:{label})")

    def where(
        self, condition: str, parameters: Mapping[str, CypherValue] | None = None
    ) -> Neo4jQueryBuilder:
        return self._add_query_part(f"WHERE {condition}", parameters)

    def for_each(
        self,
        iteration_variable: str,
        list_variable: str,
        build_fn: Callable[[Neo4jQueryBuilder], Neo4jQueryBuilder | None],
        parameters: Mapping[str, CypherValue] | None = None,
    ) -> Neo4jQueryBuilder:
        """Append a ``FOREACH`` clause whose body is built by ``build_fn``.

        ``build_fn`` receives a fresh detached builder sharing this builder's
        connection info. Parameters collected by the nested builder are kept;
        explicitly passed ``parameters`` win on key collision.
        """
        sub_builder = Neo4jQueryBuilder(
            self.uri,
            self.username,
            self._password,
            detached=True,
            database=self.database,
        )
        populated = build_fn(sub_builder)
        nested = (populated if populated is not None else sub_builder).build()
        for_each_query = (
            f"FOREACH ({iteration_variable} IN {list_variable} | {nested.query})"
        )
        # nested parameters were validated by the sub-builder
        merged = {**nested.parameters, **validate_parameters(parameters)}
        return self._append(for_each_query, merged)

    def build(self) -> CompiledQuery:
        return CompiledQuery(self._query, dict(self._parameters))

    def _require_driver(self, action: str) -> Neo4jDriverHandle:
        if self._driver is None:
            raise QueryBuilderConfigurationError(
                f"Failed to {action}: Neo4j driver not initialized."
            )
        return self._driver

    async def execute(
        self, result_variable: str | None = DEFAULT_RESULT_VARIABLE
    ) -> list[Any]:
        """Run the accumulated query and reset the builder on success.

        Returns the value bound to ``result_variable`` for each record; for a
        node this is its property map. Pass ``None`` to get whole records.
        Driver errors and a missing ``result_variable`` both leave the
        accumulated query untouched.
        """
        driver = self._require_driver("execute")
        compiled = self.build()
        records = await driver.run_query(compiled.query, compiled.parameters)
        logger.debug(
            "Cypher query executed.", record_count=len(records), query=compiled.query
        )

        if result_variable is None:
            rows = records
        else:
            try:
                rows = [record[result_variable] for record in records]
            except KeyError as exc:
                raise QueryResultError(
                    f"Result records have no variable named '{result_variable}'."
                ) from exc
        self._clear_query()
        return rows

    async def close(self) -> None:
        driver = self._require_driver("close")
        self._driver = None
        await driver.close()
