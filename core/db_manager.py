# core/db_manager.py
from __future__ import annotations

from typing import Any

import structlog
from neo4j import AsyncDriver, AsyncGraphDatabase, basic_auth  # type: ignore
from neo4j.exceptions import ServiceUnavailable  # type: ignore

logger = structlog.get_logger(__name__)


class Neo4jDriverHandle:
    """Owns a single async Neo4j driver for its whole lifetime.

    The driver is created on construction and released exactly once by
    :meth:`close`. Each query runs in its own short-lived session.
    """

    def __init__(
        self,
        uri: str,
        user: str,
        password: str,
        database: str | None = None,
    ) -> None:
        self.uri = uri
        self.database = database
        self.driver: AsyncDriver | None = AsyncGraphDatabase.driver(
            uri, auth=basic_auth(user, password)
        )
        logger.info("Neo4j driver created.", uri=uri, database=database)

    async def __aenter__(self) -> Neo4jDriverHandle:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def closed(self) -> bool:
        return self.driver is None

    def _require_driver(self) -> AsyncDriver:
        if self.driver is None:
            raise ConnectionError("Neo4j driver has already been closed.")
        return self.driver

    async def verify_connectivity(self) -> None:
        driver = self._require_driver()
        try:
            await driver.verify_connectivity()
            logger.info(f"Successfully connected to Neo4j at {self.uri}")
        except ServiceUnavailable as e:
            logger.critical(
                f"Neo4j connection failed: {e}. Ensure the Neo4j database is running and accessible."
            )
            raise
        except Exception as e:
            logger.critical(
                f"Unexpected error during Neo4j connection: {e}", exc_info=True
            )
            raise

    async def run_query(
        self, query: str, parameters: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Run ``query`` in a fresh session and return every record as a dict."""
        driver = self._require_driver()
        async with driver.session(database=self.database) as session:
            logger.debug(f"Executing Cypher query: {query} with params: {parameters}")
            result_cursor = await session.run(query, parameters or {})
            return await result_cursor.data()

    async def close(self) -> None:
        if self.driver is None:
            logger.info("No active Neo4j driver to close (driver was None).")
            return
        try:
            await self.driver.close()
            logger.info("Neo4j driver closed.", uri=self.uri)
        finally:
            self.driver = None
