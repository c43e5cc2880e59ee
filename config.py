# config.py
"""Configuration settings for the fluent Cypher query builder.
Uses Pydantic BaseSettings for automatic environment variable loading.
"""

from __future__ import annotations

import logging

import structlog
from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

logger = structlog.get_logger()

DEFAULT_NEO4J_PASSWORD = "neo4j_password"


class QueryBuilderSettings(BaseSettings):
    """Connection and logging configuration."""

    # Neo4j Connection Settings
    NEO4J_URI: str = "bolt://localhost:7687"
    NEO4J_USER: str = "neo4j"
    NEO4J_PASSWORD: str = DEFAULT_NEO4J_PASSWORD
    NEO4J_DATABASE: str | None = None

    # Logging
    LOG_LEVEL_STR: str = Field("INFO", alias="LOG_LEVEL")
    LOG_FORMAT: str = (
        "%(asctime)s - %(levelname)s - [%(name)s:%(funcName)s:%(lineno)d] - %(message)s"
    )
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
    LOG_FILE: str | None = None
    # Directory for a relative LOG_FILE
    LOG_DIR: str = "logs"
    ENABLE_RICH_LOGGING: bool = True
    # Level for the query builder and driver handle loggers; None follows LOG_LEVEL
    CYPHER_LOG_LEVEL: str | None = None

    @field_validator("LOG_LEVEL_STR", "CYPHER_LOG_LEVEL")
    @classmethod
    def check_log_level(cls, value: str | None) -> str | None:
        if value is None:
            return None
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @model_validator(mode="after")
    def warn_default_password(self) -> QueryBuilderSettings:
        if self.NEO4J_PASSWORD == DEFAULT_NEO4J_PASSWORD:
            logger.warning(
                "NEO4J_PASSWORD is using the placeholder default. "
                "Set it in the environment or a .env file.",
                uri=self.NEO4J_URI,
            )
        return self

    model_config = SettingsConfigDict(
        env_prefix="", env_file=".env", populate_by_name=True, extra="ignore"
    )


settings = QueryBuilderSettings()
