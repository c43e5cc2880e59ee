"""General utility functions for the query builder."""

from .logging import setup_logging

__all__ = ["setup_logging"]
