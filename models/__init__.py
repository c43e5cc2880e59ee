"""Central package for query data models."""

from .cypher_values import (
    CompiledQuery,
    CypherValue,
    Parameters,
    ParameterValidationError,
    validate_parameters,
)

__all__ = [
    "CompiledQuery",
    "CypherValue",
    "Parameters",
    "ParameterValidationError",
    "validate_parameters",
]
