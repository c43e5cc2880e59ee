"""Value types shared by the query builder and its callers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import NamedTuple, Union  # noqa: F401 - referenced by CypherValue

from pydantic import (  # noqa: F401 - Strict* referenced by CypherValue
    StrictBytes,
    StrictStr,
    TypeAdapter,
    ValidationError,
)
from typing_extensions import TypeAliasType

# Values the Neo4j driver can send as query parameters. Strings and byte
# arrays are strict so neither is coerced into the other.
CypherValue = TypeAliasType(
    "CypherValue",
    "Union[StrictStr, StrictBytes, int, float, bool, None, "
    "list[CypherValue], dict[str, CypherValue]]",
)

Parameters = dict[str, CypherValue]

_PARAMETERS_ADAPTER: TypeAdapter[Parameters] = TypeAdapter(Parameters)


class ParameterValidationError(ValueError):
    """Raised when query parameters hold values Cypher cannot represent."""


class CompiledQuery(NamedTuple):
    """Snapshot of a builder's query text and parameters."""

    query: str
    parameters: Parameters


def validate_parameters(parameters: Mapping[str, object] | None) -> Parameters:
    """Validate ``parameters`` against :data:`CypherValue`.

    ``None`` is treated as an empty mapping. Tuples and sets are converted to
    lists and ``bytes`` stay ``bytes``; anything else outside the tagged value
    type is rejected.
    """
    if parameters is None:
        return {}
    if not isinstance(parameters, Mapping):
        raise ParameterValidationError(
            f"Cypher parameters must be a mapping, got {type(parameters).__name__}"
        )
    try:
        return _PARAMETERS_ADAPTER.validate_python(dict(parameters))
    except ValidationError as exc:
        raise ParameterValidationError(
            f"Invalid Cypher parameters: {exc.errors(include_url=False)}"
        ) from exc
