"""Parameter type classification.

Decides whether a parameter is elementary or struct-shaped and, for structs,
extracts the declaration identifier from the compiler's internal type hint.
"""

from __future__ import annotations

import logging
import re

from abistruct.core.models import (
    TUPLE_PREFIX,
    ElementaryType,
    Identifier,
    Parameter,
    StructType,
)

logger = logging.getLogger(__name__)

# "struct Name", "struct Container.Name", optionally followed by array brackets
STRUCT_HINT_PATTERN = re.compile(r"struct ([^\[]+)")


def is_struct_parameter(parameter: Parameter) -> bool:
    """Check whether a parameter is tuple-shaped."""
    return parameter.type.startswith(TUPLE_PREFIX)


def parse_struct_hint(internal_type: str | None) -> Identifier | None:
    """Parse a ``struct [Container.]Name`` hint into an identifier.

    Args:
        internal_type: The parameter's internal type hint, if any.

    Returns:
        The identifier, or None when the hint is missing or malformed.
    """
    if not internal_type:
        return None

    match = STRUCT_HINT_PATTERN.search(internal_type)
    if match is None:
        return None

    parts = match.group(1).strip().split(".")
    if any(not part for part in parts):
        logger.debug(f"Ignoring struct hint with empty name part: {internal_type!r}")
        return None

    if len(parts) == 1:
        return Identifier(name=parts[0])
    if len(parts) == 2:
        return Identifier(scope=parts[0], name=parts[1])

    logger.debug(f"Ignoring struct hint with nested qualifier: {internal_type!r}")
    return None


def classify_parameter(parameter: Parameter) -> ElementaryType | StructType:
    """Classify a parameter as elementary or struct-shaped.

    Never fails: a missing or malformed hint yields an anonymous StructType.

    Args:
        parameter: The parameter to classify.

    Returns:
        ElementaryType, or StructType with an identifier when the hint parses.
    """
    if not is_struct_parameter(parameter):
        return ElementaryType(raw_type=parameter.type)

    return StructType(
        raw_type=parameter.type,
        identifier=parse_struct_hint(parameter.internal_type),
        components=list(parameter.components or []),
    )
