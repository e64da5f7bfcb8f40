"""Public entry point for abistruct.

The analysis passes live in `abistruct.analysis`; this module wires them
together for callers that just want a catalogue for an ABI.
"""

from __future__ import annotations

import logging
from typing import Any

from abistruct.analysis.catalogue import StructCatalogue
from abistruct.analysis.collector import DeclarationCollector
from abistruct.analysis.resolver import DeclarationResolver
from abistruct.core.serializer import parse_node

logger = logging.getLogger(__name__)


def collect_declarations(
    node: Any,
    *,
    resolver: DeclarationResolver | None = None,
) -> StructCatalogue:
    """Build the struct catalogue of an ABI.

    Args:
        node: ABI entries (models, dicts or JSON text), an artifact dict with
            an ``abi`` key, a single entry, or a single parameter.
        resolver: Optional pre-configured resolver.

    Returns:
        The resolved, immutable struct catalogue.

    Raises:
        SerializationError: If raw input fails validation.
        ResolutionError: If resolution hits an internal inconsistency.
    """
    parsed = parse_node(node)
    table = DeclarationCollector().collect(parsed)
    catalogue = (resolver or DeclarationResolver()).resolve(table)
    logger.debug(f"Built {catalogue!r}")
    return catalogue
