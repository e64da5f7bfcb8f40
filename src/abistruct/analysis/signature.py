"""Canonical tuple signatures.

A signature is the structural key of a tuple: the ordered component types
only, with nested tuples expanded recursively, e.g. ``(uint256,(address,bool)[])``.
Component names and internal type hints never take part in it.
"""

from __future__ import annotations

from collections.abc import Sequence

from abistruct.core.models import TUPLE_PREFIX, Parameter


def abi_type_signature(parameter: Parameter) -> str:
    """Canonical type string of a single parameter.

    Tuple types expand to their component signature followed by any array
    suffix (``tuple[2]`` -> ``(uint256,bool)[2]``).
    """
    if parameter.type.startswith(TUPLE_PREFIX):
        suffix = parameter.type[len(TUPLE_PREFIX):]
        return abi_tuple_signature(parameter.components or []) + suffix
    return parameter.type


def abi_tuple_signature(components: Sequence[Parameter]) -> str:
    """Canonical signature of an ordered component list."""
    return "(" + ",".join(abi_type_signature(component) for component in components) + ")"
