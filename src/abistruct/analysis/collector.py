"""Declaration collection pass.

This module walks an ABI and records a candidate declaration for every
struct-shaped parameter it finds, recursing through nested tuple components.
Naming of anonymous candidates is left to the resolver.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from functools import reduce
from typing import Union, cast

from abistruct.analysis.classifier import classify_parameter, is_struct_parameter
from abistruct.analysis.signature import abi_tuple_signature
from abistruct.analysis.table import DeclarationTable
from abistruct.core.models import (
    CandidateDeclaration,
    Component,
    ConstructorEntry,
    ErrorEntry,
    EventEntry,
    FallbackEntry,
    FunctionEntry,
    Parameter,
    ReceiveEntry,
    StructType,
)

logger = logging.getLogger(__name__)

Entry = Union[
    FunctionEntry, ConstructorEntry, EventEntry, ErrorEntry, FallbackEntry, ReceiveEntry
]
Node = Union[Sequence[Entry], Entry, Parameter]


class DeclarationCollector:
    """Collect candidate struct declarations from an ABI.

    Every candidate is tagged with its document position: the entry index,
    0 for inputs or 1 for outputs, the parameter index and then one index per
    level of component nesting. Positions order candidates as entries in
    input order, inputs before outputs, parameters in list order and each
    tuple before its own components.
    """

    def collect(self, node: Node) -> DeclarationTable:
        """Collect declarations from an ABI, a single entry or a single parameter.

        Args:
            node: The root node to visit.

        Returns:
            DeclarationTable with all candidates found under the node.
        """
        if isinstance(node, Parameter):
            return self.visit_parameter(node, ())
        if isinstance(node, (list, tuple)):
            return self.visit_abi(node)
        return self.visit_entry(node, (0,))

    def visit_abi(self, entries: Sequence[Entry]) -> DeclarationTable:
        """Visit all entries; per-entry tables are independent and merged."""
        tables = [self.visit_entry(entry, (index,)) for index, entry in enumerate(entries)]
        return reduce(DeclarationTable.merge, tables, DeclarationTable())

    def visit_entry(self, entry: Entry, position: tuple[int, ...]) -> DeclarationTable:
        """Visit a single ABI entry.

        Fallback and receive entries carry no parameters and contribute nothing.
        """
        tables = [
            self.visit_parameter(parameter, position + (group_index, parameter_index))
            for group_index, parameters in enumerate(entry.parameter_groups())
            for parameter_index, parameter in enumerate(parameters)
        ]
        return reduce(DeclarationTable.merge, tables, DeclarationTable())

    def visit_parameter(
        self, parameter: Parameter, position: tuple[int, ...]
    ) -> DeclarationTable:
        """Visit a parameter and, recursively, its tuple components.

        Args:
            parameter: The parameter to visit.
            position: Document position of the parameter.

        Returns:
            DeclarationTable with the parameter's own candidate (if it is
            struct-shaped) and the candidates of its nested tuples.
        """
        if not is_struct_parameter(parameter):
            return DeclarationTable()

        parameter_type = cast(StructType, classify_parameter(parameter))

        components = parameter.components or []
        signature = abi_tuple_signature(components)
        candidate = CandidateDeclaration(
            identifier=parameter_type.identifier,
            components=[
                Component(name=component.name, type=classify_parameter(component))
                for component in components
            ],
            position=position,
        )
        if candidate.identifier is None:
            logger.debug(f"Anonymous tuple {signature} at {position}")

        table = DeclarationTable()
        table.add_candidate(signature, candidate)

        component_tables = [
            self.visit_parameter(component, position + (index,))
            for index, component in enumerate(components)
        ]
        return reduce(DeclarationTable.merge, component_tables, table)


def collect_candidates(node: Node) -> DeclarationTable:
    """Convenience wrapper around `DeclarationCollector.collect`."""
    return DeclarationCollector().collect(node)
