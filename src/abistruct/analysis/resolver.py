"""Declaration resolution pass.

This module turns the collector's candidates into a resolved catalogue:
anonymous candidates get synthesized names, and tuple-typed components are
back-filled with the identifier of the declaration matching their signature.
"""

from __future__ import annotations

import logging

from abistruct.analysis.catalogue import StructCatalogue
from abistruct.analysis.errors import DuplicateIdentifierError, MissingDeclarationError
from abistruct.analysis.signature import abi_tuple_signature
from abistruct.analysis.table import DeclarationTable
from abistruct.core.config import get_config
from abistruct.core.models import (
    CandidateDeclaration,
    Component,
    Declaration,
    Identifier,
    StructType,
)

logger = logging.getLogger(__name__)


class DeclarationResolver:
    """Resolve collected candidates into a `StructCatalogue`.

    Resolution runs two passes:
    - Name completion: candidates without identifier are named
      ``<prefix><n>`` in document order, ``n`` counting synthesized names
    - Component back-fill: anonymous tuple components take the identifier of
      the first declaration sharing their signature
    """

    def __init__(
        self,
        name_prefix: str | None = None,
        strict_identifiers: bool | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            name_prefix: Prefix for synthesized names (defaults to config).
            strict_identifiers: Whether identifiers shared by differently
                shaped structs are fatal (defaults to config).
        """
        config = get_config()
        self._name_prefix = name_prefix or config.synthetic_name_prefix
        self._strict_identifiers = (
            config.strict_identifiers if strict_identifiers is None else strict_identifiers
        )

    def resolve(self, table: DeclarationTable) -> StructCatalogue:
        """Resolve a declaration table.

        Args:
            table: Output of the declaration collector.

        Returns:
            The resolved catalogue.

        Raises:
            MissingDeclarationError: If a tuple component has no declaration.
            DuplicateIdentifierError: In strict mode, if one identifier names
                structs of different shapes.
        """
        named = self._complete_names(table)
        self._check_identifiers(named)

        signature_declarations = {
            signature: [
                Declaration(
                    identifier=declaration.identifier,
                    components=self._backfill_components(declaration.components, named),
                )
                for declaration in declarations
            ]
            for signature, declarations in named.items()
        }
        scope_signatures = {
            scope: list(signatures) for scope, signatures in table.scope_signatures.items()
        }

        logger.debug(
            f"Resolved {sum(len(d) for d in signature_declarations.values())} declarations "
            f"across {len(signature_declarations)} signatures"
        )
        return StructCatalogue(signature_declarations, scope_signatures)

    def _complete_names(self, table: DeclarationTable) -> dict[str, list[Declaration]]:
        """Name every anonymous candidate.

        Args:
            table: Collected candidates.

        Returns:
            signature -> declarations (components not yet back-filled), with
            signatures and declarations in document order.
        """
        taken = {
            candidate.identifier.name
            for candidate in table.candidates()
            if candidate.identifier is not None and candidate.identifier.scope is None
        }

        identifiers: dict[tuple[int, ...], Identifier] = {}
        counter = 0
        for candidate in table.candidates():
            if candidate.identifier is not None:
                continue
            name, counter = self._next_name(counter, taken)
            taken.add(name)
            identifiers[candidate.position] = Identifier(name=name)
            logger.debug(f"Named anonymous struct at {candidate.position} '{name}'")

        named: dict[str, list[Declaration]] = {}
        for signature in table.signatures():
            named[signature] = [
                self._to_declaration(candidate, identifiers)
                for candidate in table.signature_declarations[signature]
            ]
        return named

    def _next_name(self, counter: int, taken: set[str]) -> tuple[str, int]:
        name = f"{self._name_prefix}{counter}"
        counter += 1
        while name in taken:
            logger.debug(f"Synthesized name '{name}' is already declared, skipping")
            name = f"{self._name_prefix}{counter}"
            counter += 1
        return name, counter

    @staticmethod
    def _to_declaration(
        candidate: CandidateDeclaration, identifiers: dict[tuple[int, ...], Identifier]
    ) -> Declaration:
        identifier = candidate.identifier or identifiers[candidate.position]
        return Declaration(identifier=identifier, components=list(candidate.components))

    def _check_identifiers(self, named: dict[str, list[Declaration]]) -> None:
        """Enforce that one identifier names one struct shape."""
        signatures_by_identifier: dict[Identifier, list[str]] = {}
        for signature, declarations in named.items():
            for declaration in declarations:
                signatures_by_identifier.setdefault(declaration.identifier, []).append(signature)

        for identifier, signatures in signatures_by_identifier.items():
            if len(signatures) < 2:
                continue
            if self._strict_identifiers:
                raise DuplicateIdentifierError(identifier, signatures)
            logger.warning(
                f"Struct '{identifier.qualified_name}' is declared with "
                f"{len(signatures)} different shapes: {', '.join(signatures)}"
            )

    @staticmethod
    def _backfill_components(
        components: list[Component], named: dict[str, list[Declaration]]
    ) -> list[Component]:
        """Attach declaration identifiers to anonymous tuple components.

        Args:
            components: Components of one declaration.
            named: signature -> named declarations.

        Returns:
            Components whose struct types all carry an identifier.

        Raises:
            MissingDeclarationError: If a component's signature is unknown.
        """
        resolved: list[Component] = []
        for component in components:
            component_type = component.type
            if not isinstance(component_type, StructType) or component_type.is_resolved:
                resolved.append(component)
                continue

            signature = abi_tuple_signature(component_type.components)
            declarations = named.get(signature)
            if not declarations:
                raise MissingDeclarationError(signature)

            # First declaration in document order wins, regardless of scope
            identifier = declarations[0].identifier
            resolved.append(
                component.model_copy(
                    update={"type": component_type.model_copy(update={"identifier": identifier})}
                )
            )
        return resolved
