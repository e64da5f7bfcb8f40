"""Struct catalogue query interface.

`StructCatalogue` is the read-only view over resolved struct declarations
consumed by code emitters: enumerate declarations (all, global or per
scope), look them up by identifier, and resolve the type of any parameter.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from abistruct.analysis.classifier import classify_parameter
from abistruct.analysis.errors import MissingDeclarationError
from abistruct.analysis.signature import abi_tuple_signature
from abistruct.analysis.table import GLOBAL_SCOPE
from abistruct.core.models import (
    Declaration,
    ElementaryType,
    Identifier,
    Parameter,
    StructType,
)

logger = logging.getLogger(__name__)


class StructCatalogue:
    """Resolved, immutable set of struct declarations.

    Declarations are indexed by tuple signature (one signature may map to
    several declarations) and by scope (one scope may define several
    signatures). Query methods return fresh containers.
    """

    def __init__(
        self,
        signature_declarations: Mapping[str, Sequence[Declaration]],
        scope_signatures: Mapping[str, Sequence[str]],
    ) -> None:
        """Initialize the catalogue.

        Args:
            signature_declarations: signature -> declarations, each list in
                document order.
            scope_signatures: scope -> signatures defined in it; global
                structs are listed under the empty scope key.
        """
        self._signature_declarations: dict[str, tuple[Declaration, ...]] = {
            signature: tuple(declarations)
            for signature, declarations in signature_declarations.items()
        }
        self._scope_signatures: dict[str, tuple[str, ...]] = {
            scope: tuple(signatures) for scope, signatures in scope_signatures.items()
        }
        self._identifier_index: dict[Identifier, Declaration] = {}
        self._declaration_signatures: dict[Identifier, str] = {}
        for signature, declarations in self._signature_declarations.items():
            for declaration in declarations:
                self._identifier_index.setdefault(declaration.identifier, declaration)
                self._declaration_signatures.setdefault(declaration.identifier, signature)

    def __repr__(self) -> str:
        return (
            f"StructCatalogue(declarations={len(self.all_declarations())}, "
            f"scopes={sorted(self.scope_names())})"
        )

    def is_empty(self) -> bool:
        """Whether the ABI uses no struct types at all."""
        return not self._signature_declarations

    def all_declarations(self) -> list[Declaration]:
        """Return every declaration once, regardless of scope."""
        return [
            declaration
            for declarations in self._signature_declarations.values()
            for declaration in declarations
        ]

    def signatures(self) -> list[str]:
        """All tuple signatures known to the catalogue."""
        return list(self._signature_declarations)

    def declarations_for_signature(self, signature: str) -> list[Declaration]:
        """Declarations sharing a tuple signature, in document order."""
        return list(self._signature_declarations.get(signature, ()))

    def signature_for(self, identifier: Identifier) -> str | None:
        """Tuple signature of the declaration with the given identifier."""
        return self._declaration_signatures.get(identifier)

    def scope_signatures(self) -> dict[str, list[str]]:
        """Copy of the scope index (global structs under the empty key)."""
        return {scope: list(signatures) for scope, signatures in self._scope_signatures.items()}

    def scope_names(self) -> set[str]:
        """Names of the scopes that define at least one struct."""
        return {scope for scope in self._scope_signatures if scope != GLOBAL_SCOPE}

    def global_declarations(self) -> list[Declaration]:
        """Declarations that appear to be defined outside any container."""
        return self._declarations_in(GLOBAL_SCOPE, None)

    def scope_declarations(self, scope_name: str) -> list[Declaration]:
        """Declarations defined in the container with the given name."""
        return self._declarations_in(scope_name, scope_name)

    def _declarations_in(self, key: str, scope: str | None) -> list[Declaration]:
        # A signature listed under a scope may also have declarations in other
        # scopes, so filter on each declaration's own identifier
        result: list[Declaration] = []
        for signature in self._scope_signatures.get(key, ()):
            for declaration in self._signature_declarations.get(signature, ()):
                if declaration.identifier.scope == scope and declaration not in result:
                    result.append(declaration)
        return result

    def identifier_declaration(self, identifier: Identifier) -> Declaration | None:
        """Look up a declaration by exact identifier (name and scope).

        Args:
            identifier: The identifier to look up.

        Returns:
            The matching declaration, or None if not found.
        """
        return self._identifier_index.get(identifier)

    def type_for_parameter(self, parameter: Parameter) -> ElementaryType | StructType:
        """Resolve the type of a parameter against the catalogue.

        Structs resolve to the first declaration, in insertion order, with a
        matching tuple signature. The parameter's own hint is not consulted.

        Args:
            parameter: Any parameter of the ABI the catalogue was built from.

        Returns:
            ElementaryType, or StructType with a mandatory identifier.

        Raises:
            MissingDeclarationError: If no declaration has the parameter's
                tuple signature.
        """
        parameter_type = classify_parameter(parameter)
        if isinstance(parameter_type, ElementaryType):
            return parameter_type

        signature = abi_tuple_signature(parameter.components or [])
        declarations = self._signature_declarations.get(signature)
        if not declarations:
            raise MissingDeclarationError(signature)

        identifier = declarations[0].identifier
        logger.debug(f"Resolved parameter '{parameter.name}' {signature} -> {identifier}")
        return parameter_type.model_copy(update={"identifier": identifier})
