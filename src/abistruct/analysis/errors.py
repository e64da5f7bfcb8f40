"""Errors raised while resolving struct declarations."""

from __future__ import annotations

from abistruct.core.models import Identifier


class ResolutionError(Exception):
    """Base error for catalogue resolution failures."""

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class MissingDeclarationError(ResolutionError):
    """Raised when a tuple signature has no collected declaration.

    This points at a collector defect (a reachable tuple was never visited),
    not at bad input, so the resolution is aborted.
    """

    def __init__(self, signature: str) -> None:
        self.signature = signature
        super().__init__(
            f"Internal error: unknown declaration for signature {signature}",
        )


class DuplicateIdentifierError(ResolutionError):
    """Raised when one identifier names structs with different signatures."""

    def __init__(self, identifier: Identifier, signatures: list[str]) -> None:
        self.identifier = identifier
        self.signatures = signatures
        super().__init__(
            f"Struct '{identifier.qualified_name}' is declared with "
            f"{len(signatures)} different shapes",
            details=", ".join(signatures),
        )
