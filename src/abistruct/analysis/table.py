"""Declaration table built by the collector.

The table maps each tuple signature to the candidate declarations observed
for it and each scope to the signatures it defines. Tables built for
separate parts of an ABI are combined with `DeclarationTable.merge`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from abistruct.core.models import CandidateDeclaration

# Key of the scope index under which global (and anonymous) structs are listed
GLOBAL_SCOPE = ""


class DeclarationTable(BaseModel):
    """Candidate declarations grouped by signature and by scope.

    Candidates for one signature are coalesced when their identifiers are both
    absent or equal; differently named candidates of the same shape are kept
    apart. Every list is kept ordered by document position, so merging is
    associative and commutative: tables may be built and combined in any
    order with the same result.
    """

    signature_declarations: dict[str, list[CandidateDeclaration]] = Field(
        default_factory=dict, description="signature -> [candidate declarations]"
    )
    scope_signatures: dict[str, list[str]] = Field(
        default_factory=dict, description="scope -> [signatures]"
    )

    def add_candidate(self, signature: str, candidate: CandidateDeclaration) -> None:
        """Register a candidate declaration under its signature.

        Args:
            signature: Canonical tuple signature of the candidate.
            candidate: The candidate to add (or coalesce with an equal one).
        """
        candidates = self.signature_declarations.setdefault(signature, [])
        for index, existing in enumerate(candidates):
            if existing.identifier == candidate.identifier:
                # Keep the earliest occurrence
                if candidate.position < existing.position:
                    candidates[index] = candidate
                break
        else:
            candidates.append(candidate)
        candidates.sort(key=lambda c: c.position)

        scope = GLOBAL_SCOPE
        if candidate.identifier is not None and candidate.identifier.scope is not None:
            scope = candidate.identifier.scope
        self.add_scope_signature(scope, signature)

    def add_scope_signature(self, scope: str, signature: str) -> None:
        """Record that a scope defines at least one struct with this signature."""
        signatures = self.scope_signatures.setdefault(scope, [])
        if signature not in signatures:
            signatures.append(signature)
            signatures.sort(key=self.signature_position)

    def signature_position(self, signature: str) -> tuple[int, ...]:
        """Position of the earliest candidate for a signature."""
        candidates = self.signature_declarations.get(signature)
        if not candidates:
            return ()
        return candidates[0].position

    def signatures(self) -> list[str]:
        """All signatures in order of first occurrence."""
        return sorted(self.signature_declarations, key=self.signature_position)

    def candidates(self) -> list[CandidateDeclaration]:
        """All candidates in document order."""
        return sorted(
            (c for cs in self.signature_declarations.values() for c in cs),
            key=lambda c: c.position,
        )

    def is_empty(self) -> bool:
        return not self.signature_declarations

    def merge(self, other: DeclarationTable) -> DeclarationTable:
        """Merge two declaration tables.

        Args:
            other: Another table to merge with this one.

        Returns:
            A new table containing candidates from both.
        """
        merged = DeclarationTable()
        for table in (self, other):
            for signature, candidates in table.signature_declarations.items():
                for candidate in candidates:
                    merged.add_candidate(signature, candidate)
        # Re-sort scope lists now that every signature has its final position
        for scope, signatures in list(self.scope_signatures.items()) + list(
            other.scope_signatures.items()
        ):
            for signature in signatures:
                merged.add_scope_signature(scope, signature)
        for signatures in merged.scope_signatures.values():
            signatures.sort(key=merged.signature_position)
        return merged
