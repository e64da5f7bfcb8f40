"""Data models for abistruct.

This module defines the input ABI structures (parameters and the six entry
variants) and the struct catalogue structures produced by the analysis
passes (identifiers, parameter types, components and declarations).
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

TUPLE_PREFIX = "tuple"


class EntryKind(str, Enum):
    """Kind of ABI entry."""

    FUNCTION = "function"
    CONSTRUCTOR = "constructor"
    EVENT = "event"
    ERROR = "error"
    FALLBACK = "fallback"
    RECEIVE = "receive"


# ---------------------------------------------------------------------------
# Input: ABI entries
# ---------------------------------------------------------------------------


class Parameter(BaseModel):
    """Typed ABI parameter (or tuple component).

    `components` is present iff `type` starts with ``tuple``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(default="", description="Parameter name (may be empty)")
    type: str = Field(..., description="Elementary type tag or tuple[...] form")
    internal_type: str | None = Field(
        default=None,
        alias="internalType",
        description="Compiler-provided type hint (e.g., 'struct Pool.Key[]')",
    )
    components: list[Parameter] | None = Field(
        default=None, description="Tuple components"
    )
    indexed: bool | None = Field(default=None, description="Indexed flag (event inputs)")

    @property
    def is_tuple(self) -> bool:
        """Whether this parameter is struct-shaped."""
        return self.type.startswith(TUPLE_PREFIX)


class _Entry(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def kind(self) -> EntryKind:
        return EntryKind(self.type)  # type: ignore[attr-defined]

    def parameter_groups(self) -> list[list[Parameter]]:
        """Parameter lists of this entry in document order (inputs, then outputs)."""
        return []


class FunctionEntry(_Entry):
    """Function entry."""

    type: Literal["function"] = "function"
    name: str
    inputs: list[Parameter] = Field(default_factory=list)
    outputs: list[Parameter] = Field(default_factory=list)
    state_mutability: str | None = Field(default=None, alias="stateMutability")

    def parameter_groups(self) -> list[list[Parameter]]:
        return [self.inputs, self.outputs]


class ConstructorEntry(_Entry):
    """Constructor entry."""

    type: Literal["constructor"] = "constructor"
    inputs: list[Parameter] = Field(default_factory=list)
    state_mutability: str | None = Field(default=None, alias="stateMutability")

    def parameter_groups(self) -> list[list[Parameter]]:
        return [self.inputs]


class EventEntry(_Entry):
    """Event entry."""

    type: Literal["event"] = "event"
    name: str
    inputs: list[Parameter] = Field(default_factory=list)
    anonymous: bool = False

    def parameter_groups(self) -> list[list[Parameter]]:
        return [self.inputs]


class ErrorEntry(_Entry):
    """Custom error entry."""

    type: Literal["error"] = "error"
    name: str
    inputs: list[Parameter] = Field(default_factory=list)

    def parameter_groups(self) -> list[list[Parameter]]:
        return [self.inputs]


class FallbackEntry(_Entry):
    """Fallback entry (carries no parameters)."""

    type: Literal["fallback"] = "fallback"
    state_mutability: str | None = Field(default=None, alias="stateMutability")


class ReceiveEntry(_Entry):
    """Receive entry (carries no parameters)."""

    type: Literal["receive"] = "receive"
    state_mutability: str | None = Field(default=None, alias="stateMutability")


AbiEntry = Annotated[
    Union[
        FunctionEntry,
        ConstructorEntry,
        EventEntry,
        ErrorEntry,
        FallbackEntry,
        ReceiveEntry,
    ],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Output: struct catalogue
# ---------------------------------------------------------------------------


class Identifier(BaseModel):
    """Name of a struct declaration.

    A missing scope means the struct is declared globally; otherwise the
    scope names the enclosing container (e.g., a contract or interface).
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Struct name")
    scope: str | None = Field(default=None, description="Enclosing container name")

    @property
    def is_global(self) -> bool:
        return self.scope is None

    @property
    def qualified_name(self) -> str:
        """``Scope.Name`` for scoped structs, ``Name`` otherwise."""
        if self.scope is None:
            return self.name
        return f"{self.scope}.{self.name}"

    def __str__(self) -> str:
        return self.qualified_name


class ElementaryType(BaseModel):
    """Non-tuple parameter type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["elementary"] = "elementary"
    raw_type: str = Field(..., description="ABI type tag (e.g., uint256)")


class StructType(BaseModel):
    """Tuple-shaped parameter type.

    `identifier` is optional while declarations are still being collected and
    mandatory once the catalogue is resolved. `components` holds the raw
    nested parameters so the tuple signature can be recomputed; it is not
    part of the serialized form.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["struct"] = "struct"
    raw_type: str = Field(..., description="ABI type tag (tuple, tuple[], tuple[2], ...)")
    identifier: Identifier | None = Field(default=None, description="Referenced declaration")
    components: list[Parameter] = Field(default_factory=list, exclude=True)

    @property
    def array_suffix(self) -> str:
        """Array brackets following the tuple prefix (``""`` for a plain tuple)."""
        return self.raw_type[len(TUPLE_PREFIX):]

    @property
    def is_resolved(self) -> bool:
        return self.identifier is not None


ParameterType = Annotated[Union[ElementaryType, StructType], Field(discriminator="kind")]


class Component(BaseModel):
    """Named member of a struct declaration."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: ParameterType


class CandidateDeclaration(BaseModel):
    """Struct declaration as seen by the collector.

    The identifier is absent for tuples that carry no usable name hint.
    `position` is the document path of the first occurrence and orders
    candidates independently of how collection results were combined.
    """

    model_config = ConfigDict(frozen=True)

    identifier: Identifier | None = None
    components: list[Component] = Field(default_factory=list)
    position: tuple[int, ...] = Field(default=(), exclude=True)


class Declaration(BaseModel):
    """One named struct type."""

    model_config = ConfigDict(frozen=True)

    identifier: Identifier
    components: list[Component] = Field(default_factory=list)

    def struct_components(self) -> Iterator[tuple[Component, StructType]]:
        """Yield (component, struct type) pairs for tuple-shaped members."""
        for component in self.components:
            if isinstance(component.type, StructType):
                yield component, component.type
