"""Core module containing data models, configuration, serializer, and validator."""

from abistruct.core.models import (
    AbiEntry,
    CandidateDeclaration,
    Component,
    ConstructorEntry,
    Declaration,
    ElementaryType,
    EntryKind,
    ErrorEntry,
    EventEntry,
    FallbackEntry,
    FunctionEntry,
    Identifier,
    Parameter,
    ParameterType,
    ReceiveEntry,
    StructType,
)
from abistruct.core.serializer import (
    SerializationError,
    catalogue_to_dict,
    deserialize_catalogue,
    load_abi,
    load_abi_file,
    parse_node,
    serialize_catalogue,
)
from abistruct.core.validator import (
    ValidationError,
    ValidationErrorType,
    ValidationResult,
    validate_catalogue,
)

__all__ = [
    "AbiEntry",
    "CandidateDeclaration",
    "Component",
    "ConstructorEntry",
    "Declaration",
    "ElementaryType",
    "EntryKind",
    "ErrorEntry",
    "EventEntry",
    "FallbackEntry",
    "FunctionEntry",
    "Identifier",
    "Parameter",
    "ParameterType",
    "ReceiveEntry",
    "SerializationError",
    "StructType",
    "ValidationError",
    "ValidationErrorType",
    "ValidationResult",
    "catalogue_to_dict",
    "deserialize_catalogue",
    "load_abi",
    "load_abi_file",
    "parse_node",
    "serialize_catalogue",
    "validate_catalogue",
]
