"""ABI loading and catalogue serialization.

This module parses ABI JSON into typed entry models and converts resolved
struct catalogues to and from JSON. Struct cross-references are written as
identifiers, never as nested declarations.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from abistruct.core.config import get_config
from abistruct.core.models import AbiEntry, Declaration, EntryKind, Identifier, Parameter

if TYPE_CHECKING:
    from abistruct.analysis.catalogue import StructCatalogue

CATALOGUE_FORMAT_VERSION = "1.0"

_ABI_ADAPTER: TypeAdapter[list[AbiEntry]] = TypeAdapter(list[AbiEntry])
_ENTRY_ADAPTER: TypeAdapter[AbiEntry] = TypeAdapter(AbiEntry)


class SerializationError(Exception):
    """Error during serialization or deserialization."""

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class CatalogueDocument(BaseModel):
    """JSON document form of a struct catalogue."""

    version: str = CATALOGUE_FORMAT_VERSION
    declarations: list[Declaration] = Field(default_factory=list)
    signatures: dict[str, list[Identifier]] = Field(
        default_factory=dict, description="signature -> [declaration identifiers]"
    )
    scopes: dict[str, list[str]] = Field(
        default_factory=dict, description="scope -> [signatures]; global under ''"
    )


def _format_validation_error(error: ValidationError) -> str:
    error_details = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"])
        error_details.append(f"{loc}: {err['msg']}")
    return "; ".join(error_details)


def _with_default_type(entry: Any) -> Any:
    # Entries without "type" are functions in the ABI JSON format
    if isinstance(entry, dict) and "type" not in entry:
        return {**entry, "type": EntryKind.FUNCTION.value}
    return entry


def load_abi(data: str | list[Any] | dict[str, Any]) -> list[AbiEntry]:
    """Load ABI entries from JSON text or decoded JSON.

    Accepts a bare entry list or an artifact object with an ``abi`` key.

    Args:
        data: JSON string, list of entry dicts, or artifact dict.

    Returns:
        The validated ABI entries.

    Raises:
        SerializationError: If the JSON is malformed or an entry is invalid.
    """
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise SerializationError(
                message="Invalid JSON format",
                details=f"Line {e.lineno}, column {e.colno}: {e.msg}",
            ) from e

    if isinstance(data, dict):
        if "abi" not in data:
            raise SerializationError(
                message="Invalid ABI document",
                details="expected a list of entries or an object with an 'abi' key",
            )
        data = data["abi"]

    if not isinstance(data, list):
        raise SerializationError(
            message="Invalid ABI document",
            details=f"expected a list of entries, got {type(data).__name__}",
        )

    try:
        return _ABI_ADAPTER.validate_python([_with_default_type(entry) for entry in data])
    except ValidationError as e:
        raise SerializationError(
            message="ABI validation failed",
            details=_format_validation_error(e),
        ) from e


def load_abi_file(path: Path) -> list[AbiEntry]:
    """Load ABI entries from a JSON file.

    Raises:
        SerializationError: If the file cannot be read or parsed.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise SerializationError(
            message=f"Failed to read ABI file: {path}",
            details=str(e),
        ) from e
    return load_abi(text)


def parse_node(node: Any) -> Union[list[AbiEntry], AbiEntry, Parameter]:
    """Coerce decoded JSON (or models) into an ABI, an entry or a parameter.

    Dicts with ``inputs``/``outputs`` or an entry-only ``type`` are entries;
    any other dict is a parameter.

    Raises:
        SerializationError: If validation fails.
    """
    if isinstance(node, BaseModel):
        return node  # type: ignore[return-value]
    if isinstance(node, (str, list)) or (isinstance(node, dict) and "abi" in node):
        if isinstance(node, list) and all(isinstance(item, BaseModel) for item in node):
            return node
        return load_abi(node)
    if not isinstance(node, dict):
        raise SerializationError(
            message="Unsupported ABI node",
            details=f"got {type(node).__name__}",
        )

    entry_only_types = {kind.value for kind in EntryKind} - {EntryKind.FUNCTION.value}
    try:
        if "inputs" in node or "outputs" in node or node.get("type") in entry_only_types:
            return _ENTRY_ADAPTER.validate_python(_with_default_type(node))
        return Parameter.model_validate(node)
    except ValidationError as e:
        raise SerializationError(
            message="ABI validation failed",
            details=_format_validation_error(e),
        ) from e


def catalogue_to_dict(catalogue: StructCatalogue) -> dict[str, Any]:
    """Serialize a catalogue to a dictionary.

    Args:
        catalogue: The catalogue to serialize.

    Returns:
        Dictionary form of the catalogue.
    """
    document = CatalogueDocument(
        declarations=catalogue.all_declarations(),
        signatures={
            signature: [d.identifier for d in catalogue.declarations_for_signature(signature)]
            for signature in catalogue.signatures()
        },
        scopes=catalogue.scope_signatures(),
    )
    return document.model_dump(mode="json")


def serialize_catalogue(catalogue: StructCatalogue, indent: int | None = None) -> str:
    """Serialize a catalogue to a JSON string.

    Args:
        catalogue: The catalogue to serialize.
        indent: JSON indentation (defaults to config).

    Returns:
        JSON string representation of the catalogue.

    Raises:
        SerializationError: If serialization fails.
    """
    if indent is None:
        indent = get_config().json_indent
    try:
        return json.dumps(catalogue_to_dict(catalogue), indent=indent or None, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(
            message="Failed to serialize catalogue",
            details=str(e),
        ) from e


def deserialize_catalogue(json_str: str) -> StructCatalogue:
    """Deserialize a JSON string to a catalogue.

    Raw tuple components are not part of the JSON form, so the result
    supports every query except re-deriving signatures of components.

    Args:
        json_str: JSON produced by `serialize_catalogue`.

    Returns:
        The deserialized catalogue.

    Raises:
        SerializationError: If the JSON is malformed or inconsistent.
    """
    from abistruct.analysis.catalogue import StructCatalogue

    try:
        document = CatalogueDocument.model_validate_json(json_str)
    except ValidationError as e:
        raise SerializationError(
            message="Catalogue validation failed",
            details=_format_validation_error(e),
        ) from e

    by_identifier = {d.identifier: d for d in document.declarations}
    signature_declarations: dict[str, list[Declaration]] = {}
    for signature, identifiers in document.signatures.items():
        declarations = []
        for identifier in identifiers:
            if identifier not in by_identifier:
                raise SerializationError(
                    message="Catalogue validation failed",
                    details=f"signatures.{signature}: unknown struct '{identifier}'",
                )
            declarations.append(by_identifier[identifier])
        signature_declarations[signature] = declarations

    return StructCatalogue(signature_declarations, document.scopes)
