"""Catalogue validation module.

This module checks resolved catalogues for reference integrity: every
struct-typed component must name a declaration of the same catalogue, and
identifiers must be unique.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from abistruct.analysis.signature import abi_tuple_signature

if TYPE_CHECKING:
    from abistruct.analysis.catalogue import StructCatalogue


class ValidationErrorType(str, Enum):
    """Types of validation errors."""

    DANGLING_STRUCT_REF = "dangling_struct_reference"
    UNRESOLVED_STRUCT_COMPONENT = "unresolved_struct_component"
    DUPLICATE_IDENTIFIER = "duplicate_identifier"
    SIGNATURE_MISMATCH = "signature_mismatch"


@dataclass
class ValidationError:
    """A single validation error."""

    error_type: ValidationErrorType
    declaration: str
    field_name: str
    invalid_ref: str
    message: str


@dataclass
class ValidationResult:
    """Result of catalogue validation."""

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    def add_error(
        self,
        error_type: ValidationErrorType,
        declaration: str,
        field_name: str,
        invalid_ref: str,
        message: str,
    ) -> None:
        """Add a validation error."""
        self.errors.append(
            ValidationError(
                error_type=error_type,
                declaration=declaration,
                field_name=field_name,
                invalid_ref=invalid_ref,
                message=message,
            )
        )
        self.is_valid = False


def validate_catalogue(catalogue: StructCatalogue) -> ValidationResult:
    """Validate a catalogue for reference integrity.

    Args:
        catalogue: The catalogue to validate.

    Returns:
        ValidationResult containing validation status and any errors found.
    """
    result = ValidationResult(is_valid=True)

    # Identifier uniqueness
    seen: dict[str, int] = {}
    for declaration in catalogue.all_declarations():
        key = declaration.identifier.qualified_name
        seen[key] = seen.get(key, 0) + 1
    for qualified_name, count in seen.items():
        if count > 1:
            result.add_error(
                error_type=ValidationErrorType.DUPLICATE_IDENTIFIER,
                declaration=qualified_name,
                field_name="identifier",
                invalid_ref=qualified_name,
                message=f"Struct '{qualified_name}' is declared {count} times",
            )

    # Component references
    for declaration in catalogue.all_declarations():
        owner = declaration.identifier.qualified_name
        for component, struct_type in declaration.struct_components():
            if struct_type.identifier is None:
                result.add_error(
                    error_type=ValidationErrorType.UNRESOLVED_STRUCT_COMPONENT,
                    declaration=owner,
                    field_name=component.name,
                    invalid_ref=struct_type.raw_type,
                    message=f"Struct '{owner}' has unresolved tuple component "
                    f"'{component.name}'",
                )
                continue

            target = struct_type.identifier.qualified_name
            if catalogue.identifier_declaration(struct_type.identifier) is None:
                result.add_error(
                    error_type=ValidationErrorType.DANGLING_STRUCT_REF,
                    declaration=owner,
                    field_name=component.name,
                    invalid_ref=target,
                    message=f"Struct '{owner}' references non-existent struct '{target}'",
                )
                continue

            # Raw components are only present for catalogues built in-process
            if struct_type.components:
                expected = abi_tuple_signature(struct_type.components)
                actual = catalogue.signature_for(struct_type.identifier)
                if actual != expected:
                    result.add_error(
                        error_type=ValidationErrorType.SIGNATURE_MISMATCH,
                        declaration=owner,
                        field_name=component.name,
                        invalid_ref=target,
                        message=f"Component '{component.name}' of '{owner}' has shape "
                        f"{expected} but '{target}' is {actual}",
                    )

    return result
