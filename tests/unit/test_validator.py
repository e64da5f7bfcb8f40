"""Unit tests for catalogue validation."""

from __future__ import annotations

from abistruct.analysis.catalogue import StructCatalogue
from abistruct.client import collect_declarations
from abistruct.core.models import (
    Component,
    Declaration,
    ElementaryType,
    Identifier,
    Parameter,
    StructType,
)
from abistruct.core.validator import ValidationErrorType, validate_catalogue

BOOL = ElementaryType(raw_type="bool")


def _declaration(name: str, components: list[Component], scope: str | None = None) -> Declaration:
    return Declaration(identifier=Identifier(name=name, scope=scope), components=components)


class TestValidateCatalogue:
    """Tests for validate_catalogue."""

    def test_resolved_catalogue_is_valid(self, pool_abi) -> None:
        result = validate_catalogue(collect_declarations(pool_abi))
        assert result.is_valid
        assert result.errors == []

    def test_empty_catalogue_is_valid(self) -> None:
        assert validate_catalogue(StructCatalogue({}, {})).is_valid

    def test_dangling_reference(self) -> None:
        ref = StructType(raw_type="tuple[]", identifier=Identifier(name="Gone"))
        outer = _declaration("Outer", [Component(name="items", type=ref)])
        catalogue = StructCatalogue({"((bool)[])": [outer]}, {"": ["((bool)[])"]})

        result = validate_catalogue(catalogue)
        assert not result.is_valid
        [error] = result.errors
        assert error.error_type == ValidationErrorType.DANGLING_STRUCT_REF
        assert error.declaration == "Outer"
        assert error.field_name == "items"
        assert error.invalid_ref == "Gone"

    def test_unresolved_component(self) -> None:
        outer = _declaration(
            "Outer", [Component(name="inner", type=StructType(raw_type="tuple"))]
        )
        catalogue = StructCatalogue({"(())": [outer]}, {"": ["(())"]})

        [error] = validate_catalogue(catalogue).errors
        assert error.error_type == ValidationErrorType.UNRESOLVED_STRUCT_COMPONENT
        assert error.field_name == "inner"

    def test_duplicate_identifier(self) -> None:
        first = _declaration("Dup", [Component(name="x", type=BOOL)])
        second = _declaration(
            "Dup", [Component(name="x", type=ElementaryType(raw_type="uint8"))]
        )
        catalogue = StructCatalogue(
            {"(bool)": [first], "(uint8)": [second]},
            {"": ["(bool)", "(uint8)"]},
        )

        [error] = validate_catalogue(catalogue).errors
        assert error.error_type == ValidationErrorType.DUPLICATE_IDENTIFIER
        assert "2 times" in error.message

    def test_same_name_in_different_scopes_is_valid(self) -> None:
        first = _declaration("Key", [Component(name="x", type=BOOL)], scope="A")
        second = _declaration("Key", [Component(name="x", type=BOOL)], scope="B")
        catalogue = StructCatalogue(
            {"(bool)": [first, second]}, {"A": ["(bool)"], "B": ["(bool)"]}
        )
        assert validate_catalogue(catalogue).is_valid

    def test_signature_mismatch(self) -> None:
        target = _declaration("Target", [Component(name="x", type=BOOL)])
        ref = StructType(
            raw_type="tuple",
            identifier=Identifier(name="Target"),
            components=[Parameter(name="x", type="uint8")],
        )
        outer = _declaration("Outer", [Component(name="t", type=ref)])
        catalogue = StructCatalogue(
            {"(bool)": [target], "((uint8))": [outer]},
            {"": ["(bool)", "((uint8))"]},
        )

        [error] = validate_catalogue(catalogue).errors
        assert error.error_type == ValidationErrorType.SIGNATURE_MISMATCH
        assert "(uint8)" in error.message
        assert "(bool)" in error.message
