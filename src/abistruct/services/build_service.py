"""Build service for catalogue tooling.

This module provides the CatalogueBuildService for loading ABI files,
resolving their struct catalogues, validating them and writing exports.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from abistruct.analysis.catalogue import StructCatalogue
from abistruct.analysis.errors import ResolutionError
from abistruct.analysis.resolver import DeclarationResolver
from abistruct.client import collect_declarations
from abistruct.core.serializer import SerializationError, load_abi_file, serialize_catalogue
from abistruct.core.validator import ValidationResult, validate_catalogue

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Result of a catalogue build."""

    source: str
    entries_count: int = 0
    catalogue: StructCatalogue | None = None
    validation: ValidationResult | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Check if the build produced a valid catalogue."""
        if self.errors or self.catalogue is None:
            return False
        return self.validation is None or self.validation.is_valid

    @property
    def declarations_count(self) -> int:
        return len(self.catalogue.all_declarations()) if self.catalogue else 0

    @property
    def global_count(self) -> int:
        return len(self.catalogue.global_declarations()) if self.catalogue else 0

    @property
    def scope_counts(self) -> dict[str, int]:
        """Number of declarations per named scope."""
        if self.catalogue is None:
            return {}
        return {
            scope: len(self.catalogue.scope_declarations(scope))
            for scope in sorted(self.catalogue.scope_names())
        }


class CatalogueBuildService:
    """Service for building struct catalogues from ABI files.

    Loading and resolution failures are reported on the BuildResult rather
    than raised, so tooling can print them uniformly.
    """

    def __init__(self, resolver: DeclarationResolver | None = None) -> None:
        self._resolver = resolver

    def build(self, abi_path: Path, validate: bool = True) -> BuildResult:
        """Load an ABI file and resolve its struct catalogue.

        Args:
            abi_path: Path to an ABI JSON file (or artifact with an ``abi`` key).
            validate: Whether to run reference-integrity validation.

        Returns:
            BuildResult with the catalogue or the errors encountered.
        """
        result = BuildResult(source=str(abi_path))

        try:
            entries = load_abi_file(abi_path)
        except SerializationError as e:
            result.errors.append(_format_error(e.message, e.details))
            return result
        result.entries_count = len(entries)

        try:
            result.catalogue = collect_declarations(entries, resolver=self._resolver)
        except ResolutionError as e:
            logger.error(f"Failed to resolve {abi_path}: {e.message}")
            result.errors.append(_format_error(e.message, e.details))
            return result

        if validate:
            result.validation = validate_catalogue(result.catalogue)
            for error in result.validation.errors:
                logger.warning(error.message)

        logger.info(
            f"Built catalogue for {abi_path}: {result.declarations_count} declarations"
        )
        return result

    def export(self, result: BuildResult, output: Path) -> None:
        """Write a built catalogue as JSON.

        Raises:
            ValueError: If the build has no catalogue.
            SerializationError: If the catalogue cannot be written.
        """
        if result.catalogue is None:
            raise ValueError(f"No catalogue to export for {result.source}")

        json_str = serialize_catalogue(result.catalogue)
        try:
            output.write_text(json_str, encoding="utf-8")
        except OSError as e:
            raise SerializationError(
                message=f"Failed to write catalogue: {output}",
                details=str(e),
            ) from e


def _format_error(message: str, details: str | None) -> str:
    return f"{message}: {details}" if details else message
