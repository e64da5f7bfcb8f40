"""Struct declaration analysis.

Implements the passes that turn an ABI into a struct catalogue:
classification, collection (with structural deduplication) and resolution.
"""

from abistruct.analysis.catalogue import StructCatalogue
from abistruct.analysis.classifier import (
    classify_parameter,
    is_struct_parameter,
    parse_struct_hint,
)
from abistruct.analysis.collector import DeclarationCollector, collect_candidates
from abistruct.analysis.errors import (
    DuplicateIdentifierError,
    MissingDeclarationError,
    ResolutionError,
)
from abistruct.analysis.resolver import DeclarationResolver
from abistruct.analysis.signature import abi_tuple_signature, abi_type_signature
from abistruct.analysis.table import GLOBAL_SCOPE, DeclarationTable

__all__ = [
    "DeclarationCollector",
    "DeclarationResolver",
    "DeclarationTable",
    "DuplicateIdentifierError",
    "GLOBAL_SCOPE",
    "MissingDeclarationError",
    "ResolutionError",
    "StructCatalogue",
    "abi_tuple_signature",
    "abi_type_signature",
    "classify_parameter",
    "collect_candidates",
    "is_struct_parameter",
    "parse_struct_hint",
]
