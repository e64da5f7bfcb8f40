"""Rich table builders used by the CLI.

Kept separate to reduce duplication and keep the command module smaller.
"""

from __future__ import annotations

from rich.table import Table

from abistruct.core.models import Component, StructType


def format_component(component: Component) -> str:
    """Render a component as ``name: type``."""
    component_type = component.type
    if isinstance(component_type, StructType) and component_type.identifier is not None:
        type_name = f"{component_type.identifier.qualified_name}{component_type.array_suffix}"
    else:
        type_name = component_type.raw_type
    return f"{component.name or '_'}: {type_name}"


def build_declarations_table(catalogue, declarations, title: str | None = None) -> Table:
    """Build a (Struct, Scope, Signature, Components) table."""
    table = Table(show_header=True, title=title)
    table.add_column("Struct", style="cyan")
    table.add_column("Scope")
    table.add_column("Signature")
    table.add_column("Components")
    for declaration in declarations:
        table.add_row(
            declaration.identifier.name,
            declaration.identifier.scope or "[dim]global[/dim]",
            catalogue.signature_for(declaration.identifier) or "",
            "\n".join(format_component(c) for c in declaration.components),
        )
    return table


def build_validation_table(errors) -> Table:
    """Build validation error table for `check`."""
    table = Table(show_header=True, title="Validation Errors")
    table.add_column("Type", style="red")
    table.add_column("Struct")
    table.add_column("Component")
    table.add_column("Reference")
    for error in errors:
        table.add_row(
            error.error_type.value,
            error.declaration,
            error.field_name,
            error.invalid_ref,
        )
    return table
