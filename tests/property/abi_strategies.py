"""Hypothesis strategies for ABI documents shared by the property tests."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from hypothesis import strategies as st

from abistruct.core.models import Parameter

elementary_type = st.sampled_from(
    ["uint256", "uint8", "int24", "address", "bool", "bytes32", "string", "uint256[]"]
)
param_name = st.from_regex(r"[a-z][a-z0-9]{0,4}", fullmatch=True)
struct_name = st.from_regex(r"[A-Z][a-zA-Z0-9]{0,5}", fullmatch=True)
scope_name = st.sampled_from(["IPool", "Lib", "Vault"])
array_suffix = st.sampled_from(["", "[]", "[2]"])
struct_hint = st.one_of(
    st.none(),
    struct_name,
    st.builds(lambda scope, name: f"{scope}.{name}", scope_name, struct_name),
)

elementary_parameter = st.builds(
    lambda name, type_: {"name": name, "type": type_, "internalType": type_},
    param_name,
    elementary_type,
)


@st.composite
def tuple_parameter(draw: st.DrawFn, children: st.SearchStrategy) -> dict[str, Any]:
    """Generate a tuple parameter whose components are drawn from `children`."""
    suffix = draw(array_suffix)
    param: dict[str, Any] = {
        "name": draw(param_name),
        "type": f"tuple{suffix}",
        "components": draw(st.lists(children, min_size=1, max_size=3)),
    }
    hint = draw(struct_hint)
    if hint is not None:
        param["internalType"] = f"struct {hint}{suffix}"
    return param


parameter = st.recursive(elementary_parameter, tuple_parameter, max_leaves=8)


@st.composite
def abi_document(draw: st.DrawFn) -> list[dict[str, Any]]:
    """Generate an ABI with 1-4 entries of mixed kinds."""
    entries: list[dict[str, Any]] = []
    for i in range(draw(st.integers(min_value=1, max_value=4))):
        kind = draw(st.sampled_from(["function", "event", "error", "constructor"]))
        entry: dict[str, Any] = {
            "type": kind,
            "inputs": draw(st.lists(parameter, max_size=3)),
        }
        if kind != "constructor":
            entry["name"] = f"entry{i}"
        if kind == "function":
            entry["outputs"] = draw(st.lists(parameter, max_size=2))
        entries.append(entry)
    return entries


def walk_parameters(params: list[Parameter]) -> Iterator[Parameter]:
    """Yield parameters and their nested components depth-first."""
    for param in params:
        yield param
        yield from walk_parameters(param.components or [])
