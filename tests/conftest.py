"""Shared pytest fixtures for abistruct tests."""

from __future__ import annotations

import os
from typing import Any
from unittest.mock import patch

import pytest
from dotenv import load_dotenv
from hypothesis import settings

from abistruct.core.config import reload_config

# Load environment variables from .env file
load_dotenv()

# Configure hypothesis for property-based testing
settings.register_profile("ci", max_examples=100, deadline=None)
settings.register_profile("dev", max_examples=20, deadline=None)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture(autouse=True)
def default_config():
    """Run every test against default configuration values."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("ABISTRUCT_")}
    with patch.dict(os.environ, env, clear=True):
        reload_config()
        yield
    reload_config()


def tuple_param(
    name: str,
    components: list[dict[str, Any]],
    internal_type: str | None = None,
    type_: str = "tuple",
) -> dict[str, Any]:
    """Build a tuple parameter dict in ABI JSON form."""
    param: dict[str, Any] = {"name": name, "type": type_, "components": components}
    if internal_type is not None:
        param["internalType"] = internal_type
    return param


def elem(name: str, type_: str) -> dict[str, Any]:
    """Build an elementary parameter dict in ABI JSON form."""
    return {"name": name, "type": type_, "internalType": type_}


@pytest.fixture
def point_tuple() -> dict[str, Any]:
    """Anonymous {a: uint256, b: address} tuple."""
    return tuple_param("point", [elem("a", "uint256"), elem("b", "address")])


@pytest.fixture
def pool_abi() -> list[dict[str, Any]]:
    """ABI mixing scoped, global and anonymous structs across entry kinds."""
    key = tuple_param(
        "key",
        [
            elem("token0", "address"),
            elem("token1", "address"),
            elem("fee", "uint24"),
        ],
        internal_type="struct IPool.PoolKey",
    )
    position = tuple_param(
        "position",
        [
            elem("liquidity", "uint128"),
            tuple_param(
                "range",
                [elem("lower", "int24"), elem("upper", "int24")],
            ),
        ],
        internal_type="struct Position",
    )
    return [
        {
            "type": "constructor",
            "inputs": [elem("owner", "address")],
            "stateMutability": "nonpayable",
        },
        {
            "type": "function",
            "name": "initialize",
            "inputs": [key, elem("sqrtPrice", "uint160")],
            "outputs": [elem("tick", "int24")],
            "stateMutability": "nonpayable",
        },
        {
            "type": "function",
            "name": "positions",
            "inputs": [key],
            "outputs": [
                tuple_param(
                    "",
                    position["components"],
                    internal_type="struct Position[]",
                    type_="tuple[]",
                )
            ],
            "stateMutability": "view",
        },
        {
            "type": "event",
            "name": "Modified",
            "inputs": [{**position, "indexed": False}],
            "anonymous": False,
        },
        {
            "type": "error",
            "name": "InvalidRange",
            "inputs": [
                tuple_param("range", [elem("lower", "int24"), elem("upper", "int24")])
            ],
        },
        {"type": "fallback", "stateMutability": "payable"},
        {"type": "receive", "stateMutability": "payable"},
    ]
