"""Unit tests for canonical tuple signatures."""

from abistruct.analysis.signature import abi_tuple_signature, abi_type_signature
from abistruct.core.models import Parameter


def _param(data: dict) -> Parameter:
    return Parameter.model_validate(data)


class TestAbiTypeSignature:
    """Tests for single parameter signatures."""

    def test_elementary(self) -> None:
        assert abi_type_signature(_param({"name": "x", "type": "uint256"})) == "uint256"
        assert abi_type_signature(_param({"name": "x", "type": "bytes32[]"})) == "bytes32[]"

    def test_tuple_expands_components(self) -> None:
        param = _param(
            {
                "name": "p",
                "type": "tuple",
                "components": [
                    {"name": "a", "type": "uint256"},
                    {"name": "b", "type": "bool"},
                ],
            }
        )
        assert abi_type_signature(param) == "(uint256,bool)"

    def test_tuple_array_suffix(self) -> None:
        param = _param(
            {
                "name": "p",
                "type": "tuple[2][]",
                "components": [{"name": "a", "type": "uint256"}, {"name": "b", "type": "bool"}],
            }
        )
        assert abi_type_signature(param) == "(uint256,bool)[2][]"


class TestAbiTupleSignature:
    """Tests for component list signatures."""

    def test_empty(self) -> None:
        assert abi_tuple_signature([]) == "()"

    def test_nested(self) -> None:
        components = [
            _param({"name": "a", "type": "address"}),
            _param(
                {
                    "name": "inner",
                    "type": "tuple[]",
                    "components": [
                        {"name": "x", "type": "int24"},
                        {"name": "y", "type": "int24"},
                    ],
                }
            ),
        ]
        assert abi_tuple_signature(components) == "(address,(int24,int24)[])"

    def test_names_and_hints_ignored(self) -> None:
        first = [
            _param({"name": "a", "type": "uint256", "internalType": "uint256"}),
            _param({"name": "b", "type": "address", "internalType": "address payable"}),
        ]
        second = [
            _param({"name": "x", "type": "uint256"}),
            _param({"name": "y", "type": "address", "internalType": "contract IToken"}),
        ]
        assert abi_tuple_signature(first) == abi_tuple_signature(second)

    def test_order_matters(self) -> None:
        forward = [_param({"name": "a", "type": "uint256"}), _param({"name": "b", "type": "bool"})]
        backward = [_param({"name": "a", "type": "bool"}), _param({"name": "b", "type": "uint256"})]
        assert abi_tuple_signature(forward) != abi_tuple_signature(backward)

    def test_length_matters(self) -> None:
        one = [_param({"name": "a", "type": "uint256"})]
        two = one + [_param({"name": "b", "type": "uint256"})]
        assert abi_tuple_signature(one) != abi_tuple_signature(two)
