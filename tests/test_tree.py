"""Tests for the typed JSON tree node."""

import math

import pytest

from ordermap.errors import MalformedJsonError, MissingFieldError, TypeMismatchError
from ordermap.tree import NodeKind, TreeNode, dumps, prune


def test_parse_reports_kinds():
    node = TreeNode.parse('{"a": null, "b": true, "c": 1, "d": "x", "e": [], "f": {}}')
    assert node.kind is NodeKind.OBJECT
    assert node.get("a").kind is NodeKind.NULL
    assert node.get("b").kind is NodeKind.BOOLEAN
    assert node.get("c").kind is NodeKind.NUMBER
    assert node.get("d").kind is NodeKind.STRING
    assert node.get("e").kind is NodeKind.ARRAY
    assert node.get("f").kind is NodeKind.OBJECT


def test_parse_invalid_json():
    with pytest.raises(MalformedJsonError):
        TreeNode.parse('{"orderId": ')


def test_load_reads_file(fixtures_path):
    node = TreeNode.load(fixtures_path / "order.json")
    assert node.get("orderId").as_text() == "O1"


def test_load_rejects_non_utf8(temp_dir):
    source = temp_dir / "latin1.json"
    source.write_bytes(b'{"orderId": "\xff"}')
    with pytest.raises(MalformedJsonError) as info:
        TreeNode.load(source)
    assert "UTF-8" in str(info.value)


class TestFieldAccess:
    """Object lookups and paths."""

    def test_get_missing_field_reports_path(self):
        node = TreeNode.parse('{"customer": {"id": "C1"}}')
        with pytest.raises(MissingFieldError) as info:
            node.get("customer").get("email")
        assert info.value.path == "$.customer.email"
        assert "$.customer.email" in str(info.value)

    def test_has_counts_null_as_present(self):
        node = TreeNode.parse('{"enabled": null}')
        assert node.has("enabled")
        assert not node.has("name")

    def test_find_returns_none_when_absent(self):
        node = TreeNode.parse('{"a": 1}')
        assert node.find("b") is None
        assert node.find("a").as_int() == 1

    def test_get_on_non_object(self):
        node = TreeNode.parse("[1, 2]")
        with pytest.raises(TypeMismatchError) as info:
            node.get("a")
        assert info.value.expected == "object"
        assert info.value.actual == "array"

    def test_elements_keep_order_and_paths(self):
        node = TreeNode.parse('{"items": [3, 1, 2]}')
        elements = list(node.get("items").elements())
        assert [e.as_int() for e in elements] == [3, 1, 2]
        assert elements[2].path == "$.items[2]"

    def test_elements_on_object(self):
        with pytest.raises(TypeMismatchError):
            list(TreeNode.parse("{}").elements())


class TestNarrowing:
    """Scalar reads."""

    def test_as_text_renders_numbers(self):
        assert TreeNode("abc").as_text() == "abc"
        assert TreeNode(42).as_text() == "42"
        assert TreeNode(True).as_text() == "true"

    def test_as_text_rejects_containers(self):
        with pytest.raises(TypeMismatchError):
            TreeNode({"a": 1}).as_text()
        with pytest.raises(TypeMismatchError):
            TreeNode(None).as_text()

    def test_as_int(self):
        assert TreeNode(2).as_int() == 2
        assert TreeNode(-3).as_int() == -3
        assert TreeNode(4.0).as_int() == 4
        assert TreeNode(" 7 ").as_int() == 7

    @pytest.mark.parametrize("value", [2.5, "two", True, None, [1]])
    def test_as_int_rejects(self, value):
        with pytest.raises(TypeMismatchError):
            TreeNode(value, "$.quantity").as_int()

    def test_as_float(self):
        assert TreeNode(19.99).as_float() == 19.99
        assert TreeNode(3).as_float() == 3.0
        assert TreeNode("9.5").as_float() == 9.5

    def test_as_float_rejects_text(self):
        with pytest.raises(TypeMismatchError) as info:
            TreeNode("cheap", "$.totalAmount").as_float()
        assert info.value.path == "$.totalAmount"

    def test_as_float_rejects_boolean(self):
        with pytest.raises(TypeMismatchError):
            TreeNode(False).as_float()

    def test_as_float_rejects_huge_integer(self):
        with pytest.raises(TypeMismatchError) as info:
            TreeNode.parse("1" + "0" * 400).as_float()
        assert info.value.path == "$"
        assert info.value.actual == "out-of-range integer"

    def test_as_bool(self):
        assert TreeNode(True).as_bool() is True
        with pytest.raises(TypeMismatchError):
            TreeNode("true").as_bool()


class TestEmission:
    """dumps/prune."""

    def test_dumps_compact_and_indented(self):
        assert dumps({"a": [1, None]}) == '{"a": [1, null]}'
        assert dumps({"a": 1}, indent=2) == '{\n  "a": 1\n}'

    def test_prune_drops_keys_at_any_depth(self):
        tree = {"name": "x", "customer": {"name": "y", "email": "e"}, "items": [{"name": "z", "q": 1}]}
        assert prune(tree, ["name"]) == {"customer": {"email": "e"}, "items": [{"q": 1}]}
        assert tree["customer"]["name"] == "y"

    def test_dumps_non_finite_numbers(self):
        assert dumps({"amount": math.nan}) == '{"amount": NaN}'
        assert dumps([math.inf]) == "[Infinity]"
