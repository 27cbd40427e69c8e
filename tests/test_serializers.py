"""Tests for the object-to-tree mappers."""

import json
from datetime import date, datetime, timezone

from ordermap.deserializers import order_from_tree, orders_from_tree
from ordermap.models import Person
from ordermap.serializers import (
    ORDER_FIELDS,
    customer_to_tree,
    format_date,
    order_to_text,
    order_to_tree,
    orders_to_tree,
    person_to_tree,
)
from ordermap.tree import TreeNode


def test_end_to_end_output_shape(order_node):
    tree = order_to_tree(order_from_tree(order_node))

    assert tree == {
        "ID": "O1",
        "amount": 19.99,
        "customer": {
            "ID": "C1",
            "name": "Jane Roe",
            "email": "j@x.com",
            "addresses": {"street": "1 Main", "city": "X", "zipCode": "00000", "country": "US"},
        },
        "items": [{"productId": "P1", "productName": "Widget", "quantity": 2, "unitPrice": 9.995}],
        "orderDate": None,
    }


def test_key_order(order_node):
    tree = order_to_tree(order_from_tree(order_node))
    assert list(tree) == list(ORDER_FIELDS.values())
    assert list(tree["customer"]) == ["ID", "name", "email", "addresses"]


def test_order_date_emitted_as_iso(order_node):
    order = order_from_tree(order_node)
    order.order_date = date(2024, 3, 5)
    assert order_to_tree(order)["orderDate"] == "2024-03-05"


def test_absent_order_date_is_null_literal(order_node):
    text = order_to_text(order_from_tree(order_node))
    assert '"orderDate": null' in text


def test_customer_name_rejoined_with_single_space(order_node):
    customer = order_from_tree(order_node).customer
    customer.first_name = "Ada"
    customer.last_name = ""
    assert customer_to_tree(customer)["name"] == "Ada "


def test_order_to_text_exclude(order_node):
    text = order_to_text(order_from_tree(order_node), exclude=["email", "orderDate"])
    parsed = json.loads(text)
    assert "email" not in parsed["customer"]
    assert "orderDate" not in parsed


def test_orders_to_tree(fixtures_path):
    orders = orders_from_tree(TreeNode.load(fixtures_path / "orders.json"))
    trees = orders_to_tree(orders)
    assert [t["ID"] for t in trees] == ["ORD-1001", "ORD-1002"]
    assert trees[0]["customer"]["name"] == "Ada Lovelace"
    assert trees[1]["items"] == []


def test_round_trip_modulo_renaming(fixtures_path):
    """Reading, writing and re-reading reproduces every input value."""
    source = json.loads((fixtures_path / "orders.json").read_text(encoding="utf-8"))
    orders = [order_from_tree(TreeNode(o)) for o in source]
    emitted = json.loads(json.dumps(orders_to_tree(orders)))

    for original, out in zip(source, emitted):
        assert out["ID"] == original["orderId"]
        assert out["amount"] == original["totalAmount"]
        assert out["orderDate"] == original.get("orderDate")
        customer_in, customer_out = original["customer"], out["customer"]
        assert customer_out["ID"] == customer_in["id"]
        assert customer_out["email"] == customer_in["email"]
        assert customer_out["addresses"] == customer_in["shippingAddress"]
        expected_name = customer_in.get("name") or f"{customer_in['firstName']} {customer_in['lastName']}"
        assert customer_out["name"].strip() == expected_name
        assert out["items"] == original["items"]


def test_person_to_tree():
    person = Person(name="John Doe", email="j@d.com", person_id=12, birth_date=date(2001, 1, 1), enabled=None)
    assert person_to_tree(person) == {
        "id": 12,
        "name": "John Doe",
        "email": "j@d.com",
        "birthDate": "2001-01-01",
        "enabled": None,
    }


def test_person_instant_birth_date():
    person = Person(birth_date=datetime(1970, 1, 1, tzinfo=timezone.utc), enabled=False)
    tree = person_to_tree(person)
    assert tree["birthDate"] == "1970-01-01T00:00:00+00:00"
    assert tree["enabled"] is False


def test_format_date():
    assert format_date(None) is None
    assert format_date(date(999, 1, 2)) == "0999-01-02"
