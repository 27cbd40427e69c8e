"""Tree-to-object mappers.

Each ``*_from_tree`` function takes a :class:`~ordermap.tree.TreeNode`
already produced by the JSON parser and returns a freshly built domain
object. Input field names are listed per type in the ``*_INPUT`` tables
below; the output side uses different names (see ``serializers``).

Mapping is all-or-nothing: any missing or mistyped required field raises a
:class:`~ordermap.errors.MappingError` and no partial object is returned.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, timezone
from typing import Any, List, Optional, Tuple, Union

from .config import DATE_FORMAT, MappingSettings
from .errors import MalformedDateError, MissingFieldError, TypeMismatchError
from .models import Address, Customer, Order, OrderItem, Person, split_full_name
from .tree import NodeKind, TreeNode

logger = logging.getLogger(__name__)

ORDER_INPUT = {
    "order_id": "orderId",
    "total_amount": "totalAmount",
    "customer": "customer",
    "items": "items",
    "order_date": "orderDate",
}

CUSTOMER_INPUT = {
    "id": "id",
    "full_name": "name",
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "shipping_address": "shippingAddress",
}

ADDRESS_INPUT = {
    "street": "street",
    "city": "city",
    "zip_code": "zipCode",
    "country": "country",
}

ORDER_ITEM_INPUT = {
    "product_id": "productId",
    "product_name": "productName",
    "quantity": "quantity",
    "unit_price": "unitPrice",
}

PERSON_INPUT = {
    "person_id": "id",
    "name": "name",
    "email": "email",
    "birth_date": ("birthDate", "dateOfBirth"),
    "enabled": "enabled",
}

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


# ----------------------------------------------------------------------
# Scalars
# ----------------------------------------------------------------------

def parse_date(text: str, path: str = "$") -> date:
    """Parse a ``YYYY-MM-DD`` calendar date."""
    if not _DATE_PATTERN.fullmatch(text):
        raise MalformedDateError(path, text)
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        raise MalformedDateError(path, text) from None


def tristate_from_value(value: Any) -> Optional[bool]:
    """Decode a tri-state boolean from a raw JSON value. Never raises."""
    if isinstance(value, bool):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def parse_tristate_bool(node: Optional[TreeNode]) -> Optional[bool]:
    """Decode an optional boolean field.

    Only JSON booleans and the exact strings ``"true"``/``"false"`` yield a
    value; a missing field, ``null`` and any other text decode to None.
    """
    if node is None:
        return None
    return tristate_from_value(node.value)


def instant_or_date(node: TreeNode) -> Optional[Union[date, datetime]]:
    """Epoch milliseconds become a UTC datetime, ``YYYY-MM-DD`` text a date."""
    if node.is_null():
        return None
    if node.kind is NodeKind.NUMBER:
        millis = node.as_float()
        try:
            return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise MalformedDateError(node.path, str(node.value)) from None
    if node.kind is NodeKind.STRING:
        return parse_date(node.value, node.path)
    raise TypeMismatchError(node.path, "epoch millis or date string", node.kind.value)


def _optional_date(node: Optional[TreeNode]) -> Optional[date]:
    if node is None or node.is_null():
        return None
    if node.kind is not NodeKind.STRING:
        raise TypeMismatchError(node.path, "date string", node.kind.value)
    return parse_date(node.value, node.path)


# ----------------------------------------------------------------------
# Order graph
# ----------------------------------------------------------------------

def address_from_tree(node: TreeNode) -> Address:
    f = ADDRESS_INPUT
    return Address(
        street=node.get(f["street"]).as_text(),
        city=node.get(f["city"]).as_text(),
        zip_code=node.get(f["zip_code"]).as_text(),
        country=node.get(f["country"]).as_text(),
    )


def _text_or_none(node: Optional[TreeNode]) -> Optional[str]:
    if node is None or node.is_null():
        return None
    return node.as_text()


def _resolve_name(node: TreeNode, settings: MappingSettings) -> Tuple[str, str]:
    # null name fields count as absent
    f = CUSTOMER_INPUT
    full_name = _text_or_none(node.find(f["full_name"]))
    if full_name is not None:
        return split_full_name(full_name)

    first = _text_or_none(node.find(f["first_name"]))
    last = _text_or_none(node.find(f["last_name"]))
    if first is None and last is None and settings.require_customer_name:
        raise MissingFieldError(f"{node.path}.{f['full_name']}")
    return first or "", last or ""



def customer_from_tree(node: TreeNode, settings: Optional[MappingSettings] = None) -> Customer:
    """Build a Customer.

    A single ``name`` field takes precedence and is split on its first
    whitespace run; otherwise ``firstName``/``lastName`` are read
    independently, each defaulting to an empty string.
    """
    settings = settings or MappingSettings()
    f = CUSTOMER_INPUT
    customer_id = node.get(f["id"]).as_text()
    first_name, last_name = _resolve_name(node, settings)
    return Customer(
        id=customer_id,
        first_name=first_name,
        last_name=last_name,
        email=node.get(f["email"]).as_text(),
        shipping_address=address_from_tree(node.get(f["shipping_address"])),
    )


def order_item_from_tree(node: TreeNode) -> OrderItem:
    f = ORDER_ITEM_INPUT
    # quantity and unit_price are not range checked
    return OrderItem(
        product_id=node.get(f["product_id"]).as_text(),
        product_name=node.get(f["product_name"]).as_text(),
        quantity=node.get(f["quantity"]).as_int(),
        unit_price=node.get(f["unit_price"]).as_float(),
    )


def _items_from_tree(node: TreeNode, settings: MappingSettings) -> List[OrderItem]:
    name = ORDER_INPUT["items"]
    items_node = node.get(name) if settings.require_items else node.find(name)
    if items_node is None or (items_node.is_null() and not settings.require_items):
        return []
    return [order_item_from_tree(item) for item in items_node.elements()]


def order_from_tree(node: TreeNode, settings: Optional[MappingSettings] = None) -> Order:
    """Build an Order together with its Customer, Address and items."""
    settings = settings or MappingSettings()
    f = ORDER_INPUT
    order = Order(
        order_id=node.get(f["order_id"]).as_text(),
        total_amount=node.get(f["total_amount"]).as_float(),
        customer=customer_from_tree(node.get(f["customer"]), settings),
        items=_items_from_tree(node, settings),
        order_date=_optional_date(node.find(f["order_date"])),
    )
    logger.debug("Mapped order %s with %d item(s)", order.order_id, len(order.items))
    return order


def orders_from_tree(node: TreeNode, settings: Optional[MappingSettings] = None) -> List[Order]:
    return [order_from_tree(element, settings) for element in node.elements()]


# ----------------------------------------------------------------------
# Person
# ----------------------------------------------------------------------

def person_from_tree(node: TreeNode) -> Person:
    """Build a Person; every field is optional."""
    f = PERSON_INPUT
    person = Person()

    id_node = node.find(f["person_id"])
    if id_node is not None and not id_node.is_null():
        person.person_id = id_node.as_int()

    for attr in ("name", "email"):
        child = node.find(f[attr])
        if child is not None and not child.is_null():
            setattr(person, attr, child.as_text())

    for key in f["birth_date"]:
        child = node.find(key)
        if child is not None:
            person.birth_date = instant_or_date(child)
            break

    person.enabled = parse_tristate_bool(node.find(f["enabled"]))
    return person
