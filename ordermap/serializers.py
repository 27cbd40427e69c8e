"""Object-to-tree mappers.

The output naming scheme is independent of the input one: an order's
``orderId`` is written as ``ID``, ``totalAmount`` as ``amount``, and the
customer's name parts are joined back into a single ``name`` field. Each
type's output names live in its ``*_FIELDS`` table.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from .models import Address, Customer, Order, OrderItem, Person
from .tree import dumps

ORDER_FIELDS = {
    "order_id": "ID",
    "total_amount": "amount",
    "customer": "customer",
    "items": "items",
    "order_date": "orderDate",
}

CUSTOMER_FIELDS = {
    "id": "ID",
    "full_name": "name",
    "email": "email",
    "shipping_address": "addresses",
}

ADDRESS_FIELDS = {
    "street": "street",
    "city": "city",
    "zip_code": "zipCode",
    "country": "country",
}

ORDER_ITEM_FIELDS = {
    "product_id": "productId",
    "product_name": "productName",
    "quantity": "quantity",
    "unit_price": "unitPrice",
}

PERSON_FIELDS = {
    "person_id": "id",
    "name": "name",
    "email": "email",
    "birth_date": "birthDate",
    "enabled": "enabled",
}


def format_date(value: Optional[Union[date, datetime]]) -> Optional[str]:
    """``YYYY-MM-DD`` for a date, None for no date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def _emit(obj: Any, table: Dict[str, str]) -> Dict[str, Any]:
    return {key: getattr(obj, attr) for attr, key in table.items()}


def address_to_tree(address: Address) -> Dict[str, Any]:
    return _emit(address, ADDRESS_FIELDS)


def order_item_to_tree(item: OrderItem) -> Dict[str, Any]:
    return _emit(item, ORDER_ITEM_FIELDS)


def customer_to_tree(customer: Customer) -> Dict[str, Any]:
    tree = _emit(customer, CUSTOMER_FIELDS)
    tree[CUSTOMER_FIELDS["shipping_address"]] = address_to_tree(customer.shipping_address)
    return tree


def order_to_tree(order: Order) -> Dict[str, Any]:
    f = ORDER_FIELDS
    return {
        f["order_id"]: order.order_id,
        f["total_amount"]: order.total_amount,
        f["customer"]: customer_to_tree(order.customer),
        f["items"]: [order_item_to_tree(item) for item in order.items],
        # always written, null when the order has no date
        f["order_date"]: format_date(order.order_date),
    }


def orders_to_tree(orders: Iterable[Order]) -> List[Dict[str, Any]]:
    return [order_to_tree(order) for order in orders]


def person_to_tree(person: Person) -> Dict[str, Any]:
    tree = _emit(person, PERSON_FIELDS)
    birth_date = person.birth_date
    if isinstance(birth_date, datetime):
        tree[PERSON_FIELDS["birth_date"]] = birth_date.isoformat()
    else:
        tree[PERSON_FIELDS["birth_date"]] = format_date(birth_date)
    return tree


def order_to_text(order: Order, indent: Optional[int] = None, exclude: Iterable[str] = ()) -> str:
    return dumps(order_to_tree(order), indent=indent, exclude=exclude)
