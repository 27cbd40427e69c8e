"""Pytest configuration and fixtures for ordermap tests."""

import json
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator

import pytest

from ordermap.tree import TreeNode


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch):
    """Point the config file at a temporary home so tests never read ~/.ordermap."""
    home = tmp_path / "ordermap_home"
    monkeypatch.setattr("ordermap.config.BASE_DIR", home)
    monkeypatch.setattr("ordermap.config.CONFIG_FILE", home / "config.toml")
    return home


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def fixtures_path() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def order_dict() -> Dict[str, Any]:
    """The single-item order used throughout the end-to-end scenario."""
    return {
        "orderId": "O1",
        "totalAmount": 19.99,
        "customer": {
            "id": "C1",
            "name": "Jane Roe",
            "email": "j@x.com",
            "shippingAddress": {
                "street": "1 Main",
                "city": "X",
                "zipCode": "00000",
                "country": "US",
            },
        },
        "items": [
            {"productId": "P1", "productName": "Widget", "quantity": 2, "unitPrice": 9.995},
        ],
    }


@pytest.fixture
def order_node(order_dict: Dict[str, Any]) -> TreeNode:
    return TreeNode.parse(json.dumps(order_dict))


@pytest.fixture
def customer_dict(order_dict: Dict[str, Any]) -> Dict[str, Any]:
    return order_dict["customer"]
