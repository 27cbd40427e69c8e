"""Typed view over parsed JSON trees.

``json.loads`` produces plain Python values; :class:`TreeNode` wraps one of
them together with its location in the document and narrows it to the
requested primitive type, raising a :class:`~ordermap.errors.MappingError`
subclass instead of failing with an ``AttributeError`` or ``KeyError``
deep inside a mapper.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

from .errors import MalformedJsonError, MissingFieldError, TypeMismatchError

logger = logging.getLogger(__name__)


def read_source(path: Path) -> str:
    """Read a UTF-8 JSON document from disk."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedJsonError(f"Invalid JSON: {path} is not UTF-8 text ({exc.reason} at byte {exc.start})") from exc


class NodeKind(str, Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: Any) -> NodeKind:
    if value is None:
        return NodeKind.NULL
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return NodeKind.BOOLEAN
    if isinstance(value, (int, float)):
        return NodeKind.NUMBER
    if isinstance(value, str):
        return NodeKind.STRING
    if isinstance(value, list):
        return NodeKind.ARRAY
    if isinstance(value, dict):
        return NodeKind.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


class TreeNode:
    """A JSON value plus the path it was found at."""

    __slots__ = ("value", "path", "kind")

    def __init__(self, value: Any, path: str = "$") -> None:
        self.value = value
        self.path = path
        self.kind = kind_of(value)

    def __repr__(self) -> str:
        return f"TreeNode({self.kind.value} at {self.path})"

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> "TreeNode":
        try:
            value = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedJsonError(f"Invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})") from exc
        return cls(value)

    @classmethod
    def load(cls, path: Path) -> "TreeNode":
        logger.debug("Loading JSON tree from %s", path)
        return cls.parse(read_source(path))

    # ------------------------------------------------------------------
    # Object access
    # ------------------------------------------------------------------

    def _require_kind(self, kind: NodeKind) -> None:
        if self.kind is not kind:
            raise TypeMismatchError(self.path, kind.value, self.kind.value)

    def has(self, name: str) -> bool:
        """Return True if this object node has ``name`` (a null value counts)."""
        self._require_kind(NodeKind.OBJECT)
        return name in self.value

    def get(self, name: str) -> "TreeNode":
        """Required field lookup."""
        self._require_kind(NodeKind.OBJECT)
        child_path = f"{self.path}.{name}"
        if name not in self.value:
            raise MissingFieldError(child_path)
        return TreeNode(self.value[name], child_path)

    def find(self, name: str) -> Optional["TreeNode"]:
        """Optional field lookup; None when the field is absent."""
        self._require_kind(NodeKind.OBJECT)
        if name not in self.value:
            return None
        return TreeNode(self.value[name], f"{self.path}.{name}")

    def elements(self) -> Iterator["TreeNode"]:
        self._require_kind(NodeKind.ARRAY)
        for index, item in enumerate(self.value):
            yield TreeNode(item, f"{self.path}[{index}]")

    # ------------------------------------------------------------------
    # Scalar narrowing
    # ------------------------------------------------------------------

    def is_null(self) -> bool:
        return self.kind is NodeKind.NULL

    def as_text(self) -> str:
        if self.kind is NodeKind.STRING:
            return self.value
        if self.kind in (NodeKind.NUMBER, NodeKind.BOOLEAN):
            return json.dumps(self.value)
        raise TypeMismatchError(self.path, "text", self.kind.value)

    def as_int(self) -> int:
        if self.kind is NodeKind.NUMBER:
            if isinstance(self.value, int):
                return self.value
            if self.value.is_integer():
                return int(self.value)
            raise TypeMismatchError(self.path, "integer", "fractional number", self.value)
        if self.kind is NodeKind.STRING:
            try:
                return int(self.value.strip())
            except ValueError:
                raise TypeMismatchError(self.path, "integer", "string", self.value) from None
        raise TypeMismatchError(self.path, "integer", self.kind.value)

    def as_float(self) -> float:
        if self.kind is NodeKind.NUMBER:
            try:
                return float(self.value)
            except OverflowError:
                raise TypeMismatchError(self.path, "number", "out-of-range integer") from None
        if self.kind is NodeKind.STRING:
            try:
                return float(self.value.strip())
            except ValueError:
                raise TypeMismatchError(self.path, "number", "string", self.value) from None
        raise TypeMismatchError(self.path, "number", self.kind.value)

    def as_bool(self) -> bool:
        self._require_kind(NodeKind.BOOLEAN)
        return self.value


# ----------------------------------------------------------------------
# Emission
# ----------------------------------------------------------------------

def prune(value: Any, exclude: Iterable[str]) -> Any:
    """Return a copy of ``value`` without object keys named in ``exclude``."""
    names = frozenset(exclude)
    if not names:
        return value
    if isinstance(value, dict):
        return {k: prune(v, names) for k, v in value.items() if k not in names}
    if isinstance(value, list):
        return [prune(v, names) for v in value]
    return value


def dumps(value: Any, indent: Optional[int] = None, exclude: Iterable[str] = ()) -> str:
    """Serialize a plain tree to JSON text.

    NaN and infinities are written as the non-standard ``NaN``/``Infinity``
    tokens, exactly as :func:`json.dumps` does.
    """
    return json.dumps(prune(value, exclude), indent=indent, ensure_ascii=False)
