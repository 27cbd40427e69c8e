"""Codec registry: a type tag maps to a pair of tree/object functions."""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from . import deserializers, serializers
from .config import MappingSettings
from .errors import UnknownCodecError
from .models import Address, Customer, Order, OrderItem, Person
from .tree import TreeNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Codec:
    tag: str
    model: Type[Any]
    from_tree: Callable[[TreeNode], Any]
    to_tree: Callable[[Any], Any]


class CodecRegistry:
    """Dispatch table from type tags and model classes to codecs."""

    def __init__(self) -> None:
        self._by_tag: Dict[str, Codec] = {}
        self._by_type: Dict[type, Codec] = {}

    def register(self, codec: Codec) -> None:
        if codec.tag in self._by_tag:
            logger.debug("Replacing codec for '%s'", codec.tag)
        self._by_tag[codec.tag] = codec
        self._by_type[codec.model] = codec

    @property
    def tags(self) -> List[str]:
        return sorted(self._by_tag)

    def codec_for(self, tag: str) -> Codec:
        try:
            return self._by_tag[tag]
        except KeyError:
            raise UnknownCodecError(tag) from None

    def codec_for_type(self, obj: Any) -> Codec:
        try:
            return self._by_type[type(obj)]
        except KeyError:
            raise UnknownCodecError(type(obj).__name__) from None

    def read(self, tag: str, node: TreeNode) -> Any:
        return self.codec_for(tag).from_tree(node)

    def read_many(self, tag: str, node: TreeNode) -> List[Any]:
        codec = self.codec_for(tag)
        return [codec.from_tree(element) for element in node.elements()]

    def write(self, obj: Any) -> Any:
        """Emit a tree for a model object or a list of them."""
        if isinstance(obj, (list, tuple)):
            return [self.write(item) for item in obj]
        return self.codec_for_type(obj).to_tree(obj)


def default_registry(settings: Optional[MappingSettings] = None) -> CodecRegistry:
    """Registry with codecs for every model in :mod:`ordermap.models`."""
    settings = settings or MappingSettings()
    registry = CodecRegistry()
    registry.register(Codec(
        "order", Order,
        functools.partial(deserializers.order_from_tree, settings=settings),
        serializers.order_to_tree,
    ))
    registry.register(Codec(
        "customer", Customer,
        functools.partial(deserializers.customer_from_tree, settings=settings),
        serializers.customer_to_tree,
    ))
    registry.register(Codec("address", Address, deserializers.address_from_tree, serializers.address_to_tree))
    registry.register(Codec(
        "order_item", OrderItem, deserializers.order_item_from_tree, serializers.order_item_to_tree,
    ))
    registry.register(Codec("person", Person, deserializers.person_from_tree, serializers.person_to_tree))
    return registry
