"""Log-entry pipeline: read an array of entries, filter, enrich, write."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .tree import TreeNode, dumps

logger = logging.getLogger(__name__)

ERROR_TYPE = "ERROR"


def modify_entry(entry: Dict[str, Any], now_ms: int) -> Dict[str, Any]:
    """Return a copy with a timestamp, ERROR severity and an upper-cased message."""
    modified = dict(entry)
    modified["timestamp"] = now_ms
    if modified.get("type") == ERROR_TYPE:
        modified["severity"] = "HIGH"
    if isinstance(modified.get("message"), str):
        modified["message"] = modified["message"].upper()
    return modified


def transform_entries(
    entries: Iterable[TreeNode],
    only_type: Optional[str] = None,
    now: Optional[int] = None,
) -> Iterator[Dict[str, Any]]:
    """Lazily filter and modify log entries.

    Args:
        entries: object nodes, each with a ``type`` field.
        only_type: keep only entries of this type (case-insensitive).
        now: timestamp in epoch milliseconds; defaults to the current time.
    """
    now_ms = now if now is not None else int(time.time() * 1000)
    for node in entries:
        entry_type = node.get("type").as_text()
        if only_type is not None and entry_type.lower() != only_type.lower():
            continue
        yield modify_entry(node.value, now_ms)


def run_pipeline(
    text: str,
    only_type: Optional[str] = None,
    indent: Optional[int] = None,
    now: Optional[int] = None,
) -> str:
    root = TreeNode.parse(text)
    entries = list(root.elements())
    result: List[Dict[str, Any]] = list(transform_entries(entries, only_type=only_type, now=now))
    logger.info("Pipeline kept %d of %d entries", len(result), len(entries))
    return dumps(result, indent=indent)
