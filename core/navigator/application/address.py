"""Query-string form of the selection path (`list=<id>&task=<id>`)."""

from enum import Enum
from typing import List, Optional, Tuple, Union
from urllib.parse import parse_qs, urlencode

from core import SelectionPath

LIST_PARAM = "list"
TASK_PARAM = "task"
SUBTASK_PARAM = "subtask"


class SubItemAddressPolicy(Enum):
    EPHEMERAL = "ephemeral"  # sub-item selection resets on reload
    PERSISTED = "persisted"

    @classmethod
    def from_value(cls, value: Union[str, bool, None]) -> "SubItemAddressPolicy":
        if isinstance(value, bool):
            return cls.PERSISTED if value else cls.EPHEMERAL
        token = (value or "").strip().lower()
        if token in ("persisted", "persist", "true", "yes", "1", "on"):
            return cls.PERSISTED
        return cls.EPHEMERAL


def _parse_id(raw: Optional[str]) -> Optional[int]:
    token = (raw or "").strip()
    if not token.isdigit():
        return None
    value = int(token)
    return value if value > 0 else None


def decode_address(query: str, policy: SubItemAddressPolicy = SubItemAddressPolicy.EPHEMERAL) -> SelectionPath:
    """Parse a query string; malformed or orphaned parameters are treated as absent."""
    raw = (query or "").strip()
    if "?" in raw:
        raw = raw.split("?", 1)[1]
    raw = raw.split("#", 1)[0]
    params = parse_qs(raw, keep_blank_values=False)

    def first(name: str) -> Optional[str]:
        values = params.get(name) or []
        return values[0] if values else None

    collection_id = _parse_id(first(LIST_PARAM))
    if collection_id is None:
        return SelectionPath()
    item_id = _parse_id(first(TASK_PARAM))
    if item_id is None:
        return SelectionPath(collection_id=collection_id)
    sub_item_id = None
    if policy is SubItemAddressPolicy.PERSISTED:
        sub_item_id = _parse_id(first(SUBTASK_PARAM))
    return SelectionPath(collection_id, item_id, sub_item_id)


def encode_address(path: SelectionPath, policy: SubItemAddressPolicy = SubItemAddressPolicy.EPHEMERAL) -> str:
    pairs: List[Tuple[str, int]] = []
    if path.collection_id is not None:
        pairs.append((LIST_PARAM, path.collection_id))
    if path.item_id is not None:
        pairs.append((TASK_PARAM, path.item_id))
    if path.sub_item_id is not None and policy is SubItemAddressPolicy.PERSISTED:
        pairs.append((SUBTASK_PARAM, path.sub_item_id))
    return urlencode(pairs)


def format_location(slug: str, query: str) -> str:
    return f"{slug}?{query}" if query else slug


__all__ = [
    "SubItemAddressPolicy",
    "decode_address",
    "encode_address",
    "format_location",
    "LIST_PARAM",
    "TASK_PARAM",
    "SUBTASK_PARAM",
]
