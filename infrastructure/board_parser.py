"""Turn REST payloads into board domain objects."""

from datetime import date
from typing import Any, Dict, List, Optional

from core import Board, Collection, Item, Label, Priority, SubItem


class BoardPayloadError(ValueError):
    """Payload does not look like a board/sub-item response."""


def _to_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "y")
    return bool(value)


def _to_int(value, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _parse_date(value) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _require_id(raw: Dict[str, Any], what: str) -> int:
    if not isinstance(raw, dict):
        raise BoardPayloadError(f"{what} must be an object")
    value = raw.get("id")
    if value is None:
        raise BoardPayloadError(f"{what} without id")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise BoardPayloadError(f"{what} has non-numeric id: {value!r}")


def parse_labels(raw) -> List[Label]:
    labels = []
    for entry in raw or []:
        if not isinstance(entry, dict) or entry.get("id") is None:
            continue
        labels.append(Label(id=_to_int(entry.get("id")), name=str(entry.get("name") or ""), color=str(entry.get("color") or "")))
    return labels


def parse_sub_item(raw: Dict[str, Any]) -> SubItem:
    return SubItem(
        id=_require_id(raw, "subtask"),
        title=str(raw.get("title") or ""),
        is_completed=_to_bool(raw.get("isCompleted", False)),
        position=_to_int(raw.get("position")),
        due_date=_parse_date(raw.get("dueDate")),
        priority=Priority.from_string(raw.get("priority")),
        labels=parse_labels(raw.get("labels")),
        description=str(raw.get("description") or ""),
        link=str(raw.get("link") or ""),
    )


def parse_sub_items(payload) -> List[SubItem]:
    """Accept a bare list or a HAL collection (`{"_embedded": {"<rel>": [...]}}`)."""
    if isinstance(payload, dict):
        embedded = payload.get("_embedded")
        if embedded is None:
            return []
        if not isinstance(embedded, dict):
            raise BoardPayloadError("_embedded must be an object")
        rows: List[Any] = []
        for value in embedded.values():
            if isinstance(value, list):
                rows.extend(value)
        payload = rows
    if not isinstance(payload, list):
        raise BoardPayloadError("subtask payload must be a list")
    return [parse_sub_item(row) for row in payload]


def parse_item(raw: Dict[str, Any]) -> Item:
    subtasks = raw.get("subtasks") if isinstance(raw, dict) else None
    return Item(
        id=_require_id(raw, "task"),
        title=str(raw.get("title") or ""),
        description=str(raw.get("description") or ""),
        link=str(raw.get("link") or ""),
        is_completed=_to_bool(raw.get("isCompleted", False)),
        position=_to_int(raw.get("position")),
        due_date=_parse_date(raw.get("dueDate")),
        priority=Priority.from_string(raw.get("priority")),
        labels=parse_labels(raw.get("labels")),
        sub_items=parse_sub_items(subtasks) if subtasks is not None else None,
    )


def parse_collection(raw: Dict[str, Any]) -> Collection:
    return Collection(
        id=_require_id(raw, "task list"),
        name=str(raw.get("name") or ""),
        description=str(raw.get("description") or ""),
        link=str(raw.get("link") or ""),
        is_completed=_to_bool(raw.get("isCompleted", False)),
        due_date=_parse_date(raw.get("dueDate")),
        priority=Priority.from_string(raw.get("priority")),
        labels=parse_labels(raw.get("labels")),
        items=[parse_item(task) for task in raw.get("tasks") or []],
    )


def parse_board(payload: Dict[str, Any]) -> Board:
    board_id = _require_id(payload, "board")
    lists = payload.get("taskLists") or []
    if not isinstance(lists, list):
        raise BoardPayloadError("taskLists must be a list")
    return Board(
        id=board_id,
        name=str(payload.get("name") or ""),
        slug=str(payload.get("slug") or ""),
        description=str(payload.get("description") or ""),
        collections=[parse_collection(entry) for entry in lists],
        labels=parse_labels(payload.get("labels")),
    )


__all__ = [
    "BoardPayloadError",
    "parse_board",
    "parse_collection",
    "parse_item",
    "parse_sub_item",
    "parse_sub_items",
    "parse_labels",
]
