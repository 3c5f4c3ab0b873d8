"""Flat records handed to column renderers; the only tree → view contract."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence, Tuple

from core import Collection, Item, Priority, SubItem, ordered_sub_items

ICON_FOLDER = "folder"
ICON_TASK = "task"
ICON_FILE = "file"


@dataclass(frozen=True)
class ColumnMetadata:
    count: Optional[int] = None
    label_colors: Tuple[str, ...] = ()
    priority: Priority = Priority.NONE
    due_date: Optional[date] = None


@dataclass(frozen=True)
class ColumnItem:
    id: int
    title: str
    icon_kind: str = ICON_FILE
    is_completed: bool = False
    # None: unknown (not fetched yet), rendered like True.
    has_children: Optional[bool] = None
    metadata: ColumnMetadata = field(default_factory=ColumnMetadata)


def collection_items(collections: Sequence[Collection]) -> List[ColumnItem]:
    return [
        ColumnItem(
            id=collection.id,
            title=collection.name,
            icon_kind=ICON_FOLDER,
            is_completed=collection.is_completed,
            has_children=True,
            metadata=ColumnMetadata(
                count=len(collection.items),
                label_colors=tuple(label.color for label in collection.labels),
                priority=collection.priority,
                due_date=collection.due_date,
            ),
        )
        for collection in collections
    ]


def item_items(collection: Optional[Collection], known_children=None) -> List[ColumnItem]:
    """Project a collection's items; `known_children(item)` reports fetched sub-items."""
    if collection is None:
        return []
    projected = []
    for item in collection.ordered_items():
        children = known_children(item) if known_children else item.sub_items
        projected.append(
            ColumnItem(
                id=item.id,
                title=item.title,
                icon_kind=ICON_TASK,
                is_completed=item.is_completed,
                has_children=None if children is None else bool(children),
                metadata=ColumnMetadata(
                    count=len(children) if children else None,
                    label_colors=tuple(label.color for label in item.labels),
                    priority=item.priority,
                    due_date=item.due_date,
                ),
            )
        )
    return projected


def sub_item_items(sub_items: Optional[Sequence[SubItem]]) -> List[ColumnItem]:
    return [
        ColumnItem(
            id=sub.id,
            title=sub.title,
            icon_kind=ICON_FILE,
            is_completed=sub.is_completed,
            has_children=False,
            metadata=ColumnMetadata(
                label_colors=tuple(label.color for label in sub.labels),
                priority=sub.priority,
                due_date=sub.due_date,
            ),
        )
        for sub in ordered_sub_items(list(sub_items or []))
    ]


def find_column_item(items: Sequence[ColumnItem], item_id: Optional[int]) -> Optional[ColumnItem]:
    if item_id is None:
        return None
    return next((entry for entry in items if entry.id == item_id), None)


__all__ = [
    "ColumnItem",
    "ColumnMetadata",
    "collection_items",
    "item_items",
    "sub_item_items",
    "find_column_item",
    "ICON_FOLDER",
    "ICON_TASK",
    "ICON_FILE",
]
