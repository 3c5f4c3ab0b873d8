"""Selection and hover paths through the Collection → Item → Sub-Item tree."""

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Optional


class Level(IntEnum):
    ROOT = 0
    COLLECTION = 1
    ITEM = 2
    SUB_ITEM = 3


@dataclass(frozen=True)
class SelectionPath:
    """Persisted open path: at most one id per level, deeper levels need shallower ones."""

    collection_id: Optional[int] = None
    item_id: Optional[int] = None
    sub_item_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.item_id is not None and self.collection_id is None:
            raise ValueError("item selected without a collection")
        if self.sub_item_id is not None and self.item_id is None:
            raise ValueError("sub-item selected without an item")

    @property
    def is_empty(self) -> bool:
        return self.collection_id is None

    @property
    def depth(self) -> Level:
        if self.sub_item_id is not None:
            return Level.SUB_ITEM
        if self.item_id is not None:
            return Level.ITEM
        if self.collection_id is not None:
            return Level.COLLECTION
        return Level.ROOT

    def id_at(self, level: Level) -> Optional[int]:
        if level == Level.COLLECTION:
            return self.collection_id
        if level == Level.ITEM:
            return self.item_id
        if level == Level.SUB_ITEM:
            return self.sub_item_id
        return None

    def truncate(self, level: Level) -> "SelectionPath":
        """Keep levels up to and including `level`, clear everything deeper."""
        return SelectionPath(
            collection_id=self.collection_id if level >= Level.COLLECTION else None,
            item_id=self.item_id if level >= Level.ITEM else None,
            sub_item_id=self.sub_item_id if level >= Level.SUB_ITEM else None,
        )

    def with_collection(self, collection_id: int) -> "SelectionPath":
        return SelectionPath(collection_id=collection_id)

    def with_item(self, item_id: int) -> "SelectionPath":
        return SelectionPath(collection_id=self.collection_id, item_id=item_id)

    def with_sub_item(self, sub_item_id: Optional[int]) -> "SelectionPath":
        return replace(self, sub_item_id=sub_item_id)


@dataclass(frozen=True)
class HoverPath:
    """Pointer position per column. Levels are independent of each other."""

    collection_id: Optional[int] = None
    item_id: Optional[int] = None
    sub_item_id: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.collection_id is None and self.item_id is None and self.sub_item_id is None

    def id_at(self, level: Level) -> Optional[int]:
        if level == Level.COLLECTION:
            return self.collection_id
        if level == Level.ITEM:
            return self.item_id
        if level == Level.SUB_ITEM:
            return self.sub_item_id
        return None


__all__ = ["Level", "SelectionPath", "HoverPath"]
