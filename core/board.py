from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Tuple


class Priority(Enum):
    HIGH = ("HIGH", "priority.high")
    MEDIUM = ("MEDIUM", "priority.medium")
    LOW = ("LOW", "priority.low")
    NONE = ("NONE", "")

    @classmethod
    def from_string(cls, value: Optional[str]) -> "Priority":
        token = (value or "").strip().upper()
        for priority in cls:
            if priority.value[0] == token:
                return priority
        return cls.NONE

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def style(self) -> str:
        return self.value[1]


@dataclass
class Label:
    id: int
    name: str
    color: str = ""


@dataclass
class SubItem:
    id: int
    title: str
    is_completed: bool = False
    position: int = 0
    due_date: Optional[date] = None
    priority: Priority = Priority.NONE
    labels: List[Label] = field(default_factory=list)
    description: str = ""
    link: str = ""


@dataclass
class Item:
    id: int
    title: str
    description: str = ""
    link: str = ""
    is_completed: bool = False
    position: int = 0
    due_date: Optional[date] = None
    priority: Priority = Priority.NONE
    labels: List[Label] = field(default_factory=list)
    # None: the board payload did not embed sub-items for this item.
    sub_items: Optional[List[SubItem]] = None


@dataclass
class Collection:
    id: int
    name: str
    description: str = ""
    link: str = ""
    is_completed: bool = False
    due_date: Optional[date] = None
    priority: Priority = Priority.NONE
    labels: List[Label] = field(default_factory=list)
    items: List[Item] = field(default_factory=list)

    def ordered_items(self) -> List[Item]:
        return sorted(self.items, key=lambda item: item.position)

    def find_item(self, item_id: Optional[int]) -> Optional[Item]:
        if item_id is None:
            return None
        for item in self.items:
            if item.id == item_id:
                return item
        return None


@dataclass
class Board:
    id: int
    name: str
    slug: str
    description: str = ""
    collections: List[Collection] = field(default_factory=list)
    labels: List[Label] = field(default_factory=list)

    def find_collection(self, collection_id: Optional[int]) -> Optional[Collection]:
        if collection_id is None:
            return None
        for collection in self.collections:
            if collection.id == collection_id:
                return collection
        return None

    def find_item(self, collection_id: Optional[int], item_id: Optional[int]) -> Optional[Item]:
        collection = self.find_collection(collection_id)
        return collection.find_item(item_id) if collection else None

    def locate_item(self, item_id: Optional[int]) -> Optional[Tuple[Collection, Item]]:
        """Search every collection for an item id."""
        if item_id is None:
            return None
        for collection in self.collections:
            item = collection.find_item(item_id)
            if item is not None:
                return collection, item
        return None


def ordered_sub_items(sub_items: Optional[List[SubItem]]) -> List[SubItem]:
    return sorted(sub_items or [], key=lambda sub: sub.position)


__all__ = [
    "Priority",
    "Label",
    "SubItem",
    "Item",
    "Collection",
    "Board",
    "ordered_sub_items",
]
