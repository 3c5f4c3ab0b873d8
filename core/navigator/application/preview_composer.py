"""Resolve hover and selection into the single entity shown in the preview pane.

Precedence, first match wins:

1. hovered sub-item      2. selected sub-item
3. hovered item          4. selected item
5. hovered collection    6. selected collection
7. nothing

Each depth is checked on its own: a hovered item never hides a selected
sub-item, whatever happened last. A rule whose id no longer resolves in the
tree falls through. Composing never triggers a fetch.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple, Union

from core import Board, Collection, HoverPath, Item, SelectionPath, SubItem
from core.navigator.application.child_cache import ChildCache
from core.navigator.application.hover_state import HoverState
from core.navigator.application.navigation_state import NavigationStateController, find_sub_item


class PreviewKind(Enum):
    NONE = "none"
    COLLECTION = "collection"
    ITEM = "item"
    SUB_ITEM = "sub_item"


class PreviewSource(Enum):
    HOVER = "hover"
    SELECTION = "selection"


@dataclass(frozen=True)
class Preview:
    kind: PreviewKind
    entity: Union[Collection, Item, SubItem, None] = None
    parent: Union[Collection, Item, None] = None
    children: Tuple[Union[Item, SubItem], ...] = ()
    children_known: bool = True
    children_loading: bool = False
    source: Optional[PreviewSource] = None

    @classmethod
    def empty(cls) -> "Preview":
        return cls(PreviewKind.NONE)

    @property
    def is_empty(self) -> bool:
        return self.kind is PreviewKind.NONE

    @property
    def completed_children(self) -> int:
        return sum(1 for child in self.children if child.is_completed)

    @property
    def progress(self) -> int:
        total = len(self.children)
        return round(self.completed_children * 100 / total) if total else 0


def _collection_preview(collection: Collection, source: PreviewSource) -> Preview:
    return Preview(
        PreviewKind.COLLECTION,
        entity=collection,
        children=tuple(collection.ordered_items()),
        source=source,
    )


def _item_preview(item: Item, collection: Optional[Collection], cache: ChildCache, source: PreviewSource) -> Preview:
    known = cache.known_for(item)
    return Preview(
        PreviewKind.ITEM,
        entity=item,
        parent=collection,
        children=tuple(sorted(known or [], key=lambda sub: sub.position)),
        children_known=known is not None,
        children_loading=known is None and cache.is_pending(item.id),
        source=source,
    )


def compose_preview(board: Optional[Board], selection: SelectionPath, hover: HoverPath, cache: ChildCache) -> Preview:
    if board is None:
        return Preview.empty()

    selected_collection = board.find_collection(selection.collection_id)
    selected_item = selected_collection.find_item(selection.item_id) if selected_collection else None

    def sub_item_under_selected_item(sub_item_id: Optional[int]) -> Optional[SubItem]:
        if selected_item is None or sub_item_id is None:
            return None
        return find_sub_item(cache.known_for(selected_item), sub_item_id)

    # 1-2: sub-item level
    for sub_item_id, source in ((hover.sub_item_id, PreviewSource.HOVER), (selection.sub_item_id, PreviewSource.SELECTION)):
        sub_item = sub_item_under_selected_item(sub_item_id)
        if sub_item is not None:
            return Preview(PreviewKind.SUB_ITEM, entity=sub_item, parent=selected_item, source=source)

    # 3: hovered item, looked up in the open collection first
    if hover.item_id is not None:
        hovered = selected_collection.find_item(hover.item_id) if selected_collection else None
        owner = selected_collection
        if hovered is None:
            located = board.locate_item(hover.item_id)
            if located:
                owner, hovered = located
        if hovered is not None:
            return _item_preview(hovered, owner, cache, PreviewSource.HOVER)

    # 4
    if selected_item is not None:
        return _item_preview(selected_item, selected_collection, cache, PreviewSource.SELECTION)

    # 5-6: collection level
    hovered_collection = board.find_collection(hover.collection_id)
    if hovered_collection is not None:
        return _collection_preview(hovered_collection, PreviewSource.HOVER)
    if selected_collection is not None:
        return _collection_preview(selected_collection, PreviewSource.SELECTION)

    return Preview.empty()


class PreviewComposer:
    def __init__(
        self,
        tree: Callable[[], Optional[Board]],
        navigation: NavigationStateController,
        hover: HoverState,
        cache: ChildCache,
    ) -> None:
        self._tree = tree
        self._navigation = navigation
        self._hover = hover
        self._cache = cache

    def compose(self) -> Preview:
        return compose_preview(self._tree(), self._navigation.path, self._hover.path, self._cache)


__all__ = ["Preview", "PreviewComposer", "PreviewKind", "PreviewSource", "compose_preview"]
