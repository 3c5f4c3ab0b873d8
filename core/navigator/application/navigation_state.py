"""Selection path owner: toggle/collapse transitions and address synchronisation."""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from application.ports import LocationSink
from core import Board, Collection, Item, Level, SelectionPath, SubItem
from core.navigator.application.address import SubItemAddressPolicy, decode_address, encode_address
from core.navigator.application.child_cache import ChildCache
from core.navigator.application.hover_state import HoverState

logger = logging.getLogger("miller.navigation")


@dataclass(frozen=True)
class ResolvedSelection:
    collection: Optional[Collection] = None
    item: Optional[Item] = None
    sub_item: Optional[SubItem] = None


def find_sub_item(sub_items: Optional[List[SubItem]], sub_item_id: Optional[int]) -> Optional[SubItem]:
    if sub_item_id is None:
        return None
    for sub in sub_items or []:
        if sub.id == sub_item_id:
            return sub
    return None


class NavigationStateController:
    def __init__(
        self,
        tree: Callable[[], Optional[Board]],
        cache: ChildCache,
        hover: HoverState,
        location: Optional[LocationSink] = None,
        *,
        policy: SubItemAddressPolicy = SubItemAddressPolicy.EPHEMERAL,
    ) -> None:
        self._tree = tree
        self._cache = cache
        self._hover = hover
        self._location = location
        self.policy = policy
        self._path = SelectionPath()
        self._listeners: List[Callable[[SelectionPath], None]] = []

    @property
    def path(self) -> SelectionPath:
        return self._path

    @property
    def address(self) -> str:
        return encode_address(self._path, self.policy)

    def subscribe(self, listener: Callable[[SelectionPath], None]) -> None:
        self._listeners.append(listener)

    # ----- user transitions ----------------------------------------------

    def select_collection(self, collection_id: int) -> None:
        if collection_id == self._path.collection_id:
            target = SelectionPath()
        else:
            target = self._path.with_collection(collection_id)
        self._hover.clear_deeper_than(Level.COLLECTION)
        self._commit(target)

    def select_item(self, item_id: int) -> None:
        if self._path.collection_id is None:
            logger.debug("select_item(%s) ignored: no collection selected", item_id)
            return
        self._hover.clear_deeper_than(Level.ITEM)
        if item_id == self._path.item_id:
            self._commit(self._path.truncate(Level.COLLECTION))
            return
        self._commit(self._path.with_item(item_id))
        self._request_children(item_id)

    def select_sub_item(self, sub_item_id: int) -> None:
        if self._path.item_id is None:
            logger.debug("select_sub_item(%s) ignored: no item selected", sub_item_id)
            return
        target = None if sub_item_id == self._path.sub_item_id else sub_item_id
        self._commit(self._path.with_sub_item(target))

    def collapse_to(self, level: Level) -> None:
        """Breadcrumb jump: keep `level` and shallower, drop the rest."""
        self._hover.clear_deeper_than(level)
        self._commit(self._path.truncate(level))

    # ----- external state ------------------------------------------------

    def restore_from_external_state(self, encoded: str) -> None:
        """Adopt an address coming from outside (startup, back/forward).

        Ids missing from the loaded tree are dropped silently. The address is
        rewritten in place when the adopted path differs from what was given.
        """
        parsed = decode_address(encoded, self.policy)
        validated = self._validate(parsed)
        if validated != parsed:
            logger.info("address %r refers to missing entities, using %r", encoded, encode_address(validated, self.policy))
        if validated != self._path:
            self._hover.reset()
        self._set(validated)
        canonical = encode_address(validated, self.policy)
        if self._location and canonical != (encoded or "").lstrip("?"):
            self._location.replace(canonical)
        if validated.item_id is not None:
            self._request_children(validated.item_id)

    def sync_with_tree(self) -> None:
        """Re-check the current path after the board tree was (re)loaded."""
        validated = self._validate(self._path)
        if validated == self._path:
            return
        self._hover.clear_deeper_than(validated.depth)
        self._commit(validated, replace=True)

    def ensure_children(self) -> None:
        """Ask for the open item's sub-items again if the cache dropped them."""
        if self._path.item_id is not None:
            self._request_children(self._path.item_id)

    def resolve(self) -> ResolvedSelection:
        board = self._tree()
        if board is None:
            return ResolvedSelection()
        collection = board.find_collection(self._path.collection_id)
        if collection is None:
            return ResolvedSelection()
        item = collection.find_item(self._path.item_id)
        if item is None:
            return ResolvedSelection(collection=collection)
        sub_item = find_sub_item(self._cache.known_for(item), self._path.sub_item_id)
        return ResolvedSelection(collection=collection, item=item, sub_item=sub_item)

    # ----- internals -----------------------------------------------------

    def _validate(self, path: SelectionPath) -> SelectionPath:
        board = self._tree()
        if board is None:
            return path
        collection = board.find_collection(path.collection_id)
        if collection is None:
            return SelectionPath()
        item = collection.find_item(path.item_id)
        if item is None:
            return SelectionPath(collection_id=collection.id)
        if path.sub_item_id is None:
            return path
        known = self._cache.known_for(item)
        if known is not None and find_sub_item(known, path.sub_item_id) is None:
            return path.truncate(Level.ITEM)
        return path

    def _request_children(self, item_id: int) -> None:
        board = self._tree()
        item = board.find_item(self._path.collection_id, item_id) if board else None
        self._cache.request(item_id, item.sub_items if item else None)

    def _commit(self, path: SelectionPath, *, replace: bool = False) -> None:
        before = self.address
        if not self._set(path):
            return
        after = self.address
        if self._location is None or after == before:
            return
        if replace:
            self._location.replace(after)
        else:
            self._location.push(after)

    def _set(self, path: SelectionPath) -> bool:
        if path == self._path:
            return False
        self._path = path
        for listener in list(self._listeners):
            listener(path)
        return True


__all__ = ["NavigationStateController", "ResolvedSelection", "find_sub_item"]
