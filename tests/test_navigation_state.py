import asyncio
import random

from core import Board, Collection, HoverPath, Item, Level, SelectionPath, SubItem
from core.navigator.application.address import SubItemAddressPolicy
from core.navigator.application.child_cache import ChildCache, EntryState
from core.navigator.application.hover_state import HoverState
from core.navigator.application.navigation_state import NavigationStateController


def _controller(board, fetcher, sink=None, policy=SubItemAddressPolicy.EPHEMERAL):
    holder = {"board": board}
    cache = ChildCache(fetcher)
    hover = HoverState()
    controller = NavigationStateController(lambda: holder["board"], cache, hover, sink, policy=policy)
    return controller, cache, hover, holder


def _assert_cascade(path):
    if path.item_id is not None:
        assert path.collection_id is not None
    if path.sub_item_id is not None:
        assert path.item_id is not None


def test_cascade_invariant_holds_for_random_sequences(board, fetcher):
    controller, *_ = _controller(board, fetcher)
    rng = random.Random(1234)
    ids = {
        "collection": [1, 2, 5, 99],
        "item": [10, 11, 12, 20, 50, 99],
        "sub_item": [101, 102, 201, 99],
    }

    async def scenario():
        for _ in range(300):
            kind = rng.choice(sorted(ids))
            target = rng.choice(ids[kind])
            getattr(controller, f"select_{kind}")(target)
            _assert_cascade(controller.path)
            await asyncio.sleep(0)

    asyncio.run(scenario())


def test_selecting_same_collection_twice_collapses_to_root(board, fetcher):
    controller, *_ = _controller(board, fetcher)
    controller.select_collection(1)
    controller.select_collection(1)
    assert controller.path == SelectionPath()


def test_switching_collection_clears_deeper_levels(board, fetcher):
    controller, *_ = _controller(board, fetcher)
    controller.select_collection(1)
    controller.select_item(11)
    controller.select_collection(2)
    assert controller.path == SelectionPath(2)


def test_selecting_other_item_clears_sub_item(board, fetcher):
    controller, *_ = _controller(board, fetcher)

    async def scenario():
        controller.select_collection(1)
        controller.select_item(11)
        controller.select_sub_item(101)
        assert controller.path == SelectionPath(1, 11, 101)
        controller.select_item(10)

    asyncio.run(scenario())
    assert controller.path == SelectionPath(1, 10)


def test_reselecting_item_collapses_it_but_keeps_cache(board, fetcher):
    controller, cache, _, _ = _controller(board, fetcher)
    controller.select_collection(1)
    controller.select_item(11)
    controller.select_item(11)
    assert controller.path == SelectionPath(1)
    assert cache.entry(11).state is EntryState.FETCHED


def test_reselecting_sub_item_clears_it(board, fetcher):
    controller, *_ = _controller(board, fetcher)
    controller.select_collection(1)
    controller.select_item(11)
    controller.select_sub_item(102)
    controller.select_sub_item(102)
    assert controller.path == SelectionPath(1, 11)


def test_deeper_selections_without_parent_are_ignored(board, fetcher):
    controller, *_ = _controller(board, fetcher)
    controller.select_item(11)
    assert controller.path == SelectionPath()
    controller.select_collection(1)
    controller.select_sub_item(101)
    assert controller.path == SelectionPath(1)


def test_select_collection_clears_deeper_hover(board, fetcher):
    controller, _, hover, _ = _controller(board, fetcher)
    hover.hover(Level.COLLECTION, 2)
    hover.hover(Level.ITEM, 11)
    hover.hover(Level.SUB_ITEM, 101)
    controller.select_collection(1)
    assert hover.path == HoverPath(collection_id=2)


def test_select_item_uses_embedded_children_without_fetch(board, fetcher):
    controller, cache, _, _ = _controller(board, fetcher)
    controller.select_collection(1)
    controller.select_item(11)
    assert fetcher.calls == []
    assert [sub.title for sub in cache.peek(11)] == ["Test", "Compile"]


def test_select_item_without_embedded_children_fetches_once(board, fetcher):
    controller, cache, _, _ = _controller(board, fetcher)

    async def scenario():
        controller.select_collection(1)
        controller.select_item(10)
        assert cache.is_pending(10)
        controller.select_item(12)
        controller.select_item(10)
        await cache.get_or_fetch(10)

    asyncio.run(scenario())
    assert fetcher.calls.count(10) == 1


def test_user_transitions_push_addresses(board, fetcher, sink):
    controller, *_ = _controller(board, fetcher, sink)
    controller.select_collection(1)
    controller.select_item(11)
    controller.select_sub_item(101)  # not part of the ephemeral address
    controller.select_collection(1)
    assert sink.calls == [("push", "list=1"), ("push", "list=1&task=11"), ("push", "")]


def test_restore_with_missing_item_keeps_collection(board, fetcher, sink):
    controller, *_ = _controller(board, fetcher, sink)
    controller.restore_from_external_state("list=5&task=12")
    assert controller.path == SelectionPath(5)
    assert sink.calls == [("replace", "list=5")]


def test_restore_with_missing_collection_is_empty(board, fetcher, sink):
    controller, *_ = _controller(board, fetcher, sink)
    controller.restore_from_external_state("?list=404&task=10")
    assert controller.path == SelectionPath()
    assert sink.calls == [("replace", "")]


def test_restore_canonical_address_does_not_touch_location(board, fetcher, sink):
    controller, *_ = _controller(board, fetcher, sink)
    controller.restore_from_external_state("list=1&task=11")
    assert controller.path == SelectionPath(1, 11)
    assert sink.calls == []


def test_restore_triggers_child_fetch(board, fetcher):
    controller, cache, _, _ = _controller(board, fetcher)

    async def scenario():
        controller.restore_from_external_state("list=5&task=50")
        assert cache.is_pending(50)
        await cache.get_or_fetch(50)

    asyncio.run(scenario())
    assert fetcher.calls == [50]


def test_restore_resets_hover_when_path_changes(board, fetcher):
    controller, _, hover, _ = _controller(board, fetcher)
    hover.hover(Level.ITEM, 12)
    controller.restore_from_external_state("list=1")
    assert hover.path == HoverPath()


def test_persisted_policy_restores_known_sub_item(board, fetcher, sink):
    controller, *_ = _controller(board, fetcher, sink, SubItemAddressPolicy.PERSISTED)
    controller.restore_from_external_state("list=1&task=11&subtask=101")
    assert controller.path == SelectionPath(1, 11, 101)
    controller.restore_from_external_state("list=1&task=11&subtask=999")
    assert controller.path == SelectionPath(1, 11)
    assert sink.calls == [("replace", "list=1&task=11")]


def test_restore_before_tree_keeps_ids_until_sync(board, fetcher, sink):
    controller, _, _, holder = _controller(None, fetcher, sink)

    async def scenario():
        controller.restore_from_external_state("list=5&task=12")
        assert controller.path == SelectionPath(5, 12)
        holder["board"] = board
        controller.sync_with_tree()

    asyncio.run(scenario())
    assert controller.path == SelectionPath(5)
    assert sink.calls == [("replace", "list=5")]


def test_sync_with_tree_drops_removed_item(board, fetcher, sink):
    controller, _, _, holder = _controller(board, fetcher, sink)
    controller.select_collection(1)
    controller.select_item(11)
    sink.calls.clear()
    sprint = board.find_collection(1)
    sprint.items = [item for item in sprint.items if item.id != 11]
    controller.sync_with_tree()
    assert controller.path == SelectionPath(1)
    assert sink.calls == [("replace", "list=1")]


def test_collapse_to(board, fetcher):
    controller, _, hover, _ = _controller(board, fetcher)
    controller.select_collection(1)
    controller.select_item(11)
    controller.select_sub_item(101)
    hover.hover(Level.SUB_ITEM, 102)
    controller.collapse_to(Level.ITEM)
    assert controller.path == SelectionPath(1, 11)
    assert hover.path == HoverPath()
    controller.collapse_to(Level.ROOT)
    assert controller.path == SelectionPath()


def test_resolve_turns_ids_into_entities(board, fetcher):
    controller, *_ = _controller(board, fetcher)
    controller.select_collection(1)
    controller.select_item(11)
    controller.select_sub_item(102)
    resolved = controller.resolve()
    assert resolved.collection.name == "Sprint"
    assert resolved.item.title == "Build"
    assert resolved.sub_item.title == "Test"


def test_listeners_receive_each_transition(board, fetcher):
    controller, *_ = _controller(board, fetcher)
    seen = []
    controller.subscribe(seen.append)
    controller.select_collection(2)
    controller.select_item(20)
    assert seen == [SelectionPath(2), SelectionPath(2, 20)]


def test_ensure_children_refetches_after_invalidation(fetcher):
    board = _single_item_board()
    controller, cache, _, _ = _controller(board, fetcher)

    async def scenario():
        controller.select_collection(1)
        controller.select_item(10)
        assert fetcher.calls == []
        cache.invalidate(10)
        controller.ensure_children()
        await cache.get_or_fetch(10)

    asyncio.run(scenario())
    assert fetcher.calls == [10]


def _single_item_board():
    item = Item(id=10, title="Only", sub_items=[SubItem(id=1, title="Embedded")])
    return Board(id=1, name="B", slug="b", collections=[Collection(id=1, name="C", items=[item])])


def test_returning_to_pending_item_joins_its_fetch(board, fetcher):
    fetcher.results[10] = [SubItem(id=104, title="Sketch")]
    controller, cache, _, _ = _controller(board, fetcher)

    async def scenario():
        fetcher.hold(10)
        controller.select_collection(1)
        controller.select_item(10)
        await asyncio.sleep(0)
        controller.select_item(11)
        controller.select_item(10)
        assert cache.is_pending(10)
        fetcher.release(10)
        return await cache.get_or_fetch(10)

    result = asyncio.run(scenario())
    assert fetcher.calls == [10]
    assert cache.fetch_count == 1
    assert [sub.title for sub in result] == ["Sketch"]
    assert controller.path == SelectionPath(1, 10)


def test_select_item_outside_event_loop_defers_fetch(board, fetcher):
    controller, cache, _, _ = _controller(board, fetcher)
    controller.select_collection(1)
    controller.select_item(10)
    assert controller.path == SelectionPath(1, 10)
    assert cache.entry(10).state is EntryState.ABSENT
    controller.restore_from_external_state("list=5&task=50")
    assert controller.path == SelectionPath(5, 50)
    assert fetcher.calls == []

    async def scenario():
        controller.ensure_children()
        await cache.get_or_fetch(50)

    asyncio.run(scenario())
    assert fetcher.calls == [50]
