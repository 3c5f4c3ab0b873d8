from core.navigator.interface.tui_history import AddressBar


def test_push_appends_and_drops_forward_entries():
    bar = AddressBar("?list=1")
    bar.push("list=1&task=10")
    bar.push("list=1&task=11")
    assert bar.back() == "list=1&task=10"
    assert bar.can_go_forward
    bar.push("list=2")
    assert bar.entries == ["list=1", "list=1&task=10", "list=2"]
    assert not bar.can_go_forward


def test_push_of_current_entry_is_ignored():
    bar = AddressBar("list=1")
    bar.push("list=1")
    assert bar.entries == ["list=1"]
    assert not bar.can_go_back


def test_replace_rewrites_current_entry():
    bar = AddressBar("list=9")
    bar.push("list=1")
    bar.replace("list=1&task=10")
    assert bar.entries == ["list=9", "list=1&task=10"]
    assert bar.current == "list=1&task=10"


def test_back_and_forward_stop_at_the_ends():
    bar = AddressBar()
    assert bar.back() is None
    bar.push("list=1")
    assert bar.forward() is None
    assert bar.back() == ""
    assert bar.forward() == "list=1"


def test_history_is_bounded():
    bar = AddressBar("", limit=3)
    for index in range(5):
        bar.push(f"list={index}")
    assert bar.entries == ["list=2", "list=3", "list=4"]
    assert bar.current == "list=4"


def test_listeners_see_every_change():
    seen = []
    bar = AddressBar()
    bar.subscribe(seen.append)
    bar.push("list=1")
    bar.replace("list=2")
    bar.back()
    bar.push("")
    assert seen == ["list=1", "list=2", ""]
