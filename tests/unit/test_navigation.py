import pytest

from gqlxp.navigation import (
    ALL_TYPES,
    Breadcrumbs,
    GQLType,
    ListPanel,
    NavigationManager,
    PanelStack,
    StaticItem,
    TypeSelector,
    find_binding,
    panel_of,
)


def _panel(title: str, *names: str) -> ListPanel:
    return panel_of([StaticItem(item_title=name) for name in names], title)


@pytest.fixture()
def manager() -> NavigationManager:
    nav = NavigationManager()
    nav.reset()
    return nav


def test_open_panel_truncates_forward_history(manager: NavigationManager) -> None:
    first, second, third, fourth = (_panel(str(i), f"item{i}") for i in range(1, 5))
    manager.set_current_panel(first)
    manager.open_panel(second)
    assert manager.navigate_forward() is True
    manager.open_panel(third)

    assert manager.navigate_backward() is True
    assert manager.stack.position == 0
    manager.navigate_forward()
    assert manager.stack.position == 1
    manager.open_panel(fourth)

    assert len(manager.stack) == 3
    assert manager.stack.panels[-1] is fourth
    assert manager.next_panel() is fourth


def test_stack_push_truncates_after_position() -> None:
    stack = PanelStack()
    panels = [_panel(str(i)) for i in range(3)]
    stack.replace(panels)
    stack.move_forward()
    extra = _panel("extra")

    stack.push(extra)

    assert stack.panels == (panels[0], panels[1], extra)
    assert stack.position == 1


def test_open_panel_does_not_move_focus(manager: NavigationManager) -> None:
    before = manager.current_panel()
    child = _panel("child")

    manager.open_panel(child)

    assert manager.current_panel() is before
    assert manager.next_panel() is child


def test_navigation_bounds_are_silent_noops() -> None:
    manager = NavigationManager(visible_panels=1)
    manager.reset()

    assert manager.navigate_forward() is False
    assert manager.navigate_backward() is False
    assert manager.stack.position == 0
    assert manager.breadcrumbs() == []


def test_breadcrumbs_record_selected_item_on_forward(manager: NavigationManager) -> None:
    top = _panel("Query", "user", "users")
    top.select_next()
    manager.set_current_panel(top)
    manager.open_panel(_panel("users", "User"))

    manager.navigate_forward()

    assert manager.breadcrumbs() == ["users"]


def test_breadcrumb_symmetry(manager: NavigationManager) -> None:
    manager.set_current_panel(_panel("root", "a"))
    for depth in range(4):
        manager.open_panel(_panel(f"level{depth}", f"child{depth}"))
        assert manager.navigate_forward() is True

    assert manager.breadcrumbs() == ["a", "child0", "child1", "child2"]

    for _ in range(4):
        assert manager.navigate_backward() is True

    assert manager.breadcrumbs() == []
    assert manager.is_at_top_level_panel() is True


def test_breadcrumbs_pop_on_empty_trail() -> None:
    crumbs = Breadcrumbs()
    crumbs.pop()
    crumbs.push("Query")
    trail = crumbs.get()
    trail.append("mutated")

    assert crumbs.get() == ["Query"]
    assert len(crumbs) == 1


def test_category_wraparound() -> None:
    selector = TypeSelector()

    assert len(ALL_TYPES) == 10
    for _ in ALL_TYPES:
        selector.next()
    assert selector.current() is GQLType.QUERY

    assert selector.previous() is GQLType.SEARCH


def test_switch_type_resets_breadcrumbs(manager: NavigationManager) -> None:
    manager.set_current_panel(_panel("Query", "user"))
    manager.open_panel(_panel("user"))
    manager.navigate_forward()

    manager.switch_type("Enum")

    assert manager.current_type() is GQLType.ENUM
    assert manager.breadcrumbs() == []
    with pytest.raises(ValueError):
        manager.switch_type("Bogus")


def test_cycle_type_returns_new_category(manager: NavigationManager) -> None:
    assert manager.cycle_type_forward() is GQLType.MUTATION
    assert manager.cycle_type_backward() is GQLType.QUERY
    assert manager.cycle_type_backward() is GQLType.SEARCH
    assert manager.all_types() == ALL_TYPES


def test_reset_fills_visible_panels() -> None:
    manager = NavigationManager(visible_panels=3)
    manager.reset()

    assert len(manager.stack) == 3
    assert manager.stack.position == 0
    assert all(not panel.items() for panel in manager.stack.panels)


def test_visible_panels_must_be_positive() -> None:
    with pytest.raises(ValueError):
        NavigationManager(visible_panels=0)


def test_set_current_panel_replaces_in_place(manager: NavigationManager) -> None:
    replacement = _panel("filtered", "x")

    assert manager.set_current_panel(replacement) is True
    assert manager.current_panel() is replacement
    assert len(manager.stack) == 2


def test_set_current_panel_on_empty_stack_is_noop() -> None:
    manager = NavigationManager()

    assert manager.set_current_panel(_panel("x")) is False
    assert manager.current_panel() is None


def test_list_panel_selection_and_filter() -> None:
    panel = _panel("Object", "Author", "Post", "PostFilter")

    assert panel.select_previous() is False
    assert panel.select_by_name("PostFilter") is True
    assert panel.selected_item().title == "PostFilter"
    assert panel.select_next() is False

    panel.set_filter("post")
    assert [item.title for item in panel.items()] == ["Post", "PostFilter"]
    assert panel.selected_index == 0
    assert panel.select_by_name("Author") is False


def test_static_item_opens_child_panel() -> None:
    child = _panel("child")
    item = StaticItem(item_title="parent", child=lambda: child)

    assert item.open_panel() is child
    assert item.ref_name == "parent"
    assert StaticItem(item_title="leaf").open_panel() is None


def test_handle_key_dispatches_navigation(manager: NavigationManager) -> None:
    manager.set_current_panel(_panel("Query", "user"))
    manager.open_panel(_panel("user"))

    assert manager.handle_key("tab") == "next_panel"
    assert manager.stack.position == 1
    assert manager.handle_key("[") == "prev_panel"
    assert manager.stack.position == 0

    assert manager.handle_key("}") == "next_type"
    assert manager.current_type() is GQLType.MUTATION
    assert len(manager.stack) == 2
    assert manager.handle_key("{") == "prev_type"
    assert manager.current_type() is GQLType.QUERY


def test_handle_key_ignores_non_navigation_keys(manager: NavigationManager) -> None:
    assert manager.handle_key("/") is None
    assert manager.handle_key("x") is None
    assert find_binding("/").action == "search_focus"
    assert find_binding("ctrl+d").action == "quit"
    assert find_binding("x") is None
