"""
Unit tests for the expansion state and the visible-row layout.
"""

from acumen_dashboard.table.expansion import ExpansionState, flatten_visible
from acumen_dashboard.table.rows import Row, build_forest


def layout(visible):
    return [(item.row.id, item.depth) for item in visible]


class TestExpansionState:
    def test_starts_empty(self):
        state = ExpansionState()
        assert len(state) == 0
        assert not state.is_expanded("A")

    def test_toggle_adds_then_removes(self):
        state = ExpansionState()
        assert state.toggle("A") is True
        assert state.is_expanded("A")
        assert "A" in state
        assert state.toggle("A") is False
        assert not state.is_expanded("A")

    def test_expanded_ids_is_a_snapshot(self):
        state = ExpansionState()
        state.toggle("A")
        snapshot = state.expanded_ids
        state.toggle("B")
        assert snapshot == frozenset({"A"})
        assert state.expanded_ids == frozenset({"A", "B"})


class TestFlattenVisible:
    """Tests for laying out expanded subtrees."""

    def test_collapsed_forest(self, abc_forest):
        visible = flatten_visible(abc_forest, ExpansionState())
        assert layout(visible) == [("A", 0), ("B", 0), ("C", 0)]
        assert [item.has_children for item in visible] == [True, False, False]
        assert not any(item.is_expanded for item in visible)

    def test_expanded_parent_shows_children(self, abc_forest):
        state = ExpansionState()
        state.toggle("A")
        visible = flatten_visible(abc_forest, state)
        assert layout(visible) == [("A", 0), ("A1", 1), ("A2", 1), ("B", 0), ("C", 0)]
        assert visible[0].is_expanded

    def test_grandchildren_need_their_own_expansion(self):
        forest = build_forest([
            {"id": "r", "children": [{"id": "c", "children": [{"id": "g"}]}]},
        ])
        state = ExpansionState()
        state.toggle("r")
        assert layout(flatten_visible(forest, state)) == [("r", 0), ("c", 1)]
        state.toggle("c")
        assert layout(flatten_visible(forest, state)) == [("r", 0), ("c", 1), ("g", 2)]

    def test_expanded_child_under_collapsed_parent_is_hidden(self):
        forest = build_forest([
            {"id": "r", "children": [{"id": "c", "children": [{"id": "g"}]}]},
        ])
        state = ExpansionState()
        state.toggle("c")
        assert layout(flatten_visible(forest, state)) == [("r", 0)]

    def test_expanding_a_leaf_is_harmless(self, abc_forest):
        state = ExpansionState()
        state.toggle("B")
        visible = flatten_visible(abc_forest, state)
        assert layout(visible) == [("A", 0), ("B", 0), ("C", 0)]
        assert not visible[1].is_expanded

    def test_not_expandable_hides_children_and_affordance(self, abc_forest):
        state = ExpansionState()
        state.toggle("A")
        visible = flatten_visible(abc_forest, state, expandable=False)
        assert layout(visible) == [("A", 0), ("B", 0), ("C", 0)]
        assert not any(item.has_children for item in visible)

    def test_deep_tree_does_not_recurse(self):
        # deeper than the default recursion limit
        node = Row(id="leaf")
        state = ExpansionState()
        for level in range(3000):
            node = Row(id=f"n{level}", children=(node,))
            state.toggle(node.id)
        visible = flatten_visible((node,), state)
        assert len(visible) == 3001
        assert visible[-1].row.id == "leaf"
        assert visible[-1].depth == 3000
