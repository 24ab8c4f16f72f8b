"""Tests for widget state tables and their migration."""

import pytest
from hypothesis import given, strategies as st

from auto_ui.bridge import WidgetState, migrate_states, states_from_defaults
from auto_ui.node import Node


def table(**widgets):
    return {name: WidgetState(fields=dict(fields)) for name, fields in widgets.items()}


@pytest.mark.unit
def test_states_from_defaults_copies():
    """Each widget gets its own dirty state."""
    defaults = {"Counter": {"count": 0}}
    states = states_from_defaults(defaults)
    states["Counter"].fields["count"] = 9
    assert defaults == {"Counter": {"count": 0}}
    assert states["Counter"].view_dirty


@pytest.mark.unit
def test_migrate_overlapping_keys():
    """Old values win for keys the new program still declares."""
    old = table(Counter={"count": 5, "extra": "x"})
    new = table(Counter={"count": 0})
    migrated = migrate_states(old, new)
    assert migrated["Counter"].fields == {"count": 5}


@pytest.mark.unit
def test_migrate_added_and_removed_widgets():
    """New widgets keep defaults; removed widgets are dropped."""
    old = table(Counter={"count": 5}, Gone={"x": 1})
    new = table(Counter={"count": 0, "step": 1}, Fresh={"y": 2})
    migrated = migrate_states(old, new)
    assert set(migrated) == {"Counter", "Fresh"}
    assert migrated["Counter"].fields == {"count": 5, "step": 1}
    assert migrated["Fresh"].fields == {"y": 2}


@pytest.mark.unit
def test_migrate_does_not_check_types():
    """Values are copied as they are."""
    migrated = migrate_states(table(A={"n": "text"}), table(A={"n": 0}))
    assert migrated["A"].fields == {"n": "text"}


@pytest.mark.unit
def test_migrate_invalidates_cache():
    """Migrated widgets must re-render."""
    new = table(A={"n": 0})
    new["A"].cached_node = Node("text")
    new["A"].view_dirty = False
    migrate_states(table(A={"n": 1}), new)
    assert new["A"].cached_node is None
    assert new["A"].view_dirty


fields_strategy = st.dictionaries(
    st.sampled_from(["a", "b", "c", "d"]), st.integers(), max_size=4
)


@pytest.mark.unit
@given(old=fields_strategy, new=fields_strategy)
def test_migrate_properties(old, new):
    """Keys come from the new table; shared keys take old values; idempotent."""
    once = migrate_states(table(W=old), table(W=new))
    assert set(once["W"].fields) == set(new)
    for key in new:
        assert once["W"].fields[key] == old.get(key, new[key])

    twice = migrate_states(table(W=old), table(W=once["W"].fields))
    assert twice["W"].fields == once["W"].fields
