"""Per-widget runtime state and its migration across reloads."""

from dataclasses import dataclass, field

from ..node import Node, Value


@dataclass
class WidgetState:
    """Field values of one interpreted widget plus its render cache."""

    fields: dict[str, Value] = field(default_factory=dict)
    cached_node: Node | None = None
    view_dirty: bool = True

    def invalidate(self) -> None:
        self.view_dirty = True


StateTable = dict[str, WidgetState]


def states_from_defaults(defaults: dict[str, dict[str, Value]]) -> StateTable:
    return {name: WidgetState(fields=dict(values)) for name, values in defaults.items()}


def migrate_states(old: StateTable, new: StateTable) -> StateTable:
    """
    Carry field values from `old` into the freshly built `new` table.

    For a widget present in both tables, each old value whose key also exists
    in the new table replaces the new default; other old keys are dropped.
    Widgets missing from `new` are discarded and new widgets keep their
    defaults. Values are copied without type checks. Render caches are
    invalidated for every migrated widget.

    Args:
        old: State table snapshot taken before the reload
        new: State table built from the new program's defaults

    Returns:
        The `new` table, updated in place
    """
    for name, state in new.items():
        previous = old.get(name)
        if previous is None:
            continue
        for key, value in previous.fields.items():
            if key in state.fields:
                state.fields[key] = value
        state.cached_node = None
        state.view_dirty = True
    return new
