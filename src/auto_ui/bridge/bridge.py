"""Interpreter Bridge - owns the language runtime and the widget state table."""

import copy
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from pathlib import Path

from ..converter import convert_node
from ..core.config import Policy, Settings, get_settings
from ..core.logging_config import get_logger
from ..lang import AutoError, AutoInterpreter
from ..node import Node, Value, placeholder_node, value_type_name
from ..view import View
from .errors import (
    AutoLangError,
    BridgeError,
    ComponentNotFound,
    FieldNotFound,
    IoError,
    LockError,
    TypeMismatch,
    UnknownError,
)
from .messages import DynamicMessage, StringMessage, TypedMessage
from .runtime import InterpreterRuntime
from .state import StateTable, WidgetState, migrate_states, states_from_defaults

logger = get_logger(__name__)


class BridgeState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"
    RENDERED = "rendered"
    RELOADING = "reloading"


class InterpreterBridge:
    """
    Runs interpreted widgets for a backend.

    Lifecycle: UNINITIALIZED → LOADED (after a successful interpret) →
    RENDERED (after the first main view), with RELOADING while a hot reload
    is in flight. All calls happen on one thread; a re-entrant call from
    inside a runtime callback raises `LockError`.

    Examples:
        >>> bridge = InterpreterBridge()
        >>> bridge.interpret('type Hello is Widget { fn view() { text("hi") } }')
        >>> bridge.get_main_view().kind
        'text'
    """

    def __init__(
        self,
        runtime: InterpreterRuntime | None = None,
        *,
        settings: Settings | None = None,
        policy: Policy | None = None,
    ) -> None:
        self.runtime = runtime if runtime is not None else AutoInterpreter()
        self.settings = settings or get_settings()
        self.policy = policy or self.settings.bridge_policy
        self.state = BridgeState.UNINITIALIZED
        self.states: StateTable = {}
        self.result: Value = None
        self.source_path: Path | None = None
        self.hot_reload_enabled = self.settings.hot_reload
        self._busy = False

    @contextmanager
    def _exclusive(self, operation: str) -> Iterator[None]:
        if self._busy:
            raise LockError(operation)
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_file(self, path: str | Path) -> None:
        """
        Read and interpret a source file.

        Args:
            path: `.at` source path

        Raises:
            IoError: File missing, unreadable or larger than `max_source_size`
            AutoLangError: Program failed to parse or run
        """
        path = Path(path)
        code = read_source(path, self.settings.max_source_size)
        self.interpret(code)
        self.source_path = path
        logger.info("source_loaded", path=str(path), widgets=sorted(self.states))

    def interpret(self, code: str) -> None:
        """Run `code` and rebuild the state table; on failure nothing changes."""
        with self._exclusive("interpret"):
            self._interpret(code)

    def _interpret(self, code: str) -> None:
        try:
            result = self.runtime.interpret(code)
        except AutoError as e:
            logger.warning("interpret_failed", error=str(e))
            raise AutoLangError(str(e), e) from e
        except BridgeError:
            raise
        except Exception as e:
            logger.error("interpret_crashed", error=str(e), exc_info=True)
            raise UnknownError(str(e)) from e

        self.result = result
        self.states = states_from_defaults(self.runtime.widget_defaults())
        self.state = BridgeState.LOADED

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def get_main_view(self) -> Node:
        """
        Produce the Node tree of the main widget (or of the program result).

        A clean widget re-uses its cached Node; a dirty one re-runs `view()`.

        Raises:
            TypeMismatch: Under STRICT policy when the result is not a Node
            AutoLangError: The view method failed
        """
        with self._exclusive("get_main_view"):
            widget = self.runtime.main_widget()
            widget_state = self.states.get(widget) if widget else None

            if widget_state is not None:
                node = self._render_widget(widget, widget_state)
            else:
                node = self._as_node(self.result, source="program")

            if self.state == BridgeState.LOADED:
                self.state = BridgeState.RENDERED
            return node

    def _render_widget(self, widget: str, widget_state: WidgetState) -> Node:
        if widget_state.cached_node is not None and not widget_state.view_dirty:
            return widget_state.cached_node

        value = self._invoke(widget, "view", [], widget_state.fields)
        node = self._as_node(value, source=widget)
        widget_state.cached_node = node
        widget_state.view_dirty = False
        logger.debug("view_rendered", widget=widget, kind=node.kind)
        return node

    def _as_node(self, value: Value, source: str) -> Node:
        if isinstance(value, Node):
            return value
        if self.policy == Policy.STRICT:
            raise TypeMismatch("node", value_type_name(value))
        logger.warning("view_not_a_node", source=source, found=value_type_name(value))
        return placeholder_node()

    def render(self) -> View[str]:
        """Main view converted to the View IR."""
        return convert_node(
            self.get_main_view(),
            policy=self.settings.converter_policy,
            max_depth=self.settings.max_view_depth,
        )

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def handle_message(self, msg: DynamicMessage) -> None:
        """
        Route a UI event to the target widget's `on()` method.

        Raises:
            ComponentNotFound: No state for the addressed widget
            LockError: Called from inside another bridge call
            AutoLangError: The handler failed
        """
        with self._exclusive("handle_message"):
            match msg:
                case StringMessage():
                    widget, event = msg.split()
                    widget = widget or self.runtime.main_widget()
                    args: list[Value] = []
                case TypedMessage(widget_name=widget, event_name=event):
                    args = list(msg.args)
                case _:
                    raise UnknownError(f"Unsupported message {msg!r}")

            widget_state = self.states.get(widget) if widget else None
            if widget_state is None:
                raise ComponentNotFound(widget or event)

            # Handlers run against a copy; fields change only if they succeed
            fields = copy.deepcopy(widget_state.fields)
            self._invoke(widget, "on", [event, *args], fields)
            widget_state.fields = fields
            widget_state.invalidate()
            logger.debug("message_handled", widget=widget, message_event=event)

    def _invoke(
        self, widget: str, method: str, args: list[Value], fields: dict[str, Value]
    ) -> Value:
        try:
            return self.runtime.invoke_method(widget, method, args, fields=fields)
        except AutoError as e:
            logger.warning("method_failed", widget=widget, method=method, error=str(e))
            raise AutoLangError(str(e), e) from e

    # ------------------------------------------------------------------
    # Hot reload
    # ------------------------------------------------------------------

    def reload(self, code: str) -> None:
        """
        Re-interpret `code`, carrying field values over to the new program.

        When hot reload is disabled this is a plain `interpret` and all state
        resets to defaults. A failed reload leaves the previous program,
        state table and lifecycle state untouched. A successful reload of a
        rendered bridge returns to RENDERED.
        """
        if not self.hot_reload_enabled:
            self.interpret(code)
            return

        with self._exclusive("reload"):
            snapshot = self.states
            previous = self.state
            self.state = BridgeState.RELOADING
            try:
                self._interpret(code)
            except BridgeError:
                self.state = previous
                self.states = snapshot
                raise
            self.states = migrate_states(snapshot, self.states)
            if previous == BridgeState.RENDERED:
                self.state = BridgeState.RENDERED
            logger.info("reloaded", widgets=sorted(self.states))

    def enable_hot_reload(self) -> None:
        self.hot_reload_enabled = True
        logger.info("hot_reload_enabled")

    def disable_hot_reload(self) -> None:
        self.hot_reload_enabled = False
        logger.info("hot_reload_disabled")

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    def widget_state(self, widget: str) -> WidgetState:
        widget_state = self.states.get(widget)
        if widget_state is None:
            raise ComponentNotFound(widget)
        return widget_state

    def get_field(self, widget: str, field: str) -> Value:
        fields = self.widget_state(widget).fields
        if field not in fields:
            raise FieldNotFound(widget, field)
        return fields[field]

    def set_field(self, widget: str, field: str, value: Value) -> None:
        """
        Overwrite one field value and mark the widget dirty.

        Raises:
            FieldNotFound: Field not declared by the widget
            TypeMismatch: Value type differs from the current non-nil value
        """
        widget_state = self.widget_state(widget)
        if field not in widget_state.fields:
            raise FieldNotFound(widget, field)
        current = widget_state.fields[field]
        if current is not None and value is not None:
            expected, found = value_type_name(current), value_type_name(value)
            if expected != found:
                raise TypeMismatch(expected, found)
        widget_state.fields[field] = value
        widget_state.invalidate()


def read_source(path: Path, max_size: int) -> str:
    """Read a UTF-8 source file, enforcing the size limit."""
    try:
        size = path.stat().st_size
        if size > max_size:
            raise IoError(str(path), f"file is {size} bytes, limit is {max_size}")
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise IoError(str(path), e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise IoError(str(path), f"not valid UTF-8 ({e.reason})") from e
