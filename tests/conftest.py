"""Pytest configuration and fixtures."""

import os

import pytest

from auto_ui.bridge import InterpreterBridge
from auto_ui.core import Policy, Settings, get_settings
from auto_ui.lang import AutoInterpreter
from auto_ui.node import Node


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["AUTO_UI_LOG_LEVEL"] = "DEBUG"
    os.environ["AUTO_UI_HOT_RELOAD"] = "true"
    get_settings.cache_clear()


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings."""
    return get_settings()


@pytest.fixture
def strict_settings():
    """Settings that fail fast everywhere."""
    return Settings(
        converter_policy=Policy.STRICT,
        extractor_policy=Policy.STRICT,
        bridge_policy=Policy.STRICT,
    )


# ============================================================================
# Source Fixtures
# ============================================================================

COUNTER_SOURCE = """
// Classic counter
type Counter is Widget {
    count int = 0

    fn view() {
        col {
            spacing: 10
            button "+" { onclick: Msg.Inc }
            text(count)
            button "-" { onclick: Msg.Dec }
        }
    }

    fn on(ev Msg) {
        is ev {
            Msg.Inc => self.count += 1
            Msg.Dec => self.count -= 1
        }
    }
}
"""

GREETER_SOURCE = """
type Greeter is Widget {
    name str = "World"
    visits int = 0

    fn view() {
        col {
            text("Hello, " + name)
            button "Visit" { onclick: Msg.Visit }
        }
    }

    fn on(ev Msg) {
        is ev {
            Msg.Visit => visits += 1
        }
    }
}
"""


@pytest.fixture
def counter_source():
    """Counter widget source."""
    return COUNTER_SOURCE


@pytest.fixture
def greeter_source():
    """Greeter widget source."""
    return GREETER_SOURCE


@pytest.fixture
def counter_file(tmp_path):
    """Counter widget written to disk."""
    path = tmp_path / "counter.at"
    path.write_text(COUNTER_SOURCE, encoding="utf-8")
    return path


# ============================================================================
# Runtime Fixtures
# ============================================================================

@pytest.fixture
def runtime():
    """Fresh reference interpreter."""
    return AutoInterpreter()


@pytest.fixture
def bridge(runtime, settings):
    """Bridge over a fresh interpreter."""
    return InterpreterBridge(runtime, settings=settings)


@pytest.fixture
def counter_bridge(bridge, counter_source):
    """Bridge with the counter program loaded."""
    bridge.interpret(counter_source)
    return bridge


@pytest.fixture
def counter_node():
    """Node tree equivalent to the counter's initial view."""
    return (
        Node("col")
        .with_prop("spacing", 10)
        .with_child(Node("button").with_arg("+").with_prop("onclick", "Counter.Inc"))
        .with_child(Node("text").with_arg(0))
        .with_child(Node("button").with_arg("-").with_prop("onclick", "Counter.Dec"))
    )
