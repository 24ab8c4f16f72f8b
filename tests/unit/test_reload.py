"""Tests for the file watcher and hot-reload sessions."""

import os
import queue
import time

import pytest

from auto_ui.bridge import AutoLangError, IoError, StringMessage
from auto_ui.core import Algorithm, Settings, hash_bytes
from auto_ui.reload import FileWatcher, HotReloadSession


def bump_mtime(path, seconds=10):
    stat = path.stat()
    os.utime(path, (stat.st_atime, stat.st_mtime + seconds))


# ============================================================================
# FileWatcher
# ============================================================================

@pytest.mark.integration
def test_poll_once_posts_changes(tmp_path):
    """New and modified files are posted; others are not."""
    source = tmp_path / "a.at"
    source.write_text("1", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    channel = queue.Queue()
    watcher = FileWatcher([tmp_path], channel)
    assert watcher.poll_once() == [source]
    assert watcher.poll_once() == []

    bump_mtime(source)
    nested = tmp_path / "sub" / "b.at"
    nested.parent.mkdir()
    nested.write_text("2", encoding="utf-8")
    assert sorted(watcher.poll_once()) == sorted([source, nested])

    posted = []
    while not channel.empty():
        posted.append(channel.get_nowait())
    assert sorted(posted) == sorted([source, source, nested])


@pytest.mark.integration
def test_watch_single_file_and_missing_paths(tmp_path):
    """Files can be watched directly; missing paths are ignored."""
    source = tmp_path / "a.at"
    source.write_text("1", encoding="utf-8")
    watcher = FileWatcher([source, tmp_path / "missing"], queue.Queue())
    assert list(watcher.scan_files()) == [source]


@pytest.mark.integration
def test_watcher_thread_lifecycle(tmp_path):
    """start() runs a daemon thread until stop()."""
    source = tmp_path / "a.at"
    source.write_text("1", encoding="utf-8")
    channel = queue.Queue()
    watcher = FileWatcher([tmp_path], channel, poll_interval=0.01)

    watcher.start()
    try:
        assert watcher.running
        bump_mtime(source)
        assert channel.get(timeout=2) == source
    finally:
        watcher.stop()
    assert not watcher.running


# ============================================================================
# HotReloadSession
# ============================================================================

@pytest.fixture
def session(bridge, counter_file, settings):
    session = HotReloadSession(bridge, counter_file, settings)
    session.load()
    return session


@pytest.mark.integration
def test_session_load(session, counter_file):
    """Initial load interprets the file."""
    assert session.bridge.source_path == counter_file
    assert session.fingerprint is not None
    assert session.bridge.get_field("Counter", "count") == 0


@pytest.mark.integration
def test_session_fingerprint_algorithm(bridge, counter_file, counter_source, settings):
    """The configured hash fingerprints the loaded source."""
    assert Settings().fingerprint_algorithm == Algorithm.XXHASH64
    sha = settings.model_copy(update={"fingerprint_algorithm": Algorithm.SHA256})
    session = HotReloadSession(bridge, counter_file, sha)
    session.load()
    assert session.fingerprint == hash_bytes(counter_source.encode("utf-8"), Algorithm.SHA256)
    assert len(session.fingerprint) == 64

    session.channel.put(counter_file)
    assert session.poll() is False


@pytest.mark.integration
def test_poll_without_changes(session):
    """Nothing queued: nothing happens."""
    assert session.poll() is False
    assert session.reload_count == 0


@pytest.mark.integration
def test_unchanged_content_is_skipped(session, counter_file):
    """A save that keeps the bytes does not reload."""
    session.channel.put(counter_file)
    session.channel.put(counter_file)
    assert session.poll() is False
    assert session.reload_count == 0
    assert session.channel.empty()


@pytest.mark.integration
def test_changed_content_reloads_with_state(session, counter_file, counter_source):
    """Edits are applied and field values survive."""
    session.bridge.handle_message(StringMessage("Inc"))
    counter_file.write_text(
        counter_source.replace("spacing: 10", "spacing: 20"), encoding="utf-8"
    )
    session.channel.put(counter_file)

    assert session.poll() is True
    assert session.reload_count == 1
    assert session.last_error is None
    view = session.bridge.get_main_view()
    assert view.props == {"spacing": 20}
    assert session.bridge.get_field("Counter", "count") == 1


@pytest.mark.integration
def test_broken_edit_keeps_program(session, counter_file, counter_node):
    """A failed reload is recorded and the old program keeps running."""
    counter_file.write_text("type Counter is Widget {", encoding="utf-8")
    session.channel.put(counter_file)

    assert session.poll() is False
    assert isinstance(session.last_error, AutoLangError)
    assert session.bridge.get_main_view() == counter_node


@pytest.mark.integration
def test_deleted_file(session, counter_file):
    """A missing file is an IO error, not a crash."""
    counter_file.unlink()
    assert session.reload() is False
    assert isinstance(session.last_error, IoError)


@pytest.mark.integration
def test_session_start_and_stop(bridge, counter_file, settings, counter_source):
    """start() loads, enables hot reload and watches the file."""
    fast = settings.model_copy(update={"watch_poll_interval": 0.01})
    session = HotReloadSession(bridge, counter_file, fast)
    bridge.disable_hot_reload()

    session.start()
    try:
        assert bridge.hot_reload_enabled
        assert session.watcher.running
        bridge.handle_message(StringMessage("Inc"))

        staged = counter_file.with_suffix(".tmp")
        staged.write_text(counter_source + "\n// edited\n", encoding="utf-8")
        bump_mtime(staged)
        os.replace(staged, counter_file)

        deadline = time.monotonic() + 2
        while not session.poll():
            assert time.monotonic() < deadline
            time.sleep(0.01)
    finally:
        session.stop()

    assert session.reload_count == 1
    assert bridge.get_field("Counter", "count") == 1
