from __future__ import annotations

from terminal_mentor.shell.history import (
    BOOT_ENTRY,
    RECALL_LIMIT,
    RecallCursor,
    append_entry,
    boot_history,
    remember,
)


def test_boot_history_is_single_system_entry():
    history = boot_history()

    assert history == (BOOT_ENTRY,)
    assert BOOT_ENTRY.role == "system"
    assert BOOT_ENTRY.content[0].startswith("Inicializando Terminal Mentor")


def test_append_entry_returns_new_history():
    history = boot_history()

    updated = append_entry(history, "user", ["help"])

    assert history == (BOOT_ENTRY,)
    assert updated[-1].role == "user"
    assert updated[-1].content == ("help",)
    assert len({entry.id for entry in updated}) == 2


def test_remember_moves_duplicates_to_front():
    buffer = remember(remember(remember((), "help"), "topics"), "help")

    assert buffer == ("help", "topics")


def test_remember_is_capped():
    buffer: tuple[str, ...] = ()
    for index in range(RECALL_LIMIT + 10):
        buffer = remember(buffer, f"cmd {index}")

    assert len(buffer) == RECALL_LIMIT
    assert buffer[0] == f"cmd {RECALL_LIMIT + 9}"
    assert len(set(buffer)) == len(buffer)


def test_cursor_moves_older_and_stops_at_oldest():
    buffer = ("c", "b", "a")
    cursor = RecallCursor()

    assert [cursor.older(buffer) for _ in range(4)] == ["c", "b", "a", "a"]
    assert cursor.index == 2


def test_cursor_newer_past_newest_clears():
    buffer = ("c", "b", "a")
    cursor = RecallCursor()
    cursor.older(buffer)
    cursor.older(buffer)

    assert cursor.newer(buffer) == "c"
    assert cursor.newer(buffer) == ""
    assert cursor.index is None
    assert cursor.newer(buffer) is None


def test_cursor_on_empty_buffer():
    cursor = RecallCursor()

    assert cursor.older(()) is None
    assert cursor.index is None
