"""State machine tests for the browser: key handling, refresh order and exit output."""

import curses
import os

import pytest

from oxmark.app import BrowserContext
from oxmark.bookmark import Bookmark
from oxmark.ui.input import (KEY_CTRL_C, KEY_CTRL_D, KEY_CTRL_E, KEY_CTRL_J, KEY_CTRL_K,
                             KEY_ESC, DeletionState, handle_key)


def press(context, *keys):
    """Feed keys the way the main loop does: handle, then refresh."""
    for key in keys:
        handle_key(context, key)
        context.refresh()


def names(bookmarks):
    return [b.name for b in bookmarks]


class TestListing:
    def test_initial_state(self, browser):
        assert browser.mode == "listing"
        assert browser.selection_index == 0
        assert browser.selected_bookmark.name == "alpha"
        assert browser.deletion_state is None

    def test_navigation(self, browser):
        press(browser, curses.KEY_DOWN, KEY_CTRL_J)
        assert browser.selected_bookmark.name == "gamma"
        press(browser, curses.KEY_DOWN)
        assert browser.selection_index == 2
        press(browser, curses.KEY_UP, KEY_CTRL_K, KEY_CTRL_K)
        assert browser.selection_index == 0

    def test_typing_filters(self, browser):
        press(browser, "g", "a")
        assert browser.query == "ga"
        assert names(browser.filtered_bookmarks) == ["gamma"]
        assert browser.selected_bookmark.name == "gamma"

    def test_backspace_widens_filter(self, browser):
        press(browser, "g", "a", "\x7f", "\x7f")
        assert names(browser.filtered_bookmarks) == ["alpha", "beta", "gamma"]

    def test_no_match_clears_selection(self, browser):
        press(browser, "z", "z")
        assert browser.filtered_bookmarks == []
        assert browser.selection_index is None
        assert browser.selected_bookmark is None

    def test_escape_exits_without_output(self, browser):
        press(browser, KEY_ESC)
        assert browser.mode == "exited"
        assert browser.finished
        assert browser.exit_output() is None
        assert browser.exit_output(print_command=True) is None

    def test_enter_selects(self, browser):
        press(browser, curses.KEY_DOWN, "\r")
        assert browser.mode == "done"
        assert browser.exit_output() == browser.selected_bookmark.path
        assert os.path.basename(browser.exit_output()) == "beta"

    def test_enter_without_selection_prints_nothing(self, browser):
        press(browser, "q", "q", "q", "\r")
        assert browser.mode == "done"
        assert browser.exit_output() is None

    def test_ctrl_c_exits_from_every_mode(self, browser):
        press(browser, KEY_CTRL_C)
        assert browser.mode == "exited"

        browser.mode = "listing"
        press(browser, KEY_CTRL_D, KEY_CTRL_C)
        assert browser.mode == "exited"
        assert browser.deletion_state is None

        browser.mode = "listing"
        press(browser, KEY_CTRL_E, KEY_CTRL_C)
        assert browser.mode == "exited"

    def test_unbound_control_keys_are_ignored(self, browser):
        press(browser, "\x07", "\x1c")
        assert browser.mode == "listing"
        assert browser.query == ""

    def test_timeout_is_a_noop(self, browser):
        press(browser, None)
        assert browser.mode == "listing"
        assert browser.selection_index == 0


class TestDeleting:
    def test_ctrl_d_opens_confirmation_with_no_highlighted(self, browser):
        press(browser, KEY_CTRL_D)
        assert browser.mode == "deleting"
        assert browser.deletion_state.choice is False
        assert browser.deletion_state.target.name == "alpha"

    def test_ctrl_d_without_selection_is_noop(self, browser):
        press(browser, "x", "x", KEY_CTRL_D)
        assert browser.mode == "listing"
        assert browser.deletion_state is None

    def test_enter_with_yes_deletes(self, browser, store):
        press(browser, KEY_CTRL_D, "h", "\r")
        assert browser.mode == "listing"
        assert browser.deletion_state is None
        assert names(store.list_all()) == ["beta", "gamma"]
        assert names(browser.filtered_bookmarks) == ["beta", "gamma"]

    def test_enter_with_no_keeps(self, browser, store):
        press(browser, KEY_CTRL_D, "h", "l", "\r")
        assert browser.mode == "listing"
        assert len(store.list_all()) == 3

    def test_arrow_keys_move_choice(self, browser):
        press(browser, KEY_CTRL_D, curses.KEY_LEFT)
        assert browser.deletion_state.choice is True
        press(browser, curses.KEY_RIGHT)
        assert browser.deletion_state.choice is False

    def test_y_deletes_immediately(self, browser, store):
        press(browser, curses.KEY_DOWN, KEY_CTRL_D, "y")
        assert browser.mode == "listing"
        assert names(store.list_all()) == ["alpha", "gamma"]

    @pytest.mark.parametrize("key", ["n", KEY_ESC])
    def test_n_and_escape_cancel(self, browser, store, key):
        press(browser, KEY_CTRL_D, "h", key)
        assert browser.mode == "listing"
        assert browser.deletion_state is None
        assert len(store.list_all()) == 3

    def test_other_keys_are_ignored_while_confirming(self, browser):
        press(browser, KEY_CTRL_D, "g", curses.KEY_DOWN)
        assert browser.mode == "deleting"
        assert browser.query == ""
        assert browser.selection_index == 0

    def test_deleting_last_row_selects_new_last_row(self, browser):
        press(browser, curses.KEY_DOWN, curses.KEY_DOWN)
        assert browser.selection_index == 2
        press(browser, KEY_CTRL_D, "y")
        assert browser.selection_index == 1
        assert browser.selected_bookmark.name == "beta"

    def test_deleting_only_row_empties_selection(self, store, make_dir):
        store.create(make_dir("solo"), "solo")
        context = BrowserContext(store)
        context.refresh()
        press(context, KEY_CTRL_D, "y")
        assert context.filtered_bookmarks == []
        assert context.selection_index is None

    def test_unsaved_target_is_a_programming_error(self, browser):
        press(browser, KEY_CTRL_D)
        browser._deletion = DeletionState(Bookmark(path="/tmp"))
        with pytest.raises(ValueError):
            browser.end_deletion(confirmed=True)


class TestUpdating:
    def test_ctrl_e_opens_and_escape_closes(self, browser):
        press(browser, KEY_CTRL_E)
        assert browser.mode == "updating"
        press(browser, "a", "\r")
        assert browser.mode == "updating"
        assert browser.query == ""
        press(browser, KEY_ESC)
        assert browser.mode == "listing"

    def test_ctrl_e_without_selection_is_noop(self, browser):
        press(browser, "z", "z", KEY_CTRL_E)
        assert browser.mode == "listing"


class TestRefresh:
    def test_external_deletion_of_selected_row(self, browser, store):
        press(browser, curses.KEY_DOWN, curses.KEY_DOWN)
        store.delete_bookmark(browser.selected_bookmark.id)
        press(browser, None)
        assert browser.selected_bookmark.name == "beta"
        assert browser.selection_index == 1

    def test_external_addition_appears(self, browser, store, make_dir):
        store.create(make_dir("delta"), "delta")
        press(browser, None)
        assert names(browser.filtered_bookmarks) == ["alpha", "beta", "gamma", "delta"]

    def test_selection_always_valid(self, browser):
        for key in ["g", curses.KEY_DOWN, "\x7f", curses.KEY_DOWN, curses.KEY_DOWN, "b"]:
            press(browser, key)
            if browser.filtered_bookmarks:
                assert 0 <= browser.selection_index < len(browser.filtered_bookmarks)
                assert browser.selected_bookmark is browser.filtered_bookmarks[browser.selection_index]
            else:
                assert browser.selection_index is None


class TestExitOutput:
    def test_command_for_directory(self, browser):
        press(browser, "\r")
        path = browser.selected_bookmark.path
        assert browser.exit_output(print_command=True) == f"cd {path}"

    def test_command_for_file(self, store, tmp_path):
        notes = tmp_path / "notes.txt"
        notes.write_text("hi")
        store.create(str(notes), "notes")
        context = BrowserContext(store)
        context.refresh()
        press(context, "\r")
        expected = os.path.realpath(str(notes))
        assert context.exit_output(print_command=True, editor="nano") == f"nano {expected}"

    def test_command_quotes_paths(self, store, make_dir):
        store.create(make_dir("with space"), "spaced")
        context = BrowserContext(store)
        context.refresh()
        press(context, "\r")
        output = context.exit_output(print_command=True)
        assert output.startswith("cd '") and output.endswith("with space'")

    def test_command_for_vanished_path(self, store, make_dir):
        path = make_dir("temp")
        store.create(path, "temp")
        context = BrowserContext(store)
        context.refresh()
        press(context, "\r")
        os.rmdir(path)
        assert context.exit_output(print_command=True) is None
        assert context.exit_output() == path
