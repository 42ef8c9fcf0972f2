"""
Browser context and main loop for oxmark.

The BrowserContext holds everything the interactive browser knows: the bookmarks
read from the store, the search line, the filtered view, the selection and the
active mode. Modes are "listing", "deleting", "updating", "done" and "exited".
"""
import curses
import locale
import os
import shlex

from oxmark import logger, terminal, ui
from oxmark.buffer import LineBuffer
from oxmark.fuzzy import filter_bookmarks
from oxmark.selection import Selection

TERMINAL_MODES = ("done", "exited")


class BrowserContext:
    """
    Holds the state of the browser and the operations that keep it consistent.
    Derived fields (filtered list, selected bookmark) are only rebuilt by refresh().
    """
    def __init__(self, store, stdscr=None, show_hidden: bool = False):
        self.store = store
        self.stdscr = stdscr

        self._mode = "listing"
        self._deletion = None

        self.search_bar = LineBuffer()
        self.selection = Selection()

        self.bookmarks = []
        self.filtered_bookmarks = []
        self.selected_bookmark = None

        self.show_hidden = show_hidden

    # ── mode ────────────────────────────────────────────────
    @property
    def mode(self) -> str:
        return self._mode

    @mode.setter
    def mode(self, value: str):
        if value != self._mode:
            logger.debug(f"mode {self._mode} -> {value}")
        if value != "deleting":
            self._deletion = None
        self._mode = value

    @property
    def deletion_state(self):
        """The pending deletion while in deleting mode, otherwise None."""
        if self._mode != "deleting":
            return None
        return self._deletion

    def begin_deletion(self) -> bool:
        """Enter deleting mode for the selected bookmark. Returns False if nothing is selected."""
        if self.selected_bookmark is None:
            return False
        self.mode = "deleting"
        self._deletion = ui.input.DeletionState(self.selected_bookmark)
        return True

    def end_deletion(self, confirmed: bool):
        """Leave deleting mode, deleting the target first if `confirmed`."""
        state = self.deletion_state
        if state is not None and confirmed:
            target = state.target
            if target.id is None:
                raise ValueError(f"bookmark {target.path} was never stored")
            self.store.delete_bookmark(target.id)
            logger.log(f"deleted from browser: {target.path}")
        self.mode = "listing"

    @property
    def finished(self) -> bool:
        return self._mode in TERMINAL_MODES

    # ── derived state ───────────────────────────────────────
    @property
    def query(self) -> str:
        return self.search_bar.current_text()

    @property
    def selection_index(self):
        return self.selection.index

    def refresh(self):
        """
        Re-read the store, then filter, then reclamp, then pick the selected bookmark.
        The order matters: the selection must never point into a stale list.
        """
        self.bookmarks = self.store.list_all()
        self.filtered_bookmarks = filter_bookmarks(self.bookmarks, self.query)
        self.selection.reclamp(len(self.filtered_bookmarks))
        self.selected_bookmark = self.selection.pick(self.filtered_bookmarks)

    def select_next(self):
        self.selection.increment(len(self.filtered_bookmarks))

    def select_previous(self):
        self.selection.decrement()

    # ── exit ────────────────────────────────────────────────
    def exit_output(self, print_command: bool = False, editor: str = "vi"):
        """
        What to print for the calling shell, or None.
        Only a "done" browser with a selection produces output.
        """
        if self._mode != "done" or self.selected_bookmark is None:
            return None
        path = self.selected_bookmark.path
        if not print_command:
            return path
        if os.path.isdir(path):
            return f"cd {shlex.quote(path)}"
        if os.path.isfile(path):
            return f"{editor} {shlex.quote(path)}"
        return None


def main(stdscr, store, show_hidden: bool = False) -> BrowserContext:
    """Run the browser loop on an initialised curses screen and return the final context."""
    terminal.setup_terminal(stdscr)
    context = BrowserContext(store, stdscr, show_hidden=show_hidden)
    context.refresh()
    logger.debug(f"browser started with {len(context.bookmarks)} bookmarks")

    while not context.finished:
        ui.screen.display(context)
        key = ui.input.read_key(stdscr)
        ui.input.handle_key(context, key)
        context.refresh()

    logger.debug(f"browser finished: {context.mode}")
    return context


def run_browser(store, config, print_command: bool = False):
    """
    Run the interactive browser and return the text to print (or None).
    curses.wrapper restores the terminal on every exit path, errors included.
    """
    locale.setlocale(locale.LC_ALL, "")
    os.environ.setdefault("ESCDELAY", "25")
    with terminal.tty_stdout():
        context = curses.wrapper(main, store, config.show_hidden)
    return context.exit_output(print_command, config.editor)
