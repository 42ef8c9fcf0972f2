"""
Input handling for oxmark.

Reads one key per loop iteration and processes it for the active mode
(listing, deleting, updating), updating the context accordingly.
Keys are str for characters and int for curses function keys; None means
the poll timed out and nothing happened.
"""
import curses
from dataclasses import dataclass

from oxmark import logger
from oxmark.bookmark import Bookmark

KEY_ESC = "\x1b"
KEY_CTRL_C = "\x03"
KEY_CTRL_D = "\x04"
KEY_CTRL_E = "\x05"
KEY_CTRL_J = "\n"
KEY_CTRL_K = "\x0b"
KEY_RETURN = ("\r", curses.KEY_ENTER)


@dataclass
class DeletionState:
    """Pending deletion: the bookmark to delete and whether "Yes" is highlighted."""
    target: Bookmark
    choice: bool = False


def read_key(stdscr):
    """Wait for the next key (bounded by the window timeout). Returns None on timeout or resize."""
    try:
        key = stdscr.get_wch()
    except curses.error:
        return None
    if key == curses.KEY_RESIZE:
        return None
    return key


def is_control(key) -> bool:
    """True for control characters, which are never typed into the search line."""
    return isinstance(key, str) and not key.isprintable()


def handle_key(context, key):
    """Dispatch `key` to the handler of the active mode. Ctrl+C exits from anywhere."""
    if key is None:
        return
    if key == KEY_CTRL_C:
        context.mode = "exited"
        return
    if context.mode == "listing":
        handle_listing_mode(context, key)
    elif context.mode == "deleting":
        handle_deleting_mode(context, key)
    elif context.mode == "updating":
        handle_updating_mode(context, key)


def handle_listing_mode(context, key):
    """Handle a key press in listing mode."""
    if key == KEY_ESC:
        context.mode = "exited"
        return

    if key in KEY_RETURN:
        context.mode = "done"
        return

    if key in (curses.KEY_UP, KEY_CTRL_K):
        context.select_previous()
        return

    if key in (curses.KEY_DOWN, KEY_CTRL_J):
        context.select_next()
        return

    if key == KEY_CTRL_D:
        if context.begin_deletion():
            logger.debug(f"confirm deletion of {context.deletion_state.target.path}")
        return

    if key == KEY_CTRL_E:
        if context.selected_bookmark is not None:
            context.mode = "updating"
        return

    # Everything else edits the search line; unknown control keys are dropped
    if context.search_bar.handle_key(key):
        return
    if is_control(key):
        logger.debug(f"ignored control key {key!r}")


def handle_deleting_mode(context, key):
    """
    Handle a key press in the delete confirmation popup.
    h/Left highlights Yes, l/Right highlights No, y/n answer directly,
    Enter answers with the highlighted choice, Esc cancels.
    """
    state = context.deletion_state
    if key == KEY_ESC:
        context.end_deletion(confirmed=False)
    elif key in (curses.KEY_LEFT, "h"):
        state.choice = True
    elif key in (curses.KEY_RIGHT, "l"):
        state.choice = False
    elif key == "y":
        context.end_deletion(confirmed=True)
    elif key == "n":
        context.end_deletion(confirmed=False)
    elif key in KEY_RETURN:
        context.end_deletion(confirmed=state.choice)


def handle_updating_mode(context, key):
    """The update popup only closes; editing happens with `oxmark update`."""
    if key == KEY_ESC:
        context.mode = "listing"
