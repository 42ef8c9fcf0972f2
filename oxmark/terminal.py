"""
Terminal setup for the oxmark browser.

The browser prints its result on stdout for the calling shell, typically through
command substitution, so curses must draw on the controlling terminal instead.
"""
import contextlib
import curses
import os
import sys

from oxmark import logger
from oxmark.ui import screen

# Milliseconds the browser waits for a key before redrawing anyway
INPUT_TIMEOUT_MS = 250

# Controlling terminal the browser draws on when stdout is redirected
TTY_PATH = "/dev/tty"


@contextlib.contextmanager
def tty_stdout():
    """
    While active, file descriptor 1 points at /dev/tty if stdout is not a terminal.
    The original stdout is restored on exit, even when the body raises.
    """
    if sys.stdout.isatty():
        yield
        return

    sys.stdout.flush()
    saved = os.dup(1)
    try:
        tty = os.open(TTY_PATH, os.O_RDWR)
    except OSError:
        os.close(saved)
        raise
    logger.debug(f"stdout is not a tty; drawing on {TTY_PATH}")
    try:
        os.dup2(tty, 1)
        os.close(tty)
        yield
    finally:
        sys.stdout.flush()
        os.dup2(saved, 1)
        os.close(saved)


def setup_terminal(stdscr):
    """
    Configure a fresh curses screen for the browser: raw keys (Ctrl+C is a key,
    not a signal), Enter distinct from Ctrl+J, keypad decoding, bounded polling.
    """
    curses.raw()
    curses.nonl()
    stdscr.keypad(True)
    stdscr.timeout(INPUT_TIMEOUT_MS)
    screen.init_colors()
