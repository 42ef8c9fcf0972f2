"""
Logger module for oxmark.

Appends level-tagged, timestamped lines to one log file, e.g.

    [2024-05-01 12:00:00] INFO created bookmark 3: /home/me/src

DEBUG lines are only written when oxmark runs with -d. The log never raises:
the browser owns the terminal and has nowhere to show a logging failure.
"""
import curses
import datetime
import os

LOG_FILE_PATH = os.path.expanduser("~/.local/share/oxmark/oxmark.log")

# Raised by each -d on the command line
DEBUG_LEVEL = 0


def configure(path: str = None, debug_level: int = 0) -> None:
    """Set the log destination and verbosity once the config is known."""
    global LOG_FILE_PATH, DEBUG_LEVEL
    if path:
        LOG_FILE_PATH = path
    DEBUG_LEVEL = debug_level


def log(message: str, level: str = "INFO") -> None:
    stamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    line = f"[{stamp}] {level} {message}\n"
    try:
        directory = os.path.dirname(LOG_FILE_PATH)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(LOG_FILE_PATH, 'a', encoding='utf-8') as log_file:
            log_file.write(line)
    except OSError:
        pass


def debug(message: str) -> None:
    if DEBUG_LEVEL > 0:
        log(message, "DEBUG")


def error(message: str) -> None:
    log(message, "ERROR")


def safe_addstr(window, y: int, x: int, text: str, attr: int = 0) -> None:
    """
    window.addstr that tolerates clipping: curses raises when text touches the
    bottom-right cell or falls outside the window, which a resize can cause.
    """
    try:
        window.addstr(y, x, text, attr)
    except curses.error:
        debug(f"addstr clipped at ({y},{x}): {text!r}")
