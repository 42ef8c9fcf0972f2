"""
Directory preview for oxmark.

This module lists the contents of a bookmarked directory for the preview pane:
directories first, then files, each group sorted by name, hidden entries skipped
unless asked for.
"""
import os
from oxmark import logger

# Icon definitions for preview display (requires a Nerd Font for proper rendering)
FOLDER_SYMBOL = ""
FILE_SYMBOL = ""
OTHER_SYMBOL = ""
TREE_BRANCH = "├─"
TREE_LAST = "└─"


class PreviewEntry:
    """One row of a directory preview."""
    def __init__(self, name: str, path: str, is_dir: bool, is_file: bool = None):
        self.name = name
        self.path = path
        self.is_dir = is_dir
        self.is_file = (not is_dir) if is_file is None else is_file
        self.is_last = False

    @property
    def icon(self) -> str:
        if self.is_dir:
            return FOLDER_SYMBOL
        if self.is_file:
            return FILE_SYMBOL
        return OTHER_SYMBOL

    @property
    def branch(self) -> str:
        return TREE_LAST if self.is_last else TREE_BRANCH

    def __repr__(self):
        return f"PreviewEntry({self.name!r}, is_dir={self.is_dir})"


def describe(path: str) -> str:
    """Classify `path` as "missing", "file" or "dir"."""
    if not path or not os.path.exists(path):
        return "missing"
    if os.path.isdir(path):
        return "dir"
    return "file"


def preview_entries(path: str, show_hidden: bool = False) -> list:
    """
    List the direct children of the directory `path`.
    An unreadable directory yields an empty list.
    """
    try:
        entries_iter = os.scandir(path)
    except OSError as e:
        logger.error(f"cannot list {path}: {e}")
        return []

    entries = []
    with entries_iter:
        for entry in entries_iter:
            if not show_hidden and entry.name.startswith('.'):
                continue
            try:
                is_dir = entry.is_dir()
                is_file = entry.is_file()
            except OSError:
                is_dir = is_file = False
            entries.append(PreviewEntry(entry.name, entry.path, is_dir, is_file))

    entries.sort(key=lambda e: (not e.is_dir, e.name))
    if entries:
        entries[-1].is_last = True
    return entries
