"""
Command handlers for the oxmark CLI.

Each handler takes the parsed arguments and an open BookmarkStore, does its work,
and returns the process exit status. Store errors are reported on stderr.
"""
import os
import sys

from oxmark import logger
from oxmark.store import StoreError

SHELL_FUNCTION = (
    "\n# oxmark\n"
    'function bk() { if [ -z "$1" ]; then eval "$(oxmark command)"; else oxmark "$@"; fi }\n'
)
SHELL_RC_FILES = (".bashrc", ".zshrc")


def report(error: Exception) -> int:
    """Print a store error for the user and return the failure status."""
    print(f"oxmark: {error}", file=sys.stderr)
    logger.error(str(error))
    return 1


def cmd_add(args, store) -> int:
    try:
        bookmark = store.create(args.path, args.name, args.description)
    except StoreError as e:
        return report(e)
    logger.log(f"add: {bookmark.path}")
    return 0


def cmd_delete(args, store) -> int:
    try:
        bookmark = store.delete(args.path)
    except StoreError as e:
        return report(e)
    logger.log(f"delete: {bookmark.path}")
    return 0


def cmd_update(args, store) -> int:
    try:
        store.update(args.id, path=args.path, name=args.name, description=args.description)
    except StoreError as e:
        return report(e)
    logger.log(f"update: {args.id}")
    return 0


def cmd_list(args, store) -> int:
    try:
        bookmarks = store.list_all()
    except StoreError as e:
        return report(e)
    for bookmark in bookmarks:
        print(bookmark.path if args.pathsonly else str(bookmark))
    return 0


def install_shell_integration(home: str = None) -> list:
    """
    Append the `bk` helper to each existing shell rc file that lacks it.
    Returns (filename, added) pairs for the rc files found.
    """
    home = home or os.path.expanduser("~")
    results = []
    for rc_name in SHELL_RC_FILES:
        rc_path = os.path.join(home, rc_name)
        if not os.path.isfile(rc_path):
            continue
        with open(rc_path, 'r', encoding='utf-8') as f:
            content = f.read()
        if SHELL_FUNCTION.strip() in content:
            results.append((rc_name, False))
            continue
        with open(rc_path, 'a', encoding='utf-8') as f:
            f.write(SHELL_FUNCTION)
        logger.log(f"init: added shell function to {rc_path}")
        results.append((rc_name, True))
    return results


def cmd_init(args, store=None) -> int:
    try:
        results = install_shell_integration()
    except OSError as e:
        return report(e)
    for rc_name, added in results:
        if added:
            print(f"Adding line to {rc_name}")
        else:
            print(f"Line already exists in {rc_name}")
    print("Done. After restarting your terminal use bk command to start using oxmark")
    return 0
