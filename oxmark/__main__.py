"""
Main entry point for oxmark.

Without a subcommand the interactive browser starts and the chosen path is
printed; `oxmark command` prints a shell command (cd or $EDITOR) instead.
"""
import argparse
import curses
import sys

from oxmark import __version__, app, commands, logger
from oxmark.config import load_config
from oxmark.store import BookmarkStore, StoreError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oxmark",
        description="Bookmark filesystem paths and jump back to them.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-d", "--debug", action="count", default=0,
                        help="Write debug information to the log file (repeatable).")
    sub = parser.add_subparsers(dest="command")

    add = sub.add_parser("add", help="Add a bookmark.")
    add.add_argument("path", help="The path of the bookmark.")
    add.add_argument("name", nargs="?", help="The name of the bookmark.")
    add.add_argument("description", nargs="?", help="The description of the bookmark.")

    delete = sub.add_parser("delete", help="Delete a bookmark.")
    delete.add_argument("path", help="The path of the bookmark.")

    update = sub.add_parser("update", help="Update a bookmark.")
    update.add_argument("id", type=int, help="The id of the bookmark.")
    update.add_argument("-p", "--path", help="The new path of the bookmark.")
    update.add_argument("-n", "--name", help="The new name of the bookmark.")
    update.add_argument("-d", "--description", help="The new description of the bookmark.")

    list_parser = sub.add_parser("list", help="List all bookmarks.")
    list_parser.add_argument("-p", "--pathsonly", action="store_true",
                             help="Print only the paths.")

    sub.add_parser("command", help="Print the shell command for the selected bookmark.")
    sub.add_parser("init", help="Install the bk shell function.")
    return parser


HANDLERS = {
    "add": commands.cmd_add,
    "delete": commands.cmd_delete,
    "update": commands.cmd_update,
    "list": commands.cmd_list,
}


def browse(store, config, print_command: bool) -> int:
    """Run the browser and print its result for the shell."""
    try:
        output = app.run_browser(store, config, print_command)
    except KeyboardInterrupt:
        return 0
    except (StoreError, curses.error, OSError) as e:
        return commands.report(e)
    if output:
        print(output)
    return 0


def run(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config()
    logger.configure(config.log_file, args.debug)
    logger.debug(f"command: {args.command or 'browse'}")

    if args.command == "init":
        return commands.cmd_init(args)

    try:
        store = BookmarkStore(config.database)
    except StoreError as e:
        return commands.report(e)

    with store:
        if args.command in HANDLERS:
            return HANDLERS[args.command](args, store)
        return browse(store, config, print_command=args.command == "command")


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
