"""
oxmark/ui/screen.py

Implements all UI-drawing functionality for the oxmark browser: title, search box,
bookmark list, directory preview, help line and the delete / update popups.
Drawing reads the context and never changes it.
"""

import curses
import os

from wcwidth import wcswidth, wcwidth

from oxmark import logger, preview

TITLE = "oxmark"
BOOKMARK_TITLE_WIDTH = 20

SELECTED_MARKER = "> "
DIR_ICON = " "
FILE_ICON = " "

# Rounded box drawing characters
BOX_TOP_LEFT, BOX_TOP_RIGHT = "╭", "╮"
BOX_BOTTOM_LEFT, BOX_BOTTOM_RIGHT = "╰", "╯"
BOX_HORIZONTAL, BOX_VERTICAL = "─", "│"

HELP_TEXT = {
    "listing": "[Ctrl+k] : move up | [Ctrl+j] : move down | [Ctrl+d] : delete | "
               "[Ctrl+e] : edit | [Esc] : exit | [Enter] : select",
    "deleting": "[Y] : delete | [N / Esc] : cancel | [h/l] : Move selection | [Enter] : select",
    "updating": "[Esc] : cancel",
}
DEFAULT_HELP = "Press enter to exit the application"

DELETE_QUESTION = "Are you sure you want to delete bookmark?  (y/N)"

# Color pair numbers
PAIR_SELECTED = 1
PAIR_DIM = 2
PAIR_DIRECTORY = 3
PAIR_HELP = 4
PAIR_DANGER = 5
PAIR_SAFE = 6

###############################################################################
# COLORS
###############################################################################

def init_colors():
    """Initialise the color pairs used by the browser (terminal default background)."""
    if not curses.has_colors():
        return
    curses.start_color()
    try:
        curses.use_default_colors()
        background = -1
    except curses.error:
        background = curses.COLOR_BLACK
    curses.init_pair(PAIR_SELECTED, curses.COLOR_GREEN, background)
    curses.init_pair(PAIR_DIM, curses.COLOR_WHITE, background)
    curses.init_pair(PAIR_DIRECTORY, curses.COLOR_BLUE, background)
    curses.init_pair(PAIR_HELP, curses.COLOR_BLUE, background)
    curses.init_pair(PAIR_DANGER, curses.COLOR_RED, background)
    curses.init_pair(PAIR_SAFE, curses.COLOR_BLUE, background)

def color(pair: int) -> int:
    """curses attribute for `pair`, or plain text on monochrome terminals."""
    try:
        if curses.has_colors():
            return curses.color_pair(pair)
    except curses.error:
        pass
    return curses.A_NORMAL

###############################################################################
# PURE HELPERS
###############################################################################

def pad_line(text: str, width: int) -> str:
    """Pad or trim a string to match the visual width."""
    if width <= 0:
        return ""
    visual_width = wcswidth(text)
    if visual_width < 0:
        visual_width = len(text)
    if visual_width == width:
        return text
    if visual_width < width:
        return text + " " * (width - visual_width)
    out = []
    used = 0
    for ch in text:
        w = max(wcwidth(ch), 0)
        if used + w > width:
            break
        out.append(ch)
        used += w
    return "".join(out) + " " * (width - used)

def row_parts(bookmark, is_selected: bool, is_dir: bool):
    """
    Split the list row for `bookmark` into (marker, icon, name, description).
    The name is padded to the name column; longer names are kept whole.
    """
    marker = SELECTED_MARKER if is_selected else "  "
    icon = DIR_ICON if is_dir else FILE_ICON
    name = bookmark.name if bookmark.name is not None else "<No name>"
    if wcswidth(name) < BOOKMARK_TITLE_WIDTH:
        name = pad_line(name, BOOKMARK_TITLE_WIDTH)
    return marker, icon, name, bookmark.description or ""

def format_row(bookmark, is_selected: bool, is_dir: bool, width: int = None) -> str:
    """The full list row as one string, trimmed to `width` when given."""
    row = "".join(row_parts(bookmark, is_selected, is_dir))
    if width is not None:
        row = pad_line(row, width).rstrip()
    return row

def help_text(mode: str) -> str:
    return HELP_TEXT.get(mode, DEFAULT_HELP)

def scroll_start(selection_index, visible_rows: int) -> int:
    """First list row to draw so that the selection stays visible."""
    if selection_index is None or visible_rows <= 0:
        return 0
    return max(0, selection_index - visible_rows + 1)

def popup_rect(height: int, width: int, percent_height: int = 20, percent_width: int = 40,
               min_height: int = 7, min_width: int = 54):
    """Centered (y, x, h, w) rectangle taking the given share of the screen."""
    h = min(height, max(min_height, height * percent_height // 100))
    w = min(width, max(min_width, width * percent_width // 100))
    return (height - h) // 2, (width - w) // 2, h, w

def preview_lines(bookmark, show_hidden: bool = False) -> list:
    """
    Lines of the preview pane as (text, kind) pairs.
    kind is one of "info", "missing", "file", "path", "dir", "entry".
    """
    if bookmark is None:
        return [("No bookmark selected", "info")]
    state = preview.describe(bookmark.path)
    if state == "missing":
        return [("Path does not exist", "missing")]
    if state == "file":
        return [("File preview not yet supported", "file")]
    lines = [(bookmark.path, "path")]
    for entry in preview.preview_entries(bookmark.path, show_hidden):
        kind = "dir" if entry.is_dir else "entry"
        lines.append((f"{entry.branch} {entry.icon} {entry.name}", kind))
    return lines

###############################################################################
# DRAWING
###############################################################################

def draw_box(stdscr, y: int, x: int, h: int, w: int, attr: int = 0, fill: bool = False):
    """Draw a rounded box; `fill` blanks the interior first (for popups)."""
    if h < 2 or w < 2:
        return
    logger.safe_addstr(stdscr, y, x,
                       BOX_TOP_LEFT + BOX_HORIZONTAL * (w - 2) + BOX_TOP_RIGHT, attr)
    for row in range(y + 1, y + h - 1):
        logger.safe_addstr(stdscr, row, x, BOX_VERTICAL, attr)
        if fill:
            logger.safe_addstr(stdscr, row, x + 1, " " * (w - 2))
        logger.safe_addstr(stdscr, row, x + w - 1, BOX_VERTICAL, attr)
    logger.safe_addstr(stdscr, y + h - 1, x,
                       BOX_BOTTOM_LEFT + BOX_HORIZONTAL * (w - 2) + BOX_BOTTOM_RIGHT, attr)

def draw_centered(stdscr, y: int, x: int, w: int, text: str, attr: int = 0):
    if w <= 0:
        return
    if max(wcswidth(text), 0) > w:
        text = pad_line(text, w).rstrip()
    offset = max(0, (w - max(wcswidth(text), 0)) // 2)
    logger.safe_addstr(stdscr, y, x + offset, text, attr)

def draw_list(context, y: int, x: int, h: int, w: int):
    """Draw the bookmark list pane."""
    stdscr = context.stdscr
    draw_box(stdscr, y, x, h, w)
    visible_rows = h - 2
    right_edge = x + w - 1
    start = scroll_start(context.selection_index, visible_rows)
    rows = context.filtered_bookmarks[start:start + max(visible_rows, 0)]
    for offset, bookmark in enumerate(rows):
        index = start + offset
        is_selected = index == context.selection_index
        is_dir = os.path.isdir(bookmark.path)
        marker, icon, name, description = row_parts(bookmark, is_selected, is_dir)
        if is_selected:
            parts = [(marker, color(PAIR_SELECTED)),
                     (icon, color(PAIR_SELECTED)),
                     (name.rstrip(), color(PAIR_SELECTED) | curses.A_UNDERLINE),
                     (name[len(name.rstrip()):], curses.A_NORMAL),
                     (description, color(PAIR_DIM) | curses.A_DIM)]
        else:
            parts = [(marker, curses.A_NORMAL),
                     (icon, color(PAIR_DIRECTORY) if is_dir else curses.A_NORMAL),
                     (name, curses.A_NORMAL),
                     (description, color(PAIR_DIM) | curses.A_DIM)]
        col = x + 1
        for text, attr in parts:
            room = right_edge - col
            if room <= 0:
                break
            text = pad_line(text, room).rstrip() if max(wcswidth(text), 0) > room else text
            logger.safe_addstr(stdscr, y + 1 + offset, col, text, attr)
            col += max(wcswidth(text), 0)

def draw_preview(context, y: int, x: int, h: int, w: int):
    """Draw the preview pane for the selected bookmark."""
    draw_box(context.stdscr, y, x, h, w)
    bookmark = context.selected_bookmark
    if bookmark is not None and bookmark.name:
        draw_centered(context.stdscr, y + 1, x + 1, w - 2, bookmark.name)

    kind_attrs = {
        "info": color(PAIR_HELP),
        "missing": color(PAIR_DANGER),
        "file": color(PAIR_SAFE),
        "path": color(PAIR_DIM) | curses.A_DIM,
        "dir": color(PAIR_DIRECTORY),
        "entry": curses.A_NORMAL,
    }
    body_y = y + 3
    for i, (text, kind) in enumerate(preview_lines(bookmark, context.show_hidden)):
        row_y = body_y + i
        if row_y >= y + h - 1:
            break
        attr = kind_attrs.get(kind, curses.A_NORMAL)
        if kind in ("info", "missing", "file"):
            draw_centered(context.stdscr, row_y, x + 1, w - 2, text, attr)
        else:
            logger.safe_addstr(context.stdscr, row_y, x + 2, pad_line(text, w - 4).rstrip(), attr)

def draw_search(context, y: int, x: int, w: int):
    """Draw the search box and return the screen position of the text cursor."""
    draw_box(context.stdscr, y, x, 3, w)
    field_x = x + 3
    field_width = max(1, w - 6)
    text = context.search_bar.current_text()
    before_cursor = text[:context.search_bar.cursor_col]
    # Scroll the field horizontally so the cursor stays inside it
    start = 0
    while start < len(before_cursor) and max(wcswidth(before_cursor[start:]), 0) >= field_width:
        start += 1
    logger.safe_addstr(context.stdscr, y + 1, field_x, pad_line(text[start:], field_width))
    return y + 1, field_x + max(wcswidth(before_cursor[start:]), 0)

def draw_help(context, y: int, x: int, w: int):
    logger.safe_addstr(context.stdscr, y, x, pad_line(help_text(context.mode), w).rstrip(),
                       color(PAIR_HELP))

def draw_deleting_popup(context, height: int, width: int):
    """Draw the centered Yes / No confirmation for the pending deletion."""
    state = context.deletion_state
    if state is None:
        return
    stdscr = context.stdscr
    top, left, h, w = popup_rect(height, width)
    draw_box(stdscr, top, left, h, w, fill=True)
    draw_centered(stdscr, top + 1, left + 1, w - 2, DELETE_QUESTION)
    draw_centered(stdscr, top + 2, left + 1, w - 2, state.target.name or state.target.path,
                  color(PAIR_DIM) | curses.A_DIM)

    button_w = 9
    button_y = top + h - 4
    yes_x = left + w // 4 - button_w // 2
    no_x = left + 3 * w // 4 - button_w // 2
    yes_attr = color(PAIR_DANGER) | curses.A_BOLD if state.choice else curses.A_NORMAL
    no_attr = curses.A_NORMAL if state.choice else color(PAIR_SAFE) | curses.A_BOLD
    for label, bx, attr in (("Yes", yes_x, yes_attr), ("No", no_x, no_attr)):
        draw_box(stdscr, button_y, bx, 3, button_w, attr)
        draw_centered(stdscr, button_y + 1, bx + 1, button_w - 2, label, attr)

def draw_updating_popup(context, height: int, width: int):
    """Draw the update popup: editing is done from the command line."""
    top, left, h, w = popup_rect(height, width)
    draw_box(context.stdscr, top, left, h, w, fill=True)
    lines = ["Editing is not available in the browser yet."]
    bookmark = context.selected_bookmark
    if bookmark is not None:
        lines.append(f"oxmark update {bookmark.id} -n NAME -d DESCRIPTION -p PATH")
    for i, text in enumerate(lines):
        draw_centered(context.stdscr, top + 2 + i, left + 1, w - 2, text)

def display(context):
    """
    Re-draw the entire screen: title, search box, list and preview panes,
    help line, and the popup of the active mode.
    """
    stdscr = context.stdscr
    height, width = stdscr.getmaxyx()
    stdscr.erase()

    main_x = 2
    main_w = max(0, width - 4)
    draw_box(stdscr, 0, main_x, height, main_w)

    inner_x = main_x + 3
    inner_w = max(0, main_w - 6)
    draw_centered(stdscr, 2, inner_x, inner_w, TITLE, curses.A_BOLD)

    search_y = 4
    cursor_y, cursor_x = draw_search(context, search_y, inner_x, inner_w)

    panes_y = search_y + 3
    help_y = height - 2
    panes_h = max(0, help_y - panes_y)
    list_w = inner_w // 2
    draw_list(context, panes_y, inner_x, panes_h, list_w)
    draw_preview(context, panes_y, inner_x + list_w, panes_h, inner_w - list_w)
    draw_help(context, help_y, inner_x, inner_w)

    if context.mode == "deleting":
        draw_deleting_popup(context, height, width)
    elif context.mode == "updating":
        draw_updating_popup(context, height, width)

    try:
        if context.mode == "listing":
            curses.curs_set(1)
            stdscr.move(cursor_y, cursor_x)
        else:
            curses.curs_set(0)
    except curses.error:
        pass

    stdscr.refresh()
