"""
Buffer module for oxmark.

Defines the LineBuffer class, the single-line text input behind the search box.
It owns the query text and a cursor column, and applies editing keys to them.
"""
import curses

# Editing keys understood by LineBuffer.handle_key
KEY_BACKSPACES = ("\x7f", "\b", curses.KEY_BACKSPACE)
KEY_CTRL_A = "\x01"
KEY_CTRL_U = "\x15"
KEY_CTRL_W = "\x17"


class LineBuffer:
    """Represents a single line of editable text with a cursor."""
    def __init__(self, text: str = ""):
        self.text = text
        self.cursor_col = len(text)

    def current_text(self) -> str:
        return self.text

    def insert(self, chars: str):
        """Insert `chars` at the cursor and move the cursor past them."""
        self.text = self.text[:self.cursor_col] + chars + self.text[self.cursor_col:]
        self.cursor_col += len(chars)

    def backspace(self):
        """Delete the character before the cursor."""
        if self.cursor_col > 0:
            self.text = self.text[:self.cursor_col - 1] + self.text[self.cursor_col:]
            self.cursor_col -= 1

    def delete(self):
        """Delete the character under the cursor."""
        if self.cursor_col < len(self.text):
            self.text = self.text[:self.cursor_col] + self.text[self.cursor_col + 1:]

    def move_left(self):
        if self.cursor_col > 0:
            self.cursor_col -= 1

    def move_right(self):
        if self.cursor_col < len(self.text):
            self.cursor_col += 1

    def home(self):
        self.cursor_col = 0

    def end(self):
        self.cursor_col = len(self.text)

    def clear(self):
        """Delete everything before the cursor."""
        self.text = self.text[self.cursor_col:]
        self.cursor_col = 0

    def delete_word_back(self):
        """Delete the word before the cursor (and the blanks between it and the cursor)."""
        pos = self.cursor_col
        while pos > 0 and not self.text[pos - 1].isalnum():
            pos -= 1
        while pos > 0 and self.text[pos - 1].isalnum():
            pos -= 1
        self.text = self.text[:pos] + self.text[self.cursor_col:]
        self.cursor_col = pos

    def handle_key(self, key) -> bool:
        """
        Apply an editing key. `key` is a str for characters or an int for curses function keys.
        Returns True if the key was consumed.
        """
        if key in KEY_BACKSPACES:
            self.backspace()
        elif key == curses.KEY_DC:
            self.delete()
        elif key == curses.KEY_LEFT:
            self.move_left()
        elif key == curses.KEY_RIGHT:
            self.move_right()
        elif key in (curses.KEY_HOME, KEY_CTRL_A):
            self.home()
        elif key == curses.KEY_END:
            self.end()
        elif key == KEY_CTRL_U:
            self.clear()
        elif key == KEY_CTRL_W:
            self.delete_word_back()
        elif isinstance(key, str) and key.isprintable():
            self.insert(key)
        else:
            return False
        return True
