"""
SQLite bookmark store for oxmark.

Durable CRUD over Bookmark records, keyed by integer id and unique canonical path.
All calls are synchronous; the browser only ever uses the store from its own loop.
"""
import os
import sqlite3

from oxmark import logger
from oxmark.bookmark import Bookmark

SCHEMA = """
CREATE TABLE IF NOT EXISTS bookmarks (
    id INTEGER PRIMARY KEY,
    name TEXT,
    path TEXT,
    description TEXT
)
"""


class StoreError(Exception):
    """Base class for store failures; also raised for unrecoverable database errors."""


class BookmarkNotFound(StoreError):
    pass


class BookmarkExists(StoreError):
    def __init__(self, path: str):
        super().__init__(f"Bookmark with path {path} already exists")
        self.path = path


class InvalidPath(StoreError):
    pass


def canonical_path(path: str) -> str:
    """
    Return the absolute, symlink-resolved form of `path` ('~' is expanded).
    Raises InvalidPath if the path does not exist.
    """
    expanded = os.path.expanduser(path)
    if not os.path.exists(expanded):
        raise InvalidPath(f"No such file or directory: {path}")
    return os.path.realpath(expanded)


def _row_to_bookmark(row) -> Bookmark:
    return Bookmark(id=row[0], name=row[1], path=row[2], description=row[3])


class BookmarkStore:
    """Bookmarks table in a single SQLite database file."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        try:
            directory = os.path.dirname(os.path.abspath(db_path))
            os.makedirs(directory, exist_ok=True)
            self.conn = sqlite3.connect(db_path)
            self.conn.execute(SCHEMA)
            self.conn.commit()
        except (OSError, sqlite3.Error) as e:
            raise StoreError(f"Cannot open database {db_path}: {e}") from e

    def __enter__(self) -> "BookmarkStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self.conn.close()

    def _query(self, sql: str, params=()) -> list:
        try:
            return self.conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Query failed: {e}") from e

    def _write(self, sql: str, params=()) -> sqlite3.Cursor:
        try:
            with self.conn:
                return self.conn.execute(sql, params)
        except sqlite3.Error as e:
            raise StoreError(f"Write failed: {e}") from e

    # ── reads ───────────────────────────────────────────────
    def list_all(self) -> list:
        """Return every bookmark in id order."""
        rows = self._query("SELECT id, name, path, description FROM bookmarks ORDER BY id")
        return [_row_to_bookmark(row) for row in rows]

    def get(self, bookmark_id: int) -> Bookmark:
        rows = self._query("SELECT id, name, path, description FROM bookmarks WHERE id = ?",
                           (bookmark_id,))
        if not rows:
            raise BookmarkNotFound(f"Bookmark with id {bookmark_id} not found")
        return _row_to_bookmark(rows[0])

    def get_by_path(self, path: str) -> Bookmark:
        """Look up a bookmark by its stored (canonical) path."""
        rows = self._query("SELECT id, name, path, description FROM bookmarks WHERE path = ?",
                           (path,))
        if not rows:
            raise BookmarkNotFound(f"Bookmark with path {path} not found")
        return _row_to_bookmark(rows[0])

    def _path_taken(self, path: str, by_other_than: int = None) -> bool:
        try:
            owner = self.get_by_path(path)
        except BookmarkNotFound:
            return False
        return owner.id != by_other_than

    # ── writes ──────────────────────────────────────────────
    def create(self, path: str, name: str = None, description: str = None) -> Bookmark:
        """
        Store a new bookmark for `path` and return it with its assigned id.
        Raises InvalidPath for a missing path and BookmarkExists for a duplicate.
        """
        bookmark = Bookmark(path=canonical_path(path), name=name, description=description)
        if self._path_taken(bookmark.path):
            raise BookmarkExists(bookmark.path)
        cursor = self._write(
            "INSERT INTO bookmarks (name, path, description) VALUES (?, ?, ?)",
            (bookmark.name, bookmark.path, bookmark.description))
        bookmark.id = cursor.lastrowid
        logger.log(f"created bookmark {bookmark.id}: {bookmark.path}")
        return bookmark

    def update(self, bookmark_id: int, path: str = None, name: str = None,
               description: str = None) -> Bookmark:
        """Overwrite the given fields of bookmark `bookmark_id`."""
        if path is not None:
            path = canonical_path(path)
            if self._path_taken(path, by_other_than=bookmark_id):
                raise BookmarkExists(path)
        bookmark = self.get(bookmark_id)
        bookmark.update(name=name, path=path, description=description)
        self._write(
            "UPDATE bookmarks SET name = ?, path = ?, description = ? WHERE id = ?",
            (bookmark.name, bookmark.path, bookmark.description, bookmark_id))
        logger.log(f"updated bookmark {bookmark_id}")
        return bookmark

    def delete(self, path: str) -> Bookmark:
        """Delete the bookmark registered for `path` and return it."""
        try:
            target = canonical_path(path)
        except InvalidPath:
            # The directory may be gone already; fall back to the literal absolute path.
            target = os.path.abspath(os.path.expanduser(path))
        try:
            bookmark = self.get_by_path(target)
        except BookmarkNotFound:
            raise BookmarkNotFound(f"Bookmark with path {path} not found") from None
        self.delete_bookmark(bookmark.id)
        return bookmark

    def delete_bookmark(self, bookmark_id: int) -> None:
        """Delete by id; deleting an unknown id is not an error."""
        self._write("DELETE FROM bookmarks WHERE id = ?", (bookmark_id,))
        logger.log(f"deleted bookmark {bookmark_id}")
