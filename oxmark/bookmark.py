"""
Bookmark record for oxmark.

A Bookmark is a named, described filesystem path. Its id is assigned by the
store on first persistence; its path is always kept in canonical form.
"""
from dataclasses import dataclass


@dataclass
class Bookmark:
    path: str
    name: str = None
    description: str = None
    id: int = None

    def update(self, name: str = None, path: str = None, description: str = None) -> None:
        """Overwrite the fields that are given, keep the others."""
        if name is not None:
            self.name = name
        if path is not None:
            self.path = path
        if description is not None:
            self.description = description

    @property
    def label(self) -> str:
        """Name used for matching; empty when the bookmark has none."""
        return self.name or ""

    def __str__(self) -> str:
        def show(value):
            return "None" if value is None else str(value)
        return (f"id: {show(self.id)}, name: {show(self.name)}, "
                f"path: {show(self.path)}, description: {show(self.description)}")
