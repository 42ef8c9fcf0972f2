"""
Selection tracking for the bookmark list.

Holds an index into the filtered list. The index is None only while the list is
empty; after a refresh that shrinks the list it lands on the new last row.
"""


class Selection:
    def __init__(self, index: int = 0):
        self.index = index

    def reclamp(self, length: int) -> None:
        """Pin the index into [0, length - 1], or None for an empty list."""
        if length <= 0:
            self.index = None
        elif self.index is None or self.index < 0 or self.index >= length:
            self.index = length - 1

    def increment(self, length: int) -> None:
        if length <= 0:
            return
        current = -1 if self.index is None else self.index
        self.index = min(current + 1, length - 1)

    def decrement(self) -> None:
        if self.index is None:
            return
        self.index = max(self.index - 1, 0)

    def pick(self, items):
        """Return the selected item of `items`, or None."""
        if self.index is None or not 0 <= self.index < len(items):
            return None
        return items[self.index]
