"""Bounded top-N leaderboard."""

from collections.abc import Iterator
from typing import Protocol


class Ratable(Protocol):
    """Anything that has a score and can describe itself on one line."""

    @property
    def score(self) -> float: ...

    def pretty(self) -> str: ...


class Rating:
    """Keeps the ``size`` highest-scoring items offered so far.

    Items are held in descending score order. When scores are equal the item
    that was offered first keeps the higher rank, so a newcomer is placed
    after every resident with an equal or greater score.
    """

    def __init__(self, size: int):
        """Initialize an empty rating.

        Args:
            size: Maximum number of items to hold
        """
        self._size = size
        self._items: list[Ratable] = []

    @property
    def size(self) -> int:
        return self._size

    @property
    def items(self) -> list[Ratable]:
        """Held items in rank order (a copy)."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Ratable]:
        return iter(list(self._items))

    def offer(self, item: Ratable) -> bool:
        """Try to place an item on the leaderboard.

        Args:
            item: Candidate to rank

        Returns:
            True if the item was inserted, False if it was rejected
        """
        if self._size <= 0:
            return False

        score = item.score
        for index, resident in enumerate(self._items):
            if score > resident.score:
                self._items.insert(index, item)
                del self._items[self._size:]
                return True

        if len(self._items) < self._size:
            self._items.append(item)
            return True

        return False

    def pretty(self) -> str:
        """Render one line per held item, best first."""
        lines = []
        for rank, item in enumerate(self._items, start=1):
            lines.append(f"{rank} (Rating: {item.score}): {item.pretty()}\n")
        return "".join(lines)
