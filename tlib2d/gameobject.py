"""Game objects that can be flagged for removal, and a container for them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, List, Optional, TypeVar


@dataclass
class GameObject:
    """Base for objects held in a :class:`GameObjectContainer`."""

    freed: bool = False


G = TypeVar("G", bound=GameObject)


class GameObjectContainer(Generic[G]):
    """An ordered collection of game objects that can drop freed ones."""

    def __init__(self, items: Optional[Iterable[G]] = None) -> None:
        self.data: List[G] = []
        for item in items or ():
            self.append(item)

    def clear_freed(self) -> None:
        """Remove every object whose ``freed`` flag is set, keeping order."""
        self.data = [obj for obj in self.data if not obj.freed]

    def append(self, item: G) -> None:
        if not isinstance(item, GameObject):
            raise TypeError("items must derive from GameObject")
        self.data.append(item)

    def __iter__(self) -> Iterator[G]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, index: int) -> G:
        return self.data[index]