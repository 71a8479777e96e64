"""In-memory wardrobe repository with a persistence callback."""
from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from logic.errors import NotFoundError
from models.wardrobe_item import AnalyzedClothingItem, ClothingItem

WardrobeListener = Callable[[List[ClothingItem]], None]
IdFactory = Callable[[], str]


def timestamp_id() -> str:
    """ISO-8601 UTC timestamp used as an item id."""

    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


class WardrobeRepository:
    """Ordered collection of clothing items, most recently added first.

    ``on_change`` receives the full collection after every mutation so the
    caller can persist it synchronously.
    """

    def __init__(
        self,
        items: Optional[Iterable[ClothingItem]] = None,
        on_change: Optional[WardrobeListener] = None,
        id_factory: Optional[IdFactory] = None,
    ) -> None:
        self._items: List[ClothingItem] = [copy.deepcopy(item) for item in items or []]
        self._on_change = on_change
        self._id_factory = id_factory or timestamp_id

    def _notify(self) -> None:
        if self._on_change:
            self._on_change(self.list_all())

    def _next_id(self) -> str:
        existing = {item.id for item in self._items}
        candidate = self._id_factory()
        base, suffix = candidate, 1
        while candidate in existing:
            candidate = f"{base}-{suffix}"
            suffix += 1
        return candidate

    def add(self, draft: AnalyzedClothingItem) -> ClothingItem:
        item = ClothingItem.from_draft(copy.deepcopy(draft), item_id=self._next_id(), is_available=True)
        self._items.insert(0, item)
        self._notify()
        return copy.deepcopy(item)

    def update_by_id(self, item: ClothingItem) -> ClothingItem:
        for index, current in enumerate(self._items):
            if current.id == item.id:
                self._items[index] = copy.deepcopy(item)
                self._notify()
                return copy.deepcopy(item)
        raise NotFoundError(item.id)

    def toggle_availability(self, item_id: str) -> ClothingItem:
        current = self.get(item_id)
        if current is None:
            raise NotFoundError(item_id)
        return self.update_by_id(current.with_availability(not current.is_available))

    def get(self, item_id: str) -> Optional[ClothingItem]:
        for item in self._items:
            if item.id == item_id:
                return copy.deepcopy(item)
        return None

    def list_all(self) -> List[ClothingItem]:
        return [copy.deepcopy(item) for item in self._items]

    def list_available(self) -> List[ClothingItem]:
        return [copy.deepcopy(item) for item in self._items if item.is_available]

    def __len__(self) -> int:
        return len(self._items)


__all__ = ["WardrobeRepository", "timestamp_id"]
