"""Observable state holder for shopping lists, selection and tax rate."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterable, Iterator, List, Optional, Set, Tuple, Union
from uuid import UUID

from shopperspoint.codec import (
    LISTS_KEY,
    SELECTED_LIST_KEY,
    TAX_RATE_KEY,
    decode_list_id,
    decode_lists,
    decode_tax_rate,
    encode_list_id,
    encode_lists,
    encode_tax_rate,
)
from shopperspoint.config import Settings
from shopperspoint.models.shopping import Category, ShoppingItem, ShoppingList
from shopperspoint.storage.base import KeyValueStore
from shopperspoint.storage.sqlite import SqliteKeyValueStore

DEFAULT_TAX_RATE = 0.01

logger = logging.getLogger(__name__)

Observer = Callable[["ShoppingStore"], None]


class ShoppingStore:
    """Holds every shopping list plus the current selection and tax rate.

    Each mutation updates memory first, then writes the affected keys to the
    backend and notifies subscribers. Inside :meth:`batch` the writes and
    notifications are deferred until the outermost block exits.

    Operations that target the selected list do nothing when there is no
    selection.
    """

    def __init__(self, backend: KeyValueStore, *, default_tax_rate: float = DEFAULT_TAX_RATE) -> None:
        self._backend = backend
        self._default_tax_rate = default_tax_rate
        self._observers: List[Observer] = []
        self._batch_depth = 0
        self._dirty: Set[str] = set()

        self._lists: List[ShoppingList] = []
        self._selected_list_id: Optional[UUID] = None
        self._tax_rate = default_tax_rate
        self._load()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ShoppingStore":
        backend = SqliteKeyValueStore(settings.database_path)
        return cls(backend, default_tax_rate=settings.default_tax_rate)

    # ------------------------------------------------------------------
    # State access

    @property
    def lists(self) -> Tuple[ShoppingList, ...]:
        """Current lists as frozen snapshots; change them through the store methods."""
        return tuple(self._lists)

    @property
    def selected_list_id(self) -> Optional[UUID]:
        return self._selected_list_id

    @property
    def selected_list(self) -> Optional[ShoppingList]:
        """Resolve the selected identifier against the current collection."""

        index = self._index_of(self._selected_list_id)
        return None if index is None else self._lists[index]

    @property
    def tax_rate(self) -> float:
        return self._tax_rate

    @tax_rate.setter
    def tax_rate(self, rate: float) -> None:
        self.set_tax_rate(rate)

    # ------------------------------------------------------------------
    # Observers

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Call ``observer`` with the store after every change; returns an unsubscribe callable."""

        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    @contextmanager
    def batch(self) -> Iterator["ShoppingStore"]:
        """Group several mutations into a single write per key and one notification."""

        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0:
                self._flush()

    # ------------------------------------------------------------------
    # Lists

    def add_list(self, name: str) -> ShoppingList:
        """Append a new empty list and select it."""

        new_list = ShoppingList(name=name)
        self._lists.append(new_list)
        self._selected_list_id = new_list.id
        logger.debug("Added list %r", name, extra={"list_id": new_list.id})
        self._mark_dirty(LISTS_KEY, SELECTED_LIST_KEY)
        return new_list

    def delete_list(self, positions: Iterable[int]) -> None:
        """Remove the lists at ``positions``, reselecting the first remaining list if needed."""

        doomed = {position for position in positions if 0 <= position < len(self._lists)}
        if not doomed:
            return

        deleting_selected = any(self._lists[position].id == self._selected_list_id for position in doomed)
        self._lists = [item for position, item in enumerate(self._lists) if position not in doomed]
        logger.debug("Deleted lists at positions %s", sorted(doomed))

        if deleting_selected:
            self._selected_list_id = self._lists[0].id if self._lists else None
            self._mark_dirty(LISTS_KEY, SELECTED_LIST_KEY)
        else:
            self._mark_dirty(LISTS_KEY)

    def select_list(self, list_id: Optional[UUID]) -> bool:
        """Select ``list_id`` (or clear the selection with ``None``).

        Identifiers that do not match a list are ignored and ``False`` is returned.
        """

        if list_id is not None and self._index_of(list_id) is None:
            logger.debug("Ignoring selection of unknown list", extra={"list_id": list_id})
            return False
        self._selected_list_id = list_id
        self._mark_dirty(SELECTED_LIST_KEY)
        return True

    # ------------------------------------------------------------------
    # Items

    def add_item(self, name: str, category: Union[Category, str], price: float) -> Optional[ShoppingItem]:
        """Append a new item to the selected list."""

        target = self.selected_list
        if target is None:
            logger.debug("No list selected; dropping item %r", name)
            return None

        item = ShoppingItem(name=name, category=category, price=price)
        self._replace_selected(target.items + (item,))
        logger.debug("Added item %r to list", name, extra={"list_id": target.id})
        self._mark_dirty(LISTS_KEY)
        return item

    def delete_item(self, positions: Iterable[int]) -> None:
        """Remove the items at ``positions`` from the selected list."""

        target = self.selected_list
        if target is None:
            return

        doomed = {position for position in positions if 0 <= position < len(target.items)}
        if not doomed:
            return
        self._replace_selected(item for position, item in enumerate(target.items) if position not in doomed)
        self._mark_dirty(LISTS_KEY)

    def delete_item_by_id(self, item_id: UUID) -> bool:
        target = self.selected_list
        if target is None:
            return False

        remaining = [item for item in target.items if item.id != item_id]
        if len(remaining) == len(target.items):
            return False
        self._replace_selected(remaining)
        self._mark_dirty(LISTS_KEY)
        return True

    def clear_items(self) -> None:
        """Remove every item from the selected list."""

        target = self.selected_list
        if target is None or not target.items:
            return
        self._replace_selected(())
        self._mark_dirty(LISTS_KEY)

    # ------------------------------------------------------------------
    # Tax

    def set_tax_rate(self, rate: float) -> None:
        self._tax_rate = float(rate)
        self._mark_dirty(TAX_RATE_KEY)

    def calculate_total(self) -> float:
        """Sum of ``price * (1 + tax_rate)`` over the selected list; unrounded."""

        target = self.selected_list
        if target is None:
            return 0.0
        return sum((item.price * (1 + self._tax_rate) for item in target.items), 0.0)

    # ------------------------------------------------------------------
    # Persistence

    def _replace_selected(self, items: Iterable[ShoppingItem]) -> None:
        index = self._index_of(self._selected_list_id)
        assert index is not None
        self._lists[index] = self._lists[index].with_items(items)

    def _index_of(self, list_id: Optional[UUID]) -> Optional[int]:
        if list_id is None:
            return None
        for index, candidate in enumerate(self._lists):
            if candidate.id == list_id:
                return index
        return None

    def _load(self) -> None:
        self._lists = decode_lists(self._backend.get(LISTS_KEY)) or []

        rate = decode_tax_rate(self._backend.get(TAX_RATE_KEY))
        self._tax_rate = self._default_tax_rate if rate is None else rate

        raw_selection = self._backend.get(SELECTED_LIST_KEY)
        saved_id = decode_list_id(raw_selection)
        if self._index_of(saved_id) is not None:
            self._selected_list_id = saved_id
        elif self._lists:
            self._selected_list_id = self._lists[0].id

        logger.debug(
            "Loaded %d list(s), tax_rate=%s, selected=%s",
            len(self._lists),
            self._tax_rate,
            self._selected_list_id,
        )
        resolved = None if self._selected_list_id is None else encode_list_id(self._selected_list_id)
        if raw_selection != resolved:
            # Stored selection was stale, unreadable or missing; record the resolved one.
            self._write(SELECTED_LIST_KEY)

    def _mark_dirty(self, *keys: str) -> None:
        self._dirty.update(keys)
        if self._batch_depth == 0:
            self._flush()

    def _flush(self) -> None:
        dirty, self._dirty = self._dirty, set()
        if not dirty:
            return
        for key in (LISTS_KEY, SELECTED_LIST_KEY, TAX_RATE_KEY):
            if key in dirty:
                self._write(key)
        self._notify()

    def _write(self, key: str) -> None:
        if key == LISTS_KEY:
            self._backend.set(LISTS_KEY, encode_lists(self._lists))
        elif key == TAX_RATE_KEY:
            self._backend.set(TAX_RATE_KEY, encode_tax_rate(self._tax_rate))
        elif key == SELECTED_LIST_KEY:
            if self._selected_list_id is None:
                self._backend.remove(SELECTED_LIST_KEY)
            else:
                self._backend.set(SELECTED_LIST_KEY, encode_list_id(self._selected_list_id))

    def _notify(self) -> None:
        for observer in list(self._observers):
            observer(self)


__all__ = ["DEFAULT_TAX_RATE", "Observer", "ShoppingStore"]
