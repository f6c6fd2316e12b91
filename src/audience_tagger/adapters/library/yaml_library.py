"""Media library stored as a YAML file."""

import logging
from pathlib import Path
from typing import Any

import yaml

from audience_tagger.core import (
    ItemRepository,
    ItemUpdateType,
    LibraryError,
    MediaItem,
    sanitize_for_log,
)

logger = logging.getLogger(__name__)


class YamlLibrary(ItemRepository):
    """Library of media items kept in a single YAML document.

    The file holds an ``items`` list; each entry carries ``id``, ``kind``,
    ``title`` and optional ``year``, ``overview``, ``official_rating``,
    ``genres``, ``tags`` and ``is_virtual`` fields. Entries that cannot be
    read are left in the file untouched.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._document: dict[str, Any] = {}
        self._entries: list[tuple[int, MediaItem]] = []
        self._loaded = False

    def load(self) -> list[MediaItem]:
        """Read all items from disk."""
        if not self.path.exists():
            raise LibraryError(f"Library file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise LibraryError(f"Could not parse library {self.path}: {e}") from e

        if not isinstance(document, dict):
            raise LibraryError(f"Library {self.path} must be a mapping with an 'items' list")

        entries = []
        for index, entry in enumerate(document.get("items") or []):
            try:
                entries.append((index, self._item_from_dict(entry, index)))
            except (TypeError, ValueError) as e:
                logger.warning("Skipping library entry %d: %s", index, e)

        self._document = document
        self._entries = entries
        self._loaded = True
        logger.debug("Loaded %d items from %s", len(entries), self.path)
        return [item for _, item in entries]

    async def query_items(
        self, kind: str, recursive: bool = True, exclude_virtual: bool = True
    ) -> list[MediaItem]:
        """Return items of the given kind in file order.

        The YAML library is flat, so ``recursive`` has no effect.
        """
        if not self._loaded:
            self.load()

        return [
            item
            for _, item in self._entries
            if item.kind.lower() == kind.lower() and not (exclude_virtual and item.is_virtual)
        ]

    async def persist(self, item: MediaItem, change: ItemUpdateType) -> None:
        """Write the whole library back to disk."""
        logger.debug("Persisting '%s' (%s)", sanitize_for_log(item.title), change.value)
        self.save()

    def save(self) -> None:
        raw_items = self._document.get("items") or []
        for index, item in self._entries:
            # Only tags are rewritten; other metadata belongs to the library
            raw = raw_items[index]
            if item.tags != list(raw.get("tags") or []):
                raw["tags"] = list(item.tags)

        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            yaml.dump(self._document, f, allow_unicode=True, default_flow_style=False, sort_keys=False)
        tmp_path.replace(self.path)

    def _item_from_dict(self, entry: Any, index: int) -> MediaItem:
        if not isinstance(entry, dict):
            raise TypeError("entry is not a mapping")

        year = entry.get("year")
        genres = entry.get("genres")
        return MediaItem(
            id=str(entry.get("id") or index),
            kind=str(entry.get("kind") or "movie"),
            title=str(entry.get("title") or ""),
            year=int(year) if year is not None else None,
            overview=entry.get("overview"),
            official_rating=entry.get("official_rating"),
            genres=[str(g) for g in genres] if genres is not None else None,
            tags=[str(t) for t in entry.get("tags") or []],
            is_virtual=bool(entry.get("is_virtual", False)),
        )
