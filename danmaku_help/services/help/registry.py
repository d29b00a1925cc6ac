"""Read-only registry of help categories and entries.

The registry is built once from a complete set of categories and is
never mutated afterwards. Concurrent readers need no locking; a new
content set is published by building a new registry and swapping the
reference (see danmaku_help.services.help.loader.publish_registry).
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, Protocol

import pydantic

from danmaku_help.lib.exceptions import NotFoundError, ValidationError
from danmaku_help.models.help import HelpCategory, HelpEntry

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    """Presentation seam between the registry and whatever displays entries."""

    def render(self, entry: HelpEntry) -> str:
        """Return the display form of an entry."""
        ...


class PassThroughRenderer:
    """Renderer that hands the BBCode body through untouched."""

    def render(self, entry: HelpEntry) -> str:
        return entry.content


def _validated(model: type[pydantic.BaseModel], raw: Any, where: str) -> Any:
    """Validate one payload record, naming its position on failure."""
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise ValidationError(f"Invalid {where}: {e.message}", field=e.field) from e
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        if location:
            where = f"{where} at '{location}'"
        raise ValidationError(
            f"Invalid {where}: {first['msg']}",
            field=str(first["loc"][-1]) if first["loc"] else None,
        ) from e


class HelpRegistry:
    """
    Immutable mapping from category id to its ordered entries.

    Responsibilities:
        - Preserve category order and per-category display order
        - Answer lookups by category and by entry name
        - Forward entries to the configured renderer
    """

    def __init__(
        self,
        categories: Iterable[HelpCategory],
        renderer: Renderer | None = None,
    ):
        """
        Build the registry.

        Args:
            categories: Categories in display order
            renderer: Presentation seam (default: PassThroughRenderer)

        Raises:
            ValidationError: If two categories share an id
        """
        entries: dict[str, tuple[HelpEntry, ...]] = {}
        index: dict[str, Mapping[str, HelpEntry]] = {}

        for category in categories:
            if category.id in entries:
                raise ValidationError(
                    f"Duplicate help category id: {category.id}", field="id"
                )
            entries[category.id] = category.entries

            # First occurrence wins for duplicate names
            by_name: dict[str, HelpEntry] = {}
            for entry in category.entries:
                by_name.setdefault(entry.name, entry)
            index[category.id] = MappingProxyType(by_name)

        self._entries = MappingProxyType(entries)
        self._index = MappingProxyType(index)
        self._order = tuple(entries)
        self._renderer: Renderer = renderer or PassThroughRenderer()

        logger.debug(f"Built help registry: {self!r}")

    @classmethod
    def from_payload(
        cls, payload: Mapping[str, Any], renderer: Renderer | None = None
    ) -> "HelpRegistry":
        """
        Build a registry from the payload shape.

        Args:
            payload: {"categories": [{"id": ..., "entries": [...]}, ...]}
            renderer: Optional presentation seam

        Returns:
            HelpRegistry holding the payload's categories

        Raises:
            ValidationError: If the payload is malformed
        """
        if not isinstance(payload, Mapping):
            raise ValidationError("Help payload must be an object", field="categories")

        raw_categories = payload.get("categories")
        if not isinstance(raw_categories, list):
            raise ValidationError(
                "Help payload must contain a 'categories' list", field="categories"
            )

        categories = []
        for position, raw in enumerate(raw_categories):
            where = f"help category #{position}"
            if not isinstance(raw, Mapping):
                raise ValidationError(f"Invalid {where}: must be an object", field="categories")

            raw_entries = raw.get("entries", [])
            if not isinstance(raw_entries, list):
                raise ValidationError(f"Invalid {where}: entries must be a list", field="entries")

            entries = tuple(
                _validated(HelpEntry, item, f"{where} entry #{index}")
                for index, item in enumerate(raw_entries)
            )
            categories.append(_validated(HelpCategory, {**raw, "entries": entries}, where))

        return cls(categories, renderer=renderer)

    def list_categories(self) -> list[str]:
        """
        List category ids in construction order.

        Returns:
            Category ids; the same order on every call
        """
        return list(self._order)

    def get_category(self, category_id: str) -> tuple[HelpEntry, ...]:
        """
        Get all entries of a category in display order.

        Args:
            category_id: Known category id

        Returns:
            The category's entries (possibly empty)

        Raises:
            NotFoundError: If the category is unknown
        """
        try:
            return self._entries[category_id]
        except KeyError:
            raise NotFoundError(category_id) from None

    def find_entry(self, category_id: str, entry_name: str) -> HelpEntry:
        """
        Find an entry by name within a category.

        When a name repeats inside one category, the first entry in
        display order is returned.

        Args:
            category_id: Known category id
            entry_name: Entry name (not the thread title)

        Returns:
            Matching HelpEntry

        Raises:
            NotFoundError: If the category or the entry is unknown
        """
        try:
            by_name = self._index[category_id]
        except KeyError:
            raise NotFoundError(category_id) from None

        entry = by_name.get(entry_name)
        if entry is None:
            raise NotFoundError(category_id, entry_name)
        return entry

    def render(self, entry: HelpEntry) -> str:
        """Render an entry through the configured renderer."""
        return self._renderer.render(entry)

    def has_category(self, category_id: str) -> bool:
        """Check whether a category id is known."""
        return category_id in self._entries

    def iter_entries(self) -> Iterator[tuple[str, HelpEntry]]:
        """Yield (category_id, entry) pairs in display order."""
        for category_id in self._order:
            for entry in self._entries[category_id]:
                yield category_id, entry

    def to_payload(self) -> dict:
        """Re-serialize to the payload shape accepted by from_payload."""
        return {
            "categories": [
                HelpCategory(id=category_id, entries=self._entries[category_id]).to_payload()
                for category_id in self._order
            ]
        }

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._entries

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        total = sum(len(entries) for entries in self._entries.values())
        return f"HelpRegistry(categories={len(self._order)}, entries={total})"
