"""Seeds forum manual sections from the help registry.

Each manual section becomes a forum subcategory under the manuals
parent. Every entry becomes a thread titled with its display title,
opened by a system-authored post holding the BBCode body verbatim.

Seeding is idempotent:
    - missing thread      -> thread + post created
    - thread without post -> post created
    - stale system post   -> content updated
    - post by a user      -> left alone
"""

import logging
from collections.abc import Sequence

from danmaku_help.lib.exceptions import NotFoundError
from danmaku_help.models.forum import (
    DEFAULT_MANUAL_SECTIONS,
    MANUALS_CATEGORY,
    MANUALS_DESCRIPTION,
    MANUALS_DISPLAY_ORDER,
    ManualSection,
    SectionSeedResult,
    SeedReport,
)
from danmaku_help.models.help import HelpEntry
from danmaku_help.services.forum.base import ForumStore
from danmaku_help.services.help.registry import HelpRegistry

logger = logging.getLogger(__name__)


class ForumSeeder:
    """
    Writes registry content into the forum's manual sections.

    The registry is injected; the seeder never loads content itself.
    """

    def __init__(
        self,
        registry: HelpRegistry,
        store: ForumStore,
        sections: Sequence[ManualSection] = DEFAULT_MANUAL_SECTIONS,
        author: str = "system",
    ):
        """
        Initialize the seeder.

        Args:
            registry: Source of help entries
            store: Forum storage to write into
            sections: Manual sections to seed, in display order
            author: Author recorded on seeded threads and posts
        """
        self.registry = registry
        self.store = store
        self.sections = tuple(sections)
        self.author = author

    def section_entries(self, section: ManualSection) -> list[HelpEntry]:
        """
        Concatenate the entries of a section's categories in order.

        Raises:
            NotFoundError: If a referenced category is unknown
        """
        entries: list[HelpEntry] = []
        for category_id in section.category_ids:
            entries.extend(self.registry.get_category(category_id))
        return entries

    def _check_sections(self) -> None:
        for section in self.sections:
            for category_id in section.category_ids:
                if not self.registry.has_category(category_id):
                    raise NotFoundError(category_id)

    def seed(self) -> SeedReport:
        """
        Seed every section.

        Returns:
            SeedReport with per-section counters

        Raises:
            NotFoundError: If a section references an unknown category
                (raised before anything is written)
            PersistenceError: If the store fails
        """
        self._check_sections()

        parent_id = self.store.ensure_category(
            MANUALS_CATEGORY, None, MANUALS_DESCRIPTION, MANUALS_DISPLAY_ORDER
        )
        report = SeedReport(parent_id=parent_id)

        for section in self.sections:
            result = self._seed_section(parent_id, section)
            report.sections.append(result)
            logger.info(
                f"Seeded '{section.name}': {result.created} created, "
                f"{result.updated} updated, {result.unchanged} unchanged, "
                f"{result.skipped} skipped"
            )

        return report

    def _seed_section(self, parent_id: int, section: ManualSection) -> SectionSeedResult:
        category_id = self.store.ensure_category(
            section.name, parent_id, section.description, section.display_order
        )
        result = SectionSeedResult(section=section.name, category_id=category_id)
        seen: set[str] = set()

        for entry in self.section_entries(section):
            title = entry.display_title
            if title in seen:
                logger.debug(f"Skipping repeated title '{title}' in '{section.name}'")
                result.skipped += 1
                continue
            seen.add(title)

            self._seed_entry(category_id, title, entry, result)

        return result

    def _seed_entry(
        self,
        category_id: int,
        title: str,
        entry: HelpEntry,
        result: SectionSeedResult,
    ) -> None:
        thread_id, created = self.store.ensure_thread(
            category_id, title, self.author, entry.content
        )
        if created:
            result.created += 1
            return

        post, created = self.store.ensure_first_post(thread_id, self.author, entry.content)
        if created:
            result.created += 1
        elif post.author == self.author and post.content != entry.content:
            self.store.update_post_content(post.id, entry.content)
            result.updated += 1
        else:
            result.unchanged += 1
