"""Domain models for the help registry and forum manuals."""

from danmaku_help.models.help import HelpEntry, HelpCategory
from danmaku_help.models.forum import (
    ManualSection,
    ForumPost,
    SectionSeedResult,
    SeedReport,
    DEFAULT_MANUAL_SECTIONS,
    MANUALS_CATEGORY,
    MANUALS_DESCRIPTION,
    MANUALS_DISPLAY_ORDER,
)

__all__ = [
    "HelpEntry",
    "HelpCategory",
    "ManualSection",
    "ForumPost",
    "SectionSeedResult",
    "SeedReport",
    "DEFAULT_MANUAL_SECTIONS",
    "MANUALS_CATEGORY",
    "MANUALS_DESCRIPTION",
    "MANUALS_DISPLAY_ORDER",
]
