"""Forum manual entities used when seeding help threads.

The forum groups manuals under a single parent category. Each manual
section is a forum subcategory built from one or more registry
categories, concatenated in order.
"""

from dataclasses import dataclass, field

from pydantic import BaseModel, Field


class ManualSection(BaseModel):
    """
    A forum subcategory under the manuals parent.

    Immutable after creation.
    """

    name: str = Field(..., description="Forum subcategory name, e.g. 'Special Keywords'")
    description: str = Field(..., description="Subcategory description shown in the forum")
    display_order: int = Field(..., ge=0, description="Sort position under the parent")
    category_ids: tuple[str, ...] = Field(
        ..., min_length=1, description="Registry categories seeded into this section, in order"
    )

    model_config = {
        "frozen": True,
    }


class ForumPost(BaseModel):
    """A post row as stored by the forum."""

    id: int
    thread_id: int
    author: str
    content: str

    model_config = {
        "frozen": True,
    }


# Parent category that holds every manual section
MANUALS_CATEGORY = "Manuals"
MANUALS_DESCRIPTION = "Game manuals and documentation"
MANUALS_DISPLAY_ORDER = 30

DEFAULT_MANUAL_SECTIONS: tuple[ManualSection, ...] = (
    ManualSection(
        name="Special Keywords",
        description="Manual for special keywords",
        display_order=1,
        category_ids=("specialKeywords",),
    ),
    ManualSection(
        name="Built-in Variables",
        description="Manual for built-in variables",
        display_order=2,
        category_ids=("builtInVariables",),
    ),
    ManualSection(
        name="Danmaku Helpers",
        description="Manual for danmaku helpers",
        display_order=3,
        category_ids=("danmakuHelpers",),
    ),
    ManualSection(
        name="DragonBones",
        description="Manual for DragonBones",
        display_order=4,
        category_ids=("dragonBones",),
    ),
    ManualSection(
        name="JavaScript Stuff",
        description="Manual for JavaScript stuff",
        display_order=5,
        category_ids=(
            "javaScriptStuff",
            "mathFunctions",
            "arrayMethods",
            "stringMethods",
            "numberMethods",
            "globalFunctions",
            "arrayConstructor",
            "stringNumberConstructors",
        ),
    ),
)


@dataclass
class SectionSeedResult:
    """Outcome of seeding one manual section.

    Attributes:
        section: Forum subcategory name
        category_id: Forum row id of the subcategory
        created: Threads (with their post) or missing posts created
        updated: System posts whose content was refreshed
        unchanged: Threads already up to date
        skipped: Entries not seeded because the title was already used
            earlier in the section
    """

    section: str
    category_id: int
    created: int = 0
    updated: int = 0
    unchanged: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        """Number of entries considered for this section."""
        return self.created + self.updated + self.unchanged + self.skipped


@dataclass
class SeedReport:
    """Outcome of a full seeding run."""

    parent_id: int
    sections: list[SectionSeedResult] = field(default_factory=list)

    @property
    def created(self) -> int:
        return sum(s.created for s in self.sections)

    @property
    def updated(self) -> int:
        return sum(s.updated for s in self.sections)

    @property
    def unchanged(self) -> int:
        return sum(s.unchanged for s in self.sections)

    @property
    def skipped(self) -> int:
        return sum(s.skipped for s in self.sections)

    @property
    def changed(self) -> bool:
        """Whether the run wrote anything."""
        return (self.created + self.updated) > 0
