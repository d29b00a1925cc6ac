"""Help entry and category entities.

Entries carry an opaque BBCode body. Nothing in this module inspects
or rewrites the markup; the content string is stored exactly as loaded.
"""

from pydantic import BaseModel, Field, field_validator


class HelpEntry(BaseModel):
    """
    One documented symbol (function, keyword, or built-in variable).

    Immutable after creation. The same name may appear in several
    categories; each occurrence is an independent entry.
    """

    name: str = Field(..., description="Documented symbol or concept")
    thread_title: str | None = Field(
        default=None,
        alias="threadTitle",
        description="Alternate display title, e.g. a signature like getDirection(x, y)",
    )
    content: str = Field(..., description="BBCode body, treated as opaque")

    model_config = {
        "frozen": True,  # Reference data, never mutated
        "str_strip_whitespace": False,  # Preserve markup byte for byte
        "extra": "forbid",  # Payload keys only; threadTitle has no snake_case form
    }

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        """Validate that the entry name is not empty."""
        if not v or not v.strip():
            from danmaku_help.lib.exceptions import ValidationError

            raise ValidationError("Help entry name cannot be empty", field="name")
        return v

    @field_validator("thread_title", mode="before")
    @classmethod
    def thread_title_not_null(cls, v: object) -> object:
        """Reject an explicit null; an absent title is simply left out."""
        if v is None:
            from danmaku_help.lib.exceptions import ValidationError

            raise ValidationError(
                "Help entry threadTitle must be omitted rather than null", field="threadTitle"
            )
        return v

    @field_validator("thread_title")
    @classmethod
    def thread_title_not_blank(cls, v: str | None) -> str | None:
        """Validate that an explicit thread title carries text."""
        if v is not None and not v.strip():
            from danmaku_help.lib.exceptions import ValidationError

            raise ValidationError("Help entry threadTitle cannot be blank", field="threadTitle")
        return v

    @field_validator("content")
    @classmethod
    def content_not_empty(cls, v: str) -> str:
        """Validate that content is not empty or whitespace-only."""
        if not v or not v.strip():
            from danmaku_help.lib.exceptions import ValidationError

            raise ValidationError(
                "Help entry content cannot be empty or whitespace-only", field="content"
            )
        return v

    @property
    def display_title(self) -> str:
        """Title shown to readers: threadTitle when present, else name."""
        return self.thread_title or self.name

    def to_payload(self) -> dict:
        """Convert back to the payload record shape ({name, threadTitle?, content})."""
        return self.model_dump(by_alias=True, exclude_none=True)


class HelpCategory(BaseModel):
    """
    A named, ordered grouping of help entries.

    Entry order is display order and is preserved exactly.
    """

    id: str = Field(..., description="Category identifier, e.g. 'specialKeywords'")
    entries: tuple[HelpEntry, ...] = Field(
        default=(), description="Entries in display order"
    )

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    @field_validator("id")
    @classmethod
    def id_not_empty(cls, v: str) -> str:
        """Validate that the category id is not empty."""
        if not v or not v.strip():
            from danmaku_help.lib.exceptions import ValidationError

            raise ValidationError("Help category id cannot be empty", field="id")
        return v

    def to_payload(self) -> dict:
        """Convert back to the payload category shape."""
        return {
            "id": self.id,
            "entries": [entry.to_payload() for entry in self.entries],
        }
