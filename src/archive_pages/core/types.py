"""Core data types for archive generation."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EmptyKeyPolicy(str, Enum):
    """What to do with a group key whose slug is empty."""

    ALLOW = "allow"
    REJECT = "reject"


class PageDescriptor(BaseModel):
    """One listing page of one group within one archive.

    ``per_page`` is None when pagination is disabled; such a group always has
    exactly one page carrying every item.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    archive_id: str
    group_key: str
    slug: str
    title: str = ""
    template_path: str = ""

    page_number: int = Field(ge=1)
    total_pages: int = Field(ge=1)
    per_page: int | None = None
    total_items: int = Field(ge=0)
    items: tuple[Any, ...] = ()

    previous_page_number: int | None = None
    previous_page_path: str | None = None
    next_page_number: int | None = None
    next_page_path: str | None = None

    output_path: str

    @property
    def is_first(self) -> bool:
        return self.previous_page_number is None

    @property
    def is_last(self) -> bool:
        return self.next_page_number is None

    def to_record(self) -> dict[str, Any]:
        """Return the flat record handed to the template engine.

        Page-level fields sit at the top; navigation and item data are grouped
        under ``paginator`` so they cannot clash with the page's own variables.
        ``paginator`` is a plain dict, so none of its keys may shadow a dict
        method name (``items``, ``keys``, ``values``...) that Jinja2 would
        resolve first.
        """
        return {
            "archive_id": self.archive_id,
            "group_key": self.group_key,
            "page_id": self.group_key,
            "slug": self.slug,
            "title": self.title,
            "output_path": self.output_path,
            "template_path": self.template_path,
            "paginator": {
                "page": self.page_number,
                "per_page": self.per_page,
                "posts": list(self.items),
                "total_posts": self.total_items,
                "total_pages": self.total_pages,
                "previous_page": self.previous_page_number,
                "previous_page_path": self.previous_page_path,
                "next_page": self.next_page_number,
                "next_page_path": self.next_page_path,
            },
        }
