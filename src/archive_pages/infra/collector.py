"""Site-wide collection of generated archive pages."""

import logging
from collections.abc import Iterable, Iterator

from archive_pages.core.exceptions import SlugCollisionError
from archive_pages.core.types import PageDescriptor

logger = logging.getLogger(__name__)


class SitePages:
    """Owns the pages produced by every archive of one build.

    Pages are keyed by output path and a later page always replaces an earlier
    one on the same path. When two distinct group keys of one archive render to
    the same path a warning is logged and the collision recorded; with
    ``strict=True`` a ``SlugCollisionError`` is raised instead. Two pages of the
    same group sharing a path (a pagination template without ``:num``) are
    logged as well.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict
        self._pages: dict[str, PageDescriptor] = {}
        self.collisions: list[tuple[str, str, str]] = []

    def add(self, page: PageDescriptor) -> None:
        existing = self._pages.get(page.output_path)
        if existing is not None and existing.archive_id == page.archive_id:
            if existing.group_key != page.group_key:
                self._collide(existing, page)
            elif existing.page_number != page.page_number:
                logger.warning(
                    "Pages %d and %d of %r in archive '%s' both render to %s; keeping page %d",
                    existing.page_number,
                    page.page_number,
                    page.group_key,
                    page.archive_id,
                    page.output_path,
                    page.page_number,
                )
        elif existing is not None:
            logger.debug(
                "Archive '%s' replaces archive '%s' at %s", page.archive_id, existing.archive_id, page.output_path
            )
        self._pages[page.output_path] = page

    def _collide(self, existing: PageDescriptor, page: PageDescriptor) -> None:
        if self.strict:
            raise SlugCollisionError(page.output_path, existing.group_key, page.group_key)
        logger.warning(
            "Group keys %r and %r of archive '%s' both render to %s; keeping the latter",
            existing.group_key,
            page.group_key,
            page.archive_id,
            page.output_path,
        )
        self.collisions.append((page.output_path, existing.group_key, page.group_key))

    def extend(self, pages: Iterable[PageDescriptor]) -> int:
        """Add every page and return how many were added."""
        count = 0
        for page in pages:
            self.add(page)
            count += 1
        return count

    def __iter__(self) -> Iterator[PageDescriptor]:
        return iter(self._pages.values())

    def __len__(self) -> int:
        return len(self._pages)

    def __contains__(self, output_path: object) -> bool:
        return output_path in self._pages

    def get(self, output_path: str) -> PageDescriptor | None:
        return self._pages.get(output_path)
