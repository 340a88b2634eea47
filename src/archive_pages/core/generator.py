"""Walks every group of an archive and yields one descriptor per page."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from archive_pages.core.builder import build_page
from archive_pages.core.exceptions import EmptyGroupKeyError, PageOutOfRangeError
from archive_pages.core.pagination import DEFAULT_PAGINATE_PATH, page_count, validate_per_page
from archive_pages.core.slugs import slugify
from archive_pages.core.types import EmptyKeyPolicy, PageDescriptor

if TYPE_CHECKING:
    from archive_pages.core.config import ArchiveSettings

logger = logging.getLogger(__name__)


def generate_all(
    archive_id: str,
    grouped_items: Mapping[str, Sequence[Any]],
    base_dir: str,
    template_path: str,
    per_page: int | None = None,
    paginate_path_template: str = DEFAULT_PAGINATE_PATH,
    *,
    title_prefix: str = "",
    empty_key_policy: EmptyKeyPolicy = EmptyKeyPolicy.ALLOW,
) -> Iterator[PageDescriptor]:
    """Yield every page of every group, in the mapping's iteration order.

    ``per_page`` is validated before anything is yielded. A failing group
    stops the iteration; descriptors already yielded are left to the caller.
    """
    validate_per_page(per_page)
    return _iter_pages(
        archive_id,
        grouped_items,
        base_dir,
        template_path,
        per_page,
        paginate_path_template,
        title_prefix,
        EmptyKeyPolicy(empty_key_policy),
    )


def _iter_pages(
    archive_id: str,
    grouped_items: Mapping[str, Sequence[Any]],
    base_dir: str,
    template_path: str,
    per_page: int | None,
    paginate_path_template: str,
    title_prefix: str,
    empty_key_policy: EmptyKeyPolicy,
) -> Iterator[PageDescriptor]:
    for group_key, items in grouped_items.items():
        if not slugify(group_key):
            if empty_key_policy is EmptyKeyPolicy.REJECT:
                raise EmptyGroupKeyError(archive_id, group_key)
            logger.warning(
                "Group key %r of archive '%s' has an empty slug; its pages land in the base directory",
                group_key,
                archive_id,
            )

        total_pages = page_count(len(items), per_page)
        for page_number in range(1, total_pages + 1):
            try:
                yield build_page(
                    archive_id,
                    group_key,
                    items,
                    page_number,
                    base_dir,
                    template_path,
                    per_page,
                    paginate_path_template,
                    title_prefix=title_prefix,
                )
            except PageOutOfRangeError:
                logger.error(
                    "Unexpected page out of range while generating '%s': group_key=%r page_number=%d total_pages=%d",
                    archive_id,
                    group_key,
                    page_number,
                    total_pages,
                )
                raise

        logger.debug("Archive '%s': %r -> %d page(s), %d item(s)", archive_id, group_key, total_pages, len(items))


class ArchiveGenerator:
    """Generates the pages of one configured archive.

    Binds an ``ArchiveSettings`` block to ``generate_all`` so callers only
    supply the grouped items.
    """

    def __init__(self, settings: ArchiveSettings) -> None:
        self.settings = settings

    @property
    def archive_id(self) -> str:
        return self.settings.archive_id

    def generate(self, grouped_items: Mapping[str, Sequence[Any]]) -> Iterator[PageDescriptor]:
        settings = self.settings
        logger.info("Generating archive '%s' for %d group(s)", settings.archive_id, len(grouped_items))
        return generate_all(
            settings.archive_id,
            grouped_items,
            settings.base_dir,
            settings.template_path,
            settings.per_page,
            settings.paginate_path,
            title_prefix=settings.title_prefix,
            empty_key_policy=settings.empty_key_policy,
        )
