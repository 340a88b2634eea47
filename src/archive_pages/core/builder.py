"""Builds a single page descriptor from a group's items."""

import logging
from collections.abc import Sequence
from typing import Any

from archive_pages.core.exceptions import PageOutOfRangeError
from archive_pages.core.pagination import DEFAULT_PAGINATE_PATH, page_count, page_num_to_path, slice_bounds
from archive_pages.core.slugs import archive_dir, slugify
from archive_pages.core.types import PageDescriptor

logger = logging.getLogger(__name__)


def build_page(
    archive_id: str,
    group_key: str,
    items: Sequence[Any],
    page_number: int,
    base_dir: str,
    template_path: str,
    per_page: int | None = None,
    paginate_path_template: str = DEFAULT_PAGINATE_PATH,
    *,
    title_prefix: str = "",
) -> PageDescriptor:
    """Compute the descriptor for page ``page_number`` of ``group_key``.

    Args:
        archive_id: Identifier of the archive type (e.g. ``"category"``).
        group_key: The raw key the items were grouped by.
        items: The group's items, already in display order.
        page_number: 1-based page to build.
        base_dir: Site-relative directory holding every group of this archive.
        template_path: Layout used to render the page; passed through untouched.
        per_page: Items per page, or None to put everything on one page.
        paginate_path_template: Path fragment with a ``:num`` token for pages 2+.
        title_prefix: Prepended to the group key to form the page title.

    Raises:
        InvalidArgumentError: If ``per_page`` is not positive.
        PageOutOfRangeError: If ``page_number`` is outside ``1..total_pages``.

    """
    total_items = len(items)
    total_pages = page_count(total_items, per_page)
    if page_number < 1 or page_number > total_pages:
        raise PageOutOfRangeError(page_number, total_pages, group_key)

    start, end = slice_bounds(total_items, per_page, page_number)

    previous_page = None if page_number == 1 else page_number - 1
    next_page = None if page_number == total_pages else page_number + 1

    directory = archive_dir(base_dir, group_key)

    descriptor = PageDescriptor(
        archive_id=archive_id,
        group_key=group_key,
        slug=slugify(group_key),
        title=f"{title_prefix}{group_key}",
        template_path=template_path,
        page_number=page_number,
        total_pages=total_pages,
        per_page=per_page,
        total_items=total_items,
        items=tuple(items[start:end]),
        previous_page_number=previous_page,
        previous_page_path=page_num_to_path(previous_page, directory, paginate_path_template),
        next_page_number=next_page,
        next_page_path=page_num_to_path(next_page, directory, paginate_path_template),
        output_path=page_num_to_path(page_number, directory, paginate_path_template),
    )
    logger.debug(
        "Built %s page %d/%d for %r at %s (%d items)",
        archive_id,
        page_number,
        total_pages,
        group_key,
        descriptor.output_path,
        end - start,
    )
    return descriptor
