"""Page arithmetic and page path rendering.

Pages are 1-based. Page 1 lives at the archive directory itself; page ``n > 1``
lives at the archive directory joined with the pagination template, where the
``:num`` token is replaced by ``n`` (``page:num/`` gives ``page2/``, ``page3/``...).
"""

import math

from archive_pages.core.exceptions import InvalidArgumentError, PageOutOfRangeError
from archive_pages.core.slugs import join_path

PAGE_NUMBER_TOKEN = ":num"
DEFAULT_PAGINATE_PATH = "page:num/"


def validate_per_page(per_page: int | None) -> None:
    """Raise ``InvalidArgumentError`` unless ``per_page`` is None or a positive int."""
    if per_page is None:
        return
    if isinstance(per_page, bool) or not isinstance(per_page, int):
        raise InvalidArgumentError("per_page", per_page, "must be an integer or None")
    if per_page <= 0:
        raise InvalidArgumentError("per_page", per_page, "must be positive")


def page_count(total_items: int, per_page: int | None) -> int:
    """Return the number of pages needed for ``total_items``.

    Pagination is disabled when ``per_page`` is None, which always gives one
    page. An empty group still gets one (empty) page.
    """
    validate_per_page(per_page)
    if per_page is None:
        return 1
    return max(1, math.ceil(total_items / per_page))


def slice_bounds(total_items: int, per_page: int | None, page_number: int) -> tuple[int, int]:
    """Return ``(start, end_exclusive)`` of the items belonging to ``page_number``.

    Raises:
        InvalidArgumentError: If ``per_page`` is not positive.
        PageOutOfRangeError: If ``page_number`` is outside ``1..page_count``.

    """
    total_pages = page_count(total_items, per_page)
    if page_number < 1 or page_number > total_pages:
        raise PageOutOfRangeError(page_number, total_pages)

    if per_page is None:
        return 0, total_items

    start = (page_number - 1) * per_page
    return start, min(start + per_page, total_items)


def ensure_leading_slash(path: str) -> str:
    return path if path.startswith("/") else f"/{path}"


def page_num_to_path(
    page_number: int | None,
    pagination_base: str,
    paginate_path: str = DEFAULT_PAGINATE_PATH,
) -> str | None:
    """Return the site-root-relative path of a page, or None for a missing page.

    The template is not validated: without a ``:num`` token every page past the
    first shares one path, and every occurrence of the token is substituted.
    """
    if page_number is None:
        return None

    path = pagination_base
    if page_number > 1:
        path = join_path(path, paginate_path.replace(PAGE_NUMBER_TOKEN, str(page_number)))

    return ensure_leading_slash(path)
