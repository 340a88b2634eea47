import pytest
from pydantic import ValidationError

from archive_pages.core.builder import build_page
from archive_pages.core.exceptions import InvalidArgumentError, PageOutOfRangeError

POSTS = ["p1", "p2", "p3"]


def _build(page_number: int, items=POSTS, per_page=2, **kwargs):
    return build_page(
        "category",
        kwargs.pop("group_key", "Ruby"),
        items,
        page_number,
        kwargs.pop("base_dir", "archive"),
        "category_index.html",
        per_page,
        kwargs.pop("paginate_path_template", "page:num/"),
        **kwargs,
    )


def test_first_page():
    page = _build(1)

    assert page.archive_id == "category"
    assert page.group_key == "Ruby"
    assert page.slug == "ruby"
    assert page.template_path == "category_index.html"
    assert page.page_number == 1
    assert page.total_pages == 2
    assert page.total_items == 3
    assert page.per_page == 2
    assert page.items == ("p1", "p2")
    assert page.output_path == "/archive/ruby"
    assert page.previous_page_number is None
    assert page.previous_page_path is None
    assert page.next_page_number == 2
    assert page.next_page_path == "/archive/ruby/page2/"
    assert page.is_first
    assert not page.is_last


def test_last_page():
    page = _build(2)

    assert page.items == ("p3",)
    assert page.output_path == "/archive/ruby/page2/"
    assert page.previous_page_number == 1
    assert page.previous_page_path == "/archive/ruby"
    assert page.next_page_number is None
    assert page.next_page_path is None
    assert page.is_last


def test_middle_page_links_both_ways():
    page = _build(2, items=list(range(10)), per_page=3)

    assert page.items == (3, 4, 5)
    assert page.previous_page_path == "/archive/ruby"
    assert page.next_page_path == "/archive/ruby/page3/"


def test_page_past_the_end_is_rejected():
    with pytest.raises(PageOutOfRangeError) as exc_info:
        _build(3)

    assert exc_info.value.page_number == 3
    assert exc_info.value.total_pages == 2
    assert exc_info.value.group_key == "Ruby"


def test_page_zero_is_rejected():
    with pytest.raises(PageOutOfRangeError):
        _build(0)


def test_pagination_disabled_puts_everything_on_one_page():
    page = _build(1, per_page=None)

    assert page.items == ("p1", "p2", "p3")
    assert page.total_pages == 1
    assert page.per_page is None
    assert page.previous_page_path is None
    assert page.next_page_path is None

    with pytest.raises(PageOutOfRangeError):
        _build(2, per_page=None)


def test_empty_group_gets_one_empty_page():
    page = _build(1, items=[], per_page=5)

    assert page.items == ()
    assert page.total_items == 0
    assert page.total_pages == 1
    assert page.next_page_path is None


def test_non_positive_per_page_is_rejected():
    with pytest.raises(InvalidArgumentError):
        _build(1, per_page=0)


def test_custom_paginate_path_and_base_dir():
    page = _build(2, base_dir="/blog/categories/", paginate_path_template="p/:num/")

    assert page.output_path == "/blog/categories/ruby/p/2/"
    assert page.previous_page_path == "/blog/categories/ruby"


def test_title_prefix():
    assert _build(1, title_prefix="Category: ").title == "Category: Ruby"
    assert _build(1).title == "Ruby"


def test_descriptor_is_immutable():
    page = _build(1)

    with pytest.raises(ValidationError):
        page.page_number = 2  # type: ignore[misc]


def test_items_are_not_copied_beyond_the_page():
    post = {"title": "hello"}
    page = _build(1, items=[post], per_page=1)

    assert page.items[0] is post
