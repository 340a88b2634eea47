import pytest


@pytest.fixture
def grouped_posts() -> dict[str, list[str]]:
    """Two categories: one spanning two pages at per_page=2, one fitting on a single page."""
    return {"Ruby": ["p1", "p2", "p3"], "Go & Rust": ["p4", "p5"]}
