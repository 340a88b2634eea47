"""Paginated archive page generation for static sites."""

from archive_pages.core.generator import ArchiveGenerator, generate_all
from archive_pages.core.types import EmptyKeyPolicy, PageDescriptor

__all__ = ["ArchiveGenerator", "EmptyKeyPolicy", "PageDescriptor", "generate_all"]
