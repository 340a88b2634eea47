"""Jinja2 rendering of archive page records."""

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from archive_pages.core.slugs import slugify
from archive_pages.core.types import PageDescriptor

INDEX_FILENAME = "index.html"


class PageRenderer:
    """Renders page descriptors with Jinja2 layouts.

    Each descriptor names its layout through ``template_path``, resolved
    relative to ``template_dir``. The template sees the record returned by
    ``PageDescriptor.to_record()``, so pagination data lives under
    ``paginator``.
    """

    def __init__(self, template_dir: Path) -> None:
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(["html", "htm", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["slugify"] = slugify

    def load_template(self, template_name: str) -> Template:
        """Raises ``TemplateNotFound`` if the layout does not exist."""
        return self.env.get_template(template_name)

    def render(self, page: PageDescriptor, **extra: Any) -> str:
        template = self.load_template(page.template_path)
        return template.render({**page.to_record(), **extra})

    @staticmethod
    def output_file(page: PageDescriptor, site_dir: Path) -> Path:
        """Map a page's output path to ``<site_dir>/<output_path>/index.html``."""
        return Path(site_dir) / page.output_path.strip("/") / INDEX_FILENAME

    def write(self, page: PageDescriptor, site_dir: Path) -> Path:
        target = self.output_file(page, site_dir)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.render(page), encoding="utf-8")
        return target
