from pathlib import Path
from typing import Any, NoReturn, Optional

import typer
from jinja2 import TemplateNotFound
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from archive_pages.core.config import ArchiveSettings, ArchivesConfig
from archive_pages.core.exceptions import ArchiveError
from archive_pages.core.generator import ArchiveGenerator
from archive_pages.core.logging import configure_logging
from archive_pages.core.types import EmptyKeyPolicy
from archive_pages.infra.collector import SitePages
from archive_pages.infra.grouping import load_manifest
from archive_pages.infra.renderer import PageRenderer

app = typer.Typer(name="archive-pages", help="Generate paginated archive pages from grouped posts.")

console = Console()

SITE_ROOT_HELP = "Directory holding archive_pages.yml (defaults to the current directory)."
PER_PAGE_HELP = "Items per page; omit to use the config or disable pagination."
REJECT_HELP = "Fail on (or allow) group keys with an empty slug."


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/] {escape(str(exc))}", highlight=False)
    raise typer.Exit(code=1) from exc


def _resolve_settings(
    ctx: typer.Context,
    site_root: Optional[Path],
    archive_id: str,
    **overrides: Any,
) -> ArchiveSettings:
    """Load archive_pages.yml, pick the archive's block and apply explicit flags over it.

    Logging is configured here so the config file's ``log_level`` applies unless
    ``--log-level`` was given.
    """
    config = ArchivesConfig.load(site_root)
    configure_logging((ctx.obj or {}).get("log_level") or config.log_level)

    try:
        base = config.archive(archive_id).model_dump()
    except KeyError:
        base = {"archive_id": archive_id}

    base.update({key: value for key, value in overrides.items() if value is not None})
    return ArchiveSettings.model_validate(base)


def _collect(manifest: Path, settings: ArchiveSettings, strict: bool) -> SitePages:
    pages = SitePages(strict=strict)
    pages.extend(ArchiveGenerator(settings).generate(load_manifest(manifest)))
    return pages


def _policy(reject_empty_keys: Optional[bool]) -> Optional[EmptyKeyPolicy]:
    if reject_empty_keys is None:
        return None
    return EmptyKeyPolicy.REJECT if reject_empty_keys else EmptyKeyPolicy.ALLOW


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (overrides the config's log_level)."),
):
    ctx.obj = {"log_level": log_level}


@app.command()
def plan(
    ctx: typer.Context,
    manifest: Path = typer.Argument(..., help="YAML or JSON file mapping group keys to item lists."),
    site_root: Optional[Path] = typer.Option(None, "--site-root", help=SITE_ROOT_HELP),
    archive_id: str = typer.Option("category", "--archive-id", help="Identifier of the archive."),
    base_dir: Optional[str] = typer.Option(None, "--base-dir", help="Directory holding the archive."),
    per_page: Optional[int] = typer.Option(None, "--per-page", help=PER_PAGE_HELP),
    paginate_path: Optional[str] = typer.Option(None, "--paginate-path", help="Path template for pages 2+."),
    reject_empty_keys: Optional[bool] = typer.Option(None, "--reject-empty-keys/--allow-empty-keys", help=REJECT_HELP),
    strict: bool = typer.Option(False, "--strict", help="Fail when two group keys share an output path."),
):
    """
    Print every page that would be generated.
    """
    try:
        settings = _resolve_settings(
            ctx,
            site_root,
            archive_id,
            base_dir=base_dir,
            per_page=per_page,
            paginate_path=paginate_path,
            empty_key_policy=_policy(reject_empty_keys),
        )
        pages = _collect(manifest, settings, strict)
    except (ArchiveError, ValueError) as exc:
        _fail(exc)

    table = Table(title=escape(f"Archive '{archive_id}'"))
    table.add_column("Group")
    table.add_column("Slug")
    table.add_column("Page", justify="right")
    table.add_column("Items", justify="right")
    table.add_column("Output")
    table.add_column("Previous")
    table.add_column("Next")
    for page in pages:
        table.add_row(
            escape(page.group_key),
            escape(page.slug),
            f"{page.page_number}/{page.total_pages}",
            str(len(page.items)),
            escape(page.output_path),
            escape(page.previous_page_path or "-"),
            escape(page.next_page_path or "-"),
        )
    console.print(table)
    console.print(f"{len(pages)} page(s) planned")


@app.command()
def render(
    ctx: typer.Context,
    manifest: Path = typer.Argument(..., help="YAML or JSON file mapping group keys to item lists."),
    template_dir: Path = typer.Option(..., "--template-dir", help="Directory containing layouts."),
    site_root: Optional[Path] = typer.Option(None, "--site-root", help=SITE_ROOT_HELP),
    template: Optional[str] = typer.Option(None, "--template", help="Layout file, relative to --template-dir."),
    out: Path = typer.Option(Path("site"), "--out", help="Site output directory."),
    archive_id: str = typer.Option("category", "--archive-id", help="Identifier of the archive."),
    base_dir: Optional[str] = typer.Option(None, "--base-dir", help="Directory holding the archive."),
    per_page: Optional[int] = typer.Option(None, "--per-page", help=PER_PAGE_HELP),
    paginate_path: Optional[str] = typer.Option(None, "--paginate-path", help="Path template for pages 2+."),
    title_prefix: Optional[str] = typer.Option(None, "--title-prefix", help="Prepended to each group key in page titles."),
    reject_empty_keys: Optional[bool] = typer.Option(None, "--reject-empty-keys/--allow-empty-keys", help=REJECT_HELP),
    strict: bool = typer.Option(False, "--strict", help="Fail when two group keys share an output path."),
):
    """
    Render every page and write it as index.html under the output directory.
    """
    try:
        settings = _resolve_settings(
            ctx,
            site_root,
            archive_id,
            base_dir=base_dir,
            template_path=template,
            per_page=per_page,
            paginate_path=paginate_path,
            title_prefix=title_prefix,
            empty_key_policy=_policy(reject_empty_keys),
        )
        pages = _collect(manifest, settings, strict)
    except (ArchiveError, ValueError) as exc:
        _fail(exc)

    renderer = PageRenderer(template_dir)
    for page in pages:
        try:
            target = renderer.write(page, out)
        except TemplateNotFound as exc:
            _fail(exc)
        console.print(f"wrote {escape(str(target))}", highlight=False)
    console.print(f"[bold green]{len(pages)} page(s) rendered[/bold green]")
