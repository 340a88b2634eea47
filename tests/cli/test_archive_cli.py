import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from archive_pages.cli.app import app

runner = CliRunner()


@pytest.fixture
def manifest(tmp_path: Path) -> Path:
    path = tmp_path / "categories.yml"
    path.write_text("Ruby:\n  - p1\n  - p2\n  - p3\nGo & Rust:\n  - p4\n  - p5\n")
    return path


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    layouts = tmp_path / "layouts"
    layouts.mkdir()
    (layouts / "archive.html").write_text(
        "{{ title }}:{% for post in paginator.posts %} {{ post }}{% endfor %}"
    )
    return layouts


def test_plan(manifest):
    result = runner.invoke(app, ["plan", str(manifest), "--base-dir", "archive", "--per-page", "2"])

    assert result.exit_code == 0, result.output
    assert "3 page(s) planned" in result.output


def test_plan_without_pagination(manifest):
    result = runner.invoke(app, ["plan", str(manifest), "--base-dir", "archive"])

    assert result.exit_code == 0, result.output
    assert "2 page(s) planned" in result.output


def test_plan_rejects_non_positive_per_page(manifest):
    result = runner.invoke(app, ["plan", str(manifest), "--per-page", "0"])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_plan_strict_collision(tmp_path: Path):
    path = tmp_path / "groups.yml"
    path.write_text("C++:\n  - p1\nC:\n  - p2\n")

    result = runner.invoke(app, ["plan", str(path), "--strict"])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_plan_missing_manifest(tmp_path: Path):
    result = runner.invoke(app, ["plan", str(tmp_path / "missing.yml")])

    assert result.exit_code == 1


def test_render(manifest, template_dir, tmp_path: Path):
    out = tmp_path / "site"

    result = runner.invoke(
        app,
        [
            "render",
            str(manifest),
            "--template-dir",
            str(template_dir),
            "--out",
            str(out),
            "--base-dir",
            "archive",
            "--per-page",
            "2",
            "--title-prefix",
            "Category ",
        ],
    )

    assert result.exit_code == 0, result.output
    assert (out / "archive" / "ruby" / "index.html").read_text() == "Category Ruby: p1 p2"
    assert (out / "archive" / "ruby" / "page2" / "index.html").read_text() == "Category Ruby: p3"
    assert (out / "archive" / "go-rust" / "index.html").read_text() == "Category Go &amp; Rust: p4 p5"


def test_render_missing_template(manifest, template_dir, tmp_path: Path):
    result = runner.invoke(
        app,
        ["render", str(manifest), "--template-dir", str(template_dir), "--template", "nope.html", "--out", str(tmp_path)],
    )

    assert result.exit_code == 1


CONFIG = """
log_level: WARNING
archives:
  - archive_id: category
    base_dir: archive
    per_page: 2
    title_prefix: "Category "
  - archive_id: tag
    base_dir: tags
    empty_key_policy: reject
"""


@pytest.fixture
def site_root(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.delenv("ARCHIVE_PAGES_LOG_LEVEL", raising=False)
    monkeypatch.delenv("ARCHIVE_PAGES_ARCHIVES", raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    (tmp_path / "archive_pages.yml").write_text(CONFIG)
    yield tmp_path
    root.handlers[:] = handlers
    root.setLevel(level)


def test_plan_reads_the_config_file(manifest, site_root):
    result = runner.invoke(app, ["plan", str(manifest), "--site-root", str(site_root)])

    assert result.exit_code == 0, result.output
    assert "3 page(s) planned" in result.output
    assert logging.getLogger().level == logging.WARNING


def test_flags_override_the_config_file(manifest, site_root):
    result = runner.invoke(
        app, ["--log-level", "DEBUG", "plan", str(manifest), "--site-root", str(site_root), "--per-page", "5"]
    )

    assert result.exit_code == 0, result.output
    assert "2 page(s) planned" in result.output
    assert logging.getLogger().level == logging.DEBUG


def test_config_empty_key_policy_and_its_override(tmp_path: Path, site_root):
    groups = tmp_path / "tags.yml"
    groups.write_text("'!!!':\n  - p1\n")
    args = ["plan", str(groups), "--site-root", str(site_root), "--archive-id", "tag"]

    rejected = runner.invoke(app, args)
    allowed = runner.invoke(app, [*args, "--allow-empty-keys"])

    assert rejected.exit_code == 1
    assert allowed.exit_code == 0, allowed.output
    assert "1 page(s) planned" in allowed.output


def test_render_from_config(manifest, template_dir, site_root, tmp_path: Path):
    out = tmp_path / "site"

    result = runner.invoke(
        app, ["render", str(manifest), "--site-root", str(site_root), "--template-dir", str(template_dir), "--out", str(out)]
    )

    assert result.exit_code == 0, result.output
    assert (out / "archive" / "ruby" / "index.html").read_text() == "Category Ruby: p1 p2"
    assert (out / "archive" / "ruby" / "page2" / "index.html").read_text() == "Category Ruby: p3"


def test_malformed_config_fails(manifest, tmp_path: Path):
    (tmp_path / "archive_pages.yml").write_text("archives: [unclosed")

    result = runner.invoke(app, ["plan", str(manifest), "--site-root", str(tmp_path)])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_plan_escapes_markup_in_paths(tmp_path: Path):
    groups = tmp_path / "groups.yml"
    groups.write_text("Ruby:\n  - p1\n")

    result = runner.invoke(app, ["plan", str(groups), "--base-dir", "[b]"])

    assert result.exit_code == 0, result.output
    assert "/[b]/ruby" in result.output
