"""Grouping collaborator: partitions items by key for the archive engine."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, TypeVar

import yaml

from archive_pages.core.exceptions import ManifestError

logger = logging.getLogger(__name__)

T = TypeVar("T")

KeyResult = str | Iterable[str] | None


def group_by_key(items: Iterable[T], key_fn: Callable[[T], KeyResult]) -> dict[str, list[T]]:
    """Group ``items`` by the key(s) returned by ``key_fn``.

    ``key_fn`` may return a single key, an iterable of keys (an item filed
    under several categories appears in each group), or None to skip the item.
    Groups appear in first-seen order and keep the input order of their items.
    """
    groups: dict[str, list[T]] = {}
    for item in items:
        keys = key_fn(item)
        if keys is None:
            continue
        if isinstance(keys, str):
            keys = (keys,)
        for key in dict.fromkeys(keys):
            groups.setdefault(key, []).append(item)
    return groups


def load_manifest(path: Path) -> dict[str, list[Any]]:
    """Read a ``{group_key: [item, ...]}`` manifest from YAML or JSON.

    Key order in the file is the group order of the result.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestError(str(path), str(e)) from e

    try:
        data = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ManifestError(str(path), f"cannot parse: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ManifestError(str(path), f"root must be a mapping, got {type(data).__name__}")

    manifest: dict[str, list[Any]] = {}
    for key, items in data.items():
        if items is None:
            items = []
        if not isinstance(items, list):
            raise ManifestError(str(path), f"group {key!r} must map to a list, got {type(items).__name__}")
        manifest[str(key)] = items

    logger.debug("Loaded %d group(s) from %s", len(manifest), path)
    return manifest
