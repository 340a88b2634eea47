"""Slug and directory helpers for archive output paths.

Group keys are arbitrary strings (category names, tags). They are turned into a
single lower-case path segment where every run of non-word characters becomes
one hyphen. "Word" follows the Unicode word class: letters, combining marks,
decimal digits, letter numbers (``Ⅻ``), connector punctuation and the joiner
controls survive, so ``"Café"`` stays ``"café"`` rather than being
transliterated. Other numbers such as ``½`` and ``²`` are separators.
"""

import re
import unicodedata

_WORD_MAJOR_CATEGORIES = frozenset("LM")
_WORD_MINOR_CATEGORIES = frozenset({"Nd", "Nl", "Pc"})
_JOIN_CONTROLS = frozenset("\u200c\u200d")
_HYPHEN_RUN = re.compile(r"-{2,}")


def _is_word_char(char: str) -> bool:
    if char == "_":
        return False
    if char in _JOIN_CONTROLS:
        return True
    category = unicodedata.category(char)
    return category[0] in _WORD_MAJOR_CATEGORIES or category in _WORD_MINOR_CATEGORIES


def slugify(raw: str) -> str:
    """Convert a group key into a lower-case, hyphen-separated path segment.

    Examples:
        >>> slugify("Foo Bar_Baz!!")
        'foo-bar-baz'
        >>> slugify("Go & Rust")
        'go-rust'
        >>> slugify("Café au lait")
        'café-au-lait'
        >>> slugify("")
        ''

    """
    replaced = "".join(char if _is_word_char(char) else "-" for char in raw)
    slug = _HYPHEN_RUN.sub("-", replaced).strip("-")
    return slug.lower()


def normalize_base_dir(raw: str) -> str:
    """Strip every leading and trailing ``/``, keeping interior slashes."""
    return raw.strip("/")


def join_path(left: str, right: str) -> str:
    """Join two URL path fragments with a single ``/``.

    Either side may be empty, in which case the other side is returned as is.
    """
    if not left:
        return right
    if not right:
        return left
    return f"{left.rstrip('/')}/{right.lstrip('/')}"


def archive_dir(base_dir: str, group_key: str) -> str:
    """Return ``<base_dir>/<slug>`` with the base directory's slashes stripped."""
    return join_path(normalize_base_dir(base_dir), slugify(group_key))
