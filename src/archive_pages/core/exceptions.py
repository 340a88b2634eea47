"""Core exceptions for archive page generation."""


class ArchiveError(Exception):
    """Base exception for all archive generation errors."""


class InvalidArgumentError(ArchiveError, ValueError):
    """Raised when an argument makes the archive math undefined."""

    def __init__(self, name: str, value: object, reason: str) -> None:
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for '{name}': {value!r} ({reason})")


class EmptyGroupKeyError(InvalidArgumentError):
    """Raised when a group key slugifies to nothing and empty keys are rejected."""

    def __init__(self, archive_id: str, group_key: str) -> None:
        self.archive_id = archive_id
        self.group_key = group_key
        super().__init__("group_key", group_key, f"produces an empty slug in archive '{archive_id}'")


class PageOutOfRangeError(ArchiveError, IndexError):
    """Raised when a page number falls outside 1..total_pages."""

    def __init__(self, page_number: int, total_pages: int, group_key: str | None = None) -> None:
        self.page_number = page_number
        self.total_pages = total_pages
        self.group_key = group_key
        where = f" for group '{group_key}'" if group_key is not None else ""
        super().__init__(f"Page {page_number} is out of range 1..{total_pages}{where}")


class SlugCollisionError(ArchiveError):
    """Raised when two distinct group keys resolve to the same output path."""

    def __init__(self, output_path: str, first_key: str, second_key: str) -> None:
        self.output_path = output_path
        self.first_key = first_key
        self.second_key = second_key
        super().__init__(f"Group keys '{first_key}' and '{second_key}' both render to '{output_path}'")


class ManifestError(ArchiveError):
    """Raised when a grouping manifest cannot be read or has the wrong shape."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load manifest at '{path}': {reason}")


class ConfigLoadError(ArchiveError):
    """Raised when the configuration file cannot be loaded or parsed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load or parse config at '{path}': {reason}")
