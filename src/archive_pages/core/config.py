from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, PositiveInt, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from archive_pages.core.exceptions import ConfigLoadError
from archive_pages.core.pagination import DEFAULT_PAGINATE_PATH
from archive_pages.core.types import EmptyKeyPolicy

CONFIG_FILENAME = "archive_pages.yml"


def _deep_merge(destination: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and key in destination and isinstance(destination[key], Mapping):
            destination[key] = _deep_merge(dict(destination[key]), dict(value))
        else:
            destination[key] = value
    return destination


class ArchiveSettings(BaseModel):
    """Configuration for one archive type (e.g. categories or tags)."""

    archive_id: str = Field(min_length=1, description="Identifier of the archive, e.g. 'category'")
    base_dir: str = Field(default="", description="Site-relative directory holding the archive")
    template_path: str = Field(default="archive.html", description="Layout used to render each page")
    per_page: PositiveInt | None = Field(default=None, description="Items per page; unset disables pagination")
    paginate_path: str = Field(
        default=DEFAULT_PAGINATE_PATH,
        description="Path fragment for pages 2 and up; ':num' is replaced by the page number",
    )
    title_prefix: str = Field(default="", description="Prepended to the group key to form page titles")
    empty_key_policy: EmptyKeyPolicy = Field(
        default=EmptyKeyPolicy.ALLOW,
        description="Whether group keys with an empty slug are allowed or rejected",
    )


class ArchivesConfig(BaseSettings):
    """Root configuration.

    Supports environment variable overrides with the pattern:
    ARCHIVE_PAGES_KEY (e.g., ARCHIVE_PAGES_LOG_LEVEL)
    """

    archives: list[ArchiveSettings] = Field(default_factory=list)
    log_level: str = Field(default="INFO", description="Root logging level")

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="ARCHIVE_PAGES_",
        env_nested_delimiter="__",
    )

    def archive(self, archive_id: str) -> ArchiveSettings:
        """Return the settings block for ``archive_id``."""
        for settings in self.archives:
            if settings.archive_id == archive_id:
                return settings
        raise KeyError(archive_id)

    @classmethod
    def load(cls, site_root: Path | None = None) -> "ArchivesConfig":
        """Loads configuration from archive_pages.yml and environment variables.

        Priority (highest to lowest):
        1. Environment variables (ARCHIVE_PAGES_KEY)
        2. Config file (archive_pages.yml in site_root)
        3. Defaults
        """
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILENAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            try:
                with config_file.open(encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigLoadError(str(config_file), f"invalid YAML: {e}") from e
            if not isinstance(data, dict):
                raise ConfigLoadError(
                    str(config_file), f"root must be a mapping, got {type(data).__name__}"
                )
            file_settings = data

        try:
            env_settings = cls().model_dump(exclude_unset=True)
            merged_config = _deep_merge(file_settings, env_settings)
            return cls.model_validate(merged_config)
        except ValidationError as e:
            raise ConfigLoadError(str(config_file), str(e)) from e
