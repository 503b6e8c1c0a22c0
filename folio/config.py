from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .dates import DEFAULT_LOCALE

CONFIG_FILENAME = "folio.yml"


class Config(BaseModel):
    model_config = ConfigDict(extra="forbid")

    project_name: str = Field(default="Folio Project")
    content_dir: Path = Field(
        default=Path("content"),
        description="Root used when resolving URL paths to content files.",
    )
    source_dir: Path | None = Field(
        default=None,
        description="Local directory backing the content source (e.g. a repository checkout).",
    )
    cache_dir: Path = Field(default=Path(".cache/content"))
    extension: str = Field(default="md", description="File extension of content documents.")
    strict_cache_reads: bool = Field(
        default=False,
        description=(
            "Raise when a cached entry exists but cannot be read. "
            "By default the failure is logged and the item is refetched from the source."
        ),
    )
    date_locale: str = Field(
        default=DEFAULT_LOCALE,
        description="Default locale used by the 'date' template filter.",
    )
    site: dict[str, Any] = Field(
        default_factory=dict,
        description="Values exposed to templates under the 'site' key.",
    )

    @field_validator("content_dir", "cache_dir", mode="before")
    def _ensure_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("source_dir", mode="before")
    def _ensure_optional_path(cls, value: Any) -> Path | None:
        if value is None or value == "":
            return None
        return Path(value)

    @field_validator("extension")
    def _normalize_extension(cls, value: str) -> str:
        text = value.strip().lstrip(".")
        if not text:
            raise ValueError("Content extension must not be empty.")
        return text


def load_config(path: str | Path) -> Config:
    """Load configuration and resolve relative paths based on the config location.

    The ``path`` argument may point to a file (e.g., ``/site/folio.yml``) or a
    directory containing that file. All relative paths inside the configuration
    are interpreted relative to the directory holding the config file.
    """
    candidate = Path(path)
    data: dict[str, Any] = {}
    base_dir: Path
    if candidate.is_dir():
        # A project directory without a config file uses defaults.
        config_file = candidate / CONFIG_FILENAME
        if config_file.exists():
            data = _read_yaml(config_file)
        base_dir = candidate.resolve()
    else:
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        data = _read_yaml(candidate)
        base_dir = candidate.parent.resolve()

    cfg = Config(**data)

    def _abs_required(value: Path) -> Path:
        return value if value.is_absolute() else (base_dir / value).resolve()

    cfg.content_dir = _abs_required(cfg.content_dir)
    cfg.cache_dir = _abs_required(cfg.cache_dir)
    if cfg.source_dir is not None:
        cfg.source_dir = _abs_required(cfg.source_dir)

    return cfg


def _read_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration {path} must define a mapping.")
    return data
