from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, Field, ValidationError

DEFAULT_CONFIG_PATH = Path("fractalizer.config.yaml")
DEFAULT_SQLITE_PATH = "fractalizer.db"


class TransformSettings(BaseModel):
    """Settings for include resolution."""
    max_depth: int = Field(default=10, ge=1, description="Deepest include nesting allowed")
    eager_load_includes: bool = Field(default=False, description="Experimental: pre-fetch includes with selectinload")
    include_param: str = Field(default="with", min_length=1, description="Query parameter carrying the include selection")


class PaginationSettings(BaseModel):
    """Settings for collection pagination."""
    per_page: int = Field(default=15, ge=1)
    max_per_page: int = Field(default=100, ge=1)
    base_url: str = Field(default="", description="Prefix for pagination links; relative when empty")


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load runtime configuration from YAML file.

    Args:
        path: Optional path to config file. Defaults to fractalizer.config.yaml

    Returns:
        Dictionary with configuration (empty dict for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file is not a YAML mapping
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")
    return config


def load_config_or_default(path: Path | None = None) -> Dict[str, Any]:
    """Load config, falling back to built-in defaults when the file is absent."""
    try:
        return load_config(path)
    except FileNotFoundError:
        return {}


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config '{name}' must be a dictionary if provided")
    return section


def _validated(model: type, config: Dict[str, Any], name: str):
    try:
        return model(**_section(config, name))
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise ValueError(f"Invalid '{name}' config ({fields}): {e}") from e


def get_transform_settings(config: Dict[str, Any] | None = None) -> TransformSettings:
    """
    Get include-resolution settings with defaults applied.

    Defaults:
    - max_depth: 10
    - eager_load_includes: False (lazy loading)
    - include_param: "with"

    Raises:
        ValueError: If the 'transform' section is invalid
    """
    if config is None:
        config = load_config_or_default()
    return _validated(TransformSettings, config, "transform")


def get_pagination_settings(config: Dict[str, Any] | None = None) -> PaginationSettings:
    """
    Get pagination settings with defaults applied.

    Raises:
        ValueError: If the 'pagination' section is invalid or per_page > max_per_page
    """
    if config is None:
        config = load_config_or_default()
    settings = _validated(PaginationSettings, config, "pagination")
    if settings.per_page > settings.max_per_page:
        raise ValueError(
            f"Config 'pagination.per_page' ({settings.per_page}) exceeds max_per_page ({settings.max_per_page})"
        )
    return settings


def get_storage_path(config: Dict[str, Any] | None = None) -> str:
    if config is None:
        config = load_config_or_default()
    return _section(config, "storage").get("sqlite_path", DEFAULT_SQLITE_PATH)
