"""Configuration loading for depsort."""

from pathlib import Path

import tomli

from depsort.errors import ConfigError
from depsort.models.project import LayoutOverrides

CONFIG_FILE = "depsort.toml"


def find_config(project_root: Path) -> Path | None:
    """Get the depsort.toml path for a project, if one exists."""
    config_path = project_root / CONFIG_FILE
    return config_path if config_path.is_file() else None


def load_config(config_path: Path | None) -> dict:
    """Load a depsort.toml configuration file; None means no configuration."""
    if config_path is None:
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomli.load(f)
    except tomli.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read {config_path}: {e}") from e


def _string_list(value: object) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(item) for item in value]
    return []


def get_analysis_includes(config: dict) -> list[str]:
    """Get include patterns from config; empty means every supported file."""
    return _string_list(config.get("analysis", {}).get("include", []))


def get_analysis_excludes(config: dict) -> list[str]:
    """Get exclude patterns from config."""
    return _string_list(config.get("analysis", {}).get("exclude", []))


def get_layout_overrides(config: dict, config_path: Path | None = None) -> LayoutOverrides:
    """Get directory lists that replace the detected project layout."""
    layout = config.get("layout", {})
    overrides = LayoutOverrides()

    if "source_dirs" in layout:
        overrides.source_dirs = _string_list(layout["source_dirs"])
    if "test_dirs" in layout:
        overrides.test_dirs = _string_list(layout["test_dirs"])
    if "build_dirs" in layout:
        overrides.build_dirs = _string_list(layout["build_dirs"])

    if layout and config_path is not None:
        overrides.sources.append(str(config_path))
    return overrides


def split_patterns(value: str | None) -> list[str]:
    """Split a comma-separated CLI option into trimmed patterns."""
    if not value:
        return []
    return [pattern.strip() for pattern in value.split(",") if pattern.strip()]
