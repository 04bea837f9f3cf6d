"""Configuration loading and management for DiscoPoP Results.

Configuration sources are merged in priority order:
    1. Defaults (defined in ResultsConfig)
    2. Global config (~/.discopop-results.toml)
    3. Project config (./discopop-results.toml)
    4. Explicit config file
    5. Environment variables (DISCOPOP_RESULTS_* prefix)
    6. Keyword overrides

Example:
    >>> config = load_config(strict_access_kinds=False)
    >>> config.strict_access_kinds
    False
    >>> config.static_dependencies_file
    'profiler/static_dependencies.txt'
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError, InvalidPathError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "DISCOPOP_RESULTS_"
GLOBAL_CONFIG_NAME = ".discopop-results.toml"
PROJECT_CONFIG_NAME = "discopop-results.toml"


@dataclass(frozen=True)
class ResultsConfig:
    """Where to find each artifact inside a ``.discopop`` directory, and how
    strictly to read them.

    Attributes:
        Artifact locations (relative to the .discopop directory):
            file_mapping_file: fileId -> path table
            line_mapping_file: (fileId, line) -> current line table
            applied_status_file: ids of currently applied suggestions
            suggestion_files: candidate locations of patterns.json, first hit wins
            hotspots_file: hotspot detection output
            static_dependencies_file: profiler static dependency dump

        Parsing:
            ignored_dependents: dependent names dropped from static dependencies
            strict_access_kinds: only accept INIT/RAW/WAR/WAW access kinds
            unknown_as_write: treat unrecognized access kinds as write accesses

        Output control:
            verbosity: Logging verbosity level
    """

    # Artifact locations
    file_mapping_file: str = "FileMapping.txt"
    line_mapping_file: str = "line_mapping.json"
    applied_status_file: str = "patch_applicator/applied_suggestions.json"
    suggestion_files: tuple[str, ...] = (
        "optimizer/patterns.json",
        "explorer/patterns.json",
        "patterns.json",
    )
    hotspots_file: str = "hotspot_detection/Hotspots.json"
    static_dependencies_file: str = "profiler/static_dependencies.txt"

    # Parsing
    ignored_dependents: tuple[str, ...] = ("retval", "this")
    strict_access_kinds: bool = True
    unknown_as_write: bool = False

    # Output control
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        for name in (
            "file_mapping_file",
            "line_mapping_file",
            "applied_status_file",
            "hotspots_file",
            "static_dependencies_file",
        ):
            _check_relative(name, getattr(self, name))

        if not self.suggestion_files:
            raise InvalidConfigError(
                "suggestion_files", self.suggestion_files, "at least one location is required"
            )
        for location in self.suggestion_files:
            _check_relative("suggestion_files", location)

        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected one of quiet, normal, verbose"
            )

        # Lenient parsing only makes sense with somewhere to put unknown kinds
        if self.unknown_as_write and self.strict_access_kinds:
            raise InvalidConfigError(
                "unknown_as_write",
                self.unknown_as_write,
                "requires strict_access_kinds = false",
            )


def _check_relative(key: str, value: str) -> None:
    if not value or Path(value).is_absolute():
        raise InvalidConfigError(key, value, "must be a non-empty path relative to .discopop")


DEFAULT_CONFIG = ResultsConfig()


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> ResultsConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated ResultsConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
        InvalidConfigError: If a value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / GLOBAL_CONFIG_NAME
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise InvalidPathError(config_file, "config file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if "verbose" in overrides:
        if overrides.pop("verbose"):
            overrides["verbosity"] = "verbose"
    if "quiet" in overrides:
        if overrides.pop("quiet"):
            overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    # TOML arrays arrive as lists
    for key in ("suggestion_files", "ignored_dependents"):
        if isinstance(merged.get(key), list):
            merged[key] = tuple(merged[key])

    known = {f.name for f in fields(ResultsConfig)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise ConfigurationError(
            "Invalid configuration: unknown keys", details={"keys": ", ".join(unknown)}
        )

    return ResultsConfig(**merged)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from DISCOPOP_RESULTS_* environment variables.

    Supported environment variables:
        DISCOPOP_RESULTS_FILE_MAPPING_FILE: str
        DISCOPOP_RESULTS_LINE_MAPPING_FILE: str
        DISCOPOP_RESULTS_APPLIED_STATUS_FILE: str
        DISCOPOP_RESULTS_SUGGESTION_FILES: comma separated list
        DISCOPOP_RESULTS_HOTSPOTS_FILE: str
        DISCOPOP_RESULTS_STATIC_DEPENDENCIES_FILE: str
        DISCOPOP_RESULTS_IGNORED_DEPENDENTS: comma separated list
        DISCOPOP_RESULTS_STRICT_ACCESS_KINDS: bool (true/false/1/0)
        DISCOPOP_RESULTS_UNKNOWN_AS_WRITE: bool
        DISCOPOP_RESULTS_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any DISCOPOP_RESULTS_* vars found.
    """
    type_hints = get_type_hints(ResultsConfig)

    result: dict[str, Any] = {}
    for field_name in ResultsConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            result[field_name] = _parse_env_value(env_value, type_hints[field_name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if origin is tuple:
        return tuple(part.strip() for part in value.split(",") if part.strip())

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    return value


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file, accepting either top-level keys or a [discopop-results] table."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}") from e

    section = data.get("discopop-results")
    if isinstance(section, dict):
        return dict(section)
    return data
