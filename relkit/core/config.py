"""Typed configuration loaded from an optional `relkit.toml`.

The file lives at the repository root. Every key is optional; a missing
file yields the defaults below.

    [release]
    output_dir = "release"
    version_package = "pkg/version"
    tag_variable = "Version"
    date_variable = "BuildDate"

    [github]
    api_url = "https://api.github.com"
    timeout = 60.0
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "GitHubConfig",
    "RelkitConfig",
    "ReleaseLayoutConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "relkit.toml"

DEFAULT_OUTPUT_DIR = "release"
DEFAULT_VERSION_PACKAGE = "pkg/version"
DEFAULT_TAG_VARIABLE = "Version"
DEFAULT_DATE_VARIABLE = "BuildDate"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_HTTP_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseLayoutConfig:
    """Where artifacts go and which Go symbols receive version data."""

    output_dir: str = DEFAULT_OUTPUT_DIR
    version_package: str = DEFAULT_VERSION_PACKAGE
    tag_variable: str = DEFAULT_TAG_VARIABLE
    date_variable: str = DEFAULT_DATE_VARIABLE


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class RelkitConfig:
    """Main configuration container."""

    release: ReleaseLayoutConfig = field(default_factory=ReleaseLayoutConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> RelkitConfig:
        """Create a config from parsed TOML."""
        release: StrDict = get_table(data, "release") or {}
        github: StrDict = get_table(data, "github") or {}

        api_url = get_str(github, "api_url") or DEFAULT_API_URL
        timeout = get_float(github, "timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"github.timeout must be positive, got {timeout}")

        return cls(
            release=ReleaseLayoutConfig(
                output_dir=get_str(release, "output_dir") or DEFAULT_OUTPUT_DIR,
                version_package=(
                    get_str(release, "version_package") or DEFAULT_VERSION_PACKAGE
                ).strip("/"),
                tag_variable=get_str(release, "tag_variable") or DEFAULT_TAG_VARIABLE,
                date_variable=get_str(release, "date_variable") or DEFAULT_DATE_VARIABLE,
            ),
            github=GitHubConfig(
                api_url=api_url.rstrip("/"),
                timeout=timeout or DEFAULT_HTTP_TIMEOUT_SECONDS,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[RelkitConfig, ConfigError]:
    """Load and parse `relkit.toml`.

    Args:
        path: Path to the config file

    Returns:
        Ok(RelkitConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(RelkitConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(repo_root: Path) -> Result[RelkitConfig, ConfigError]:
    """Load `relkit.toml` from the repository root, or defaults if absent.

    A file that exists but cannot be parsed is still an error.
    """
    path = repo_root / CONFIG_FILENAME
    if not path.exists():
        return Ok(RelkitConfig())
    return load_config(path)
