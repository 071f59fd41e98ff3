"""Configuration management module.

Loads optional TOML configuration for manual generation. Settings live in a
``[tool.climanual]`` table (so ``pyproject.toml`` can carry them) or at the
top level of a dedicated file:

    template_dirs = ["docs/fragments", "docs/overrides"]
    output = "docs/manual.md"
"""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

try:
    import tomli  # type: ignore[import]
except ImportError:
    # Python 3.11+ ships the same parser as tomllib
    import tomllib as tomli  # type: ignore[no-redef]

from climanual.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENVVAR = "CLIMANUAL_CONFIG"


@dataclass
class ManualConfig:
    """Manual generation settings."""

    template_dirs: list[str] = field(default_factory=list)
    output: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None) -> "ManualConfig":
        """Build a config from parsed TOML.

        Relative template directories are resolved against ``base_dir``.

        Raises:
            ConfigError: If a value has the wrong type
        """
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                logger.warning(f"Unknown config key: {key}")

        template_dirs = data.get("template_dirs", [])
        if not isinstance(template_dirs, list) or not all(
            isinstance(directory, str) for directory in template_dirs
        ):
            raise ConfigError("template_dirs must be a list of strings")

        output = data.get("output")
        if output is not None and not isinstance(output, str):
            raise ConfigError("output must be a string")

        if base_dir is not None:
            template_dirs = [str(base_dir / directory) for directory in template_dirs]

        return cls(template_dirs=template_dirs, output=output)


class ConfigManager:
    """Reads climanual configuration files."""

    TABLE = ("tool", "climanual")

    @classmethod
    def load_config(cls, custom_path: str | Path | None = None) -> ManualConfig:
        """Load configuration from file.

        Args:
            custom_path: Config file path; None means defaults

        Returns:
            ManualConfig object

        Raises:
            ConfigError: If the file cannot be read or is malformed
        """
        if custom_path is None:
            return ManualConfig()

        config_path = Path(custom_path)
        try:
            with open(config_path, "rb") as f:
                data = tomli.load(f)
        except FileNotFoundError as e:
            raise ConfigError(f"Config file not found: {config_path}") from e
        except (OSError, UnicodeDecodeError, tomli.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to load config: {e}") from e

        section = data
        for key in cls.TABLE:
            if not isinstance(section.get(key), dict):
                section = data
                break
            section = section[key]

        logger.debug(f"Loaded config from: {config_path}")
        return ManualConfig.from_dict(section, base_dir=config_path.parent)


__all__ = ["CONFIG_ENVVAR", "ConfigManager", "ManualConfig"]
