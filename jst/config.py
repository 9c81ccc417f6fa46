"""YAML configuration file loading."""

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from jst.output import FORMATS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".jst"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.yaml"


@dataclass
class JstConfig:
    """Top-level configuration for the speed test tool.

    Every field has a default, so the tool runs without a config file.

    Attributes:
        timeout_seconds: Per-request probe timeout.
        default_format: Output format used when ``--format`` is not given.
        update_repo: GitHub ``owner/name`` checked by ``update``.
        update_api_url: Base URL of the GitHub REST API.
    """

    timeout_seconds: float = 10.0
    default_format: str = "text"
    update_repo: str = "cfanbo/jito-speedtest"
    update_api_url: str = "https://api.github.com"


_KNOWN_KEYS = frozenset(f.name for f in fields(JstConfig))


class ConfigError(Exception):
    """Raised when a configuration file is malformed or unreadable."""


def load_config(path: Path | str | None = None) -> JstConfig:
    """Load configuration from a YAML file.

    Args:
        path: Explicit config file.  If ``None``, ``~/.jst/config.yaml``
            is used when it exists; otherwise all defaults apply.

    Returns:
        A populated ``JstConfig`` instance.

    Raises:
        FileNotFoundError: If an explicit *path* was given but doesn't exist.
        ConfigError: If the file is not a YAML mapping or holds an invalid
            value.
    """
    if path is not None:
        source = Path(path).expanduser()
        if not source.is_file():
            raise FileNotFoundError(f"Config file not found: {source}")
    else:
        source = DEFAULT_CONFIG_PATH.expanduser()
        if not source.is_file():
            logger.debug("No config file found; using defaults")
            return JstConfig()

    raw = _read_mapping(source)

    unknown = set(raw) - _KNOWN_KEYS
    if unknown:
        logger.warning(
            "Ignoring unknown config keys in %s: %s",
            source,
            ", ".join(sorted(unknown)),
        )
    values = {key: value for key, value in raw.items() if key in _KNOWN_KEYS}

    if "timeout_seconds" in values:
        values["timeout_seconds"] = _parse_timeout(values["timeout_seconds"], source)
    if "default_format" in values and values["default_format"] not in FORMATS:
        raise ConfigError(
            f"default_format must be one of {', '.join(FORMATS)} in {source}, "
            f"got {values['default_format']!r}"
        )

    return JstConfig(**values)


def _read_mapping(source: Path) -> dict:
    """Parse *source* as YAML; an empty file yields an empty mapping."""
    logger.debug("Loading config from %s", source)
    try:
        raw = yaml.safe_load(source.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source}: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(
            f"Expected a YAML mapping at the top level in {source}, "
            f"got {type(raw).__name__}"
        )
    return raw


def _parse_timeout(value: object, source: Path) -> float:
    """Validate a timeout value; it must be a positive number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"timeout_seconds must be a number in {source}, got {value!r}")
    if value <= 0:
        raise ConfigError(f"timeout_seconds must be positive in {source}, got {value!r}")
    return float(value)
