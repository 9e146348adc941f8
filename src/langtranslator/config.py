"""Runtime settings: defaults, a JSON settings file, and environment overrides."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path

from langtranslator.translation.splitter import DEFAULT_MAX_CHUNK_SIZE

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://translate.googleapis.com/translate_a/single"
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "Mozilla/5.0 (langtranslator)"

_SETTINGS_DIR = Path.home() / ".langtranslator"
DEFAULT_SETTINGS_FILE = _SETTINGS_DIR / "settings.json"

# Environment variable → settings field
_ENV_OVERRIDES = {
    "LANGTRANSLATOR_ENDPOINT": "endpoint",
    "LANGTRANSLATOR_TIMEOUT": "timeout",
    "LANGTRANSLATOR_MAX_CHUNK_SIZE": "max_chunk_size",
}


class ConfigError(ValueError):
    """Raised when a setting has an invalid value."""


@dataclass(frozen=True)
class TranslatorSettings:
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT
    max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE
    user_agent: str = DEFAULT_USER_AGENT
    default_source: str = "en"
    default_target: str = "es"

    def __post_init__(self) -> None:
        if self.max_chunk_size <= 0:
            raise ConfigError(f"max_chunk_size must be positive, got {self.max_chunk_size}")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")

    def to_dict(self) -> dict:
        return asdict(self)


def _coerce(name: str, value: object) -> object:
    """Convert a raw file/env value to the type of the named field."""
    try:
        if name == "timeout":
            return float(value)  # type: ignore[arg-type]
        if name == "max_chunk_size":
            return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid value for {name}: {value!r}") from None
    return str(value)


def _read_settings_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return {}
    return data


def load_settings(path: str | Path | None = None) -> TranslatorSettings:
    """Build settings from defaults, the settings file, then environment variables."""
    settings_path = Path(path) if path is not None else DEFAULT_SETTINGS_FILE
    known = {f.name for f in fields(TranslatorSettings)}

    overrides: dict[str, object] = {}
    for key, value in _read_settings_file(settings_path).items():
        if key not in known:
            logger.debug("Unknown setting %r in %s", key, settings_path)
            continue
        overrides[key] = _coerce(key, value)

    for env_name, key in _ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if raw:
            overrides[key] = _coerce(key, raw)

    return replace(TranslatorSettings(), **overrides)


def save_settings(settings: TranslatorSettings, path: str | Path | None = None) -> Path:
    """Write settings to the JSON settings file and return its path."""
    settings_path = Path(path) if path is not None else DEFAULT_SETTINGS_FILE
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(
        json.dumps(settings.to_dict(), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    return settings_path
