"""Persistent config loader/saver for twinpane."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppConfig:
    """User-facing configuration."""

    show_hidden: bool = False
    compact_height: int = 6
    command_timeout: float = 30.0
    max_output_chars: int = 20000
    tick_ms: int = 15
    sync_system_clipboard: bool = False


def default_config_path() -> Path:
    """Return default config path (~/.config/twinpane/config.toml)."""
    return Path.home() / ".config" / "twinpane" / "config.toml"


def _coerce_bool(value, default=False):
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lower = value.strip().lower()
        if lower in ("1", "true", "yes", "on"):
            return True
        if lower in ("0", "false", "no", "off"):
            return False
    return default


def _coerce_number(value, default, cast=int, minimum=0):
    if isinstance(value, bool):
        return default
    try:
        number = cast(value)
    except (TypeError, ValueError):
        return default
    return number if number >= minimum else default


def _section(raw: dict, name: str) -> dict:
    value = raw.get(name, {})
    return value if isinstance(value, dict) else {}


def _normalize_config(raw: dict) -> AppConfig:
    defaults = AppConfig()
    ui = _section(raw, "ui")
    console = _section(raw, "console")
    animation = _section(raw, "animation")
    clipboard = _section(raw, "clipboard")
    return AppConfig(
        show_hidden=_coerce_bool(ui.get("show_hidden"), default=defaults.show_hidden),
        compact_height=_coerce_number(ui.get("compact_height"), defaults.compact_height),
        command_timeout=_coerce_number(
            console.get("command_timeout"), defaults.command_timeout, float, minimum=0.1
        ),
        max_output_chars=_coerce_number(
            console.get("max_output_chars"), defaults.max_output_chars, minimum=1
        ),
        tick_ms=_coerce_number(animation.get("tick_ms"), defaults.tick_ms, minimum=1),
        sync_system_clipboard=_coerce_bool(
            clipboard.get("sync_system"), default=defaults.sync_system_clipboard
        ),
    )


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from TOML file; return defaults when missing/invalid."""
    cfg_path = Path(path) if path is not None else default_config_path()
    try:
        text = cfg_path.read_text(encoding="utf-8")
    except OSError:
        return AppConfig()
    try:
        raw = tomllib.loads(text)
    except tomllib.TOMLDecodeError:
        LOGGER.debug("invalid config file %s", cfg_path, exc_info=True)
        return AppConfig()
    return _normalize_config(raw)


def serialize_config(config: AppConfig) -> str:
    """Serialize AppConfig as TOML text."""
    return (
        "# twinpane user configuration\n"
        "[ui]\n"
        f"show_hidden = {'true' if config.show_hidden else 'false'}\n"
        f"compact_height = {config.compact_height}\n"
        "\n[console]\n"
        f"command_timeout = {float(config.command_timeout)}\n"
        f"max_output_chars = {config.max_output_chars}\n"
        "\n[animation]\n"
        f"tick_ms = {config.tick_ms}\n"
        "\n[clipboard]\n"
        f"sync_system = {'true' if config.sync_system_clipboard else 'false'}\n"
    )


def save_config(config: AppConfig, path: str | Path | None = None) -> Path:
    """Persist config and return written path."""
    cfg_path = Path(path) if path is not None else default_config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    cfg_path.write_text(serialize_config(config), encoding="utf-8", newline="\n")
    return cfg_path
