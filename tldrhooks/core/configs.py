"""Configuration management for tldrhooks.

Loads user settings from ~/.config/tldrhooks/config.cfg, with an optional
~/.config/tldrhooks/.env underneath it and TLDRHOOKS_* environment
variables on top.
Provides AdapterSettings (tool location, timeouts, daemon behavior).
"""

import configparser
from dataclasses import dataclass
import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

CONFIG_DIR = Path.home() / ".config" / "tldrhooks"
CONFIG_PATH = CONFIG_DIR / "config.cfg"
ENV_PATH = CONFIG_DIR / ".env"

# Budget for a query answered by a warm daemon.
DEFAULT_DAEMON_TIMEOUT_S = 10.0
# Budget for a cold, non-daemonized analysis run.
DEFAULT_FALLBACK_TIMEOUT_S = 60.0

ENV_OVERRIDES = {
    "TLDRHOOKS_TLDR_BIN": "tldr_bin",
    "TLDRHOOKS_DAEMON_TIMEOUT_S": "daemon_timeout",
    "TLDRHOOKS_FALLBACK_TIMEOUT_S": "fallback_timeout",
    "TLDRHOOKS_SOCKET_DIR": "socket_dir",
    "TLDRHOOKS_LOG_LEVEL": "log_level",
}


@dataclass
class AdapterSettings:
    tldr_bin: str = "tldr"
    daemon_timeout: float = DEFAULT_DAEMON_TIMEOUT_S
    fallback_timeout: float = DEFAULT_FALLBACK_TIMEOUT_S
    handshake_timeout: float = 0.5
    launch_deadline: float = 3.0
    socket_dir: Optional[Path] = None
    use_daemon: bool = True
    log_level: str = "WARNING"


def load_raw_config(
    path: Path = CONFIG_PATH, env_path: Optional[Path] = ENV_PATH
) -> Dict[str, str]:
    """
    Load configuration values from the standard config locations.
    Values are returned with lowercase keys for convenience.

    The .env file is read first so that config.cfg wins on conflicts.
    Raises ValueError if config.cfg cannot be parsed.
    """
    data: Dict[str, str] = {}

    if env_path is not None and env_path.exists():
        env_values = dotenv_values(env_path)
        data.update({k.lower(): v for k, v in env_values.items() if v is not None})

    if path.exists():
        cfg = configparser.ConfigParser()
        try:
            cfg.read(path)
        except configparser.Error as e:
            raise ValueError(f"Invalid config file {path}: {e}") from e
        if "DEFAULT" in cfg:
            data.update({k.lower(): v for k, v in cfg["DEFAULT"].items()})

    return data


def _get_bool(raw: Dict[str, str], key: str, default: bool = False) -> bool:
    value = raw.get(key, "")
    if isinstance(value, bool):
        return value
    if value is None or str(value).strip() == "":
        return default
    return str(value).strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_seconds(raw: Dict[str, str], key: str, default: float) -> float:
    value = raw.get(key)
    if value is None or str(value).strip() == "":
        return default
    try:
        seconds = float(value)
    except ValueError:
        raise ValueError(f"Invalid value for '{key}': {value!r} is not a number.")
    if seconds <= 0:
        raise ValueError(f"Invalid value for '{key}': must be positive, got {seconds}.")
    return seconds


def _apply_env_overrides(raw: Dict[str, str]) -> Dict[str, str]:
    merged = dict(raw)
    for env_name, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value is not None and value.strip() != "":
            merged[key] = value
    if os.environ.get("TLDRHOOKS_NO_DAEMON", "").strip().lower() in ("1", "true", "yes"):
        merged["use_daemon"] = "false"
    return merged


def get_adapter_settings(raw: Optional[Dict[str, str]] = None) -> AdapterSettings:
    """
    Build AdapterSettings from raw configuration values.
    Raises ValueError if a numeric setting is malformed.
    """
    if raw is None:
        raw = load_raw_config()
    raw = _apply_env_overrides(raw)

    socket_dir = raw.get("socket_dir", "").strip()
    return AdapterSettings(
        tldr_bin=raw.get("tldr_bin", "").strip() or "tldr",
        daemon_timeout=_get_seconds(raw, "daemon_timeout", DEFAULT_DAEMON_TIMEOUT_S),
        fallback_timeout=_get_seconds(raw, "fallback_timeout", DEFAULT_FALLBACK_TIMEOUT_S),
        handshake_timeout=_get_seconds(raw, "handshake_timeout", 0.5),
        launch_deadline=_get_seconds(raw, "launch_deadline", 3.0),
        socket_dir=Path(socket_dir).expanduser() if socket_dir else None,
        use_daemon=_get_bool(raw, "use_daemon", True),
        log_level=raw.get("log_level", "").strip().upper() or "WARNING",
    )
