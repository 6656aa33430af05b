#!/usr/bin/env python3
"""
Configuration helpers for the Fantastical MCP server.

Provides standard locations for config and logs, loads the YAML settings
file, and wires up logging. Honors environment overrides.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


APP_ENV_PREFIX = "FANTASTICAL_MCP"
SETTINGS_FILENAME = "fantastical.yaml"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "url_scheme": "x-fantastical3",
    "calendar_app": "Calendar",
    "companion_app": "Fantastical",
    "default_days": 7,
    "create_event_strategy": "url",
    "command_timeout": None,
    "check_installation": True,
    "logging": {
        "level": "INFO",
        "log_file": None,
    },
}

# Settings whose default is null, and the types a file may set them to
_NULLABLE_TYPES = {
    "command_timeout": (int, float),
    "log_file": (str,),
}

_settings: Optional[Dict[str, Any]] = None


def repo_root() -> Path:
    """Best-effort repository root (dev checkout)."""
    here = Path(__file__).resolve()
    # fantastical_mcp/config.py -> repo root is parent of package dir
    return here.parent.parent


def home_dir() -> Path:
    return Path.home()


def base_dir() -> Path:
    """Base application data directory (overridable via FANTASTICAL_MCP_HOME)."""
    override = os.getenv(f"{APP_ENV_PREFIX}_HOME")
    if override:
        return Path(override).expanduser()

    if sys.platform == "darwin":
        return home_dir() / "Library" / "Application Support" / "FantasticalMCP"
    xdg = os.getenv("XDG_DATA_HOME")
    base = Path(xdg) if xdg else (home_dir() / ".local" / "share")
    return base / "fantastical_mcp"


def config_dir() -> Path:
    if sys.platform == "darwin":
        return base_dir() / "config"
    xdg = os.getenv("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else (home_dir() / ".config")
    return base / "fantastical_mcp"


def logs_dir() -> Path:
    return base_dir() / "logs"


def settings_path() -> Path:
    """Resolve the fantastical.yaml path.

    Priority:
    1) FANTASTICAL_MCP_CONFIG env
    2) repo-local config/fantastical.yaml (dev)
    3) config_dir/fantastical.yaml
    """
    override = os.getenv(f"{APP_ENV_PREFIX}_CONFIG")
    if override:
        return Path(override).expanduser()
    repo_candidate = repo_root() / "config" / SETTINGS_FILENAME
    if repo_candidate.exists():
        return repo_candidate
    return config_dir() / SETTINGS_FILENAME


def substitutions() -> Dict[str, str]:
    """Substitution variables available to ${VAR} placeholders in settings."""
    return {
        "APP_HOME": str(base_dir()),
        "CONFIG_DIR": str(config_dir()),
        "LOGS_DIR": str(logs_dir()),
        "REPO_ROOT": str(repo_root()),
        "HOME": str(home_dir()),
    }


def expand_placeholders(value: str) -> str:
    """Expand env vars, ~, and ${VAR} placeholders from substitutions()."""
    if not isinstance(value, str):
        return value
    expanded = os.path.expanduser(os.path.expandvars(value))
    for key, repl in substitutions().items():
        expanded = expanded.replace(f"${{{key}}}", repl)
    return expanded


def expand_in_config(cfg: Dict) -> Dict:
    """Recursively expand placeholders in a dict-based configuration."""
    def _expand(obj):
        if isinstance(obj, dict):
            return {k: _expand(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [_expand(x) for x in obj]
        if isinstance(obj, str):
            return expand_placeholders(obj)
        return obj

    return _expand(cfg)


def _accepts(key: str, default: Any, value: Any) -> bool:
    if default is None:
        expected = _NULLABLE_TYPES.get(key)
    elif isinstance(default, bool):
        expected = (bool,)
    elif isinstance(default, (int, float)):
        expected = (int, float)
    else:
        expected = (type(default),)
    if expected is None:
        return True
    if isinstance(value, bool) and bool not in expected:
        return False
    return isinstance(value, expected)


def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay overrides on defaults; null or mistyped values keep the default"""
    merged = dict(defaults)
    for key, value in overrides.items():
        if key not in defaults or value is None:
            continue
        if isinstance(defaults[key], dict) and isinstance(value, dict):
            merged[key] = _merge(defaults[key], value)
        elif _accepts(key, defaults[key], value):
            merged[key] = value
        else:
            logging.getLogger("FantasticalMCP_Config").warning(
                f"Ignoring setting '{key}': unexpected value {value!r}"
            )
    return merged


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load settings from YAML, falling back to DEFAULT_SETTINGS.

    Unknown keys are ignored; a missing or malformed file yields the defaults.
    """
    path = path or settings_path()
    raw: Dict[str, Any] = {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
        if isinstance(loaded, dict):
            raw = loaded
        elif loaded is not None:
            logging.getLogger("FantasticalMCP_Config").error(
                f"Ignoring settings file {path}: top level must be a mapping"
            )
    except FileNotFoundError:
        pass
    except yaml.YAMLError as e:
        logging.getLogger("FantasticalMCP_Config").error(f"Error parsing settings file {path}: {e}")

    settings = expand_in_config(_merge(DEFAULT_SETTINGS, raw))

    level = os.getenv(f"{APP_ENV_PREFIX}_LOG_LEVEL")
    if level:
        settings["logging"]["level"] = level.upper()
    return settings


def get_settings() -> Dict[str, Any]:
    """Process-wide settings, loaded on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None


def setup_logging(settings: Optional[Dict[str, Any]] = None) -> None:
    """Configure root logging on stderr, plus an optional log file.

    stdout carries MCP protocol frames, so nothing may log there.
    """
    settings = settings or get_settings()
    log_config = settings.get("logging") or {}
    level = getattr(logging, str(log_config.get("level", "INFO")).upper(), logging.INFO)

    handlers = [logging.StreamHandler(sys.stderr)]
    log_file = log_config.get("log_file")
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
