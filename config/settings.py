"""JSON-backed configuration for the print gateway.

Values come from the defaults below, then the JSON settings file, then
environment variables. A missing settings file is created from the defaults.
"""

from __future__ import annotations

import json
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Callable, Dict, Tuple

_CONFIG_FILE = Path(os.environ.get("PRINT_GATEWAY_SETTINGS") or Path(__file__).with_name("settings.json"))

_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "SERVICE": {
        "host": "0.0.0.0",
        "port": 8080,
        "debug": False,
        "allowed_origins": ["*"],
        "tls_cert_path": "",
        "tls_key_path": ""
    },
    "TOOLS": {
        "backend": "auto",
        "pdf_printer_path": "./PDFtoPrinter.exe",
        "drawer_command_path": "./drawer_open_command.ps1",
        "drawer_backend": "script",
        "drawer_interpreter": "powershell",
        "drawer_pin": 2,
        "process_timeout": 0
    },
    "FETCH": {
        "timeout": 30,
        "chunk_size": 8192
    },
    "LOGGING": {
        "file": "app.log",
        "to_file": True,
        "level": "INFO",
        "max_size_mb": 10,
        "backups": 3
    }
}


def _as_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _as_list(value: str) -> list:
    return [part.strip() for part in value.split(",") if part.strip()]


_ENV_OVERRIDES: Dict[str, Tuple[str, str, Callable[[str], Any]]] = {
    "HOST": ("SERVICE", "host", str),
    "PORT": ("SERVICE", "port", int),
    "DEBUG": ("SERVICE", "debug", _as_bool),
    "ALLOWED_ORIGINS": ("SERVICE", "allowed_origins", _as_list),
    "TLS_CERT_PATH": ("SERVICE", "tls_cert_path", str),
    "TLS_KEY_PATH": ("SERVICE", "tls_key_path", str),
    "PRINTER_BACKEND": ("TOOLS", "backend", str),
    "PDF_PRINTER_PATH": ("TOOLS", "pdf_printer_path", str),
    "DRAWER_COMMAND_PATH": ("TOOLS", "drawer_command_path", str),
    "DRAWER_BACKEND": ("TOOLS", "drawer_backend", str),
    "DRAWER_INTERPRETER": ("TOOLS", "drawer_interpreter", str),
    "PROCESS_TIMEOUT": ("TOOLS", "process_timeout", float),
    "FETCH_TIMEOUT": ("FETCH", "timeout", float),
    "LOG_FILE": ("LOGGING", "file", str),
    "LOG_TO_FILE": ("LOGGING", "to_file", _as_bool),
    "LOG_LEVEL": ("LOGGING", "level", str),
    "LOG_MAX_SIZE_MB": ("LOGGING", "max_size_mb", int),
    "LOG_MAX_BACKUPS": ("LOGGING", "backups", int),
}


def _ensure_config_file() -> None:
    if not _CONFIG_FILE.exists():
        _write_config(_DEFAULTS)


def _merge_with_defaults(raw: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    merged: Dict[str, Dict[str, Any]] = {}
    for section, defaults in _DEFAULTS.items():
        section_values: Dict[str, Any] = deepcopy(defaults)
        incoming = raw.get(section)
        if isinstance(incoming, dict):
            section_values.update(incoming)
        merged[section] = section_values
    return merged


def _apply_env(data: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    result = deepcopy(data)
    for env_key, (section, key, convert) in _ENV_OVERRIDES.items():
        raw = os.environ.get(env_key)
        if raw is None:
            continue
        try:
            result[section][key] = convert(raw)
        except ValueError:
            # malformed overrides fall back to the file/default value
            continue
    return result


def _load_config() -> Dict[str, Dict[str, Any]]:
    _ensure_config_file()
    with _CONFIG_FILE.open("r", encoding="utf-8") as handle:
        raw = json.load(handle)
    return _merge_with_defaults(raw)


def _write_config(data: Dict[str, Dict[str, Any]]) -> None:
    _CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    with _CONFIG_FILE.open("w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=2, ensure_ascii=False)


def _refresh_globals(new_data: Dict[str, Dict[str, Any]]) -> None:
    global SERVICE, TOOLS, FETCH, LOGGING
    data = _apply_env(new_data)
    SERVICE = deepcopy(data["SERVICE"])
    TOOLS = deepcopy(data["TOOLS"])
    FETCH = deepcopy(data["FETCH"])
    LOGGING = deepcopy(data["LOGGING"])


def reload() -> None:
    """Reload settings from disk and the environment."""
    config = _load_config()
    _refresh_globals(config)


reload()

__all__ = [
    "SERVICE",
    "TOOLS",
    "FETCH",
    "LOGGING",
    "reload",
]
