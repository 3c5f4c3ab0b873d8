from __future__ import annotations

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

USER_CONFIG_PATH = Path.home() / ".miller_board_config.yaml"
DEFAULT_API_URL = "http://localhost:8080/api"


def _load_config() -> Dict[str, Any]:
    if not USER_CONFIG_PATH.exists():
        return {}
    try:
        data = yaml.safe_load(USER_CONFIG_PATH.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _save_config(data: Dict[str, Any]) -> None:
    if not data:
        if USER_CONFIG_PATH.exists():
            USER_CONFIG_PATH.unlink()
        return
    USER_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    USER_CONFIG_PATH.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def _set_value(key: str, value: Any) -> None:
    data = _load_config()
    if isinstance(value, str):
        value = value.strip()
    if value in ("", None):
        data.pop(key, None)
    else:
        data[key] = value
    _save_config(data)


def get_api_url() -> str:
    env = os.getenv("MILLER_API_URL", "").strip()
    if env:
        return env
    return str(_load_config().get("api_url", "") or DEFAULT_API_URL).strip()


def set_api_url(value: str) -> None:
    _set_value("api_url", value)


def get_user_token() -> str:
    env = os.getenv("MILLER_TOKEN", "").strip()
    if env:
        return env
    return str(_load_config().get("token", "") or "")


def set_user_token(value: str) -> None:
    _set_value("token", value)


def get_user_lang() -> str:
    return str(_load_config().get("lang", "") or "").strip()


def set_user_lang(value: str) -> None:
    _set_value("lang", value)


def get_user_theme() -> str:
    return str(_load_config().get("theme", "") or "").strip()


def set_user_theme(value: str) -> None:
    _set_value("theme", value)


def get_subtask_in_address() -> bool:
    value = _load_config().get("subtask_in_address", False)
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def set_subtask_in_address(value: Optional[bool]) -> None:
    _set_value("subtask_in_address", True if value else None)
