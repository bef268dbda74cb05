from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class Config:
    docs_root: str | None = None
    strict: bool = False
    plain_text: bool = False


_CONFIG: Config | None = None


def get_config() -> Config:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config()
    return _CONFIG


def config_path() -> Path:
    override = os.environ.get("NDTIPS_CONFIG")
    if override:
        return Path(override).expanduser()
    return Path("~/.config/ndtips/config.toml").expanduser()


def docs_root() -> Path | None:
    value = get_config().docs_root
    return Path(value).expanduser() if value else None


def _load_config() -> Config:
    if os.environ.get("PYTEST_CURRENT_TEST") and "NDTIPS_CONFIG" not in os.environ:
        return Config()
    cfg = Config()
    path = config_path()
    if path.is_file():
        try:
            raw = tomllib.loads(path.read_text())
        except (OSError, tomllib.TOMLDecodeError):
            raw = {}
        _apply_file_config(cfg, raw)

    _apply_env_overrides(cfg)
    return cfg


def _apply_file_config(cfg: Config, raw: dict[str, Any]) -> None:
    root_value = raw.get("docs_root")
    if isinstance(root_value, str) and root_value.strip():
        cfg.docs_root = root_value.strip()

    strict_value = raw.get("strict")
    if isinstance(strict_value, bool):
        cfg.strict = strict_value

    text_value = raw.get("plain_text")
    if isinstance(text_value, bool):
        cfg.plain_text = text_value


def _apply_env_overrides(cfg: Config) -> None:
    env_root = os.environ.get("NDTIPS_DOCS_ROOT")
    if env_root:
        cfg.docs_root = env_root.strip()

    env_strict = os.environ.get("NDTIPS_STRICT")
    if env_strict is not None:
        cfg.strict = env_strict.strip().lower() in _TRUE_VALUES

    env_text = os.environ.get("NDTIPS_PLAIN_TEXT")
    if env_text is not None:
        cfg.plain_text = env_text.strip().lower() in _TRUE_VALUES
