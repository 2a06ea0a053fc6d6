from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
import tomllib
from typing import Any, Optional

from .debounce import DEFAULT_DEBOUNCE_MS
from .errors import ConfigError
from .sorting import DEFAULT_SORT, sort_choices
from .state import MIN_QUERY_LENGTH
from .suggest import DEFAULT_SUGGESTION_LIMIT


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class EffectiveConfig:
    data_path: Optional[str]
    min_query_length: int = MIN_QUERY_LENGTH
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT
    default_sort: str = DEFAULT_SORT
    log_level: str = "WARNING"
    project_dir: str = "."

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def _config_root() -> Path:
    return Path(os.path.expanduser("~/.config/petitsplats"))


def load_global_config() -> dict[str, Any]:
    path = _config_root() / "config.toml"
    if not path.exists():
        return {}
    return _load_toml(path)


def load_project_config(project_dir: str) -> dict[str, Any]:
    path = Path(project_dir) / "petitsplats.toml"
    if not path.exists():
        return {}
    return _load_toml(path)


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except OSError as exc:
        raise ConfigError(f"Failed to read config: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config: {path}") from exc


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_config(cli: dict[str, Any], project: dict[str, Any], global_cfg: dict[str, Any]) -> dict[str, Any]:
    merged = _deep_merge(global_cfg, project)
    return _deep_merge(merged, cli)


def resolve_config(cli_args: dict[str, Any]) -> EffectiveConfig:
    global_cfg = load_global_config()
    project_dir = cli_args.get("project") or os.getcwd()
    project_cfg = load_project_config(project_dir)

    merged = merge_config(_cli_to_dict(cli_args), project_cfg, global_cfg)

    data_path = merged.get("data_path")
    if data_path is not None:
        data_path = _resolve_data_path(str(data_path), project_dir)

    return EffectiveConfig(
        data_path=data_path,
        min_query_length=_bounded_int(merged, "min_query_length", MIN_QUERY_LENGTH, minimum=1),
        debounce_ms=_bounded_int(merged, "debounce_ms", DEFAULT_DEBOUNCE_MS, minimum=0),
        suggestion_limit=_bounded_int(merged, "suggestion_limit", DEFAULT_SUGGESTION_LIMIT, minimum=1),
        default_sort=_normalize_sort(merged.get("default_sort", DEFAULT_SORT)),
        log_level=_normalize_log_level(merged.get("log_level", "WARNING")),
        project_dir=str(project_dir),
    )


def _cli_to_dict(cli_args: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key in (
        "data_path",
        "min_query_length",
        "debounce_ms",
        "suggestion_limit",
        "default_sort",
        "log_level",
    ):
        if cli_args.get(key) is not None:
            out[key] = cli_args[key]
    return out


def _resolve_data_path(value: str, project_dir: str) -> str:
    path = Path(os.path.expanduser(value))
    if not path.is_absolute():
        path = Path(project_dir) / path
    return str(path)


def _bounded_int(merged: dict[str, Any], key: str, default: int, minimum: int) -> int:
    value = merged.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigError(f"{key} must be >= {minimum}, got {value}")
    return value


def _normalize_sort(value: Any) -> str:
    text = str(value or "").strip()
    if text in sort_choices():
        return text
    return DEFAULT_SORT


def _normalize_log_level(value: Any) -> str:
    text = str(value or "").strip().upper()
    if text in LOG_LEVELS:
        return text
    return "WARNING"


def config_to_toml(cfg: EffectiveConfig) -> str:
    lines = []
    if cfg.data_path:
        lines.append(f"data_path = {cfg.data_path!r}")
    lines.append(f"min_query_length = {cfg.min_query_length!r}")
    lines.append(f"debounce_ms = {cfg.debounce_ms!r}")
    lines.append(f"suggestion_limit = {cfg.suggestion_limit!r}")
    lines.append(f"default_sort = {cfg.default_sort!r}")
    lines.append(f"log_level = {cfg.log_level!r}")
    return "\n".join(lines) + "\n"
