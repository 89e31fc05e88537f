from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml

from . import __version__

DEFAULT_CONFIG: dict[str, Any] = {
    "github": {
        "graphql_url": "https://api.github.com/graphql",
        "token_env": "GITHUB_TOKEN",
        "timeout_sec": 60,
        "user_agent": f"pending-payments/{__version__}",
    },
    "project": {
        "org": "NautilusOSS",
        "number": 2,
        # Only the first page is read; anything beyond is dropped.
        "items_page_size": 100,
        "field_values_page_size": 100,
    },
    "classify": {
        "status_name": "Pending Payment",
        "bounty_symbol": "BUIDL",
    },
    "output": {
        "csv_path": "pending_payment_tasks.csv",
        "summary_path": "pending_payment_summary.txt",
    },
    "runtime": {
        "log_level": "INFO",
    },
}


class ConfigError(ValueError):
    pass


def _deep_update(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
    return base


def load_config(config_path: str | Path | None) -> dict[str, Any]:
    cfg = json.loads(json.dumps(DEFAULT_CONFIG))
    if not config_path:
        return cfg
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    if not isinstance(payload, dict):
        raise ConfigError("Config root must be a mapping")
    _deep_update(cfg, payload)
    return cfg


def apply_cli_overrides(cfg: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    def _drop_none(value: Any) -> Any:
        if isinstance(value, dict):
            return {k: _drop_none(v) for k, v in value.items() if v is not None}
        if isinstance(value, list):
            return [_drop_none(v) for v in value if v is not None]
        return value

    cleaned = _drop_none(overrides)
    _deep_update(cfg, cleaned)
    return cfg


def load_token(cfg: dict[str, Any], environ: dict[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    name = str(cfg.get("github", {}).get("token_env") or "GITHUB_TOKEN")
    token = (env.get(name) or "").strip()
    if not token:
        raise ConfigError(f"GitHub token not found. Set the {name} environment variable.")
    return token
