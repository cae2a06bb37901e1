# infrastructure/config/trace_config.py
"""
wiretrace の設定を YAML と環境変数から読み込む

優先順位: 環境変数(WIRETRACE_*) > YAML > デフォルト
"""
from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import dotenv_values

ENV_PREFIX = "WIRETRACE_"


class ConfigLoadError(Exception):
    pass


@dataclass(frozen=True)
class TraceConfig:
    max_redirect_hops: int = 32
    probe_limit: int = 512
    artifact_dir: str = "tmp/wiretrace"
    log_level: str = "INFO"
    timeout_sec: int = 20
    follow_redirects: bool = True


def _coerce(name: str, raw: Any, default: Any) -> Any:
    if isinstance(default, bool):
        if isinstance(raw, bool):
            return raw
        text = str(raw).strip().lower()
        if text in ("1", "true", "yes", "on"):
            return True
        if text in ("0", "false", "no", "off"):
            return False
        raise ConfigLoadError(f"{name}: expected boolean, got {raw!r}")
    if isinstance(default, int):
        try:
            value = int(raw)
        except (TypeError, ValueError) as e:
            raise ConfigLoadError(f"{name}: expected integer, got {raw!r}") from e
        if value < 1:
            raise ConfigLoadError(f"{name}: must be >= 1")
        return value
    return str(raw)


class TraceConfigLoader:
    def __init__(self, env: Optional[Mapping[str, str]] = None, env_file: Optional[str] = ".env"):
        self._env = env
        self._env_file = env_file

    def load(self, path: Optional[str] = None) -> TraceConfig:
        config = TraceConfig()
        if path:
            config = self._apply(config, self._load_yaml(path), source=path)
        return self._apply(config, self._env_overrides(), source="env")

    def _load_yaml(self, path: str) -> Dict[str, Any]:
        p = Path(path)
        if not p.exists():
            raise ConfigLoadError(f"Config file not found: {path}")

        with p.open("r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigLoadError(f"Config file is not valid YAML: {path}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigLoadError(f"Config file is invalid: {path}")
        # wiretrace: セクションがあればそれを使う
        section = data.get("wiretrace", data)
        if not isinstance(section, dict):
            raise ConfigLoadError(f"Config section 'wiretrace' is invalid: {path}")
        return section

    def _env_overrides(self) -> Dict[str, Any]:
        env: Dict[str, Any] = {}
        if self._env_file and Path(self._env_file).exists():
            env.update({k: v for k, v in dotenv_values(self._env_file).items() if v is not None})
        env.update(self._env if self._env is not None else os.environ)

        out: Dict[str, Any] = {}
        for f in fields(TraceConfig):
            key = ENV_PREFIX + f.name.upper()
            if key in env:
                out[f.name] = env[key]
        return out

    def _apply(self, config: TraceConfig, values: Dict[str, Any], source: str) -> TraceConfig:
        known = {f.name for f in fields(TraceConfig)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigLoadError(f"Unknown config keys in {source}: {', '.join(unknown)}")

        updates = {
            name: _coerce(name, raw, getattr(config, name))
            for name, raw in values.items()
        }
        return replace(config, **updates)
