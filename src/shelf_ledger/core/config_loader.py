from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, TypeVar

import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, ValidationError

from shelf_ledger.core.exceptions import (
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    MissingEnvironmentVariableError,
)

T = TypeVar("T", bound=BaseModel)

_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


class ConfigLoader:
    """
    YAML config loader for the ledger.

    Layout assumed (relative to project_root):
      config/default.yaml
      config/dev.yaml
      config/prod.yaml
      .env                 (optional)

    Base file precedence:
      (1) explicit config_path argument
      (2) the config_env_var environment variable, if given
      (3) config/default.yaml

    When env is given, config/{env}.yaml is deep-merged on top of the base.
    ${VAR} placeholders are resolved from .env first, then os.environ.
    """

    def __init__(self, project_root: str | Path | None = None, config_dir: str = "config"):
        self.project_root = Path(project_root).resolve() if project_root else Path.cwd().resolve()
        raw = Path(config_dir)
        self.config_dir = (raw if raw.is_absolute() else self.project_root / raw).resolve()

    def load(
        self,
        *,
        schema: type[T],
        env: str | None = None,
        config_path: str | None = None,
        config_env_var: str | None = None,
        use_dotenv: bool = True,
    ) -> T:
        base_path = self._resolve_base_path(config_path, config_env_var)
        merged: dict[str, Any] = self._read_yaml(base_path)

        if env:
            overlay = self.config_dir / f"{env}.yaml"
            if overlay.exists():
                merged = self._deep_merge(merged, self._read_yaml(overlay))

        dotenv_vars = self._dotenv_vars() if use_dotenv else {}
        merged = self._expand_vars(merged, dotenv_vars)

        try:
            return schema.model_validate(merged)
        except ValidationError as e:
            raise ConfigValidationError(
                f"Validation failed for config loaded from '{base_path}'. {e}"
            ) from e

    # ----------------- internal helpers -----------------

    def _resolve_base_path(self, config_path: str | None, config_env_var: str | None) -> Path:
        if config_path:
            raw = Path(config_path).expanduser()
            p = (raw if raw.is_absolute() else self.project_root / raw).resolve()
            if not p.exists():
                raise ConfigFileNotFoundError(f"Config file not found: {p}")
            return p

        env_value = os.getenv(config_env_var) if config_env_var else None
        if env_value:
            p = Path(env_value).expanduser().resolve()
            if not p.exists():
                raise ConfigFileNotFoundError(f"{config_env_var} points to missing file: {p}")
            return p

        if not self.config_dir.exists():
            raise ConfigFileNotFoundError(f"Config directory not found: {self.config_dir}")
        p = self.config_dir / "default.yaml"
        if not p.exists():
            raise ConfigFileNotFoundError(f"Default config not found: {p}")
        return p

    def _read_yaml(self, path: Path) -> dict[str, Any]:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigFileNotFoundError(f"Cannot read config file: {path}. {e}") from e

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigParseError(f"Top-level YAML must be a mapping: {path}")
        return data

    def _deep_merge(self, base: Any, override: Any) -> Any:
        if isinstance(base, dict) and isinstance(override, dict):
            out = dict(base)
            for k, v in override.items():
                out[k] = self._deep_merge(out[k], v) if k in out else v
            return out
        # lists and scalars are replaced
        return override

    def _dotenv_vars(self) -> dict[str, str]:
        for candidate in (self.config_dir / ".env", self.project_root / ".env"):
            if candidate.exists():
                return {k: v for k, v in dotenv_values(candidate).items() if v is not None}
        return {}

    def _expand_vars(self, obj: Any, dotenv_vars: dict[str, str]) -> Any:
        def resolve(var: str, key_path: str) -> str:
            if var in dotenv_vars:
                return dotenv_vars[var]
            if var in os.environ:
                return os.environ[var]
            raise MissingEnvironmentVariableError(var, key_path)

        def walk(x: Any, path: str) -> Any:
            if isinstance(x, dict):
                return {k: walk(v, f"{path}.{k}") for k, v in x.items()}
            if isinstance(x, list):
                return [walk(v, f"{path}[{i}]") for i, v in enumerate(x)]
            if isinstance(x, str):
                return _VAR_PATTERN.sub(lambda m: resolve(m.group(1), path), x)
            return x

        return walk(obj, "root")
