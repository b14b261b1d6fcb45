import os
from pathlib import Path

from shelf_ledger.config_schema import Settings
from shelf_ledger.core.config_loader import ConfigLoader

CONFIG_ENV_VAR = "SHELF_LEDGER_CONFIG"

project_root = Path(__file__).resolve().parents[2]


def load_settings(
    root: str | Path | None = None,
    config_path: str | None = None,
) -> Settings:
    """Load settings from config/default.yaml plus the ENV overlay (dev/prod)."""
    env = os.getenv("ENV")
    return ConfigLoader(project_root=root or project_root).load(
        schema=Settings,
        env=env if env in {"dev", "prod"} else None,
        config_path=config_path,
        config_env_var=CONFIG_ENV_VAR,
    )
