from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from artilens.infra.filesystem import read_json
from artilens.infra.logging_utils import configure_logging, resolve_level

ENV_CONFIG_PATH = "ARTILENS_CONFIG"
ENV_STAGING_DIR = "ARTILENS_STAGING_DIR"
ENV_LOG_LEVEL = "ARTILENS_LOG_LEVEL"
ENV_STAGING_PASSPHRASE = "ARTILENS_STAGING_PASSPHRASE"


def default_staging_dir() -> Path:
    return Path.cwd() / "data" / "staged-artifacts"


@dataclass
class Settings:
    staging_dir: Path
    log_level: str = "INFO"
    staging_passphrase: Optional[str] = None

    @property
    def encrypt_staged(self) -> bool:
        return bool(self.staging_passphrase)


def load_settings(path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Defaults, then the JSON config file, then environment variables."""
    env = os.environ if environ is None else environ
    config_path = path or (Path(env[ENV_CONFIG_PATH]) if env.get(ENV_CONFIG_PATH) else None)
    file_values = read_json(config_path) if config_path else {}
    if not isinstance(file_values, dict):
        raise ValueError(f"Config file {config_path} must contain a JSON object, got {type(file_values).__name__}")

    staging_dir = env.get(ENV_STAGING_DIR) or file_values.get("staging_dir")
    log_level = str(env.get(ENV_LOG_LEVEL) or file_values.get("log_level") or "INFO").strip().upper()
    resolve_level(log_level)
    return Settings(
        staging_dir=Path(staging_dir) if staging_dir else default_staging_dir(),
        log_level=log_level,
        staging_passphrase=env.get(ENV_STAGING_PASSPHRASE) or file_values.get("staging_passphrase") or None,
    )


def apply_logging(settings: Settings) -> None:
    configure_logging(settings.log_level)
