import json
import logging
from pathlib import Path

import pytest

from artilens.infra.config import apply_logging, load_settings
from artilens.infra.logging_utils import LOGGER


def test_defaults(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    settings = load_settings(environ={})
    assert settings.staging_dir == tmp_path / "data" / "staged-artifacts"
    assert settings.log_level == "INFO"
    assert settings.staging_passphrase is None
    assert not settings.encrypt_staged


def test_file_then_environment(tmp_path: Path) -> None:
    config_path = tmp_path / "artilens.json"
    config_path.write_text(
        json.dumps({"staging_dir": str(tmp_path / "from-file"), "log_level": "debug"}),
        encoding="utf-8",
    )
    settings = load_settings(config_path, environ={})
    assert settings.staging_dir == tmp_path / "from-file"
    assert settings.log_level == "DEBUG"

    env = {
        "ARTILENS_CONFIG": str(config_path),
        "ARTILENS_STAGING_DIR": str(tmp_path / "from-env"),
        "ARTILENS_STAGING_PASSPHRASE": "s3cret",
    }
    settings = load_settings(environ=env)
    assert settings.staging_dir == tmp_path / "from-env"
    assert settings.log_level == "DEBUG"
    assert settings.encrypt_staged


def test_apply_logging(tmp_path: Path) -> None:
    apply_logging(load_settings(environ={"ARTILENS_LOG_LEVEL": "warning", "ARTILENS_STAGING_DIR": str(tmp_path)}))
    try:
        assert LOGGER.level == logging.WARNING
    finally:
        apply_logging(load_settings(environ={"ARTILENS_STAGING_DIR": str(tmp_path)}))
    assert LOGGER.level == logging.INFO


@pytest.mark.parametrize("content", ["[]", '"staging"', "42", "null"])
def test_config_file_must_be_object(tmp_path: Path, content: str) -> None:
    config_path = tmp_path / "artilens.json"
    config_path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError, match="must contain a JSON object") as excinfo:
        load_settings(config_path, environ={})
    assert str(config_path) in str(excinfo.value)


def test_unknown_log_level_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="TRACE"):
        load_settings(environ={"ARTILENS_LOG_LEVEL": "trace", "ARTILENS_STAGING_DIR": str(tmp_path)})
