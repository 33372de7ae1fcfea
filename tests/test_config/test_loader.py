"""Tests for configuration file loading."""

import pytest
from pydantic import ValidationError

from provisioner.config import CONFIG_ENV_VAR, load_config


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point the default config path at an empty home."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    return tmp_path


def test_missing_default_config_uses_defaults():
    config = load_config()

    assert config.defaults.zone == "fr-par-1"


def test_load_explicit_file(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("""
api:
  secret_key: secret
defaults:
  zone: nl-ams-1
  organization_id: org
validation:
  implicit_root_volume_size: 20000000000
log_level: info
""")

    config = load_config(config_file)

    assert config.api.secret_key == "secret"
    assert config.defaults.zone == "nl-ams-1"
    assert config.validation.implicit_root_volume_size == 20000000000
    assert config.log_level == "INFO"


def test_default_path_from_home(isolated_home):
    config_dir = isolated_home / ".config" / "provisioner"
    config_dir.mkdir(parents=True)
    (config_dir / "config.yaml").write_text("defaults:\n  zone: pl-waw-1\n")

    assert load_config().defaults.zone == "pl-waw-1"


def test_path_from_environment(tmp_path, monkeypatch):
    config_file = tmp_path / "custom.yaml"
    config_file.write_text("defaults:\n  commercial_type: GP1-S\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))

    assert load_config().defaults.commercial_type == "GP1-S"


def test_missing_explicit_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_empty_file(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("")

    assert load_config(config_file).log_level == "WARNING"


def test_invalid_file(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("log_level: LOUD\n")

    with pytest.raises(ValidationError):
        load_config(config_file)
