"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from provisioner.models.config import ProvisionerConfig


class TestProvisionerConfig:
    """Test ProvisionerConfig model."""

    def test_default_config(self):
        config = ProvisionerConfig()

        assert config.api.url == "https://api.scaleway.com"
        assert config.api.secret_key is None
        assert config.defaults.zone == "fr-par-1"
        assert config.defaults.commercial_type == "DEV1-S"
        assert config.validation.implicit_root_volume_size is None
        assert config.log_level == "WARNING"

    def test_nested_config(self):
        config = ProvisionerConfig(
            api={"secret_key": "secret", "timeout": 10},
            defaults={"zone": "nl-ams-1", "organization_id": "org"},
            validation={"implicit_root_volume_size": 20000000000},
        )

        assert config.api.secret_key == "secret"
        assert config.api.timeout == 10
        assert config.defaults.zone == "nl-ams-1"
        assert config.defaults.organization_id == "org"
        assert config.validation.implicit_root_volume_size == 20000000000

    def test_log_level_normalized(self):
        assert ProvisionerConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError) as exc_info:
            ProvisionerConfig(log_level="LOUD")

        assert "Invalid log level" in str(exc_info.value)

    def test_invalid_timeout(self):
        with pytest.raises(ValidationError):
            ProvisionerConfig(api={"timeout": 0})

    def test_extra_fields_ignored(self):
        config = ProvisionerConfig(unknown_section={"a": 1})

        assert not hasattr(config, "unknown_section")
