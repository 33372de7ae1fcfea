"""Configuration models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class APIConfig(BaseModel):
    """Remote compute API connection settings."""
    url: str = Field(default="https://api.scaleway.com")
    secret_key: Optional[str] = None
    timeout: float = Field(default=30.0, ge=1)


class DefaultsConfig(BaseModel):
    """Defaults applied when the CLI leaves an argument unset."""
    zone: str = Field(default="fr-par-1")
    organization_id: Optional[str] = None
    commercial_type: str = Field(default="DEV1-S")


class ValidationConfig(BaseModel):
    """Pre-creation check settings."""
    # Size the API gives a root volume when none is requested.
    # None means the server type's minimum local size.
    implicit_root_volume_size: Optional[int] = Field(default=None, ge=0)


class ProvisionerConfig(BaseModel):
    """Main configuration model."""
    api: APIConfig = Field(default_factory=APIConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    log_level: str = Field(default="WARNING")

    model_config = ConfigDict(extra="ignore")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()
