"""Server creation argument and intent models."""

import secrets
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from provisioner.models.volume import VolumeSet


class CommercialType(str, Enum):
    """Commercial types offered by the CLI."""
    GP1_XS = "GP1-XS"
    GP1_S = "GP1-S"
    GP1_M = "GP1-M"
    GP1_L = "GP1-L"
    GP1_XL = "GP1-XL"
    DEV1_S = "DEV1-S"
    DEV1_M = "DEV1-M"
    DEV1_L = "DEV1-L"
    DEV1_XL = "DEV1-XL"
    RENDER_S = "RENDER-S"


def random_server_name(prefix: str = "srv") -> str:
    """Generate a default server name."""
    return f"{prefix}-{secrets.token_hex(4)}"


class CreateServerArgs(BaseModel):
    """Arguments collected by the CLI for a server creation."""
    zone: str = Field(default="fr-par-1")
    organization_id: Optional[str] = None
    image: str = Field(..., description="Image UUID or marketplace label")
    commercial_type: str = Field(default=CommercialType.DEV1_S.value)
    name: str = Field(default_factory=random_server_name)
    root_volume: Optional[str] = None
    additional_volumes: List[str] = Field(default_factory=list)
    ip: str = Field(default="new")
    tags: List[str] = Field(default_factory=list)
    ipv6: bool = False
    start: bool = False
    security_group_id: Optional[str] = None
    placement_group_id: Optional[str] = None
    bootscript_id: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("image")
    @classmethod
    def validate_image(cls, v):
        """Reject an empty image argument."""
        if not v or not v.strip():
            raise ValueError("image is required")
        return v.strip()

    @property
    def has_volumes(self) -> bool:
        return bool(self.root_volume) or bool(self.additional_volumes)


class ServerCreationIntent(BaseModel):
    """Fully resolved server creation request."""
    zone: str
    organization: Optional[str] = None
    name: str
    commercial_type: str
    image: str
    public_ip: Optional[str] = None
    dynamic_ip_required: Optional[bool] = None
    volumes: Optional[VolumeSet] = None
    tags: List[str] = Field(default_factory=list)
    enable_ipv6: bool = False
    security_group: Optional[str] = None
    placement_group: Optional[str] = None
    bootscript: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Render the create-server request body."""
        payload: Dict[str, Any] = {
            "name": self.name,
            "commercial_type": self.commercial_type,
            "image": self.image,
            "enable_ipv6": self.enable_ipv6,
            "tags": list(self.tags),
        }
        optional = {
            "organization": self.organization,
            "public_ip": self.public_ip,
            "dynamic_ip_required": self.dynamic_ip_required,
            "security_group": self.security_group,
            "placement_group": self.placement_group,
            "bootscript": self.bootscript,
        }
        payload.update({k: v for k, v in optional.items() if v is not None})
        if self.volumes is not None and len(self.volumes):
            payload["volumes"] = self.volumes.to_templates()
        return payload
