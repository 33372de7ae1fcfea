"""Pydantic models for provisioning requests and API records."""

from provisioner.models.config import (
    APIConfig,
    DefaultsConfig,
    ProvisionerConfig,
    ValidationConfig,
)
from provisioner.models.ip import IPAction, IPDirective
from provisioner.models.resources import (
    IP,
    Bootscript,
    Image,
    MarketplaceImage,
    Server,
    ServerType,
    Volume,
    VolumeConstraint,
)
from provisioner.models.server import CommercialType, CreateServerArgs, ServerCreationIntent
from provisioner.models.volume import (
    ExistingVolume,
    NewVolume,
    StorageClass,
    VolumeDescriptor,
    VolumeSet,
    VolumeSlot,
    VolumeTemplate,
)

__all__ = [
    "APIConfig",
    "DefaultsConfig",
    "ProvisionerConfig",
    "ValidationConfig",
    "IPAction",
    "IPDirective",
    "IP",
    "Bootscript",
    "Image",
    "MarketplaceImage",
    "Server",
    "ServerType",
    "Volume",
    "VolumeConstraint",
    "CommercialType",
    "CreateServerArgs",
    "ServerCreationIntent",
    "ExistingVolume",
    "NewVolume",
    "StorageClass",
    "VolumeDescriptor",
    "VolumeSet",
    "VolumeSlot",
    "VolumeTemplate",
]
