"""Volume argument parsing, resolution and volume set assembly."""

import logging
from typing import List, Optional

from pydantic import ValidationError

from provisioner.api.base import APIError, ComputeAPI
from provisioner.errors import (
    InvalidSizeFormat,
    InvalidVolumeFormat,
    InvalidVolumeType,
    ProvisioningError,
    VolumeAlreadyAttached,
    VolumeNotFound,
)
from provisioner.models.volume import (
    ExistingVolume,
    NewVolume,
    StorageClass,
    VolumeDescriptor,
    VolumeSet,
    VolumeTemplate,
)
from provisioner.utils.sizes import parse_bytes
from provisioner.utils.validation import is_uuid


logger = logging.getLogger(__name__)

STORAGE_CLASS_TOKENS = {
    "l": StorageClass.LOCAL,
    "local": StorageClass.LOCAL,
    "b": StorageClass.BLOCK,
    "block": StorageClass.BLOCK,
}


def parse_volume_descriptor(value: str) -> VolumeDescriptor:
    """Parse a volume argument.

    Accepted forms are ``<class>:<size>`` where class is one of l, local,
    b or block (e.g. ``l:20GB``), or the UUID of an existing volume.
    """
    parts = value.strip().split(":")

    if len(parts) == 2:
        class_token, size_token = parts
        storage_class = STORAGE_CLASS_TOKENS.get(class_token)
        if storage_class is None:
            raise InvalidVolumeType(class_token, value)
        try:
            size = parse_bytes(size_token)
        except ValueError as e:
            raise InvalidSizeFormat(size_token, value) from e
        return NewVolume(storage_class=storage_class, size=size)

    if len(parts) == 1 and is_uuid(parts[0]):
        return ExistingVolume(id=parts[0])

    raise InvalidVolumeFormat(value)


class VolumeResolver:
    """Turns existing volume references into full templates."""

    def __init__(self, api: ComputeAPI):
        self.api = api

    def resolve(self, zone: str, volume_id: str) -> VolumeTemplate:
        """Look up an existing volume and check it can be attached."""
        try:
            volume = self.api.get_volume(zone, volume_id)
        except (APIError, ValidationError) as e:
            logger.debug(f"Volume lookup for {volume_id} failed: {e}")
            raise VolumeNotFound(volume_id) from e

        if volume.server is not None:
            raise VolumeAlreadyAttached(volume.id, volume.server.id)

        return VolumeTemplate(id=volume.id, volume_type=volume.volume_type, size=volume.size)

    def template_for(
        self, zone: str, organization_id: Optional[str], descriptor: VolumeDescriptor
    ) -> VolumeTemplate:
        """Build the template for any descriptor."""
        if isinstance(descriptor, ExistingVolume):
            return self.resolve(zone, descriptor.id)
        return VolumeTemplate(
            volume_type=descriptor.storage_class,
            size=descriptor.size,
            organization=organization_id,
        )


class VolumeSetBuilder:
    """Assembles the root and additional volumes of a server."""

    def __init__(self, api: ComputeAPI):
        self.resolver = VolumeResolver(api)

    def build(
        self,
        zone: str,
        organization_id: Optional[str],
        server_name: str,
        root_volume: Optional[str],
        additional_volumes: List[str],
    ) -> VolumeSet:
        """Parse and resolve every volume argument."""
        volume_set = VolumeSet()

        if root_volume:
            template = self._build_one(zone, organization_id, root_volume, "root-volume")
            template.organization = None
            volume_set.root = template

        for i, value in enumerate(additional_volumes):
            template = self._build_one(
                zone, organization_id, value, f"additional-volumes.{i}"
            )
            template.name = f"{server_name}-{i + 1}"
            volume_set.additional.append(template)

        logger.debug(f"Built volume set: {volume_set.to_templates()}")
        return volume_set

    def _build_one(
        self, zone: str, organization_id: Optional[str], value: str, argument: str
    ) -> VolumeTemplate:
        try:
            descriptor = parse_volume_descriptor(value)
            return self.resolver.template_for(zone, organization_id, descriptor)
        except ProvisioningError as e:
            e.argument = argument
            raise
