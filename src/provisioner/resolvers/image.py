"""Image argument resolution."""

import logging

from provisioner.api.base import APIError, ComputeAPI
from provisioner.errors import UnknownImageLabel
from provisioner.utils.validation import is_uuid


logger = logging.getLogger(__name__)


class ImageResolver:
    """Maps an image label or UUID to a local image UUID."""

    def __init__(self, api: ComputeAPI):
        self.api = api

    def resolve(self, zone: str, image: str, commercial_type: str) -> str:
        """Return the image UUID to boot the server from."""
        if is_uuid(image):
            return image

        logger.info(f"Resolving image label {image} for {commercial_type} in {zone}")
        try:
            image_id = self.api.get_local_image_id_by_label(zone, image, commercial_type)
        except APIError as e:
            raise UnknownImageLabel(image, commercial_type) from e

        logger.debug(f"Image label {image} resolved to {image_id}")
        return image_id
