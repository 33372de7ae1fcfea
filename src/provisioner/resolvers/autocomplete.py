"""Shell completion for image labels."""

import logging
from typing import List

from provisioner.api.base import ComputeAPI


logger = logging.getLogger(__name__)


def complete_image_label(api: ComputeAPI, prefix: str) -> List[str]:
    """Return marketplace image labels starting with prefix.

    Labels use underscores, so dashes in the prefix are translated. Listing
    failures yield no suggestions rather than an error.
    """
    try:
        images = api.list_marketplace_images()
    except Exception as e:
        logger.debug(f"Cannot list marketplace images: {e}")
        return []

    prefix = prefix.lower().replace("-", "_")
    return [image.label for image in images if image.label.lower().startswith(prefix)]
