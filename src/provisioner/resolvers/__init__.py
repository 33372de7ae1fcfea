"""Resolvers turning user arguments into API identifiers."""

from provisioner.resolvers.autocomplete import complete_image_label
from provisioner.resolvers.bootscript import BootscriptResolver
from provisioner.resolvers.constraints import (
    ConstraintValidator,
    ValidationResult,
    ValidationStatus,
)
from provisioner.resolvers.image import ImageResolver
from provisioner.resolvers.ip import IPResolver
from provisioner.resolvers.volume import (
    VolumeResolver,
    VolumeSetBuilder,
    parse_volume_descriptor,
)

__all__ = [
    "complete_image_label",
    "BootscriptResolver",
    "ConstraintValidator",
    "ValidationResult",
    "ValidationStatus",
    "ImageResolver",
    "IPResolver",
    "VolumeResolver",
    "VolumeSetBuilder",
    "parse_volume_descriptor",
]
