"""Pre-creation checks on the assembled volume set.

Both checks are advisory: the API enforces the same rules when the server
is created. When the data a check needs cannot be fetched, the check is
reported as skipped and creation goes ahead.
"""

import logging
from enum import Enum
from typing import List, Optional

from provisioner.api.base import APIError, ComputeAPI
from provisioner.errors import (
    ConstraintViolation,
    LocalVolumeSizeOutOfRange,
    RootVolumeCannotBeExisting,
    RootVolumeMustBeLocal,
    RootVolumeTooSmall,
)
from provisioner.models.volume import VolumeSet


logger = logging.getLogger(__name__)


class ValidationStatus(Enum):
    """Outcome of a single check."""
    PASSED = "passed"
    SKIPPED = "skipped"
    FAILED = "failed"


class ValidationResult:
    """Result of a check, with the skip reason or the violation."""

    def __init__(
        self,
        check: str,
        status: ValidationStatus,
        reason: Optional[str] = None,
        error: Optional[ConstraintViolation] = None,
    ):
        self.check = check
        self.status = status
        self.reason = reason
        self.error = error

    @classmethod
    def passed(cls, check: str) -> "ValidationResult":
        return cls(check, ValidationStatus.PASSED)

    @classmethod
    def skipped(cls, check: str, reason: str) -> "ValidationResult":
        return cls(check, ValidationStatus.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, check: str, error: ConstraintViolation) -> "ValidationResult":
        return cls(check, ValidationStatus.FAILED, reason=str(error), error=error)

    def raise_for_status(self):
        """Raise the violation if the check failed."""
        if self.status == ValidationStatus.FAILED:
            raise self.error

    def __repr__(self) -> str:
        return f"ValidationResult({self.check!r}, {self.status.value}, reason={self.reason!r})"


class ConstraintValidator:
    """Checks a volume set against image and server type constraints."""

    ROOT_VOLUME_CHECK = "root-volume"
    LOCAL_VOLUME_SIZE_CHECK = "local-volume-size"

    def __init__(self, api: ComputeAPI, implicit_root_volume_size: Optional[int] = None):
        """Initialize validator.

        Args:
            api: Compute API used for read-only lookups
            implicit_root_volume_size: Root size the API allocates when no
                root volume is given; defaults to the server type minimum
        """
        self.api = api
        self.implicit_root_volume_size = implicit_root_volume_size

    def validate(
        self, zone: str, image_id: str, commercial_type: str, volumes: VolumeSet
    ) -> List[ValidationResult]:
        """Run every check and raise the first violation."""
        results = [
            self.check_root_volume(zone, image_id, volumes),
            self.check_local_volume_size(zone, commercial_type, volumes),
        ]
        for result in results:
            if result.status == ValidationStatus.SKIPPED:
                logger.warning(f"Skipping {result.check} validation: {result.reason}")
            result.raise_for_status()
        return results

    def check_root_volume(self, zone: str, image_id: str, volumes: VolumeSet) -> ValidationResult:
        """Root volume must be a new local volume large enough for the image."""
        check = self.ROOT_VOLUME_CHECK
        root = volumes.root
        if root is None:
            return ValidationResult.passed(check)

        if not root.is_local:
            return ValidationResult.failed(check, RootVolumeMustBeLocal())
        if root.is_existing:
            return ValidationResult.failed(check, RootVolumeCannotBeExisting())

        try:
            image = self.api.get_image(zone, image_id)
        except APIError as e:
            return ValidationResult.skipped(check, f"cannot get image {image_id}: {e}")

        min_size = image.root_volume.size
        if (root.size or 0) < min_size:
            return ValidationResult.failed(check, RootVolumeTooSmall(root.size or 0, min_size))
        return ValidationResult.passed(check)

    def check_local_volume_size(
        self, zone: str, commercial_type: str, volumes: VolumeSet
    ) -> ValidationResult:
        """Total local volume size must fit the server type constraint."""
        check = self.LOCAL_VOLUME_SIZE_CHECK

        try:
            server_types = self.api.list_server_types(zone)
        except APIError as e:
            return ValidationResult.skipped(check, f"cannot get server types: {e}")

        server_type = server_types.get(commercial_type)
        if server_type is None:
            return ValidationResult.skipped(check, f"unrecognized server type: {commercial_type}")

        constraint = server_type.volumes_constraint
        total = volumes.local_size()
        if volumes.root is None:
            # The API adds a default root volume
            if self.implicit_root_volume_size is not None:
                total += self.implicit_root_volume_size
            else:
                total += constraint.min_size

        if total < constraint.min_size or total > constraint.max_size:
            return ValidationResult.failed(
                check,
                LocalVolumeSizeOutOfRange(
                    commercial_type, total, constraint.min_size, constraint.max_size
                ),
            )
        return ValidationResult.passed(check)
