"""Error taxonomy for server provisioning."""

from typing import Optional

from provisioner.utils.sizes import format_bytes


class ProvisioningError(Exception):
    """Base error carrying a user-facing message and an optional hint."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint
        # Set by the volume set builder to the offending argument name
        self.argument: Optional[str] = None

    def __str__(self) -> str:
        return self.message


class InputError(ProvisioningError):
    """Malformed or unresolvable user input, raised before any mutation."""
    pass


class ConstraintViolation(ProvisioningError):
    """Volume set rejected by a pre-creation constraint check."""
    pass


class CreationError(ProvisioningError):
    """A mutating remote call failed."""
    pass


VOLUME_FORMAT_HINT = (
    'You must provide either a UUID ("11111111-1111-1111-1111-111111111111"), '
    'a local volume size ("local:100G" or "l:100G") '
    'or a block volume size ("block:100G" or "b:100G").'
)


class InvalidVolumeFormat(InputError):
    def __init__(self, value: str):
        super().__init__(f"invalid volume format '{value}'", hint=VOLUME_FORMAT_HINT)
        self.value = value


class InvalidVolumeType(InputError):
    def __init__(self, volume_type: str, value: str):
        super().__init__(
            f"invalid volume type {volume_type} in {value} volume",
            hint=VOLUME_FORMAT_HINT,
        )
        self.volume_type = volume_type


class InvalidSizeFormat(InputError):
    def __init__(self, size: str, value: str):
        super().__init__(
            f"invalid size format {size} in {value} volume",
            hint=VOLUME_FORMAT_HINT,
        )
        self.size = size


class VolumeNotFound(InputError):
    def __init__(self, volume_id: str):
        super().__init__(f"volume {volume_id} does not exist")
        self.volume_id = volume_id


class VolumeAlreadyAttached(InputError):
    def __init__(self, volume_id: str, server_id: str):
        super().__init__(f"volume {volume_id} is already attached to {server_id} server")
        self.volume_id = volume_id
        self.server_id = server_id


class UnknownImageLabel(InputError):
    def __init__(self, label: str, commercial_type: str):
        super().__init__(
            f"bad image label '{label}' for {commercial_type}",
            hint="Use 'provisionctl complete-image <prefix>' to list marketplace labels.",
        )
        self.label = label
        self.commercial_type = commercial_type


class IPNotOwned(InputError):
    def __init__(self, address: str):
        super().__init__(f"{address} does not belong to you")
        self.address = address


class InvalidIPArgument(InputError):
    def __init__(self, value: str):
        super().__init__(
            f'invalid IP "{value}", should be either \'new\', \'dynamic\', \'none\', '
            "an IP address ID or a reserved flexible IP address",
            hint="Accepted forms: new, dynamic, none, <ip-id>, <address>.",
        )
        self.value = value


class InvalidBootscriptID(InputError):
    def __init__(self, bootscript_id: str):
        super().__init__(f"bootscript ID {bootscript_id} is not a valid UUID")
        self.bootscript_id = bootscript_id


class BootscriptNotFound(InputError):
    def __init__(self, bootscript_id: str):
        super().__init__(f"bootscript ID {bootscript_id} does not exist")
        self.bootscript_id = bootscript_id


class RootVolumeMustBeLocal(ConstraintViolation):
    def __init__(self):
        super().__init__("first volume must be local")


class RootVolumeCannotBeExisting(ConstraintViolation):
    def __init__(self):
        super().__init__(
            "you cannot use an existing volume as a root volume",
            hint="Create an image of this volume and use its ID in the 'image' argument.",
        )


class RootVolumeTooSmall(ConstraintViolation):
    def __init__(self, size: int, min_size: int):
        super().__init__(
            f"first volume size must be at least {format_bytes(min_size)} for this image"
        )
        self.size = size
        self.min_size = min_size


class LocalVolumeSizeOutOfRange(ConstraintViolation):
    def __init__(self, commercial_type: str, total: int, min_size: int, max_size: int):
        if min_size == max_size:
            message = (
                f"{commercial_type} total local volume size must be equal to "
                f"{format_bytes(min_size)}"
            )
        else:
            message = (
                f"{commercial_type} total local volume size must be between "
                f"{format_bytes(min_size)} and {format_bytes(max_size)}"
            )
        super().__init__(message)
        self.commercial_type = commercial_type
        self.total = total
        self.min_size = min_size
        self.max_size = max_size


class IPCreationFailed(CreationError):
    def __init__(self, cause: Exception):
        super().__init__(f"error while creating your public IP: {cause}")


class ServerCreationFailed(CreationError):
    def __init__(self, cause: Exception):
        super().__init__(f"cannot create the server: {cause}")
