"""Bootscript argument resolution."""

from provisioner.api.base import APIError, ComputeAPI
from provisioner.errors import BootscriptNotFound, InvalidBootscriptID
from provisioner.utils.validation import is_uuid


class BootscriptResolver:
    """Checks that a bootscript ID is well-formed and exists."""

    def __init__(self, api: ComputeAPI):
        self.api = api

    def resolve(self, zone: str, bootscript_id: str) -> str:
        if not is_uuid(bootscript_id):
            raise InvalidBootscriptID(bootscript_id)
        try:
            self.api.get_bootscript(zone, bootscript_id)
        except APIError as e:
            raise BootscriptNotFound(bootscript_id) from e
        return bootscript_id
