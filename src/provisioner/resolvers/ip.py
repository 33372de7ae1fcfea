"""Public IP argument resolution."""

import logging

from provisioner.api.base import APIError, ComputeAPI
from provisioner.errors import InvalidIPArgument, IPNotOwned
from provisioner.models.ip import IPDirective
from provisioner.utils.validation import is_ip_address, is_uuid


logger = logging.getLogger(__name__)


class IPResolver:
    """Turns the ip argument into an IP directive.

    Accepted values are "new" (or empty), an IP UUID, a reserved IP address,
    "dynamic" and "none".
    """

    def __init__(self, api: ComputeAPI):
        self.api = api

    def resolve(self, zone: str, ip: str) -> IPDirective:
        if ip in ("", "new"):
            return IPDirective.create_new()
        if is_uuid(ip):
            return IPDirective.attach_existing(ip)
        if is_ip_address(ip):
            logger.info(f"Finding public IP UUID from address: {ip}")
            try:
                res = self.api.get_ip(zone, ip)
            except APIError as e:
                raise IPNotOwned(ip) from e
            return IPDirective.attach_existing(res.id)
        if ip == "dynamic":
            return IPDirective.dynamic()
        if ip == "none":
            return IPDirective.none()
        raise InvalidIPArgument(ip)
