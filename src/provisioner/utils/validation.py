"""Argument shape checks."""

import ipaddress
import re


_UUID_RE = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


def is_uuid(value: str) -> bool:
    """Return True for a canonical hyphenated UUID."""
    return bool(_UUID_RE.match(value))


def is_ip_address(value: str) -> bool:
    """Return True for an IPv4 or IPv6 literal."""
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True
