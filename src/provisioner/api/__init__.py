"""Remote compute API interface and HTTP client."""

from provisioner.api.base import APIError, ComputeAPI, NotFoundError
from provisioner.api.client import HTTPComputeAPI

__all__ = [
    "APIError",
    "ComputeAPI",
    "NotFoundError",
    "HTTPComputeAPI",
]
