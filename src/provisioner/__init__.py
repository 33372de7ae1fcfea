"""
Instance Provisioner - resolve, validate and create compute servers.

Turns a sparse server description (image label, volume sizes, IP mode) into
a complete creation request, and unwinds a reserved IP when the server
creation fails.
"""

__version__ = "1.0.0"

# Re-export key components for easier access
from provisioner.errors import ProvisioningError
from provisioner.models.server import CreateServerArgs, ServerCreationIntent
from provisioner.orchestrator import ServerProvisioner

__all__ = [
    "ProvisioningError",
    "CreateServerArgs",
    "ServerCreationIntent",
    "ServerProvisioner",
]
