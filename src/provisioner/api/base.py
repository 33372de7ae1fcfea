"""Compute API interface consumed by the provisioning core."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from provisioner.models.resources import (
    IP,
    Bootscript,
    Image,
    MarketplaceImage,
    Server,
    ServerType,
    Volume,
)
from provisioner.models.server import ServerCreationIntent


class APIError(Exception):
    """Remote API call failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(APIError):
    """Remote resource does not exist."""
    pass


class ComputeAPI(ABC):
    """Remote compute API operations. All calls are synchronous."""

    @abstractmethod
    def get_local_image_id_by_label(self, zone: str, label: str, commercial_type: str) -> str:
        """Resolve a marketplace label to a local image ID."""
        pass

    @abstractmethod
    def get_ip(self, zone: str, ip: str) -> IP:
        """Get a flexible IP by ID or address."""
        pass

    @abstractmethod
    def create_ip(self, zone: str, organization_id: Optional[str]) -> IP:
        """Reserve a new flexible IP."""
        pass

    @abstractmethod
    def delete_ip(self, zone: str, ip_id: str) -> None:
        """Release a flexible IP."""
        pass

    @abstractmethod
    def get_volume(self, zone: str, volume_id: str) -> Volume:
        """Get a volume."""
        pass

    @abstractmethod
    def list_server_types(self, zone: str) -> Dict[str, ServerType]:
        """List server types keyed by commercial type."""
        pass

    @abstractmethod
    def get_image(self, zone: str, image_id: str) -> Image:
        """Get an image."""
        pass

    @abstractmethod
    def get_bootscript(self, zone: str, bootscript_id: str) -> Bootscript:
        """Get a bootscript."""
        pass

    @abstractmethod
    def create_server(self, intent: ServerCreationIntent) -> Server:
        """Create a server."""
        pass

    @abstractmethod
    def server_action(self, zone: str, server_id: str, action: str) -> None:
        """Run an action (poweron, poweroff, reboot...) on a server."""
        pass

    @abstractmethod
    def list_marketplace_images(self) -> List[MarketplaceImage]:
        """List every marketplace image, all pages."""
        pass

    @abstractmethod
    def wait_for_server(self, zone: str, server_id: str, timeout: float) -> Server:
        """Block until the server leaves its transient state."""
        pass
