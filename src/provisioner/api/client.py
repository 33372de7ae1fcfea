"""HTTP implementation of the compute API."""

import logging
import time
from typing import Any, Dict, List, Optional

import httpx

from provisioner.api.base import APIError, ComputeAPI, NotFoundError
from provisioner.models.config import APIConfig
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


logger = logging.getLogger(__name__)

TRANSIENT_SERVER_STATES = {"starting", "stopping"}


class HTTPComputeAPI(ComputeAPI):
    """Client for the instance and marketplace REST APIs."""

    def __init__(
        self,
        config: APIConfig,
        transport: Optional[httpx.BaseTransport] = None,
        page_size: int = 100,
        poll_interval: float = 5.0,
    ):
        """Initialize HTTP client."""
        headers = {"User-Agent": "instance-provisioner"}
        if config.secret_key:
            headers["X-Auth-Token"] = config.secret_key
        self.page_size = page_size
        self.poll_interval = poll_interval
        self._client = httpx.Client(
            base_url=config.url,
            headers=headers,
            timeout=config.timeout,
            transport=transport,
        )

    def close(self):
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Send a request and return the decoded JSON body."""
        try:
            response = self._client.request(method, path, json=json, params=params)
        except httpx.RequestError as e:
            raise APIError(f"Connection error: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(f"{method} {path}: not found", status_code=404)
        if response.is_error:
            raise APIError(
                f"HTTP error {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
            )
        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    @staticmethod
    def _zoned(zone: str, path: str) -> str:
        return f"/instance/v1/zones/{zone}{path}"

    def get_local_image_id_by_label(self, zone: str, label: str, commercial_type: str) -> str:
        """Resolve a marketplace label to a local image ID."""
        for image in self._list_raw_marketplace_images():
            if image.get("label") != label:
                continue
            current = image.get("current_public_version")
            for version in image.get("versions", []):
                if version.get("id") != current:
                    continue
                for local_image in version.get("local_images", []):
                    if (
                        local_image.get("zone") == zone
                        and commercial_type in local_image.get("compatible_commercial_types", [])
                    ):
                        return local_image["id"]
            raise NotFoundError(
                f"no local image for {label} compatible with {commercial_type} in {zone}"
            )
        raise NotFoundError(f"image label {label} not found")

    def get_ip(self, zone: str, ip: str) -> IP:
        data = self._request("GET", self._zoned(zone, f"/ips/{ip}"))
        return IP(**data["ip"])

    def create_ip(self, zone: str, organization_id: Optional[str]) -> IP:
        body = {"organization": organization_id} if organization_id else {}
        data = self._request("POST", self._zoned(zone, "/ips"), json=body)
        return IP(**data["ip"])

    def delete_ip(self, zone: str, ip_id: str) -> None:
        self._request("DELETE", self._zoned(zone, f"/ips/{ip_id}"))

    def get_volume(self, zone: str, volume_id: str) -> Volume:
        data = self._request("GET", self._zoned(zone, f"/volumes/{volume_id}"))
        return Volume(**data["volume"])

    def list_server_types(self, zone: str) -> Dict[str, ServerType]:
        data = self._request("GET", self._zoned(zone, "/products/servers"))
        return {
            name: ServerType(**server_type)
            for name, server_type in data.get("servers", {}).items()
        }

    def get_image(self, zone: str, image_id: str) -> Image:
        data = self._request("GET", self._zoned(zone, f"/images/{image_id}"))
        return Image(**data["image"])

    def get_bootscript(self, zone: str, bootscript_id: str) -> Bootscript:
        data = self._request("GET", self._zoned(zone, f"/bootscripts/{bootscript_id}"))
        return Bootscript(**data["bootscript"])

    def create_server(self, intent: ServerCreationIntent) -> Server:
        data = self._request(
            "POST", self._zoned(intent.zone, "/servers"), json=intent.to_payload()
        )
        return Server(**data["server"])

    def server_action(self, zone: str, server_id: str, action: str) -> None:
        self._request(
            "POST", self._zoned(zone, f"/servers/{server_id}/action"), json={"action": action}
        )

    def get_server(self, zone: str, server_id: str) -> Server:
        data = self._request("GET", self._zoned(zone, f"/servers/{server_id}"))
        return Server(**data["server"])

    def list_marketplace_images(self) -> List[MarketplaceImage]:
        return [MarketplaceImage(**image) for image in self._list_raw_marketplace_images()]

    def _list_raw_marketplace_images(self) -> List[Dict[str, Any]]:
        """Fetch every page of the marketplace image listing."""
        images: List[Dict[str, Any]] = []
        page = 1
        while True:
            data = self._request(
                "GET",
                "/marketplace/v1/images",
                params={"page": page, "per_page": self.page_size},
            )
            batch = data.get("images", [])
            images.extend(batch)
            total = data.get("total_count", len(images))
            if not batch or len(images) >= total:
                return images
            page += 1

    def wait_for_server(self, zone: str, server_id: str, timeout: float) -> Server:
        """Poll the server until it leaves a transient state."""
        deadline = time.monotonic() + timeout
        while True:
            server = self.get_server(zone, server_id)
            if server.state not in TRANSIENT_SERVER_STATES:
                return server
            if time.monotonic() >= deadline:
                raise APIError(
                    f"Timeout waiting for server {server_id}, still {server.state}"
                )
            logger.debug(f"Server {server_id} is {server.state}, waiting")
            time.sleep(self.poll_interval)


def _error_message(response: httpx.Response) -> str:
    """Extract the API error message from a response."""
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict) and data.get("message"):
        return data["message"]
    return response.text
