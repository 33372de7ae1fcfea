"""Tests for the HTTP compute API client."""

import json

import httpx
import pytest

from provisioner.api.base import APIError, NotFoundError
from provisioner.api.client import HTTPComputeAPI
from provisioner.models.config import APIConfig
from provisioner.models.server import ServerCreationIntent
from provisioner.models.volume import StorageClass, VolumeSet, VolumeTemplate

GB = 1000 ** 3
ZONE = "fr-par-1"
IMAGE_ID = "11111111-1111-1111-1111-111111111111"
IP_ID = "33333333-3333-3333-3333-333333333333"
SERVER_ID = "44444444-4444-4444-4444-444444444444"


def make_client(handler, **kwargs):
    """Create a client whose requests are served by handler."""
    config = APIConfig(url="https://api.example.com", secret_key="secret")
    return HTTPComputeAPI(config, transport=httpx.MockTransport(handler), **kwargs)


def marketplace_page(images, total):
    return {"images": images, "total_count": total}


MARKETPLACE_IMAGES = [
    {
        "id": "m-1",
        "label": "ubuntu_focal",
        "current_public_version": "v2",
        "versions": [
            {"id": "v1", "local_images": [
                {"id": "old-image", "zone": ZONE, "compatible_commercial_types": ["DEV1-S"]},
            ]},
            {"id": "v2", "local_images": [
                {"id": "gpu-image", "zone": ZONE, "compatible_commercial_types": ["RENDER-S"]},
                {"id": IMAGE_ID, "zone": ZONE, "compatible_commercial_types": ["DEV1-S", "DEV1-M"]},
                {"id": "ams-image", "zone": "nl-ams-1", "compatible_commercial_types": ["DEV1-S"]},
            ]},
        ],
    },
    {"id": "m-2", "label": "debian_buster", "versions": []},
]


class TestRequests:
    """Test request construction and error mapping."""

    def test_auth_header_sent(self):
        seen = {}

        def handler(request):
            seen["token"] = request.headers.get("X-Auth-Token")
            seen["path"] = request.url.path
            return httpx.Response(200, json={"ip": {"id": IP_ID, "address": "51.15.0.1"}})

        ip = make_client(handler).get_ip(ZONE, "51.15.0.1")

        assert ip.id == IP_ID
        assert seen["token"] == "secret"
        assert seen["path"] == "/instance/v1/zones/fr-par-1/ips/51.15.0.1"

    def test_not_found(self):
        client = make_client(lambda request: httpx.Response(404, json={"message": "not found"}))

        with pytest.raises(NotFoundError) as exc_info:
            client.get_volume(ZONE, "missing")

        assert exc_info.value.status_code == 404

    def test_server_error_message(self):
        client = make_client(
            lambda request: httpx.Response(409, json={"message": "quota exceeded"})
        )

        with pytest.raises(APIError) as exc_info:
            client.create_ip(ZONE, "org")

        assert exc_info.value.status_code == 409
        assert "quota exceeded" in str(exc_info.value)

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(APIError) as exc_info:
            make_client(handler).delete_ip(ZONE, IP_ID)

        assert "Connection error" in str(exc_info.value)

    def test_delete_no_content(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            return httpx.Response(204)

        make_client(handler).delete_ip(ZONE, IP_ID)

        assert seen["method"] == "DELETE"


class TestResources:
    """Test resource decoding."""

    def test_get_volume_attached(self):
        def handler(request):
            return httpx.Response(200, json={"volume": {
                "id": "vol", "volume_type": "b_ssd", "size": 50 * GB,
                "server": {"id": SERVER_ID, "name": "db"},
            }})

        volume = make_client(handler).get_volume(ZONE, "vol")

        assert volume.volume_type == StorageClass.BLOCK
        assert volume.server.id == SERVER_ID

    def test_list_server_types(self):
        def handler(request):
            assert request.url.path == "/instance/v1/zones/fr-par-1/products/servers"
            return httpx.Response(200, json={"servers": {
                "DEV1-S": {"volumes_constraint": {"min_size": 20 * GB, "max_size": 20 * GB}},
            }})

        types = make_client(handler).list_server_types(ZONE)

        assert types["DEV1-S"].volumes_constraint.max_size == 20 * GB

    def test_create_server_payload(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"server": {"id": SERVER_ID, "name": "web"}})

        intent = ServerCreationIntent(
            zone=ZONE,
            name="web",
            commercial_type="DEV1-S",
            image=IMAGE_ID,
            public_ip=IP_ID,
            volumes=VolumeSet(root=VolumeTemplate(volume_type=StorageClass.LOCAL, size=20 * GB)),
        )

        server = make_client(handler).create_server(intent)

        assert server.id == SERVER_ID
        assert seen["body"]["public_ip"] == IP_ID
        assert seen["body"]["volumes"] == {"0": {"size": 20 * GB}}

    def test_server_action(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(202, json={"task": {"id": "t"}})

        make_client(handler).server_action(ZONE, SERVER_ID, "poweron")

        assert seen["path"].endswith(f"/servers/{SERVER_ID}/action")
        assert seen["body"] == {"action": "poweron"}


class TestMarketplace:
    """Test marketplace listing and label resolution."""

    def test_all_pages_fetched(self):
        pages = []

        def handler(request):
            page = int(request.url.params["page"])
            pages.append(page)
            return httpx.Response(
                200, json=marketplace_page([MARKETPLACE_IMAGES[page - 1]], total=2)
            )

        images = make_client(handler, page_size=1).list_marketplace_images()

        assert [image.label for image in images] == ["ubuntu_focal", "debian_buster"]
        assert pages == [1, 2]

    def test_label_resolved_for_zone_and_type(self):
        client = make_client(
            lambda request: httpx.Response(200, json=marketplace_page(MARKETPLACE_IMAGES, 2))
        )

        assert client.get_local_image_id_by_label(ZONE, "ubuntu_focal", "DEV1-M") == IMAGE_ID

    def test_label_incompatible_type(self):
        client = make_client(
            lambda request: httpx.Response(200, json=marketplace_page(MARKETPLACE_IMAGES, 2))
        )

        with pytest.raises(NotFoundError):
            client.get_local_image_id_by_label(ZONE, "ubuntu_focal", "GP1-XL")

    def test_unknown_label(self):
        client = make_client(
            lambda request: httpx.Response(200, json=marketplace_page(MARKETPLACE_IMAGES, 2))
        )

        with pytest.raises(NotFoundError):
            client.get_local_image_id_by_label(ZONE, "centos_7", "DEV1-S")


class TestWaitForServer:
    """Test the wait collaborator."""

    def test_returns_when_stable(self):
        states = iter(["starting", "starting", "running"])

        def handler(request):
            return httpx.Response(
                200, json={"server": {"id": SERVER_ID, "name": "web", "state": next(states)}}
            )

        server = make_client(handler, poll_interval=0).wait_for_server(ZONE, SERVER_ID, 60)

        assert server.state == "running"

    def test_timeout(self):
        def handler(request):
            return httpx.Response(
                200, json={"server": {"id": SERVER_ID, "name": "web", "state": "starting"}}
            )

        with pytest.raises(APIError) as exc_info:
            make_client(handler, poll_interval=0).wait_for_server(ZONE, SERVER_ID, 0)

        assert "Timeout" in str(exc_info.value)
