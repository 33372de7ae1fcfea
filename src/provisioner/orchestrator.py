"""Server provisioning orchestration.

Creating a server takes several remote calls (IP, then server, then power
on) and the API has no multi-resource transaction, so an IP reserved for a
server that then fails to be created is released again here.
"""

import logging
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from provisioner.api.base import APIError, ComputeAPI
from provisioner.errors import IPCreationFailed, ServerCreationFailed
from provisioner.models.ip import IPAction, IPDirective
from provisioner.models.resources import Server
from provisioner.models.server import CreateServerArgs, ServerCreationIntent
from provisioner.resolvers.bootscript import BootscriptResolver
from provisioner.resolvers.constraints import ConstraintValidator, ValidationResult
from provisioner.resolvers.image import ImageResolver
from provisioner.resolvers.ip import IPResolver
from provisioner.resolvers.volume import VolumeSetBuilder


logger = logging.getLogger(__name__)


class ProvisioningState(Enum):
    """Steps of a server creation."""
    RESOLVING = "resolving"
    VALIDATING = "validating"
    CREATING_IP = "creating_ip"
    CREATING_SERVER = "creating_server"
    DELETING_IP = "deleting_ip"
    STARTING = "starting"
    DONE = "done"
    FAILED = "failed"


def run_best_effort(description: str, func: Callable[..., Any], *args: Any) -> bool:
    """Run a secondary action; its failure is logged and never raised."""
    try:
        func(*args)
    except Exception as e:
        logger.warning(f"{description} failed: {e}")
        return False
    return True


class ServerProvisioner:
    """Resolves arguments and creates a server, rolling back a new IP on failure."""

    def __init__(self, api: ComputeAPI, implicit_root_volume_size: Optional[int] = None):
        """Initialize provisioner."""
        self.api = api
        self.image_resolver = ImageResolver(api)
        self.ip_resolver = IPResolver(api)
        self.volume_set_builder = VolumeSetBuilder(api)
        self.bootscript_resolver = BootscriptResolver(api)
        self.constraint_validator = ConstraintValidator(api, implicit_root_volume_size)
        self.state: Optional[ProvisioningState] = None
        self.validation_results: List[ValidationResult] = []

    def _transition(self, state: ProvisioningState):
        logger.debug(f"Provisioning state: {self.state} -> {state}")
        self.state = state

    def build_intent(self, args: CreateServerArgs) -> Tuple[ServerCreationIntent, IPDirective]:
        """Resolve and validate arguments without creating anything."""
        self._transition(ProvisioningState.RESOLVING)

        intent = ServerCreationIntent(
            zone=args.zone,
            organization=args.organization_id,
            name=args.name,
            commercial_type=args.commercial_type,
            image=self.image_resolver.resolve(args.zone, args.image, args.commercial_type),
            tags=args.tags,
            enable_ipv6=args.ipv6,
        )

        directive = self.ip_resolver.resolve(args.zone, args.ip)
        if directive.action == IPAction.ATTACH_EXISTING:
            intent.public_ip = directive.ip_id
        elif directive.action == IPAction.DYNAMIC:
            intent.dynamic_ip_required = True

        if args.has_volumes:
            intent.volumes = self.volume_set_builder.build(
                args.zone,
                args.organization_id,
                args.name,
                args.root_volume,
                args.additional_volumes,
            )

        if args.bootscript_id:
            intent.bootscript = self.bootscript_resolver.resolve(args.zone, args.bootscript_id)
        if args.security_group_id:
            intent.security_group = args.security_group_id
        if args.placement_group_id:
            intent.placement_group = args.placement_group_id

        self.validation_results = []
        if intent.volumes is not None:
            self._transition(ProvisioningState.VALIDATING)
            self.validation_results = self.constraint_validator.validate(
                args.zone, intent.image, intent.commercial_type, intent.volumes
            )

        return intent, directive

    def create_server(self, args: CreateServerArgs) -> Server:
        """Create the server described by args and return it."""
        try:
            intent, directive = self.build_intent(args)
            created_ip_id = None

            if directive.action == IPAction.CREATE_NEW:
                self._transition(ProvisioningState.CREATING_IP)
                logger.info("Creating IP")
                try:
                    ip = self.api.create_ip(args.zone, args.organization_id)
                except APIError as e:
                    raise IPCreationFailed(e) from e
                created_ip_id = ip.id
                intent.public_ip = ip.id
                logger.info(f"IP created: {ip.id}")

            self._transition(ProvisioningState.CREATING_SERVER)
            logger.info(f"Creating server {intent.name}")
            try:
                server = self.api.create_server(intent)
            except Exception as e:
                if created_ip_id is not None:
                    self._transition(ProvisioningState.DELETING_IP)
                    logger.info(f"Deleting created IP: {created_ip_id}")
                    run_best_effort(
                        f"Deleting created IP {created_ip_id}",
                        self.api.delete_ip,
                        args.zone,
                        created_ip_id,
                    )
                raise ServerCreationFailed(e) from e
            logger.info(f"Server created: {server.id}")

            if args.start:
                self._transition(ProvisioningState.STARTING)
                logger.info(f"Starting server {server.id}")
                started = run_best_effort(
                    f"Starting server {server.id} (the server is successfully created)",
                    self.api.server_action,
                    args.zone,
                    server.id,
                    "poweron",
                )
                if started:
                    logger.info("Server started")

            self._transition(ProvisioningState.DONE)
            return server

        except Exception:
            self._transition(ProvisioningState.FAILED)
            raise
