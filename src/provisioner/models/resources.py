"""Records returned by the remote compute API."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field



class _APIRecord(BaseModel):
    """Base for API payloads; unknown fields are ignored."""
    model_config = ConfigDict(extra="ignore")


class IP(_APIRecord):
    id: str
    address: Optional[str] = None
    organization: Optional[str] = None


class ServerRef(_APIRecord):
    id: str
    name: Optional[str] = None


class Volume(_APIRecord):
    id: str
    name: Optional[str] = None
    volume_type: str
    size: int
    organization: Optional[str] = None
    server: Optional[ServerRef] = None


class VolumeConstraint(_APIRecord):
    """Allowed total local volume size for a server type."""
    min_size: int = 0
    max_size: int = 0


class ServerType(_APIRecord):
    volumes_constraint: VolumeConstraint = Field(default_factory=VolumeConstraint)


class RootVolume(_APIRecord):
    id: Optional[str] = None
    size: int = 0


class Image(_APIRecord):
    id: str
    name: Optional[str] = None
    root_volume: RootVolume = Field(default_factory=RootVolume)


class Bootscript(_APIRecord):
    id: str
    title: Optional[str] = None


class ServerIP(_APIRecord):
    id: str
    address: Optional[str] = None
    dynamic: bool = False


class Server(_APIRecord):
    id: str
    name: str
    commercial_type: Optional[str] = None
    state: Optional[str] = None
    public_ip: Optional[ServerIP] = None
    volumes: dict = Field(default_factory=dict)
    tags: List[str] = Field(default_factory=list)


class MarketplaceImage(_APIRecord):
    id: Optional[str] = None
    label: str
    name: Optional[str] = None
