"""Volume descriptor, template and volume set models."""

from enum import Enum
from typing import Dict, Iterator, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class StorageClass(str, Enum):
    """Volume storage class as named by the compute API."""
    LOCAL = "l_ssd"
    BLOCK = "b_ssd"


class NewVolume(BaseModel):
    """Request for a volume created along with the server."""
    kind: Literal["new"] = "new"
    storage_class: StorageClass
    size: int = Field(..., ge=0, description="Size in bytes")


class ExistingVolume(BaseModel):
    """Reference to an existing volume by UUID."""
    kind: Literal["existing"] = "existing"
    id: str


VolumeDescriptor = Union[NewVolume, ExistingVolume]


class VolumeTemplate(BaseModel):
    """Resolved per-volume record."""
    id: Optional[str] = None
    name: Optional[str] = None
    volume_type: Optional[Union[StorageClass, str]] = None
    size: Optional[int] = None
    organization: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    @property
    def is_existing(self) -> bool:
        return self.id is not None

    @property
    def is_local(self) -> bool:
        return self.volume_type == StorageClass.LOCAL


class VolumeSlot(BaseModel):
    """Position of a volume on the server: the root slot or an additional one."""
    index: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def root(cls) -> "VolumeSlot":
        return cls(index=0)

    @classmethod
    def additional(cls, index: int) -> "VolumeSlot":
        if index < 1:
            raise ValueError(f"Additional volume index must be >= 1, got {index}")
        return cls(index=index)

    @property
    def is_root(self) -> bool:
        return self.index == 0

    @property
    def key(self) -> str:
        return str(self.index)


class VolumeSet(BaseModel):
    """Root volume plus additional volumes in argument order."""
    root: Optional[VolumeTemplate] = None
    additional: List[VolumeTemplate] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.additional) + (1 if self.root else 0)

    def items(self) -> Iterator[Tuple[VolumeSlot, VolumeTemplate]]:
        """Iterate over (slot, template) pairs, root first."""
        if self.root is not None:
            yield VolumeSlot.root(), self.root
        for position, template in enumerate(self.additional, start=1):
            yield VolumeSlot.additional(position), template

    def local_size(self) -> int:
        """Total size in bytes of local-class volumes."""
        return sum(t.size or 0 for _, t in self.items() if t.is_local)

    def to_templates(self) -> Dict[str, Dict[str, Union[str, int]]]:
        """Render the API volume mapping keyed by "0", "1", ...

        Existing volumes keep only id and name, since the API rejects size
        and type for them. A new root volume keeps only its size.
        """
        templates: Dict[str, Dict[str, Union[str, int]]] = {}
        for slot, template in self.items():
            if template.is_existing:
                rendered = {"id": template.id}
                if template.name:
                    rendered["name"] = template.name
            elif slot.is_root:
                rendered = {"size": template.size}
            else:
                rendered = template.model_dump(exclude_none=True, mode="json")
            templates[slot.key] = rendered
        return templates
