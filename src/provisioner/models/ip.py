"""Public IP directive model."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, model_validator


class IPAction(str, Enum):
    """What to do about the server's public IP."""
    CREATE_NEW = "create_new"
    ATTACH_EXISTING = "attach_existing"
    DYNAMIC = "dynamic"
    NONE = "none"


class IPDirective(BaseModel):
    """Resolved public IP directive."""
    action: IPAction
    ip_id: Optional[str] = None

    @model_validator(mode="after")
    def check_ip_id(self):
        """Only ATTACH_EXISTING carries an IP id."""
        if self.action == IPAction.ATTACH_EXISTING and not self.ip_id:
            raise ValueError("ip_id is required to attach an existing IP")
        if self.action != IPAction.ATTACH_EXISTING and self.ip_id:
            raise ValueError(f"ip_id is not allowed for {self.action.value}")
        return self

    @classmethod
    def create_new(cls) -> "IPDirective":
        return cls(action=IPAction.CREATE_NEW)

    @classmethod
    def attach_existing(cls, ip_id: str) -> "IPDirective":
        return cls(action=IPAction.ATTACH_EXISTING, ip_id=ip_id)

    @classmethod
    def dynamic(cls) -> "IPDirective":
        return cls(action=IPAction.DYNAMIC)

    @classmethod
    def none(cls) -> "IPDirective":
        return cls(action=IPAction.NONE)
