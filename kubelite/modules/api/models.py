"""
Kubelite shared data models.

These models define the structure of the data exchanged with the
Kubernetes API server.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Enums


class PatchOperation(str, Enum):
    """JSON Patch operations supported by the pod patch call."""

    UNSET = "unset"
    ADD = "add"
    REPLACE = "replace"


# Resource Models (API Output)


class Metadata(BaseModel):
    """Object metadata of a pod."""

    model_config = ConfigDict(extra="ignore", hide_input_in_errors=True)

    name: str = ""

    # None if no "labels" key was provided, an empty dict if the key
    # was provided without values.
    labels: Optional[Dict[str, str]] = None


class Pod(BaseModel):
    """The subset of a pod kubelite reads."""

    model_config = ConfigDict(extra="ignore", hide_input_in_errors=True)

    metadata: Optional[Metadata] = None


# Request Models (API Input)


class Patch(BaseModel):
    """A single JSON Patch entry."""

    operation: PatchOperation = Field(..., description="Patch operation")
    path: str = Field(..., description="JSON pointer to the target member")
    value: Any = Field(default=None, description="JSON-serializable value")

    @field_validator("operation")
    @classmethod
    def validate_operation(cls, v):
        """Reject the unset sentinel."""
        if v == PatchOperation.UNSET:
            raise ValueError("patch operation must be set")
        return v

    def to_json_patch(self) -> Dict[str, Any]:
        """Render the entry as a JSON Patch object."""
        return {"op": PatchOperation(self.operation).value, "path": self.path, "value": self.value}


def encode_patches(patches: List[Patch]) -> bytes:
    """Serialize patches to a JSON Patch document."""
    return json.dumps([patch.to_json_patch() for patch in patches]).encode("utf-8")


@dataclass(frozen=True)
class ApiRequest:
    """
    A request ready to be handed to the executor.

    The body is kept as bytes so it can be replayed on every attempt and
    shown in diagnostics.
    """

    method: str
    url: str
    body: Optional[bytes] = None
    headers: Dict[str, str] = field(default_factory=dict)
