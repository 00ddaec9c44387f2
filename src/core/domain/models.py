"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation at the edges (CLI args, server responses) without coupling
  the Core to HTTP.
- Aliases map the camelCase wire fields onto Python names in one place.

Note:
- These models describe *what* a mapping is, not *how* it is stored.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

API_GROUP = "user.openshift.io"
API_VERSION = f"{API_GROUP}/v1"
MAPPING_KIND = "UserIdentityMapping"
MAPPING_RESOURCE = "useridentitymappings"


class ObjectReference(BaseModel):
    """Reference to another API object (here: an Identity or a User)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Name of the referenced object.",
    )
    uid: str | None = Field(
        default=None,
        description="Server-assigned UID of the referenced object.",
    )
    kind: str | None = None
    namespace: str | None = None
    api_version: str | None = Field(default=None, alias="apiVersion")
    resource_version: str | None = Field(default=None, alias="resourceVersion")


class ObjectMeta(BaseModel):
    """Subset of object metadata the server may assign on create."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    name: str | None = None
    uid: str | None = None
    resource_version: str | None = Field(default=None, alias="resourceVersion")
    creation_timestamp: datetime | None = Field(default=None, alias="creationTimestamp")
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)


class UserIdentityMapping(BaseModel):
    """Binds one identity to one user.

    Immutable: the command builds it from the CLI arguments and, after a
    successful create, swaps it for the server's version instead of mutating it.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    kind: str = Field(default=MAPPING_KIND)
    api_version: str = Field(default=API_VERSION, alias="apiVersion")
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    identity: ObjectReference = Field(
        ...,
        description="Identity from the identity provider (e.g. 'acme_ldap:adamjones').",
    )
    user: ObjectReference = Field(
        ...,
        description="Cluster user account the identity maps to.",
    )

    @classmethod
    def for_names(cls, identity: str, user: str) -> "UserIdentityMapping":
        return cls(identity=ObjectReference(name=identity), user=ObjectReference(name=user))

    @property
    def name(self) -> str:
        """Display name: server-assigned name, falling back to the identity name."""

        return self.metadata.name or self.identity.name

    def to_wire(self) -> dict[str, Any]:
        """Serialize with wire field names, dropping unset/empty values."""

        payload = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        metadata = {k: v for k, v in payload.get("metadata", {}).items() if v not in ({}, None)}
        if metadata:
            payload["metadata"] = metadata
        else:
            payload.pop("metadata", None)
        return payload


class Status(BaseModel):
    """Error body returned by the API server (`kind: Status`)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    status: str | None = None
    message: str = ""
    reason: str = ""
    code: int | None = None
    details: dict[str, Any] = Field(default_factory=dict)
