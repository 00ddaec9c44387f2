"""Contract for the user identity mapping API client.

Why Protocol:
- Structural contract (duck typing) with no rigid inheritance.
- The command handler works against any implementation: the HTTP adapter in
  production, a mock in tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import UserIdentityMapping


@runtime_checkable
class UserIdentityMappingClient(Protocol):
    """Minimal client surface needed by the create command.

    Design rules:
    - `create` is synchronous: one request per invocation, nothing to overlap.
    - Returns the server's version of the object, which may carry
      server-assigned fields.
    - Failures are raised, never returned.
    """

    def create(self, mapping: UserIdentityMapping) -> UserIdentityMapping:
        """Persist `mapping` on the server and return the stored object."""

        ...
