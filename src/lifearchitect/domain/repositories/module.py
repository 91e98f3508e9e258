"""Module catalog repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.module import Module


class ModuleRepository(Protocol):
    """Read access to the module catalog plus seeding."""

    def list_all(self) -> list[Module]:
        """List modules ordered by display order, then name."""
        ...

    def get_by_id(self, module_id: int) -> Optional[Module]:
        ...

    def get_by_name(self, name: str) -> Optional[Module]:
        ...

    def create(self, module: Module) -> Module:
        """Insert a module; raises ConflictError when the name exists."""
        ...
