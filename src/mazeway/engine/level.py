# src/mazeway/engine/level.py
# The world-side collaborator the orchestrator talks to, plus an in-memory
# level used by tools and tests.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, List, Optional, Protocol, Sequence, Set

from ..errors import EntityCreationFailure
from ..mapgen.placement import IDENTITY, Quaternion, Vector3

Handle = Hashable


class Level(Protocol):
    def create_entity(self, role: str, definition: str, name: str, labels: Sequence[str] = ()) -> Optional[Handle]:
        """Create an entity; return its handle, or None / raise EntityCreationFailure."""

    def remove_entity(self, handle: Handle) -> None: ...

    def set_world_position(self, handle: Handle, position: Vector3) -> None: ...

    def set_world_rotation(self, handle: Handle, rotation: Quaternion) -> None: ...

    def removable_entities(self) -> List[Handle]:
        """Every entity a regeneration is allowed to clear."""

    def set_active_character(self, handle: Optional[Handle]) -> None: ...


@dataclass
class EntityRecord:
    handle: int
    role: str
    name: str
    definition: str
    position: Vector3 = Vector3()
    rotation: Quaternion = IDENTITY
    labels: List[str] = field(default_factory=list)
    essential: bool = False


class InMemoryLevel:
    """Dictionary-backed level.

    ``fail_roles`` / ``fail_names`` make ``create_entity`` fail for matching
    requests, the way an unloadable object definition would. With
    ``return_none`` the failure is signalled by returning None instead of
    raising.
    """

    def __init__(self, *, fail_roles: Iterable[str] = (), fail_names: Iterable[str] = (), return_none: bool = False) -> None:
        self.entities: Dict[int, EntityRecord] = {}
        self.active_character: Optional[int] = None
        self.fail_roles: Set[str] = set(fail_roles)
        self.fail_names: Set[str] = set(fail_names)
        self.return_none = return_none
        self._next_handle = 1

    # ---- Level protocol ----
    def create_entity(self, role: str, definition: str, name: str, labels: Sequence[str] = ()) -> Optional[int]:
        if role in self.fail_roles or name in self.fail_names:
            if self.return_none:
                return None
            raise EntityCreationFailure(role, name, f"definition {definition} failed to load")
        return self._add(role, definition, name, labels, essential=False)

    def remove_entity(self, handle: int) -> None:
        if self.active_character == handle:
            self.active_character = None
        self.entities.pop(handle, None)

    def set_world_position(self, handle: int, position: Vector3) -> None:
        self.entities[handle].position = Vector3(*position)

    def set_world_rotation(self, handle: int, rotation: Quaternion) -> None:
        self.entities[handle].rotation = Quaternion(*rotation)

    def removable_entities(self) -> List[int]:
        return [h for h, rec in self.entities.items() if not rec.essential]

    def set_active_character(self, handle: Optional[int]) -> None:
        if handle is not None and handle not in self.entities:
            raise KeyError(f"no entity with handle {handle}")
        self.active_character = handle

    # ---- Queries ----
    def add_essential(self, role: str, definition: str, name: str) -> int:
        """Place an entity generation must never clear (camera, lights, ...)."""
        return self._add(role, definition, name, (), essential=True)

    def by_role(self, role: str) -> List[EntityRecord]:
        return [rec for rec in self.entities.values() if rec.role == role]

    def by_name(self, name: str) -> Optional[EntityRecord]:
        for rec in self.entities.values():
            if rec.name == name:
                return rec
        return None

    def __len__(self) -> int:
        return len(self.entities)

    def _add(self, role: str, definition: str, name: str, labels: Sequence[str], *, essential: bool) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self.entities[handle] = EntityRecord(handle, role, name, definition, labels=list(labels), essential=essential)
        return handle
