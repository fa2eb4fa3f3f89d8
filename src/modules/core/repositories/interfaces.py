"""Storage port shared by the modules.

Services receive an ``IRepository`` implementation in their
constructor and never touch the ORM; unit tests hand them a
``MagicMock`` instead.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

EntityT = TypeVar("EntityT")


class IRepository(ABC, Generic[EntityT]):
    """Keyed store of entities, listed in insertion order."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[EntityT]:
        """Entity with this id, or ``None`` (malformed ids included)."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[EntityT]:
        """Every entity matching ORM-style ``filters``, oldest first."""

    @abstractmethod
    def save(self, entity: EntityT) -> EntityT:
        """Insert or overwrite ``entity``; returns the stored instance."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Retire the entity; ``False`` when the id is unknown."""
