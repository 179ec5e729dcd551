from abc import ABC, abstractmethod
from typing import List, Optional

from notefilter.models.saved_filters import SavedFilter


class IFilterConfigRepository(ABC):
    """Durable storage for user-saved filters, supplied by the host application"""

    @abstractmethod
    async def save(self, saved_filter: SavedFilter) -> None:
        pass

    @abstractmethod
    async def get_by_id(self, filter_id: str) -> Optional[SavedFilter]:
        pass

    @abstractmethod
    async def get_all(self) -> List[SavedFilter]:
        pass

    @abstractmethod
    async def delete(self, filter_id: str) -> bool:
        pass

    @abstractmethod
    async def update(self, filter_id: str, saved_filter: SavedFilter) -> None:
        pass

    @abstractmethod
    async def search(self, query: str) -> List[SavedFilter]:
        """Saved filters whose name or description contains ``query``"""
        pass
