"""
Helpers shared by the test modules.
"""
from datetime import datetime
from typing import Dict, List, Optional

from notefilter.models.saved_filters import SavedFilter
from notefilter.services.filter_config.interface.repository import IFilterConfigRepository

DAY = 24 * 60 * 60

# Wednesday afternoon, local time
FIXED_NOW = datetime(2026, 10, 14, 15, 30, 0)


def nested_composite(levels: int) -> dict:
    """A chain of ``levels`` single-child AND composites around a tag filter"""
    config: dict = {"type": "TAG", "tags": ["work"]}
    for _ in range(levels):
        config = {"type": "COMPOSITE", "operator": "AND", "filters": [config]}
    return config


class InMemoryFilterConfigRepository(IFilterConfigRepository):
    """Dict-backed repository that records every call it receives"""

    def __init__(self) -> None:
        self.filters: Dict[str, SavedFilter] = {}
        self.calls: List[str] = []

    async def save(self, saved_filter: SavedFilter) -> None:
        self.calls.append("save")
        self.filters[saved_filter.metadata.id] = saved_filter

    async def get_by_id(self, filter_id: str) -> Optional[SavedFilter]:
        self.calls.append("get_by_id")
        return self.filters.get(filter_id)

    async def get_all(self) -> List[SavedFilter]:
        self.calls.append("get_all")
        return list(self.filters.values())

    async def delete(self, filter_id: str) -> bool:
        self.calls.append("delete")
        return self.filters.pop(filter_id, None) is not None

    async def update(self, filter_id: str, saved_filter: SavedFilter) -> None:
        self.calls.append("update")
        self.filters[filter_id] = saved_filter

    async def search(self, query: str) -> List[SavedFilter]:
        self.calls.append("search")
        query_lower = query.lower()
        return [
            f for f in self.filters.values()
            if query_lower in f.metadata.name.lower()
            or query_lower in (f.metadata.description or "").lower()
        ]
