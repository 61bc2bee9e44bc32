from typing import Dict, Iterator, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection

from .collections import IdCaster, SearchableCollection, SearchHook


class CollectionRegistry:
    """Ordered mapping of collection name to its handle"""

    def __init__(self):
        self._collections: Dict[str, SearchableCollection] = {}

    def register(
        self,
        name: str,
        collection: AsyncIOMotorCollection,
        search_hook: Optional[SearchHook] = None,
        id_caster: Optional[IdCaster] = None,
    ) -> SearchableCollection:
        handle = SearchableCollection(name, collection, search_hook, id_caster)
        self._collections[name] = handle
        return handle

    def get(self, name: str) -> Optional[SearchableCollection]:
        return self._collections.get(name)

    def names(self) -> List[str]:
        return list(self._collections)

    def searchable(self) -> List[SearchableCollection]:
        """Handles with a search hook attached, in registration order"""
        return [handle for handle in self._collections.values() if handle.searchable]

    def __contains__(self, name: str) -> bool:
        return name in self._collections

    def __iter__(self) -> Iterator[SearchableCollection]:
        return iter(self._collections.values())

    def __len__(self) -> int:
        return len(self._collections)
