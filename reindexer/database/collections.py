"""
Collection handles used by the reindex workflow
Wraps motor collections with an explicit search capability flag and
documents that re-run the search hook when saved
"""
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING, ReturnDocument

from ..logger import logger

SearchHook = Callable[["Document"], Awaitable[Any]]
IdCaster = Callable[[str], Any]


def coerce_object_id(value: str) -> Any:
    """Cast an identifier to ObjectId when it looks like one"""
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def coerce_int(value: str) -> Any:
    """Cast an identifier to int, keeping values that are not numbers as-is"""
    try:
        return int(value)
    except ValueError:
        return value


def id_caster_for(sample_id: Any) -> IdCaster:
    """
    Pick the caster matching the type of a stored _id

    Args:
        sample_id: An _id read from the collection, None when it is empty

    Returns:
        Callable turning a filter value into the stored _id type
    """
    if isinstance(sample_id, bool):
        return str
    if isinstance(sample_id, int):
        return coerce_int
    if isinstance(sample_id, str):
        return str
    return coerce_object_id


class Document(dict):
    """A MongoDB document bound to the collection it was read from"""

    def __init__(self, data: Dict[str, Any], collection: "SearchableCollection"):
        super().__init__(data)
        self.collection = collection

    @property
    def id(self) -> Any:
        return self.get("_id")

    async def save(self) -> Optional["Document"]:
        """
        Touch the stored document without changing it and fire the collection's
        search hook with its current content

        Returns:
            The saved document, or None when it no longer exists
        """
        current = await self.collection.collection.find_one_and_update(
            {"_id": self.id},
            {"$set": {"_id": self.id}},
            return_document=ReturnDocument.AFTER,
        )
        if current is None:
            logger.warning(
                f"Document {self.collection.name} #{self.id} no longer exists, skipping"
            )
            return None

        self.clear()
        self.update(current)
        if self.collection.search is not None:
            await self.collection.search(self)
        return self


class SearchableCollection:
    """Handle over a motor collection with an optional search hook attached"""

    def __init__(
        self,
        name: str,
        collection: AsyncIOMotorCollection,
        search_hook: Optional[SearchHook] = None,
        id_caster: Optional[IdCaster] = None,
    ):
        self.name = name
        self.collection = collection
        self.search = search_hook
        self.id_caster = id_caster

    @property
    def searchable(self) -> bool:
        """Whether a search hook is attached to this collection"""
        return self.search is not None

    async def resolve_id_caster(self) -> IdCaster:
        """Infer the _id type from a stored document unless a caster was given"""
        if self.id_caster is None:
            sample = await self.collection.find_one({}, {"_id": 1})
            self.id_caster = id_caster_for(sample["_id"] if sample else None)
        return self.id_caster

    def cast_id(self, value: str) -> Any:
        return (self.id_caster or coerce_object_id)(value)

    async def count_documents(self, query: Dict[str, Any]) -> int:
        return await self.collection.count_documents(query)

    async def find(self, query: Dict[str, Any]) -> AsyncIterator[Document]:
        """Stream the matching documents in _id order, one at a time"""
        cursor = self.collection.find(query).sort("_id", ASCENDING)
        try:
            async for raw in cursor:
                yield Document(raw, self)
        finally:
            await cursor.close()

    def __repr__(self) -> str:
        return f"SearchableCollection({self.name!r}, searchable={self.searchable})"
