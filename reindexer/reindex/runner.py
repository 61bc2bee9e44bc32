"""
Reindex runner

Loops through every collection with a search hook attached and "touches" each
document (saves it unchanged) so the hook pushes it to the search index again.

Collections are processed one after another in registry order. Within a
collection documents are streamed from a cursor and saved one at a time, each
save awaited before the next document is fetched. Any error aborts the run.
"""
from contextlib import aclosing
from typing import Any, Dict, List, Tuple

from ..database.collections import SearchableCollection
from ..database.registry import CollectionRegistry
from ..logger import logger
from .filters import ReindexFilters


class ReindexRun:
    """State of a single reindex run: the filters and the running counter"""

    def __init__(self, filters: ReindexFilters):
        self.filters = filters
        self.reindexed = 0


def select_collections(
    registry: CollectionRegistry, filters: ReindexFilters
) -> List[Tuple[str, SearchableCollection]]:
    """
    Collections to reindex, in registry order

    Only collections with a search hook are candidates; the collection filter,
    when set, narrows them down further.
    """
    for name in filters.collections:
        if name not in registry:
            logger.warning(f"Collection {name} is not registered, ignoring")

    return [
        (handle.name, handle)
        for handle in registry.searchable()
        if not filters.collections or handle.name in filters.collections
    ]


def build_query(filters: ReindexFilters, handle: SearchableCollection) -> Dict[str, Any]:
    """Mongo query selecting the documents to reindex in one collection"""
    id_clause: Dict[str, Any] = {}
    if filters.ids:
        id_clause["$in"] = [handle.cast_id(doc_id) for doc_id in filters.ids]
    if filters.from_id:
        id_clause["$gt"] = handle.cast_id(filters.from_id)

    return {"_id": id_clause} if id_clause else {}


async def reindex_collection(
    run: ReindexRun, name: str, handle: SearchableCollection
) -> int:
    """
    Save every matching document of one collection

    Args:
        run: Current reindex run, its counter is incremented per document
        name: Collection name, for progress logging
        handle: Collection handle to read from

    Returns:
        Number of documents saved in this collection
    """
    if run.filters.ids or run.filters.from_id:
        await handle.resolve_id_caster()
    query = build_query(run.filters, handle)
    total_docs = await handle.count_documents(query)

    doc_number = 0
    async with aclosing(handle.find(query)) as documents:
        async for document in documents:
            doc_number += 1
            percent = round(doc_number / total_docs * 100) if total_docs else 100
            logger.info(
                f"Reindex {name} / #{document.id} {doc_number} / {total_docs} ~ {percent}%"
            )
            run.reindexed += 1
            await document.save()

    return doc_number


async def run_reindex(registry: CollectionRegistry, filters: ReindexFilters) -> int:
    """
    Reindex all selected collections

    Returns:
        Total number of documents saved
    """
    if filters.collections:
        logger.info(f"Only reindexing collections: {', '.join(filters.collections)}")
    if filters.ids:
        logger.info(f"Only reindexing IDs: {', '.join(filters.ids)}")
    if filters.from_id:
        logger.info(f"Resuming after ID: {filters.from_id}")

    # TODO: Ability to throttle reindexing to reduce server load
    run = ReindexRun(filters)
    for name, handle in select_collections(registry, filters):
        await reindex_collection(run, name, handle)

    logger.info(f"Reindex complete. Processed {run.reindexed} documents")
    return run.reindexed
