"""
Named tasks
A task is an async callable taking a TaskContext; it may depend on other tasks
which run first, at most once per context.
"""
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

from .algolia.config import AlgoliaConfig, algolia_config
from .algolia.hook import AlgoliaSearchHook
from .database.database import database as default_database
from .database.registry import CollectionRegistry
from .logger import logger
from .reindex.filters import ReindexFilters
from .reindex.runner import run_reindex

TaskFunc = Callable[["TaskContext"], Awaitable[None]]

TASKS: Dict[str, Tuple[TaskFunc, Tuple[str, ...]]] = {}


class TaskNotFoundError(KeyError):
    """Raised when running a task that was never registered"""


class TaskContext:
    """Shared state handed to every task of a single invocation"""

    def __init__(
        self,
        database=None,
        algolia: Optional[AlgoliaConfig] = None,
        filters: Optional[ReindexFilters] = None,
    ):
        self.database = database
        self.algolia = algolia or algolia_config
        self.filters = filters
        self.registry = CollectionRegistry()
        self.reindexed: Optional[int] = None
        self.completed: List[str] = []


def task(name: str, *depends: str):
    """Register an async function as a named task"""

    def decorator(func: TaskFunc) -> TaskFunc:
        TASKS[name] = (func, depends)
        return func

    return decorator


def list_tasks() -> List[str]:
    return sorted(TASKS)


async def run_task(name: str, context: TaskContext) -> None:
    """Run a task after its dependencies, skipping anything already run in this context"""
    if name in context.completed:
        return
    if name not in TASKS:
        raise TaskNotFoundError(name)

    func, depends = TASKS[name]
    for dependency in depends:
        await run_task(dependency, context)

    logger.debug(f"Running task {name}")
    await func(context)
    context.completed.append(name)


@task("load:app.db")
async def load_database(context: TaskContext) -> None:
    """Register every collection, attaching a search hook where an Algolia index is mapped"""
    if context.database is None:
        context.database = default_database

    if not context.algolia.is_configured():
        logger.warning("Algolia not configured. No collection has a search hook.")

    for name in sorted(await context.database.list_collection_names()):
        search_hook = None
        index_name = context.algolia.index_name_for(name)
        if index_name and context.algolia.is_configured():
            search_hook = AlgoliaSearchHook(index_name, context.algolia)

        context.registry.register(
            name, context.database.get_collection(name), search_hook
        )

    logger.info(
        f"Loaded {len(context.registry)} collections, "
        f"{len(context.registry.searchable())} with search"
    )


@task("search.reindex", "load:app.db")
async def search_reindex(context: TaskContext) -> None:
    """
    Loop through all records that have a search hook installed and "touch" each
    record, forcing the search indexer to fire again

    REINDEX_COLLECTION: CSV of collections to reindex, defaults to all with search
    REINDEX_ID: CSV of document IDs to reindex, defaults to all documents
    REINDEX_FROM: ID to continue reindexing from (i.e. AFTER this ID)
    """
    filters = context.filters or ReindexFilters.from_settings()
    context.reindexed = await run_reindex(context.registry, filters)
