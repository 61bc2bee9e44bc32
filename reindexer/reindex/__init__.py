from .filters import ReindexFilters, split_csv
from .runner import ReindexRun, build_query, reindex_collection, run_reindex, select_collections

__all__ = [
    "ReindexFilters",
    "split_csv",
    "ReindexRun",
    "build_query",
    "reindex_collection",
    "run_reindex",
    "select_collections",
]
