# reindexer/algolia/hook.py
"""
Post-save search hook
Pushes a saved MongoDB document to its Algolia index
"""
from typing import Any, Dict, Optional
import datetime
from bson import ObjectId

from .config import AlgoliaConfig, algolia_config
from ..logger import logger


def _to_algolia_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    if isinstance(value, list):
        return [_to_algolia_value(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_algolia_value(item) for key, item in value.items()}
    return value


def to_algolia_record(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a MongoDB document into an Algolia record

    Args:
        document: Document as read from MongoDB

    Returns:
        JSON-serialisable record keyed by objectID
    """
    # Create a copy of the document to avoid modifying the original
    record = {key: value for key, value in document.items() if key != "_id"}
    record = _to_algolia_value(record)

    # Convert MongoDB _id to Algolia objectID
    record["objectID"] = str(document["_id"])
    return record


class AlgoliaSearchHook:
    """Search hook attached to a collection, fired after every save"""

    def __init__(self, index_name: str, config: Optional[AlgoliaConfig] = None):
        self.index_name = index_name
        self.config = config or algolia_config

    async def __call__(self, document: Dict[str, Any]) -> None:
        record = to_algolia_record(document)
        self.config.client.save_object(index_name=self.index_name, body=record)
        logger.debug(f"Indexed {record['objectID']} to Algolia index {self.index_name}")

    def __repr__(self) -> str:
        return f"AlgoliaSearchHook({self.index_name!r})"
