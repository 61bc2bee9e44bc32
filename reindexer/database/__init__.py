from .database import database, client
from .collections import Document, SearchableCollection, coerce_object_id, id_caster_for
from .registry import CollectionRegistry

__all__ = [
    "database",
    "client",
    "Document",
    "SearchableCollection",
    "coerce_object_id",
    "id_caster_for",
    "CollectionRegistry",
]
