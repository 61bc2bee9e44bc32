"""
Reindex filters read from the REINDEX_* environment variables
"""
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import Settings

CSV_SEPARATOR = re.compile(r"\s*,\s*")


def split_csv(value: Optional[str]) -> Tuple[str, ...]:
    """Split a comma separated value, trimming whitespace and dropping empty tokens"""
    if not value:
        return ()
    return tuple(token for token in CSV_SEPARATOR.split(value.strip()) if token)


@dataclass(frozen=True)
class ReindexFilters:
    collections: Tuple[str, ...] = ()
    ids: Tuple[str, ...] = ()
    from_id: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ReindexFilters":
        """
        Parse the filters once for the whole run

        Args:
            settings: Settings to read from; a fresh instance reads the current environment

        Returns:
            Immutable filter set
        """
        if settings is None:
            settings = Settings()

        return cls(
            collections=split_csv(settings.REINDEX_COLLECTION),
            ids=split_csv(settings.REINDEX_ID),
            from_id=settings.REINDEX_FROM.strip() or None,
        )
