from .config import algolia_config, AlgoliaConfig
from .hook import AlgoliaSearchHook

__all__ = ["algolia_config", "AlgoliaConfig", "AlgoliaSearchHook"]
