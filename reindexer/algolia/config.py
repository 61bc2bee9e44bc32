# reindexer/algolia/config.py
"""
Configuration for Algolia search integration
Handles initialization of the Algolia client and the collection to index mapping
"""
from typing import Dict, Optional
from pydantic_settings import BaseSettings
from algoliasearch.search.client import SearchClientSync as SearchClient
from ..logger import logger


class AlgoliaSettings(BaseSettings):
    """Settings for Algolia search"""

    app_id: str = ""
    write_api_key: str = ""
    # Collection name -> Algolia index name, e.g. {"tools": "tools_index"}
    indexes: Dict[str, str] = {}

    model_config = {
        "env_prefix": "ALGOLIA_",
        "env_file": ".env",
        "extra": "ignore",  # Ignore extra fields that aren't part of the model
    }


# Load settings from environment variables
try:
    settings = AlgoliaSettings()
    logger.info(f"Algolia configuration loaded. App ID: {settings.app_id}")
except Exception as e:
    logger.error(f"Failed to load Algolia settings: {str(e)}")
    # Fall back to an unconfigured client
    settings = AlgoliaSettings(app_id="", write_api_key="", indexes={})


class AlgoliaConfig:
    """Configuration for Algolia search"""

    # Singleton instance
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(AlgoliaConfig, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Initialize the Algolia client"""
        self.app_id = settings.app_id
        self.write_api_key = settings.write_api_key
        self.indexes = dict(settings.indexes)

        # Initialize client only if credentials are provided
        self.client: Optional[SearchClient] = None

        if self.app_id and self.write_api_key:
            self.client = SearchClient(self.app_id, self.write_api_key)
            logger.info("Algolia client initialized successfully")
        else:
            logger.warning(
                "Algolia credentials not provided. No collection will be reindexed."
            )

    def is_configured(self) -> bool:
        """Check if Algolia is properly configured"""
        return self.client is not None

    def index_name_for(self, collection_name: str) -> Optional[str]:
        """Algolia index fed by the given collection, if any"""
        return self.indexes.get(collection_name)


# Create a singleton instance of AlgoliaConfig
algolia_config = AlgoliaConfig()
