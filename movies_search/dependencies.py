"""
Wiring of the search service from the settings.
"""
import json
import logging
from typing import Any, Dict, List, Optional

from .clients.movie_searcher import DocumentStoreMovieSearcher
from .clients.store_client import (
    DocumentStoreClient,
    DynamoDbStoreClient,
    InMemoryStoreClient,
)
from .config import Settings, settings as default_settings
from .service import SearchService

logger = logging.getLogger(__name__)


def load_seed_items(path: str) -> List[Dict[str, Any]]:
    """
    Read movies for the in-memory store from a JSON array file.

    Items without a `TitleToSearch` attribute get one, holding their
    lowercased `Title`, as the Movies table does.
    """
    with open(path, encoding='utf-8') as f:
        items = json.load(f)
    for item in items:
        if 'TitleToSearch' not in item and isinstance(item.get('Title'), str):
            item['TitleToSearch'] = item['Title'].lower()
    return items


def build_store_client(settings: Settings) -> DocumentStoreClient:
    if settings.STORE_BACKEND == 'memory':
        items = load_seed_items(settings.MEMORY_SEED_FILE) if settings.MEMORY_SEED_FILE else []
        logger.info(f"Using in-memory store with {len(items)} movies")
        return InMemoryStoreClient(items, page_size=settings.MEMORY_PAGE_SIZE)

    logger.info(f"Using DynamoDB table {settings.MOVIES_TABLE_NAME}")
    return DynamoDbStoreClient(
        region_name=settings.AWS_REGION,
        endpoint_url=settings.DYNAMODB_ENDPOINT_URL
    )


def build_search_service(settings: Optional[Settings] = None) -> SearchService:
    settings = settings or default_settings
    searcher = DocumentStoreMovieSearcher(
        build_store_client(settings),
        table_name=settings.MOVIES_TABLE_NAME
    )
    return SearchService(searcher, timeout=settings.SEARCH_TIMEOUT_SECONDS)


_service: Optional[SearchService] = None


def get_search_service() -> SearchService:
    """FastAPI dependency returning the service built once per process."""
    global _service
    if _service is None:
        _service = build_search_service()
    return _service
