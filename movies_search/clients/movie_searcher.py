import asyncio
import logging
from typing import List, Optional, Protocol

from ..exceptions import PaginatorCreationError, PaginatorExecutionError
from ..schemas.movies_schemas import Movie
from ..utils.utils_movies_search import (
    DEFAULT_TABLE_NAME,
    build_scan_request,
    unmarshal_movies,
)
from .store_client import DocumentStoreClient, ScanPaginator

logger = logging.getLogger(__name__)


class MovieSearcher(Protocol):
    async def execute(self, title: str, timeout: Optional[float] = None) -> List[Movie]:
        ...


class DocumentStoreMovieSearcher:
    """
    Search movies by title with a filtered scan over the whole table.

    Every page of the scan is fetched, one after the other, before returning.
    The search is all-or-nothing: the first failing page aborts it and the
    movies already collected are dropped.
    """

    def __init__(self, store: DocumentStoreClient, table_name: str = DEFAULT_TABLE_NAME):
        self.store = store
        self.table_name = table_name

    async def execute(self, title: str, timeout: Optional[float] = None) -> List[Movie]:
        """
        Run the search.

        :param title: Title fragment to look for, in any case.
        :param timeout: Seconds the whole scan may take, None for no limit.
        :return: List of matching movies, in the order the pages arrived.
        :raises SearchError: If the scan cannot be opened, a page fails or a
            page cannot be decoded.
        """
        scan = build_scan_request(title, self.table_name)

        try:
            paginator = await asyncio.to_thread(self.store.new_scan_paginator, scan)
        except Exception as e:
            raise PaginatorCreationError(e) from e

        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout if timeout is not None else None

        result: List[Movie] = []
        while self._has_more_pages(paginator):
            remaining = deadline - loop.time() if deadline is not None else None
            if remaining is not None and remaining <= 0:
                raise PaginatorExecutionError("search deadline exceeded")
            try:
                items = await asyncio.wait_for(
                    asyncio.to_thread(paginator.next_page), remaining
                )
            except asyncio.TimeoutError as e:
                raise PaginatorExecutionError("search deadline exceeded") from e
            except Exception as e:
                raise PaginatorExecutionError(e) from e

            result += unmarshal_movies(items)

        logger.debug(f"Found {len(result)} movies matching {title!r}")
        return result

    @staticmethod
    def _has_more_pages(paginator: ScanPaginator) -> bool:
        try:
            return paginator.has_more_pages()
        except Exception as e:
            raise PaginatorExecutionError(e) from e
