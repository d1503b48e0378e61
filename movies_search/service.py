import logging
from typing import Callable, List, Mapping, Optional

from .clients.movie_searcher import MovieSearcher
from .exceptions import EncodingError, SearchError, TitleValidationError
from .schemas.movies_schemas import (
    BadRequest,
    InternalError,
    Movie,
    Outcome,
    SearchResponse,
    Success,
)
from .utils.utils_movies_search import encode_movies, get_title_to_search

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = "Internal error"

Encoder = Callable[[List[Movie]], bytes]


class SearchService:
    """
    Answer a search request: validate the title, run the search, encode the
    movies found and turn the outcome into a response.

    Causes of internal errors are logged but never returned to the caller.
    """

    def __init__(
        self,
        searcher: MovieSearcher,
        encoder: Encoder = encode_movies,
        timeout: Optional[float] = None
    ):
        self.searcher = searcher
        self.encoder = encoder
        self.timeout = timeout

    async def handle(
        self,
        query_params: Optional[Mapping[str, str]],
        timeout: Optional[float] = None
    ) -> SearchResponse:
        """
        :param query_params: Query string parameters of the request.
        :param timeout: Seconds left for this invocation; overrides the
            service default when given.
        :return: SearchResponse with the status code and body to send back.
        """
        outcome = await self.search(query_params, timeout)
        return self.response_for(outcome)

    async def search(
        self,
        query_params: Optional[Mapping[str, str]],
        timeout: Optional[float] = None
    ) -> Outcome:
        try:
            title = get_title_to_search(query_params)
        except TitleValidationError as e:
            logger.info(f"400 - Bad Request: {e.reason}")
            return BadRequest(reason=e.reason)

        try:
            result = await self.searcher.execute(
                title, timeout if timeout is not None else self.timeout
            )
        except SearchError as e:
            logger.error(f"500 - Internal Error: error executing the search: {e}")
            return InternalError()

        try:
            body = self.encoder(result)
        except (EncodingError, TypeError, ValueError) as e:
            logger.error(f"500 - Internal Error: error marshaling the search results: {e}")
            return InternalError()

        logger.info("200 - Ok")
        return Success(body=body)

    @staticmethod
    def response_for(outcome: Outcome) -> SearchResponse:
        if isinstance(outcome, BadRequest):
            return SearchResponse(status_code=400, body=outcome.reason)
        if isinstance(outcome, Success):
            return SearchResponse(status_code=200, body=outcome.body.decode('utf-8'))
        return SearchResponse(status_code=500, body=INTERNAL_ERROR_BODY)
