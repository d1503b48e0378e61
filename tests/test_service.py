import logging

import pytest

from movies_search.clients.movie_searcher import DocumentStoreMovieSearcher
from movies_search.clients.store_client import InMemoryStoreClient
from movies_search.exceptions import EncodingError, PaginatorExecutionError
from movies_search.schemas.movies_schemas import (
    BadRequest,
    InternalError,
    Movie,
    SearchResponse,
    Success,
)
from movies_search.service import SearchService


class FakeSearcher:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def execute(self, title, timeout=None):
        self.calls.append((title, timeout))
        if self.error:
            raise self.error
        return self.result


@pytest.fixture(autouse=True)
def info_logs(caplog):
    caplog.set_level(logging.INFO)


# --- bad requests ---


@pytest.mark.asyncio
@pytest.mark.parametrize("query_params, reason", [
    (None, "query string is empty"),
    ({}, "query string is empty"),
    ({"title": ""}, "the title to search is empty"),
    ({"another": "value"}, "the title to search is empty"),
    ({"title": "a"}, "the title to search is too short"),
    ({"title": "ab"}, "the title to search is too short"),
])
async def test_handle_bad_request(caplog, query_params, reason):
    searcher = FakeSearcher()
    s = SearchService(searcher)

    res = await s.handle(query_params)

    assert res == SearchResponse(status_code=400, body=reason)
    assert f"400 - Bad Request: {reason}" in caplog.text
    assert searcher.calls == []


# --- internal errors ---


@pytest.mark.asyncio
async def test_handle_searcher_fails(caplog):
    searcher = FakeSearcher(error=PaginatorExecutionError("some error"))
    s = SearchService(searcher)

    res = await s.handle({"title": "value"})

    assert res == SearchResponse(status_code=500, body="Internal error")
    assert (
        "500 - Internal Error: error executing the search: "
        "error executing paginator: some error"
    ) in caplog.text
    assert searcher.calls == [("value", None)]


@pytest.mark.asyncio
async def test_handle_encoder_fails(caplog):
    def encoder(movies):
        raise EncodingError("some error")

    s = SearchService(FakeSearcher(result=[]), encoder=encoder)

    res = await s.handle({"title": "value"})

    assert res.status_code == 500
    assert res.body == "Internal error"
    assert "500 - Internal Error: error marshaling the search results: some error" in caplog.text
    assert "some error" not in res.body


# --- success ---


@pytest.mark.asyncio
async def test_handle_returns_the_encoded_result(caplog):
    s = SearchService(FakeSearcher(result=[]), encoder=lambda movies: b"encoded result")

    res = await s.handle({"title": "value"})

    assert res == SearchResponse(status_code=200, body="encoded result")
    assert "200 - Ok" in caplog.text


@pytest.mark.asyncio
async def test_handle_no_pages_is_an_empty_array():
    s = SearchService(FakeSearcher(result=None))

    res = await s.handle({"title": "value"})

    assert res == SearchResponse(status_code=200, body="[]")


@pytest.mark.asyncio
async def test_handle_alien_scenario_end_to_end():
    store = InMemoryStoreClient([
        {"Title": "Alien", "TitleToSearch": "alien", "Location": "LA", "Type": "movie"},
        {"Title": "Heat", "TitleToSearch": "heat", "Location": "LA", "Type": "movie"},
    ])
    s = SearchService(DocumentStoreMovieSearcher(store))

    first = await s.handle({"title": "alien"})
    second = await s.handle({"title": "alien"})

    assert first == SearchResponse(
        status_code=200,
        body='[{"Title":"Alien","Location":"LA","Kind":"movie"}]'
    )
    assert second == first


# --- timeouts ---


@pytest.mark.asyncio
async def test_handle_passes_the_service_timeout():
    searcher = FakeSearcher(result=[])
    s = SearchService(searcher, timeout=3.0)

    await s.handle({"title": "value"})
    await s.handle({"title": "value"}, timeout=1.5)

    assert searcher.calls == [("value", 3.0), ("value", 1.5)]


# --- outcomes ---


@pytest.mark.asyncio
async def test_search_outcomes():
    movies = [Movie(Title="Alien", Location="LA", Kind="movie")]

    assert await SearchService(FakeSearcher()).search({}) == BadRequest(reason="query string is empty")
    assert await SearchService(FakeSearcher(error=PaginatorExecutionError("x"))).search({"title": "abc"}) == InternalError()
    assert await SearchService(FakeSearcher(result=movies), encoder=lambda m: b"ok").search({"title": "abc"}) == Success(body=b"ok")
