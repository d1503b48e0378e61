import logging
from typing import Any, Dict, List, Mapping, Optional

from boto3.dynamodb.types import TypeDeserializer
from pydantic import TypeAdapter

from ..exceptions import DecodeError, EncodingError, TitleValidationError
from ..schemas.movies_schemas import Movie, ScanRequest

logger = logging.getLogger(__name__)

MIN_TITLE_LENGTH = 3
DEFAULT_TABLE_NAME = 'Movies'

_deserializer = TypeDeserializer()
_movies_adapter = TypeAdapter(List[Movie])


def get_title_to_search(query_params: Optional[Mapping[str, str]]) -> str:
    """
    Extract and validate the title to search from the query string.

    :param query_params: Query string parameters of the request, possibly None.
    :return: The title, with its case preserved.
    :raises TitleValidationError: If the title is missing or too short.
    """
    title = (query_params or {}).get('title') or ''
    logger.debug(f"Title to search: {title!r}")

    if not query_params:
        raise TitleValidationError("query string is empty")
    if not title:
        raise TitleValidationError("the title to search is empty")
    if len(title) < MIN_TITLE_LENGTH:
        raise TitleValidationError("the title to search is too short")
    return title


def build_scan_request(title: str, table_name: str = DEFAULT_TABLE_NAME) -> ScanRequest:
    """
    Build the scan matching every movie whose title contains `title`.

    Equivalent to:
        aws dynamodb scan \\
          --table-name Movies \\
          --filter-expression "contains(#Title, :Title)" \\
          --expression-attribute-names '{"#Title": "TitleToSearch"}' \\
          --expression-attribute-values '{":Title":{"S":"alien"}}'

    :param title: Title fragment as typed by the user.
    :param table_name: Table holding the movies.
    :return: ScanRequest with the lowercased title as filter value.
    """
    return ScanRequest(
        table_name=table_name,
        attribute_values={':Title': title.lower()},
    )


def unmarshal_movies(items: List[Dict[str, Any]]) -> List[Movie]:
    """
    Decode one page of DynamoDB typed items into movies.

    :param items: Items as returned by a Scan call.
    :return: List of Movie objects, in the order of the page.
    :raises DecodeError: If any item cannot be decoded.
    """
    try:
        return [
            Movie.model_validate(
                {k: _deserializer.deserialize(v) for k, v in item.items()}
            )
            for item in items
        ]
    except Exception as e:
        raise DecodeError(e) from e


def encode_movies(movies: Optional[List[Movie]]) -> bytes:
    """
    Encode the search results as a JSON array.

    :param movies: Movies to encode; None is encoded as an empty array.
    :return: JSON bytes.
    :raises EncodingError: If the movies cannot be serialized.
    """
    try:
        return _movies_adapter.dump_json(movies or [])
    except Exception as e:
        raise EncodingError(str(e)) from e
