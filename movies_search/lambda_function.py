"""AWS Lambda entrypoint for Function URL search requests."""
import asyncio
from typing import Any, Dict, Mapping, Optional

from .config import configure_logging, settings
from .dependencies import get_search_service

configure_logging(settings.LOG_LEVEL)

# time kept back from the runtime deadline to send the response
DEADLINE_MARGIN_SECONDS = 0.5


def remaining_time(context: Any) -> Optional[float]:
    if context is None or not hasattr(context, 'get_remaining_time_in_millis'):
        return None
    return max(context.get_remaining_time_in_millis() / 1000 - DEADLINE_MARGIN_SECONDS, 0.0)


def lambda_handler(event: Mapping[str, Any], context: Any) -> Dict[str, Any]:
    """
    Search movies for a Function URL request.

    The time the Lambda runtime has left, minus a margin, bounds the search.
    A page fetch abandoned at the deadline is not waited for: the loop is
    closed without joining its executor threads.
    """
    loop = asyncio.new_event_loop()
    try:
        response = loop.run_until_complete(
            get_search_service().handle(
                event.get('queryStringParameters'), remaining_time(context)
            )
        )
    finally:
        # unlike asyncio.run, close() shuts the default executor down with wait=False
        loop.close()
    return {'statusCode': response.status_code, 'body': response.body}
