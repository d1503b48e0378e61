"""
Document store access for the movie search.

Two implementations of the same capability are provided: one backed by
DynamoDB through boto3, and one backed by an in-memory list of items that
behaves like a DynamoDB table for local runs.
"""
import logging
import threading
from typing import Any, Dict, Iterable, List, Optional, Protocol

import boto3
from boto3.dynamodb.types import TypeSerializer

from ..schemas.movies_schemas import ScanRequest

logger = logging.getLogger(__name__)

RawItem = Dict[str, Dict[str, Any]]


class ScanPaginator(Protocol):
    def has_more_pages(self) -> bool:
        ...

    def next_page(self) -> List[RawItem]:
        ...


class DocumentStoreClient(Protocol):
    def new_scan_paginator(self, scan: ScanRequest) -> ScanPaginator:
        ...


class DynamoDbScanPaginator:
    """
    Walk a DynamoDB Scan page by page.

    The first page is always available. After that, a page remains as long as
    the previous response carried a `LastEvaluatedKey`.
    """

    def __init__(self, client: Any, scan_kwargs: Dict[str, Any]):
        self._client = client
        self._scan_kwargs = scan_kwargs
        self._first_page = True
        self._last_evaluated_key: Optional[Dict[str, Any]] = None

    def has_more_pages(self) -> bool:
        return self._first_page or self._last_evaluated_key is not None

    def next_page(self) -> List[RawItem]:
        kwargs = dict(self._scan_kwargs)
        if self._last_evaluated_key is not None:
            kwargs['ExclusiveStartKey'] = self._last_evaluated_key

        response = self._client.scan(**kwargs)
        self._first_page = False
        self._last_evaluated_key = response.get('LastEvaluatedKey')
        items = response.get('Items', [])
        logger.debug(f"Scanned page of {len(items)} items from {kwargs['TableName']}")
        return items


class DynamoDbStoreClient:
    """
    Open scans against DynamoDB. The boto3 client is built on the first scan,
    from the default credential chain plus the optional region and endpoint,
    and reused for every later scan.
    """

    def __init__(
        self,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None
    ):
        self.region_name = region_name
        self.endpoint_url = endpoint_url
        self._client: Any = None
        self._client_lock = threading.Lock()

    def _get_client(self) -> Any:
        with self._client_lock:
            if self._client is None:
                config_kwargs = {}
                if self.region_name:
                    config_kwargs['region_name'] = self.region_name
                if self.endpoint_url:
                    config_kwargs['endpoint_url'] = self.endpoint_url

                self._client = boto3.client('dynamodb', **config_kwargs)
                logger.info("DynamoDB client initialized")
            return self._client

    def new_scan_paginator(self, scan: ScanRequest) -> DynamoDbScanPaginator:
        return DynamoDbScanPaginator(self._get_client(), scan.to_scan_kwargs())


class InMemoryScanPaginator:
    def __init__(self, pages: List[List[RawItem]]):
        self._pages = pages
        self._next = 0

    def has_more_pages(self) -> bool:
        # DynamoDB always answers the first request, even for an empty table
        return self._next == 0 or self._next < len(self._pages)

    def next_page(self) -> List[RawItem]:
        page = self._pages[self._next] if self._next < len(self._pages) else []
        self._next += 1
        return page


class InMemoryStoreClient:
    """
    Serve scans from plain Python items, paged and filtered the way DynamoDB
    would, and returned in DynamoDB's typed attribute format.
    """

    def __init__(self, items: Iterable[Dict[str, Any]] = (), page_size: int = 25):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.items = list(items)
        self.page_size = page_size
        self._serializer = TypeSerializer()

    def new_scan_paginator(self, scan: ScanRequest) -> InMemoryScanPaginator:
        # only `contains(#name, :value)` filters are supported
        attribute = scan.attribute_names['#Title']
        needle = scan.attribute_values[':Title']
        matched = [
            item for item in self.items
            if isinstance(item.get(attribute), str) and needle in item[attribute]
        ]
        serialized = [
            {k: self._serializer.serialize(v) for k, v in item.items()}
            for item in matched
        ]
        pages = [
            serialized[i:i + self.page_size]
            for i in range(0, len(serialized), self.page_size)
        ]
        return InMemoryScanPaginator(pages)
