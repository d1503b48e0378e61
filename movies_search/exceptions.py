"""Errors raised along the search pipeline."""


class MovieSearchError(Exception):
    pass


class TitleValidationError(MovieSearchError):
    """The request does not carry a usable title. The message is shown to the caller."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class SearchError(MovieSearchError):
    pass


class PaginatorCreationError(SearchError):
    def __init__(self, cause: object):
        super().__init__(f"error creating paginator: {cause}")


class PaginatorExecutionError(SearchError):
    def __init__(self, cause: object):
        super().__init__(f"error executing paginator: {cause}")


class DecodeError(SearchError):
    def __init__(self, cause: object):
        super().__init__(f"error unmarshaling the scan output items: {cause}")


class EncodingError(MovieSearchError):
    pass
