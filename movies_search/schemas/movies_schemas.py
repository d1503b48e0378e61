from typing import Any, Dict, Literal, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Movie(BaseModel):
    model_config = ConfigDict(frozen=True)

    Title: str = ''
    Location: str = ''
    # stored under the "Type" attribute in the Movies table
    Kind: str = Field(default='', validation_alias=AliasChoices('Type', 'Kind'))


class ScanRequest(BaseModel):
    """
    A filtered scan over one table of the document store.

    The filter targets the `TitleToSearch` attribute, which holds a
    lowercased copy of the movie title.
    """
    model_config = ConfigDict(frozen=True)

    table_name: str
    filter_expression: str = 'contains(#Title, :Title)'
    attribute_names: Dict[str, str] = {'#Title': 'TitleToSearch'}
    attribute_values: Dict[str, str]

    def to_scan_kwargs(self) -> Dict[str, Any]:
        """
        Build the keyword arguments of a DynamoDB Scan call.

        :return: Dictionary accepted by `client.scan(**kwargs)`.
        """
        return {
            'TableName': self.table_name,
            'FilterExpression': self.filter_expression,
            'ExpressionAttributeNames': dict(self.attribute_names),
            'ExpressionAttributeValues': {
                k: {'S': v} for k, v in self.attribute_values.items()
            },
        }


class BadRequest(BaseModel):
    kind: Literal['bad_request'] = 'bad_request'
    reason: str


class InternalError(BaseModel):
    kind: Literal['internal_error'] = 'internal_error'


class Success(BaseModel):
    kind: Literal['success'] = 'success'
    body: bytes


Outcome = Union[BadRequest, InternalError, Success]


class SearchResponse(BaseModel):
    status_code: int
    body: str
