from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

HTTP_METHODS = ('post', 'get', 'put', 'patch', 'delete')


def _first_type(value: Any) -> Optional[str]:
    # OpenAPI 3.1 allows `type: [string, 'null']`
    if isinstance(value, list):
        for item in value:
            if isinstance(item, str) and item != 'null':
                return item
        return None
    return value


def _without_nulls(value: Any) -> Any:
    if isinstance(value, list):
        return [item for item in value if item is not None]
    return value


class _Model(BaseModel):
    model_config = ConfigDict(extra='ignore', populate_by_name=True, frozen=True)

    @model_validator(mode='before')
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # YAML decodes empty keys as null; those fields keep their defaults
        if not isinstance(data, dict):
            return data
        return {
            key: _without_nulls(value)
            for key, value in data.items()
            if value is not None
        }

    @field_validator('type', mode='before', check_fields=False)
    @classmethod
    def normalize_type(cls, value: Any) -> Any:
        return _first_type(value)

    @field_validator(
        'properties', 'paths', 'schemas', 'responses', 'content',
        mode='before',
        check_fields=False,
    )
    @classmethod
    def empty_entries(cls, value: Any) -> Any:
        # `/teams:` with nothing below it still names a path
        if isinstance(value, dict):
            return {key: {} if item is None else item for key, item in value.items()}
        return value


class Ref(_Model):
    ref: str = Field('', alias='$ref')
    type: Optional[str] = None


class AdditionalProperties(_Model):
    type: Optional[str] = None


class Property(_Model):
    type: Optional[str] = None
    format: Optional[str] = None
    description: Optional[str] = None
    ref: str = Field('', alias='$ref')
    allOf: List[Ref] = Field(default_factory=list)
    items: Optional[Ref] = None
    additionalProperties: Optional[Union[AdditionalProperties, bool]] = None
    enum: List[Any] = Field(default_factory=list)


class Schema(_Model):
    type: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    format: Optional[str] = None
    properties: Dict[str, Property] = Field(default_factory=dict)
    required: List[str] = Field(default_factory=list)
    additionalProperties: Optional[Union[AdditionalProperties, bool]] = None
    items: Optional[Ref] = None
    allOf: List[Ref] = Field(default_factory=list)
    enum: List[Any] = Field(default_factory=list)

    @property
    def is_enum(self) -> bool:
        return len(self.enum) > 0


class ParameterSchema(_Model):
    type: Optional[str] = None
    format: Optional[str] = None
    ref: str = Field('', alias='$ref')
    enum: List[Any] = Field(default_factory=list)


class Parameter(_Model):
    name: str = ''
    in_: str = Field('', alias='in')
    description: Optional[str] = None
    required: bool = False
    schema_: ParameterSchema = Field(default_factory=ParameterSchema, alias='schema')


class MediaType(_Model):
    schema_: Ref = Field(default_factory=Ref, alias='schema')


class RequestBody(_Model):
    description: Optional[str] = None
    required: bool = False
    content: Dict[str, MediaType] = Field(default_factory=dict)


class Response(_Model):
    description: Optional[str] = None
    content: Dict[str, MediaType] = Field(default_factory=dict)


class Operation(_Model):
    tags: List[str] = Field(default_factory=list)
    summary: Optional[str] = None
    description: Optional[str] = None
    operationId: str = ''
    parameters: List[Parameter] = Field(default_factory=list)
    requestBody: Optional[RequestBody] = None
    responses: Dict[str, Response] = Field(default_factory=dict)

    @field_validator('responses', mode='before')
    @classmethod
    def stringify_status_codes(cls, value: Any) -> Any:
        # YAML decodes unquoted `200:` keys as integers
        if isinstance(value, dict):
            return {str(code): response for code, response in value.items()}
        return value


class PathItem(_Model):
    post: Optional[Operation] = None
    get: Optional[Operation] = None
    put: Optional[Operation] = None
    patch: Optional[Operation] = None
    delete: Optional[Operation] = None

    def operations(self) -> List[tuple[str, Operation]]:
        """Return the declared operations in method precedence order."""
        result = []
        for method in HTTP_METHODS:
            operation = getattr(self, method)
            if operation is not None:
                result.append((method, operation))
        return result


class Components(_Model):
    schemas: Dict[str, Schema] = Field(default_factory=dict)


class OpenAPI(_Model):
    openapi: Optional[str] = None
    paths: Dict[str, PathItem] = Field(default_factory=dict)
    components: Components = Field(default_factory=Components)

    @field_validator('openapi', mode='before')
    @classmethod
    def stringify_version(cls, value: Any) -> Any:
        # unquoted `openapi: 3.0` decodes as a float
        if isinstance(value, (int, float)):
            return str(value)
        return value
