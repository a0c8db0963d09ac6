from tidegen.openapi.models import (
    HTTP_METHODS,
    AdditionalProperties,
    Components,
    MediaType,
    OpenAPI,
    Operation,
    Parameter,
    ParameterSchema,
    PathItem,
    Property,
    Ref,
    RequestBody,
    Response,
    Schema,
)

__all__ = [
    'HTTP_METHODS',
    'AdditionalProperties',
    'Components',
    'MediaType',
    'OpenAPI',
    'Operation',
    'Parameter',
    'ParameterSchema',
    'PathItem',
    'Property',
    'Ref',
    'RequestBody',
    'Response',
    'Schema',
]
