"""Synthesis of client functions from API operations.

For every (path, method, operation) triple this module derives the target
module, the function name, the summary, and the request/response type names.
Operations without a body but with query parameters get an ad-hoc request
type, which is registered once per name in a RequestTypeRegistry.
"""

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from tidegen.codegen.modules import module_for_operation
from tidegen.codegen.references import EnumSet, resolve_reference
from tidegen.codegen.types import (
    ProcessedProperty,
    SchemaDeclaration,
    resolve_parameter_type,
)
from tidegen.codegen.utils import capitalize, lower_first, to_camel
from tidegen.config import DEFAULT_MODULE
from tidegen.openapi import MediaType, Operation

logger = logging.getLogger(__name__)

EMPTY_REQUEST = 'EmptyRequest'
EMPTY_REPLY = 'EmptyReply'
SUCCESS_STATUS = '200'
QUERY_LOCATION = 'query'


@dataclass
class FunctionUnit:
    """A client function derived from one operation.

    Attributes:
        module: The module the function is emitted into.
        name: The function name; unique within the module once the collision
            resolver has run.
        summary: Documentation line for the function.
        param_type: Type of the single ``params`` argument.
        response_type: Type the returned promise resolves to.
        method: Upper-case HTTP method.
        path: The path template, e.g. ``/teams/{id}``.
        operation_id: The identifier the function was derived from.
        order: Discovery sequence number assigned by the collision resolver.
    """

    module: str
    name: str
    summary: str
    param_type: str
    response_type: str
    method: str
    path: str
    operation_id: str = ''
    order: int = 0

    @property
    def referenced_types(self) -> set[str]:
        return {self.param_type, self.response_type}


def split_operation_id(operation_id: str) -> list[str] | None:
    """Split an identifier of the form ``<Group>_<Action>``.

    Returns None when the identifier has fewer than two parts.
    """
    parts = operation_id.split('_')
    if len(parts) < 2:
        return None
    return parts


def action_name(operation_id: str) -> str | None:
    """Return the camel-cased action portion of an identifier.

    Example:
        >>> action_name('Team_GetTeamRole')
        'GetTeamRole'
        >>> action_name('Team_list_members')
        'listMembers'
    """
    parts = split_operation_id(operation_id)
    if parts is None:
        return None
    return to_camel('_'.join(parts[1:]))


def function_name(operation_id: str) -> str | None:
    action = action_name(operation_id)
    if not action:
        return None
    return lower_first(action)


def request_type_name(operation_id: str) -> str | None:
    action = action_name(operation_id)
    if not action:
        return None
    return capitalize(action) + 'Request'


def select_schema_ref(content: Mapping[str, MediaType]) -> str | None:
    """Pick the schema reference of the first media type, by sorted key."""
    for media_type in sorted(content):
        ref = content[media_type].schema_.ref
        if ref:
            return ref
    return None


def synthesize_summary(operation: Operation) -> str:
    if operation.summary:
        return operation.summary
    action = action_name(operation.operationId) or operation.operationId
    if operation.tags:
        return f'{action} {", ".join(operation.tags)}'
    return action


class RequestTypeRegistry:
    """Holds the request types synthesized from query parameters.

    A name is declared once; later operations that synthesize the same name
    reuse the first declaration.
    """

    def __init__(self, enum_set: EnumSet):
        self.enum_set = enum_set
        self._declarations: dict[str, SchemaDeclaration] = {}

    def synthesize(self, operation: Operation) -> str | None:
        """Return the request type name for an operation's query parameters.

        Returns None when the operation has no query parameters or its
        identifier cannot be named.
        """
        name = request_type_name(operation.operationId)
        if name is None:
            return None

        query_params = [p for p in operation.parameters if p.in_ == QUERY_LOCATION]
        if not query_params:
            return None

        if name in self._declarations:
            return name

        properties = [
            ProcessedProperty(
                name=param.name.replace('.', '_'),
                type_name=resolve_parameter_type(param.schema_, self.enum_set),
                required=param.required,
                description=param.description,
            )
            for param in query_params
        ]
        self._declarations[name] = SchemaDeclaration(
            schema_name=name, type_name=name, properties=properties
        )
        logger.debug(f'Synthesized request type {name} for {operation.operationId}')
        return name

    def get(self, name: str) -> SchemaDeclaration | None:
        return self._declarations.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._declarations

    def __iter__(self) -> Iterator[SchemaDeclaration]:
        return iter(self._declarations.values())

    def __len__(self) -> int:
        return len(self._declarations)


class OperationSynthesizer:
    """Derives FunctionUnit candidates from operations.

    The returned unit carries the base function name; collision suffixes and
    discovery order are assigned later by the CollisionResolver.

    Example:
        >>> synthesizer = OperationSynthesizer(RequestTypeRegistry(frozenset()))
        >>> unit = synthesizer.synthesize('/teams', 'get', operation)
        >>> unit.module, unit.name
        ('team', 'list')
    """

    def __init__(
        self,
        request_types: RequestTypeRegistry,
        default_module: str = DEFAULT_MODULE,
    ):
        self.request_types = request_types
        self.default_module = default_module

    def synthesize(
        self, path: str, method: str, operation: Operation
    ) -> FunctionUnit | None:
        """Build the function for one operation, or None if it cannot be named."""
        operation_id = operation.operationId
        if not operation_id:
            logger.warning(f'Skipping {method.upper()} {path}: missing operationId')
            return None

        name = function_name(operation_id)
        if not name:
            logger.warning(
                f"Skipping {method.upper()} {path}: operationId '{operation_id}' "
                'is not of the form <Group>_<Action>'
            )
            return None

        return FunctionUnit(
            module=module_for_operation(operation.tags, self.default_module),
            name=name,
            summary=synthesize_summary(operation),
            param_type=self._param_type(operation),
            response_type=self._response_type(operation),
            method=method.upper(),
            path=path,
            operation_id=operation_id,
        )

    def _param_type(self, operation: Operation) -> str:
        if operation.requestBody is not None:
            ref = select_schema_ref(operation.requestBody.content)
            return resolve_reference(ref) if ref else EMPTY_REQUEST
        if operation.parameters:
            return self.request_types.synthesize(operation) or EMPTY_REQUEST
        return EMPTY_REQUEST

    def _response_type(self, operation: Operation) -> str:
        response = operation.responses.get(SUCCESS_STATUS)
        if response is None:
            return EMPTY_REPLY
        ref = select_schema_ref(response.content)
        return resolve_reference(ref) if ref else EMPTY_REPLY
