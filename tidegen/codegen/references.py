"""Reference resolution for API documents.

References in the source documents come in two decorated forms: registry
paths such as ``#/components/schemas/Foo`` and namespaced names such as
``Billing.Invoice``. Generated code only ever uses the terminal identifier,
except for enum types, which keep their full name so the declaration emitted
in the enum file can be addressed precisely.
"""

from collections.abc import Mapping

from tidegen.openapi import Schema

__all__ = (
    'EnumSet',
    'build_enum_set',
    'clean_ref',
    'is_enum',
    'resolve_reference',
    'strip_namespace',
)

EnumSet = frozenset[str]


def clean_ref(ref: str) -> str:
    """Return the portion of a reference after its last path separator.

    Example:
        >>> clean_ref('#/components/schemas/Billing.Invoice')
        'Billing.Invoice'
    """
    if not ref:
        return ''
    return ref.rsplit('/', 1)[-1]


def strip_namespace(name: str) -> str:
    """Return the portion of a name after its last namespace separator."""
    if not name:
        return ''
    return name.rsplit('.', 1)[-1]


def resolve_reference(ref: str) -> str:
    """Resolve a raw reference string into a clean type name.

    Example:
        >>> resolve_reference('#/components/schemas/Billing.Invoice')
        'Invoice'
        >>> resolve_reference('Pet')
        'Pet'
    """
    return strip_namespace(clean_ref(ref))


def build_enum_set(schemas: Mapping[str, Schema]) -> EnumSet:
    """Collect the names of all schemas that declare a non-empty literal set.

    This must run over the complete schema mapping before any property type
    is resolved; resolution consults the result to keep enum names intact.
    """
    return frozenset(name for name, schema in schemas.items() if schema.is_enum)


def is_enum(name: str, enum_set: EnumSet) -> bool:
    return name in enum_set
