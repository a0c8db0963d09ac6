"""Type naming for schema properties and declarations.

This module computes TypeScript type expressions for properties and query
parameters, and turns component schemas into declaration records that the
templates render. Everything here is pure: results depend only on the input
shapes and on the EnumSet built beforehand.
"""

import enum
from dataclasses import dataclass, field

from tidegen.codegen.references import (
    EnumSet,
    clean_ref,
    is_enum,
    strip_namespace,
)
from tidegen.openapi import AdditionalProperties, ParameterSchema, Property, Ref, Schema

__all__ = (
    'ANY_TYPE',
    'PRIMITIVE_TYPES',
    'STRING_MAP_TYPE',
    'EnumDeclaration',
    'ProcessedProperty',
    'PropertyKind',
    'PropertyType',
    'SchemaDeclaration',
    'TypeNamer',
    'classify_property',
    'map_primitive',
    'resolve_parameter_type',
    'resolve_type',
)

ANY_TYPE = 'any'
ARRAY_SUFFIX = '[]'
STRING_MAP_TYPE = '{ [key: string]: string }'

PRIMITIVE_TYPES = {
    'string': 'string',
    'integer': 'number',
    'number': 'number',
    'boolean': 'boolean',
    'object': 'object',
}


def map_primitive(kind: str | None) -> str:
    return PRIMITIVE_TYPES.get(kind or '', ANY_TYPE)


class PropertyKind(enum.Enum):
    REFERENCE = 'reference'
    COMPOSED = 'composed'
    ARRAY = 'array'
    STRING_MAP = 'string_map'
    ENUM = 'enum'
    PRIMITIVE = 'primitive'


@dataclass(frozen=True)
class PropertyType:
    """Tagged union describing the shape of a property.

    Attributes:
        kind: The active tag.
        name: The raw reference for REFERENCE/COMPOSED, the primitive kind for
            PRIMITIVE, unused otherwise.
        item: The item shape for ARRAY; None when the item is unresolvable.
    """

    kind: PropertyKind
    name: str | None = None
    item: 'PropertyType | None' = None

    @classmethod
    def primitive(cls, kind: str | None) -> 'PropertyType':
        return cls(PropertyKind.PRIMITIVE, name=kind)

    @classmethod
    def reference(cls, ref: str) -> 'PropertyType':
        return cls(PropertyKind.REFERENCE, name=ref)

    @classmethod
    def composed(cls, ref: str) -> 'PropertyType':
        return cls(PropertyKind.COMPOSED, name=ref)

    @classmethod
    def array_of(cls, item: 'PropertyType | None') -> 'PropertyType':
        return cls(PropertyKind.ARRAY, item=item)

    @classmethod
    def string_map(cls) -> 'PropertyType':
        return cls(PropertyKind.STRING_MAP)

    @classmethod
    def enum_literal(cls) -> 'PropertyType':
        return cls(PropertyKind.ENUM)


def _classify_item(items: Ref | None) -> PropertyType | None:
    if items is None:
        return None
    if items.ref:
        return PropertyType.reference(items.ref)
    if items.type:
        return PropertyType.primitive(items.type)
    return None


def _is_string_map(type_: str | None, additional: AdditionalProperties | bool | None) -> bool:
    return (
        type_ == 'object'
        and isinstance(additional, AdditionalProperties)
        and additional.type == 'string'
    )


def classify_property(prop: Property) -> PropertyType:
    """Pick the single active shape of a property.

    Precedence: reference, first allOf element, array, string-keyed map,
    inline enum, primitive.
    """
    if prop.ref:
        return PropertyType.reference(prop.ref)
    if prop.allOf:
        return PropertyType.composed(prop.allOf[0].ref)
    if prop.type == 'array' and prop.items is not None:
        return PropertyType.array_of(_classify_item(prop.items))
    if _is_string_map(prop.type, prop.additionalProperties):
        return PropertyType.string_map()
    if prop.enum:
        return PropertyType.enum_literal()
    return PropertyType.primitive(prop.type)


def _reference_type(ref: str, enum_set: EnumSet) -> str:
    name = clean_ref(ref)
    if is_enum(name, enum_set):
        return name
    return strip_namespace(name)


def resolve_type(ptype: PropertyType, enum_set: EnumSet) -> str:
    """Compute the TypeScript type expression for a property shape."""
    if ptype.kind is PropertyKind.REFERENCE:
        return _reference_type(ptype.name or '', enum_set)
    if ptype.kind is PropertyKind.COMPOSED:
        return strip_namespace(clean_ref(ptype.name or ''))
    if ptype.kind is PropertyKind.ARRAY:
        item = ptype.item
        if item is not None and item.kind is PropertyKind.REFERENCE:
            return strip_namespace(clean_ref(item.name or '')) + ARRAY_SUFFIX
        if item is not None and item.kind is PropertyKind.PRIMITIVE:
            return map_primitive(item.name) + ARRAY_SUFFIX
        return ANY_TYPE + ARRAY_SUFFIX
    if ptype.kind is PropertyKind.STRING_MAP:
        return STRING_MAP_TYPE
    if ptype.kind is PropertyKind.ENUM:
        return 'string'
    return map_primitive(ptype.name)


def resolve_parameter_type(schema: ParameterSchema, enum_set: EnumSet) -> str:
    """Compute the type of a query parameter.

    Parameters support references and primitives only; array and composed
    shapes fall through to the primitive table and end up as ``any``.
    """
    if schema.ref:
        return _reference_type(schema.ref, enum_set)
    if schema.enum:
        return 'string'
    return map_primitive(schema.type)


@dataclass(frozen=True)
class ProcessedProperty:
    name: str
    type_name: str
    required: bool = False
    description: str | None = None


@dataclass
class SchemaDeclaration:
    """A resolved type declaration ready for rendering.

    Attributes:
        schema_name: The name the schema is declared under in the document.
        type_name: The emitted identifier.
        properties: Processed properties, sorted by name.
        extends: The supertype of an ``allOf`` composition.
        alias_type: Set for declarations emitted as ``type X = ...``.
        description: Documentation attached to the declaration.
    """

    schema_name: str
    type_name: str
    properties: list[ProcessedProperty] = field(default_factory=list)
    extends: str | None = None
    alias_type: str | None = None
    description: str | None = None

    @property
    def is_alias(self) -> bool:
        return self.alias_type is not None

    @property
    def referenced_types(self) -> set[str]:
        """Type names used by this declaration, with array markers removed."""
        names = {prop.type_name for prop in self.properties}
        if self.alias_type:
            names.add(self.alias_type)
        if self.extends:
            names.add(self.extends)
        return {name.removesuffix(ARRAY_SUFFIX) for name in names}


@dataclass
class EnumDeclaration:
    schema_name: str
    type_name: str
    values: list[str] = field(default_factory=list)

    @property
    def namespace(self) -> str | None:
        if '.' not in self.type_name:
            return None
        return self.type_name.rsplit('.', 1)[0]

    @property
    def local_name(self) -> str:
        return strip_namespace(self.type_name)

    @property
    def root_name(self) -> str:
        return self.type_name.split('.', 1)[0]


class TypeNamer:
    """Resolves property types and builds declarations for component schemas.

    Example:
        >>> namer = TypeNamer(build_enum_set(schemas))
        >>> declaration = namer.declare('Item', schemas['Item'])
        >>> [p.type_name for p in declaration.properties]
        ['Status']
    """

    def __init__(self, enum_set: EnumSet):
        self.enum_set = enum_set

    def resolve(self, prop: Property) -> str:
        return resolve_type(classify_property(prop), self.enum_set)

    def declare(self, schema_name: str, schema: Schema) -> SchemaDeclaration | None:
        """Build the declaration for a component schema.

        Returns None for enum schemas; those are collected by declare_enum.
        """
        if schema.is_enum:
            return None

        type_name = strip_namespace(clean_ref('#/' + schema_name))
        declaration = SchemaDeclaration(
            schema_name=schema_name,
            type_name=type_name,
            description=schema.description,
        )

        if schema.allOf:
            declaration.extends = strip_namespace(clean_ref(schema.allOf[0].ref)) or None

        if not schema.properties and not declaration.extends:
            if schema.type == 'array':
                declaration.alias_type = resolve_type(
                    PropertyType.array_of(_classify_item(schema.items)), self.enum_set
                )
                return declaration
            if _is_string_map(schema.type, schema.additionalProperties):
                declaration.alias_type = STRING_MAP_TYPE
                return declaration
            if schema.type in PRIMITIVE_TYPES and schema.type != 'object':
                declaration.alias_type = PRIMITIVE_TYPES[schema.type]
                return declaration

        required = set(schema.required)
        for name in sorted(schema.properties):
            prop = schema.properties[name]
            declaration.properties.append(
                ProcessedProperty(
                    name=name,
                    type_name=self.resolve(prop),
                    required=name in required,
                    description=prop.description,
                )
            )
        return declaration

    def declare_enum(self, schema_name: str, schema: Schema) -> EnumDeclaration:
        values = sorted(value for value in schema.enum if isinstance(value, str))
        return EnumDeclaration(
            schema_name=schema_name,
            type_name=clean_ref('#/' + schema_name),
            values=values,
        )
