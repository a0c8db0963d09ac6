"""Tests for property type naming and schema declarations."""

import pytest

from tidegen.codegen.references import build_enum_set
from tidegen.codegen.types import (
    STRING_MAP_TYPE,
    PropertyKind,
    PropertyType,
    TypeNamer,
    classify_property,
    resolve_parameter_type,
    resolve_type,
)
from tidegen.openapi import ParameterSchema, Property, Schema


def _prop(**data) -> Property:
    return Property.model_validate(data)


class TestClassifyProperty:
    """Tests for the precedence of property shapes."""

    def test_reference_wins_over_everything(self):
        """Test that a $ref is classified as a reference."""
        prop = _prop(
            **{'$ref': '#/components/schemas/Status', 'type': 'string', 'enum': ['A']}
        )
        assert classify_property(prop).kind is PropertyKind.REFERENCE

    def test_all_of_before_array(self):
        """Test that allOf takes precedence over array shapes."""
        prop = _prop(
            type='array',
            items={'type': 'string'},
            allOf=[{'$ref': '#/components/schemas/Base'}],
        )
        ptype = classify_property(prop)
        assert ptype.kind is PropertyKind.COMPOSED
        assert ptype.name == '#/components/schemas/Base'

    def test_array_with_reference_item(self):
        ptype = classify_property(
            _prop(type='array', items={'$ref': '#/components/schemas/Foo'})
        )
        assert ptype == PropertyType.array_of(
            PropertyType.reference('#/components/schemas/Foo')
        )

    def test_array_without_items_is_primitive(self):
        """Test that an array without items falls back to the primitive table."""
        ptype = classify_property(_prop(type='array'))
        assert ptype == PropertyType.primitive('array')

    def test_string_map(self):
        ptype = classify_property(
            _prop(type='object', additionalProperties={'type': 'string'})
        )
        assert ptype.kind is PropertyKind.STRING_MAP

    def test_inline_enum(self):
        ptype = classify_property(_prop(type='string', enum=['x', 'y']))
        assert ptype.kind is PropertyKind.ENUM

    def test_primitive(self):
        assert classify_property(_prop(type='integer')) == PropertyType.primitive(
            'integer'
        )


class TestResolveType:
    """Tests for resolve_type."""

    @pytest.mark.parametrize(
        'kind,expected',
        [
            ('string', 'string'),
            ('integer', 'number'),
            ('number', 'number'),
            ('boolean', 'boolean'),
            ('object', 'object'),
            ('file', 'any'),
            (None, 'any'),
        ],
    )
    def test_primitive_table(self, kind, expected):
        """Test the primitive type table."""
        assert resolve_type(PropertyType.primitive(kind), frozenset()) == expected

    def test_reference_to_enum_keeps_full_name(self):
        """Test that enum references are returned verbatim."""
        ptype = PropertyType.reference('#/components/schemas/Billing.State')
        assert resolve_type(ptype, frozenset({'Billing.State'})) == 'Billing.State'

    def test_reference_strips_namespace(self):
        ptype = PropertyType.reference('#/components/schemas/Billing.Invoice')
        assert resolve_type(ptype, frozenset()) == 'Invoice'

    def test_composed_uses_first_element_only(self):
        """Test that later allOf elements are ignored."""
        prop = _prop(
            allOf=[
                {'$ref': '#/components/schemas/Acme.Base'},
                {'$ref': '#/components/schemas/Other'},
            ]
        )
        assert resolve_type(classify_property(prop), frozenset()) == 'Base'

    def test_array_of_primitive_string(self):
        """Test that arrays of strings resolve to string[]."""
        prop = _prop(type='array', items={'type': 'string'})
        assert resolve_type(classify_property(prop), frozenset()) == 'string[]'

    def test_array_of_integer(self):
        prop = _prop(type='array', items={'type': 'integer'})
        assert resolve_type(classify_property(prop), frozenset()) == 'number[]'

    def test_array_of_reference(self):
        """Test that arrays of references resolve to Name[]."""
        prop = _prop(type='array', items={'$ref': '#/components/schemas/Foo'})
        assert resolve_type(classify_property(prop), frozenset()) == 'Foo[]'

    def test_array_of_unknown_item(self):
        """Test that unresolvable items fall back to any[]."""
        prop = _prop(type='array', items={})
        assert resolve_type(classify_property(prop), frozenset()) == 'any[]'

    def test_string_map(self):
        prop = _prop(type='object', additionalProperties={'type': 'string'})
        assert resolve_type(classify_property(prop), frozenset()) == STRING_MAP_TYPE

    def test_other_maps_are_objects(self):
        """Test that only string-valued maps are special-cased."""
        prop = _prop(type='object', additionalProperties={'type': 'integer'})
        assert resolve_type(classify_property(prop), frozenset()) == 'object'

    def test_boolean_additional_properties(self):
        prop = _prop(type='object', additionalProperties=True)
        assert resolve_type(classify_property(prop), frozenset()) == 'object'

    def test_inline_enum_is_string(self):
        prop = _prop(type='string', enum=['x'])
        assert resolve_type(classify_property(prop), frozenset()) == 'string'

    def test_nullable_type_list(self):
        """Test that OpenAPI 3.1 type lists use their first non-null entry."""
        prop = _prop(type=['null', 'integer'])
        assert resolve_type(classify_property(prop), frozenset()) == 'number'


class TestResolveParameterType:
    """Tests for resolve_parameter_type."""

    def test_primitive(self):
        assert resolve_parameter_type(ParameterSchema(type='integer'), frozenset()) == 'number'

    def test_reference(self):
        schema = ParameterSchema.model_validate({'$ref': '#/components/schemas/Sort'})
        assert resolve_parameter_type(schema, frozenset()) == 'Sort'

    def test_enum_reference(self):
        schema = ParameterSchema.model_validate(
            {'$ref': '#/components/schemas/Acme.Sort'}
        )
        assert resolve_parameter_type(schema, frozenset({'Acme.Sort'})) == 'Acme.Sort'

    def test_array_is_not_supported(self):
        """Test that array parameters degrade to any."""
        assert resolve_parameter_type(ParameterSchema(type='array'), frozenset()) == 'any'


class TestTypeNamer:
    """Tests for TypeNamer declarations."""

    def test_enum_reference_resolves_to_enum_name(self):
        """A property referencing an enum schema resolves to that schema's name."""
        schemas = {
            'Item': Schema.model_validate(
                {'properties': {'status': {'$ref': '#/components/schemas/Status'}}}
            ),
            'Status': Schema(type='string', enum=['A', 'B']),
        }
        namer = TypeNamer(build_enum_set(schemas))
        declaration = namer.declare('Item', schemas['Item'])

        assert [(p.name, p.type_name) for p in declaration.properties] == [
            ('status', 'Status')
        ]

    def test_enum_precedence_independent_of_order(self):
        """Test that schema order does not change enum resolution."""
        data = {
            'Zeta.Kind': {'type': 'string', 'enum': ['z']},
            'Alpha': {'properties': {'kind': {'$ref': '#/components/schemas/Zeta.Kind'}}},
        }
        for ordered in (data, dict(reversed(list(data.items())))):
            schemas = {name: Schema.model_validate(value) for name, value in ordered.items()}
            namer = TypeNamer(build_enum_set(schemas))
            declaration = namer.declare('Alpha', schemas['Alpha'])
            assert declaration.properties[0].type_name == 'Zeta.Kind'

    def test_enum_schema_has_no_declaration(self):
        namer = TypeNamer(frozenset({'Status'}))
        assert namer.declare('Status', Schema(type='string', enum=['A'])) is None

    def test_declare_enum_sorts_values(self):
        """Test that enum values are sorted and non-strings dropped."""
        namer = TypeNamer(frozenset({'Status'}))
        enum = namer.declare_enum('Status', Schema(type='string', enum=['B', 'A', 3]))

        assert enum.type_name == 'Status'
        assert enum.values == ['A', 'B']
        assert enum.namespace is None

    def test_declare_namespaced_enum(self):
        namer = TypeNamer(frozenset({'Billing.State'}))
        enum = namer.declare_enum('Billing.State', Schema(enum=['paid']))

        assert enum.type_name == 'Billing.State'
        assert enum.namespace == 'Billing'
        assert enum.local_name == 'State'
        assert enum.root_name == 'Billing'

    def test_namespace_is_stripped_from_declaration_name(self):
        namer = TypeNamer(frozenset())
        declaration = namer.declare('Billing.Invoice', Schema(type='object'))
        assert declaration.type_name == 'Invoice'
        assert declaration.schema_name == 'Billing.Invoice'

    def test_required_flags_and_sorted_properties(self):
        schema = Schema.model_validate(
            {
                'required': ['name'],
                'properties': {
                    'name': {'type': 'string', 'description': 'Display name'},
                    'age': {'type': 'integer'},
                },
            }
        )
        declaration = TypeNamer(frozenset()).declare('Person', schema)

        assert [(p.name, p.type_name, p.required) for p in declaration.properties] == [
            ('age', 'number', False),
            ('name', 'string', True),
        ]
        assert declaration.properties[1].description == 'Display name'

    def test_all_of_schema_extends_first_reference(self):
        schema = Schema.model_validate(
            {
                'allOf': [{'$ref': '#/components/schemas/Acme.Base'}],
                'properties': {'extra': {'type': 'boolean'}},
            }
        )
        declaration = TypeNamer(frozenset()).declare('Child', schema)

        assert declaration.extends == 'Base'
        assert declaration.referenced_types == {'Base', 'boolean'}

    def test_array_schema_is_alias(self):
        schema = Schema.model_validate(
            {'type': 'array', 'items': {'$ref': '#/components/schemas/Foo'}}
        )
        declaration = TypeNamer(frozenset()).declare('FooList', schema)

        assert declaration.is_alias
        assert declaration.alias_type == 'Foo[]'

    def test_primitive_schema_is_alias(self):
        declaration = TypeNamer(frozenset()).declare('Id', Schema(type='integer'))
        assert declaration.alias_type == 'number'

    def test_string_map_schema_is_alias(self):
        schema = Schema.model_validate(
            {'type': 'object', 'additionalProperties': {'type': 'string'}}
        )
        declaration = TypeNamer(frozenset()).declare('Labels', schema)
        assert declaration.alias_type == STRING_MAP_TYPE

    def test_empty_object_is_interface(self):
        declaration = TypeNamer(frozenset()).declare('Empty', Schema(type='object'))
        assert not declaration.is_alias
        assert declaration.properties == []
