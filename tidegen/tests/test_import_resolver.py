"""Tests for import discovery and import statement collection."""

from tidegen.codegen.import_resolver import (
    ImportCollector,
    ImportResolver,
    ImportStatement,
    collect_used_enums,
    discover_used_types,
)
from tidegen.codegen.operations import FunctionUnit
from tidegen.codegen.types import EnumDeclaration, ProcessedProperty, SchemaDeclaration

FUNCTION_TEXT = """/**
 * Search teams
 * @param { SearchRequest } params
 * @returns {Promise<TeamPage>}
 */
export function search(params: SearchRequest): Promise<TeamPage> {
  return request<TeamPage>({
    url: '/teams/search',
    method: 'GET',
    params: params,
  });
}
"""


class TestDiscoverUsedTypes:
    """Tests for the three discovery patterns."""

    def test_full_function(self):
        assert discover_used_types(FUNCTION_TEXT) == {'SearchRequest', 'TeamPage'}

    def test_param_annotation_alone(self):
        """Test that the @param annotation is matched on its own."""
        assert discover_used_types(' * @param {Filter} params') == {'Filter'}

    def test_returns_annotation_alone(self):
        assert discover_used_types(' * @returns { Promise<Page> }') == {'Page'}

    def test_signature_alone(self):
        """Test that a signature without documentation is still scanned."""
        text = 'export function get(params: GetRequest): Promise<Team> {'
        assert discover_used_types(text) == {'GetRequest', 'Team'}

    def test_array_suffix_is_removed(self):
        text = 'export function list(params: EmptyRequest): Promise<Team[]> {'
        assert discover_used_types(text) == {'EmptyRequest', 'Team'}

    def test_multiple_functions(self):
        text = FUNCTION_TEXT + '\n' + FUNCTION_TEXT.replace('TeamPage', 'Other')
        assert discover_used_types(text) == {'SearchRequest', 'TeamPage', 'Other'}

    def test_unrelated_text(self):
        assert discover_used_types('const x: Team = {};') == set()


class TestImportResolver:
    """Tests for ImportResolver."""

    def test_only_declared_names_are_imported(self):
        """Test that names the shared module does not export are dropped."""
        resolver = ImportResolver('../types', {'SearchRequest', 'TeamPage', 'Foo'})
        statements = resolver.resolve([FUNCTION_TEXT])

        assert statements == [
            ImportStatement('../types', ('SearchRequest', 'TeamPage'), type_only=True)
        ]

    def test_names_are_deduplicated_and_sorted(self):
        resolver = ImportResolver('../types', {'SearchRequest', 'TeamPage'})
        assert resolver.used_types([FUNCTION_TEXT, FUNCTION_TEXT]) == [
            'SearchRequest',
            'TeamPage',
        ]

    def test_referenced_types_agree_with_discovery(self):
        """Test that the records and the rendered text name the same imports."""
        unit = FunctionUnit(
            module='team',
            name='search',
            summary='Search teams',
            param_type='SearchRequest',
            response_type='TeamPage[]',
            method='GET',
            path='/teams/search',
        )
        resolver = ImportResolver('../types', {'SearchRequest', 'TeamPage', 'Foo'})

        assert resolver.referenced_types([unit]) == ['SearchRequest', 'TeamPage']
        assert resolver.referenced_types([unit]) == resolver.used_types([FUNCTION_TEXT])

    def test_no_used_types(self):
        """Test that a module using no declared type gets no type import."""
        resolver = ImportResolver('../types', {'Foo'})
        assert resolver.resolve([FUNCTION_TEXT]) == []


class TestImportCollector:
    """Tests for ImportCollector."""

    def test_value_imports_come_first(self):
        collector = ImportCollector()
        collector.add_imports({'../types': {'Team', 'EmptyReply'}}, type_only=True)
        collector.add_import('@/utils/request', 'request')

        assert collector.to_statements() == [
            ImportStatement('@/utils/request', ('request',)),
            ImportStatement('../types', ('EmptyReply', 'Team'), type_only=True),
        ]

    def test_names_are_merged_per_module(self):
        collector = ImportCollector()
        collector.add_import('../types', 'Team', type_only=True)
        collector.add_imports({'../types': ['Team', 'Member']}, type_only=True)

        assert collector.to_statements() == [
            ImportStatement('../types', ('Member', 'Team'), type_only=True)
        ]


class TestCollectUsedEnums:
    """Tests for collect_used_enums."""

    def test_enums_used_by_declarations(self):
        """Test that namespaced enums are imported through their root name."""
        enums = [
            EnumDeclaration('Billing.State', 'Billing.State', ['open']),
            EnumDeclaration('Status', 'Status', ['A']),
            EnumDeclaration('Unused', 'Unused', ['x']),
        ]
        declarations = [
            SchemaDeclaration(
                'Item', 'Item', properties=[ProcessedProperty('status', 'Status')]
            ),
            SchemaDeclaration(
                'Billing.Invoice',
                'Invoice',
                properties=[ProcessedProperty('states', 'Billing.State[]')],
            ),
        ]
        enum_set = frozenset(enum.type_name for enum in enums)

        assert collect_used_enums(declarations, enums, enum_set) == ['Billing', 'Status']

    def test_non_enum_names_are_ignored(self):
        declarations = [
            SchemaDeclaration('Item', 'Item', properties=[ProcessedProperty('a', 'Foo')])
        ]
        assert collect_used_enums(declarations, [], frozenset()) == []
