"""Jinja2 rendering of resolved declarations and functions into TypeScript.

The renderer receives fully resolved records (SchemaDeclaration,
EnumDeclaration, FunctionUnit) and returns opaque text. The only place that
looks back into that text is the ImportResolver, whose patterns mirror
``function.ts.j2``.
"""

import re
from collections.abc import Iterable, Sequence
from itertools import groupby

import jinja2

from tidegen.codegen.import_resolver import ImportStatement
from tidegen.codegen.operations import FunctionUnit
from tidegen.codegen.types import EnumDeclaration, SchemaDeclaration

HEADER = '// This file is generated by tidegen. Do not edit it by hand.'

# methods whose params are sent in the query string
QUERY_METHODS = ('GET', 'DELETE')

_IDENTIFIER = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')


def doc(text: str | None, indent: str = '') -> str:
    """Make text safe for the body of a ``/** ... */`` comment."""
    if not text:
        return ''
    text = text.strip().replace('*/', '*\\/')
    return text.replace('\n', f'\n{indent} * ')


def ts_string(value: str) -> str:
    escaped = value.replace('\\', '\\\\').replace("'", "\\'").replace('\n', '\\n')
    return f"'{escaped}'"


def ts_union(values: Sequence[str]) -> str:
    if not values:
        return 'string'
    return ' | '.join(ts_string(value) for value in values)


def property_key(name: str) -> str:
    if _IDENTIFIER.match(name):
        return name
    return ts_string(name)


def create_environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.PackageLoader('tidegen', 'templates'),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters['doc'] = doc
    env.filters['ts_string'] = ts_string
    env.filters['ts_union'] = ts_union
    env.filters['property_key'] = property_key
    return env


class TemplateRenderer:
    """Renders TypeScript fragments and files from resolved records.

    Example:
        >>> renderer = TemplateRenderer()
        >>> print(renderer.render_declaration(declaration))
        export interface Item {
          status?: Status;
        }
    """

    def __init__(self, env: jinja2.Environment | None = None):
        self.env = env or create_environment()

    def _render(self, template_name: str, **context) -> str:
        template = self.env.get_template(template_name)
        return template.render(header=HEADER, **context)

    def render_declaration(self, declaration: SchemaDeclaration) -> str:
        return self._render('declaration.ts.j2', declaration=declaration)

    def render_function(self, unit: FunctionUnit) -> str:
        return self._render('function.ts.j2', unit=unit, query_methods=QUERY_METHODS)

    def render_enum_file(self, enums: Iterable[EnumDeclaration]) -> str:
        enums = sorted(enums, key=lambda e: e.type_name)
        top_level = [enum for enum in enums if enum.namespace is None]
        namespaced = sorted(
            (enum for enum in enums if enum.namespace is not None),
            key=lambda e: (e.namespace, e.local_name),
        )
        groups = [
            (namespace, list(members))
            for namespace, members in groupby(namespaced, key=lambda e: e.namespace)
        ]
        return self._render('enum.ts.j2', top_level=top_level, namespaced=groups)

    def render_types_file(
        self,
        declarations: Sequence[str],
        used_enums: Sequence[str],
        has_enums: bool,
    ) -> str:
        return self._render(
            'types.ts.j2',
            declarations=declarations,
            used_enums=used_enums,
            has_enums=has_enums,
        )

    def render_module_file(
        self, imports: Sequence[ImportStatement], functions: Sequence[str]
    ) -> str:
        return self._render('module.ts.j2', imports=imports, functions=functions)

    def render_index_file(
        self, shared_module: str, modules: Sequence[tuple[str, str]]
    ) -> str:
        return self._render(
            'index.ts.j2', shared_module=shared_module, modules=modules
        )
