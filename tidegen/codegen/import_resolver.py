"""Import discovery and management for generated TypeScript modules.

Function fragments are rendered before their module's imports are known.
The ImportResolver scans the rendered text with three independent patterns,
one per place a type name can appear in a function fragment:

- the ``@param { Type } params`` doc annotation,
- the ``@returns {Promise<Type>}`` doc annotation,
- the ``function name(params: Type): Promise<Type>`` signature.

A name found by any pattern counts as used. Only names declared in the
shared module are imported, so the result never carries unused imports.
If the function template changes shape, these patterns must follow.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from tidegen.codegen.operations import FunctionUnit
from tidegen.codegen.references import EnumSet
from tidegen.codegen.types import EnumDeclaration, SchemaDeclaration

PARAM_PATTERN = re.compile(r'@param\s*\{\s*([^}]+?)\s*\}\s*params')
RETURNS_PATTERN = re.compile(r'@returns\s*\{\s*Promise<([^>]+)>\s*\}')
SIGNATURE_PATTERN = re.compile(
    r'function\s+\w+\(params:\s*([^)]+)\):\s*Promise<([^>]+)>'
)

DISCOVERY_PATTERNS = (PARAM_PATTERN, RETURNS_PATTERN, SIGNATURE_PATTERN)


def _normalize(name: str) -> str:
    return name.strip().removesuffix('[]').strip()


def discover_used_types(text: str) -> set[str]:
    """Return every type name the discovery patterns find in ``text``."""
    used: set[str] = set()
    for pattern in DISCOVERY_PATTERNS:
        for match in pattern.finditer(text):
            for group in match.groups():
                name = _normalize(group)
                if name:
                    used.add(name)
    return used


@dataclass(frozen=True)
class ImportStatement:
    module: str
    names: tuple[str, ...]
    type_only: bool = False


class ImportCollector:
    """Collects imported names per module and renders them deterministically.

    Example:
        >>> collector = ImportCollector()
        >>> collector.add_imports({'../types': {'Team', 'EmptyReply'}}, type_only=True)
        >>> collector.to_statements()
        [ImportStatement(module='../types', names=('EmptyReply', 'Team'), type_only=True)]
    """

    def __init__(self):
        self._imports: dict[tuple[str, bool], set[str]] = {}

    def add_imports(self, imports: dict[str, Iterable[str]], type_only: bool = False) -> None:
        for module, names in imports.items():
            self._imports.setdefault((module, type_only), set()).update(names)

    def add_import(self, module: str, name: str, type_only: bool = False) -> None:
        self._imports.setdefault((module, type_only), set()).add(name)

    def to_statements(self) -> list[ImportStatement]:
        """Return one statement per module, value imports first, names sorted."""
        statements = []
        for (module, type_only), names in sorted(
            self._imports.items(), key=lambda item: (item[0][1], item[0][0])
        ):
            if names:
                statements.append(
                    ImportStatement(module, tuple(sorted(names)), type_only)
                )
        return statements


class ImportResolver:
    """Computes the shared-module import of an API module.

    Args:
        shared_import_path: Import path of the shared module as seen from an
            API module, e.g. ``'../types'``.
        declared: Every type name the shared module exports.
    """

    def __init__(self, shared_import_path: str, declared: Iterable[str]):
        self.shared_import_path = shared_import_path
        self.declared = frozenset(declared)

    def used_types(self, function_texts: Iterable[str]) -> list[str]:
        used: set[str] = set()
        for text in function_texts:
            used |= discover_used_types(text)
        return sorted(used & self.declared)

    def referenced_types(self, units: Iterable[FunctionUnit]) -> list[str]:
        """Return the declared types named by the function records themselves.

        This is the structured counterpart of used_types and must agree with
        it for functions rendered from the same records.
        """
        used = {
            name.removesuffix('[]') for unit in units for name in unit.referenced_types
        }
        return sorted(used & self.declared)

    def resolve(self, function_texts: Iterable[str]) -> list[ImportStatement]:
        """Return the aggregated type import for a module's function fragments.

        The list is empty when no declared type is used.
        """
        names = self.used_types(function_texts)
        if not names:
            return []
        return [ImportStatement(self.shared_import_path, tuple(names), type_only=True)]


def collect_used_enums(
    declarations: Iterable[SchemaDeclaration],
    enums: Iterable[EnumDeclaration],
    enum_set: EnumSet,
) -> list[str]:
    """Return the enum identifiers the shared declarations need to import.

    Uses the structured type names of the processed properties rather than
    the rendered text. Namespaced enums are imported through their root
    namespace identifier.
    """
    roots = {enum.type_name: enum.root_name for enum in enums}
    used: set[str] = set()
    for declaration in declarations:
        for name in declaration.referenced_types:
            if name in enum_set and name in roots:
                used.add(roots[name])
    return sorted(used)
