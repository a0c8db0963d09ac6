"""Module partitioning for generated code.

Every type declaration lives in one shared module so that API modules only
ever import from a single place. Functions are grouped by the first tag of
their operation, lower-cased, with untagged operations going to a default
module.

Module names become directory names, so a tag is reduced to lower-case
letters, digits, ``_`` and ``-`` first. A tag with nothing left after that
counts as absent.
"""

import re
from dataclasses import dataclass, field

from tidegen.codegen.utils import remove_accents
from tidegen.config import DEFAULT_MODULE, DEFAULT_SHARED_MODULE

__all__ = ('Fragment', 'ModulePartitioner', 'ModuleUnit', 'module_for_operation')

_UNSAFE_MODULE_CHARS = re.compile(r'[^a-z0-9_-]+')


def module_name(tag: str) -> str:
    """Reduce a tag to a name that is safe as a single path segment.

    Example:
        >>> module_name('User Admin')
        'user-admin'
        >>> module_name('../escaped')
        'escaped'
    """
    name = remove_accents(tag.strip().lower())
    return _UNSAFE_MODULE_CHARS.sub('-', name).strip('-')


def module_for_operation(tags: list[str] | None, default: str = DEFAULT_MODULE) -> str:
    """Return the module an operation belongs to.

    Example:
        >>> module_for_operation(['Team', 'Admin'])
        'team'
        >>> module_for_operation(['  '])
        'common'
    """
    if tags:
        return module_name(tags[0]) or default
    return default


@dataclass(frozen=True)
class Fragment:
    """A rendered piece of a module.

    Attributes:
        name: The declared identifier (type or function name).
        text: The rendered source text.
        order: Discovery sequence number, used to break ties on name.
    """

    name: str
    text: str
    order: int = 0


@dataclass
class ModuleUnit:
    name: str
    declarations: list[Fragment] = field(default_factory=list)
    functions: list[Fragment] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.declarations and not self.functions

    def sorted_declarations(self) -> list[Fragment]:
        return sorted(self.declarations, key=lambda f: (f.name, f.order))

    def sorted_functions(self) -> list[Fragment]:
        return sorted(self.functions, key=lambda f: (f.name, f.order))

    def function_texts(self) -> list[str]:
        return [fragment.text for fragment in self.sorted_functions()]


class ModulePartitioner:
    """Accumulates rendered fragments per module.

    Modules are created on first reference and never merged or removed;
    modules without functions are left out of api_modules.
    """

    def __init__(
        self,
        shared_module: str = DEFAULT_SHARED_MODULE,
        default_module: str = DEFAULT_MODULE,
    ):
        self.shared_module = shared_module
        self.default_module = default_module
        self._modules: dict[str, ModuleUnit] = {}

    def get_or_create(self, name: str) -> ModuleUnit:
        if name not in self._modules:
            self._modules[name] = ModuleUnit(name=name)
        return self._modules[name]

    @property
    def shared(self) -> ModuleUnit:
        return self.get_or_create(self.shared_module)

    def add_declaration(self, fragment: Fragment) -> None:
        self.shared.declarations.append(fragment)

    def add_function(self, module: str, fragment: Fragment) -> None:
        self.get_or_create(module).functions.append(fragment)

    def api_modules(self) -> list[ModuleUnit]:
        """Return the modules that hold functions, sorted by name."""
        return [
            self._modules[name]
            for name in sorted(self._modules)
            if self._modules[name].functions
        ]
