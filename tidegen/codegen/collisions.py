"""Function name collision resolution.

Several operations may share the action portion of their identifier, for
example ``Team_List`` declared on two paths. Within one module the first
function processed keeps the plain name and later ones receive increasing
numeric suffixes: ``list``, ``list2``, ``list3`` and so on.

Resolution is order dependent, so callers must feed operations in a
deterministic order (see ``Codegen._iter_operations``).
"""

from tidegen.codegen.operations import FunctionUnit


class CollisionResolver:
    """Assigns unique per-module names and discovery order to functions.

    Example:
        >>> resolver = CollisionResolver()
        >>> resolver.claim('team', 'list')
        'list'
        >>> resolver.claim('team', 'list')
        'list2'
        >>> resolver.claim('user', 'list')
        'list'
    """

    def __init__(self):
        self._accepted: dict[str, set[str]] = {}
        self._order = 0

    def is_taken(self, module: str, name: str) -> bool:
        return name in self._accepted.get(module, set())

    def claim(self, module: str, name: str) -> str:
        """Reserve a free name derived from ``name`` in ``module`` and return it."""
        candidate = name
        counter = 1
        while self.is_taken(module, candidate):
            counter += 1
            candidate = f'{name}{counter}'
        self._accepted.setdefault(module, set()).add(candidate)
        return candidate

    def resolve(self, unit: FunctionUnit) -> FunctionUnit:
        """Rename ``unit`` in place if needed and stamp its discovery order."""
        unit.name = self.claim(unit.module, unit.name)
        self._order += 1
        unit.order = self._order
        return unit
