"""
unitcore Kind Registry

Name -> quantity kind lookup for callers that only know a kind or a unit by
its string (config files, UI dropdowns, observation tables).

Usage:
    >>> from unitcore.registry import default_registry
    >>> registry = default_registry()
    >>> registry.units_for("electric_potential")
    ['uV', 'mV', 'V', 'kV', 'MV']
    >>> registry.kinds_for_unit("psi")
    ['pressure']
    >>> registry.parse("4 kV", "electric_potential")
    ElectricPotential(4000.0)
"""

import logging
import threading
from typing import Any, Dict, Iterator, List, Mapping, Optional, Type

from unitcore.errors import InvalidConfiguration, UnsupportedUnit
from unitcore.quantity import Quantity

logger = logging.getLogger(__name__)


class KindRegistry:
    """Mapping of kind names to Quantity subclasses."""

    def __init__(self):
        self._kinds: Dict[str, Type[Quantity]] = {}
        self._lock = threading.Lock()

    @classmethod
    def with_builtins(cls) -> "KindRegistry":
        """A new registry holding every built-in kind."""
        from unitcore.kinds import BUILTIN_KINDS

        registry = cls()
        for kind_cls in BUILTIN_KINDS:
            registry.register(kind_cls)
        return registry

    @staticmethod
    def _check_kind(kind_cls: Any) -> None:
        if not (isinstance(kind_cls, type) and issubclass(kind_cls, Quantity)) \
                or kind_cls.unit_table is None:
            raise InvalidConfiguration(f"Not a quantity kind: {kind_cls!r}")

    def register(self, kind_cls: Type[Quantity], name: Optional[str] = None) -> Type[Quantity]:
        """
        Register a quantity kind.

        Args:
            kind_cls: Quantity subclass with a unit table
            name: Registry key (default: the table's kind name)

        Returns:
            kind_cls, so this can be used as a class decorator

        Raises:
            InvalidConfiguration: If kind_cls is not a quantity kind, or the
                name is already taken by another kind
        """
        self._check_kind(kind_cls)

        name = name or kind_cls.unit_table.kind
        with self._lock:
            existing = self._kinds.get(name)
            if existing is not None and existing is not kind_cls:
                raise InvalidConfiguration(
                    f"Kind '{name}' is already registered to {existing.__name__}"
                )
            self._kinds[name] = kind_cls

        logger.debug("Registered kind %s -> %s", name, kind_cls.__name__)
        return kind_cls

    def register_many(self, kinds: Mapping[str, Type[Quantity]]) -> None:
        """
        Register several kinds at once: either all of them or none.

        Raises:
            InvalidConfiguration: If any entry is not a quantity kind or any
                name is already taken by another kind; nothing is registered
        """
        for kind_cls in kinds.values():
            self._check_kind(kind_cls)

        with self._lock:
            taken = [
                f"'{name}' ({self._kinds[name].__name__})"
                for name, kind_cls in kinds.items()
                if self._kinds.get(name, kind_cls) is not kind_cls
            ]
            if taken:
                raise InvalidConfiguration(f"Kinds already registered: {', '.join(taken)}")
            self._kinds.update(kinds)

        logger.debug("Registered kinds %s", list(kinds))

    def get(self, name: str) -> Type[Quantity]:
        """
        Look up a kind by name.

        Raises:
            KeyError: If no kind of that name is registered
        """
        try:
            return self._kinds[name]
        except KeyError:
            raise KeyError(f"Unknown kind: {name}. Available: {self.names()}") from None

    def names(self) -> List[str]:
        return sorted(self._kinds)

    def __contains__(self, name: object) -> bool:
        return name in self._kinds

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._kinds)

    def units_for(self, name: str) -> List[str]:
        """Abbreviations of every unit of a kind, in table order (for UI dropdowns)."""
        table = self.get(name).table()
        return [table.default_abbreviation(unit) for unit in table.units]

    def kinds_for_unit(self, text: str) -> List[str]:
        """Names of every kind that accepts the unit string."""
        matches = []
        for name in self.names():
            try:
                self._kinds[name].table().parse_unit(text)
            except UnsupportedUnit:
                continue
            matches.append(name)
        return matches

    def parse(self, text: str, name: str) -> Quantity:
        """Parse '<number> <unit>' as a quantity of the named kind."""
        return self.get(name).parse(text)


# =============================================================================
# DEFAULT REGISTRY
# =============================================================================

_default: Optional[KindRegistry] = None
_default_lock = threading.Lock()


def default_registry() -> KindRegistry:
    """
    Registry of the built-in kinds, created on first use.

    Initialization runs exactly once even when first called from several
    threads at the same time; later calls take no lock.
    """
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                registry = KindRegistry.with_builtins()
                logger.debug("Default registry ready: %s", registry.names())
                _default = registry
    return _default
