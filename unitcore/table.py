"""
unitcore UnitTable: per-kind unit registry

For one quantity kind, maps each supported unit to a linear rule to and
from the kind's base unit:

    base  = value * scale
    value = base / scale

Exactly one unit is the base unit (scale == 1). Tables are validated when
built and are read-only afterwards, so a single table can be shared by
every Quantity of its kind without locking.

Usage:
    >>> table = UnitTable.build(ElectricPotentialUnit.VOLT, [
    ...     UnitDef(ElectricPotentialUnit.VOLT, "V", 1.0),
    ...     UnitDef(ElectricPotentialUnit.MILLIVOLT, "mV", 1e-3),
    ... ])
    >>> table.scale_to_base(ElectricPotentialUnit.MILLIVOLT)
    0.001
    >>> table.parse_unit("mV")
    <ElectricPotentialUnit.MILLIVOLT: 'millivolt'>
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Generic, Iterable, Iterator, List, Mapping, Optional, Tuple, TypeVar

from unitcore.errors import InvalidConfiguration, UnsupportedUnit

logger = logging.getLogger(__name__)

U = TypeVar("U", bound=Enum)

# Name of the enum member every unit enum reserves for "no unit".
UNDEFINED = "UNDEFINED"


# =============================================================================
# UNIT DEFINITIONS
# =============================================================================

@dataclass(frozen=True)
class UnitDef(Generic[U]):
    """
    Definition of a single unit of one quantity kind.

    Attributes:
        unit: Enum member identifying the unit
        abbreviation: Default display symbol (e.g., "mV")
        scale: Multiply a value in this unit by scale to get the base unit
        name: Long name (e.g., "millivolt"); derived from the enum if empty
        aliases: Extra spellings accepted by UnitTable.parse_unit
        offset: Affine extension point. Must stay 0.0: tables reject any
            offset, so temperature-style scales are flagged, not converted.
    """
    unit: U
    abbreviation: str
    scale: float
    name: str = ""
    aliases: Tuple[str, ...] = ()
    offset: float = 0.0

    @property
    def long_name(self) -> str:
        if self.name:
            return self.name
        return self.unit.name.lower().replace("_", " ")


def _fold(text: str) -> str:
    return text.strip().lower()


# =============================================================================
# UNIT TABLE
# =============================================================================

class UnitTable(Generic[U]):
    """
    Immutable unit lookup for one quantity kind.

    Build instances with UnitTable.build(); the constructor does no
    validation of its own.
    """

    __slots__ = ("_kind", "_base_unit", "_defs", "_exact", "_folded")

    def __init__(
        self,
        kind: str,
        base_unit: U,
        defs: Mapping[U, UnitDef[U]],
        exact: Mapping[str, U],
        folded: Mapping[str, Optional[U]],
    ):
        self._kind = kind
        self._base_unit = base_unit
        self._defs = MappingProxyType(dict(defs))
        self._exact = MappingProxyType(dict(exact))
        self._folded = MappingProxyType(dict(folded))

    @classmethod
    def build(
        cls,
        base_unit: U,
        units: Iterable[UnitDef[U]],
        kind: Optional[str] = None,
    ) -> "UnitTable[U]":
        """
        Validate unit definitions and build a table.

        Args:
            base_unit: The kind's canonical unit; must be listed with scale 1
            units: One UnitDef per supported unit
            kind: Kind name used in error messages (default: enum class name)

        Returns:
            A read-only UnitTable

        Raises:
            InvalidConfiguration: On a missing base unit, duplicate unit,
                empty abbreviation, bad scale, non-zero offset, a unit from
                another enum, or two units claiming the same spelling
        """
        if not isinstance(base_unit, Enum):
            raise InvalidConfiguration(
                f"Base unit must be an Enum member, got {type(base_unit).__name__}: {base_unit!r}"
            )

        unit_enum = type(base_unit)
        kind = kind or unit_enum.__name__

        defs: Dict[U, UnitDef[U]] = {}
        for definition in units:
            cls._validate_def(definition, unit_enum, kind)
            if definition.unit in defs:
                raise InvalidConfiguration(f"{kind}: unit {definition.unit.name} is defined twice")
            defs[definition.unit] = definition

        if base_unit not in defs:
            raise InvalidConfiguration(
                f"{kind}: base unit {base_unit.name} has no definition. "
                f"Every kind must list its base unit with scale 1."
            )
        if defs[base_unit].scale != 1:
            raise InvalidConfiguration(
                f"{kind}: base unit {base_unit.name} must have scale 1, got {defs[base_unit].scale!r}"
            )

        exact, folded = cls._build_lookups(defs, kind)
        table = cls(kind, base_unit, defs, exact, folded)

        logger.debug(
            "Built unit table %s: base=%s, units=%s",
            kind, defs[base_unit].abbreviation, [d.abbreviation for d in defs.values()],
        )
        return table

    @staticmethod
    def _validate_def(definition: UnitDef, unit_enum: type, kind: str) -> None:
        if not isinstance(definition, UnitDef):
            raise InvalidConfiguration(
                f"{kind}: expected UnitDef, got {type(definition).__name__}: {definition!r}"
            )

        unit = definition.unit
        if not isinstance(unit, unit_enum):
            raise InvalidConfiguration(
                f"{kind}: unit {unit!r} is not a member of {unit_enum.__name__}"
            )
        if unit.name == UNDEFINED:
            raise InvalidConfiguration(f"{kind}: {UNDEFINED} is reserved and cannot be registered")

        if not isinstance(definition.abbreviation, str) or not definition.abbreviation.strip():
            raise InvalidConfiguration(f"{kind}: unit {unit.name} has no abbreviation")

        scale = definition.scale
        if isinstance(scale, bool) or not isinstance(scale, numbers.Real):
            raise InvalidConfiguration(
                f"{kind}: unit {unit.name} scale must be a number, got {scale!r}"
            )
        if not math.isfinite(scale) or scale <= 0:
            raise InvalidConfiguration(
                f"{kind}: unit {unit.name} scale must be finite and positive, got {scale!r}"
            )

        if definition.offset != 0:
            raise InvalidConfiguration(
                f"{kind}: unit {unit.name} declares offset {definition.offset!r}. "
                f"Only linear conversions (base = value * scale) are supported; "
                f"affine scales such as degrees Celsius need their own model."
            )

    @staticmethod
    def _build_lookups(
        defs: Mapping[U, UnitDef[U]], kind: str,
    ) -> Tuple[Dict[str, U], Dict[str, Optional[U]]]:
        exact: Dict[str, U] = {}
        folded: Dict[str, Optional[U]] = {}

        for unit, definition in defs.items():
            spellings = {definition.abbreviation, definition.long_name, unit.name}
            if isinstance(unit.value, str):
                spellings.add(unit.value)
            spellings.update(definition.aliases)

            for spelling in spellings:
                key = spelling.strip()
                if not key:
                    continue
                owner = exact.get(key)
                if owner is not None and owner is not unit:
                    raise InvalidConfiguration(
                        f"{kind}: '{key}' names both {owner.name} and {unit.name}"
                    )
                exact[key] = unit

                # mV / MV style pairs collide once case is ignored: mark as ambiguous
                low = _fold(key)
                if low in folded and folded[low] is not unit:
                    folded[low] = None
                else:
                    folded[low] = unit

        return exact, folded

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def base_unit(self) -> U:
        return self._base_unit

    @property
    def units(self) -> List[U]:
        """Registered units in definition order."""
        return list(self._defs)

    def __len__(self) -> int:
        return len(self._defs)

    def __iter__(self) -> Iterator[U]:
        return iter(self._defs)

    def __contains__(self, unit: object) -> bool:
        return self.supports(unit)

    def __repr__(self) -> str:
        symbols = ", ".join(d.abbreviation for d in self._defs.values())
        return f"UnitTable({self._kind}: {symbols})"

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def supports(self, unit: object) -> bool:
        """True if unit is registered for this kind."""
        try:
            return unit in self._defs
        except TypeError:
            return False

    def definition(self, unit: U) -> UnitDef[U]:
        """
        Get the full definition of a unit.

        Raises:
            UnsupportedUnit: If unit is not registered for this kind
        """
        if not self.supports(unit):
            raise UnsupportedUnit(unit, self._kind)
        return self._defs[unit]

    def scale_to_base(self, unit: U) -> float:
        """
        Factor such that base = value_in_unit * factor.

        Raises:
            UnsupportedUnit: If unit is not registered for this kind
        """
        return self.definition(unit).scale

    def default_abbreviation(self, unit: U) -> str:
        """
        Display symbol for a unit (e.g., "V").

        Raises:
            UnsupportedUnit: If unit is not registered for this kind
        """
        return self.definition(unit).abbreviation

    def to_base(self, value: float, unit: U) -> float:
        """Convert value expressed in unit to the base unit."""
        return value * self.scale_to_base(unit)

    def from_base(self, base_value: float, unit: U) -> float:
        """Convert a base-unit value to unit."""
        return base_value / self.scale_to_base(unit)

    def parse_unit(self, text: str) -> U:
        """
        Resolve a unit from its abbreviation, long name, enum name or alias.

        Tries an exact match, then a case-insensitive one, then both again
        with spaces removed. A case-insensitive spelling shared by two units
        (mV / MV) is never guessed.

        Raises:
            UnsupportedUnit: If text names no unit of this kind, or only
                matches ambiguously
        """
        if not isinstance(text, str):
            raise UnsupportedUnit(text, self._kind, "unit text must be a string")

        candidates = [text.strip()]
        no_space = text.replace(" ", "")
        if no_space != candidates[0]:
            candidates.append(no_space)

        for candidate in candidates:
            if candidate in self._exact:
                return self._exact[candidate]

        ambiguous = False
        for candidate in candidates:
            low = _fold(candidate)
            if low in self._folded:
                unit = self._folded[low]
                if unit is not None:
                    return unit
                ambiguous = True

        if ambiguous:
            raise UnsupportedUnit(text, self._kind, "ambiguous when case is ignored")
        raise UnsupportedUnit(text, self._kind)
