"""
unitcore Quantity: immutable unit-aware values

A Quantity stores one float, its magnitude in the base unit of its kind.
Construction and conversion consult the kind's UnitTable; arithmetic and
comparison work on base values directly and never touch the table.

Each quantity kind is its own subclass, so mixing kinds fails the same way
mixing str and int does:

    >>> v = ElectricPotential.from_unit(5.0, ElectricPotentialUnit.VOLT)
    >>> v + ElectricPotential.from_unit(2500, ElectricPotentialUnit.MILLIVOLT)
    ElectricPotential(7.5)
    >>> str(_)
    '7.5 V'
    >>> v + Length.from_unit(1.0, LengthUnit.METER)
    TypeError: unsupported operand type(s) for +: 'ElectricPotential' and 'Length'

Equality is exact float equality of the base values, never epsilon based.
Ordering with NaN magnitudes follows IEEE-754: every ordered comparison
involving NaN is False, so NaN has no place in the total order.
"""

import math
import numbers
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal
from enum import Enum
from typing import Any, ClassVar, Generic, List, NamedTuple, Optional, Type, TypeVar

import numpy as np

from unitcore.errors import UnsupportedUnit
from unitcore.table import UnitTable

U = TypeVar("U", bound=Enum)
Q = TypeVar("Q", bound="Quantity")

DISPLAY_PRECISION = 2

# Integer digits of the largest finite float, plus slack
_DISPLAY_DIGITS = 330

_QUANTITY_RE = re.compile(
    r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)\s*([^\s\d.].*?)\s*$"
)


class ConversionResult(NamedTuple):
    """Outcome of Quantity.try_convert: unpacks as (value, ok)."""
    value: float
    ok: bool


def _ieee_divide(numerator: float, denominator: float) -> float:
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return float(np.float64(numerator) / np.float64(denominator))


def format_magnitude(value: float, precision: int = DISPLAY_PRECISION) -> str:
    """
    Round a magnitude for display.

    The value is first taken to 15 significant digits, then rounded to at
    most `precision` fractional digits with ties away from zero, and
    trailing zeros and a trailing decimal point are trimmed:
    7.5 -> "7.5", 12.0 -> "12", 1/3 -> "0.33", 0.125 -> "0.13".
    Values that round to zero print as "0", never "-0".
    """
    value = float(value)
    if not math.isfinite(value):
        return repr(value)
    context = Context(prec=_DISPLAY_DIGITS + precision, rounding=ROUND_HALF_UP)
    rounded = Decimal(f"{value:.15g}").quantize(Decimal(1).scaleb(-precision), context=context)
    text = f"{rounded:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


@dataclass(frozen=True, eq=False, repr=False)
class Quantity(Generic[U]):
    """
    Base class for every quantity kind.

    Subclasses set `unit_table`; everything else is inherited.

        class ElectricPotential(Quantity[ElectricPotentialUnit]):
            unit_table = UnitTable.build(ElectricPotentialUnit.VOLT, [...])

    Attributes:
        base_value: Magnitude in the kind's base unit
    """
    base_value: float

    unit_table: ClassVar[Optional[UnitTable]] = None

    # Unit used by str(); None means the base unit.
    display_unit: ClassVar[Optional[Enum]] = None

    # numpy scalars on the left of * and / must defer to our reflected operators
    __array_ufunc__ = None

    def __post_init__(self):
        if type(self).unit_table is None:
            raise TypeError(
                f"{type(self).__name__} has no unit table; "
                f"instantiate a quantity kind such as ElectricPotential"
            )
        value = self.base_value
        if isinstance(value, Quantity) or not isinstance(value, numbers.Real):
            raise TypeError(
                f"{type(self).__name__} magnitude must be a real number, "
                f"got {type(value).__name__}: {value!r}"
            )
        object.__setattr__(self, "base_value", float(value))

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def table(cls) -> UnitTable:
        if cls.unit_table is None:
            raise TypeError(f"{cls.__name__} has no unit table")
        return cls.unit_table

    @classmethod
    def from_unit(cls: Type[Q], value: float, unit: U) -> Q:
        """
        Create a quantity from a value expressed in unit.

        Args:
            value: Any real number, negative values included
            unit: A unit registered for this kind

        Raises:
            UnsupportedUnit: If unit is not registered for this kind
        """
        return cls(cls.table().to_base(value, unit))

    @classmethod
    def zero(cls: Type[Q]) -> Q:
        """The additive identity."""
        return cls(0.0)

    @classmethod
    def parse(cls: Type[Q], text: str) -> Q:
        """
        Parse '4 kV', '-3.5e-3 V' or '12mV'.

        Raises:
            ValueError: If text is not '<number> <unit>'
            UnsupportedUnit: If the unit is not registered for this kind
        """
        if not isinstance(text, str):
            raise ValueError(f"Cannot parse {type(text).__name__} as {cls.__name__}")
        match = _QUANTITY_RE.match(text)
        if not match:
            raise ValueError(f"Cannot parse quantity string: '{text}'")
        unit = cls.table().parse_unit(match.group(2))
        return cls.from_unit(float(match.group(1)), unit)

    @classmethod
    def units(cls) -> List[U]:
        return cls.table().units

    @classmethod
    def default_unit(cls) -> U:
        if cls.display_unit is not None:
            return cls.display_unit
        return cls.table().base_unit

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def try_convert(self, unit: U) -> ConversionResult:
        """
        Express this quantity in unit without raising.

        Returns:
            ConversionResult(value, True) on success, (0.0, False) if unit is
            not registered for this kind
        """
        table = self.table()
        if not table.supports(unit):
            return ConversionResult(0.0, False)
        return ConversionResult(table.from_base(self.base_value, unit), True)

    def convert(self, unit: U) -> float:
        """
        Express this quantity in unit.

        Raises:
            UnsupportedUnit: If unit is not registered for this kind
        """
        value, ok = self.try_convert(unit)
        if not ok:
            raise UnsupportedUnit(unit, self.table().kind)
        return value

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def to_string(self, unit: Optional[U] = None, precision: int = DISPLAY_PRECISION) -> str:
        """
        Render for humans, e.g. '12.34 V'. Lossy; never parse this back.

        Raises:
            UnsupportedUnit: If unit is given and not registered for this kind
        """
        if unit is None:
            unit = self.default_unit()
        symbol = self.table().default_abbreviation(unit)
        return f"{format_magnitude(self.convert(unit), precision)} {symbol}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.base_value!r})"

    def __format__(self, spec: str) -> str:
        if not spec:
            return str(self)
        symbol = self.table().default_abbreviation(self.default_unit())
        return f"{format(self.convert(self.default_unit()), spec)} {symbol}"

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def _same_kind(self, other: Any) -> bool:
        return type(other) is type(self)

    @staticmethod
    def _is_scalar(other: Any) -> bool:
        return isinstance(other, numbers.Real) and not isinstance(other, Quantity)

    def __neg__(self: Q) -> Q:
        return type(self)(-self.base_value)

    def __pos__(self: Q) -> Q:
        return self

    def __abs__(self: Q) -> Q:
        return type(self)(abs(self.base_value))

    def __add__(self: Q, other: Q) -> Q:
        if not self._same_kind(other):
            return NotImplemented
        return type(self)(self.base_value + other.base_value)

    def __sub__(self: Q, other: Q) -> Q:
        if not self._same_kind(other):
            return NotImplemented
        return type(self)(self.base_value - other.base_value)

    def __mul__(self: Q, other: float) -> Q:
        if not self._is_scalar(other):
            return NotImplemented
        return type(self)(self.base_value * float(other))

    __rmul__ = __mul__

    def __truediv__(self, other):
        """
        q / number -> same kind; q / q -> dimensionless float.

        Division by zero follows IEEE-754 (inf, -inf or nan) and never raises.
        """
        if self._same_kind(other):
            return _ieee_divide(self.base_value, other.base_value)
        if self._is_scalar(other):
            return type(self)(_ieee_divide(self.base_value, float(other)))
        return NotImplemented

    # -------------------------------------------------------------------------
    # Equality / ordering
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        if not self._same_kind(other):
            return False
        return self.base_value == other.base_value

    def __hash__(self) -> int:
        return hash(self.base_value)

    def __lt__(self, other: "Quantity") -> bool:
        if not self._same_kind(other):
            return NotImplemented
        return self.base_value < other.base_value

    def __le__(self, other: "Quantity") -> bool:
        if not self._same_kind(other):
            return NotImplemented
        return self.base_value <= other.base_value

    def __gt__(self, other: "Quantity") -> bool:
        if not self._same_kind(other):
            return NotImplemented
        return self.base_value > other.base_value

    def __ge__(self, other: "Quantity") -> bool:
        if not self._same_kind(other):
            return NotImplemented
        return self.base_value >= other.base_value

    def compare_to(self, other: "Quantity") -> int:
        """
        -1, 0 or 1 as self is less than, equal to or greater than other.

        Raises:
            TypeError: If other is not the same quantity kind
        """
        if not self._same_kind(other):
            raise TypeError(
                f"Expected {type(self).__name__}, got {type(other).__name__}"
            )
        return (self.base_value > other.base_value) - (self.base_value < other.base_value)
