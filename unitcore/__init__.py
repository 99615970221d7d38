"""
unitcore - Unit-Aware Quantities
================================

Type-safe physical quantities with unit conversion.

    VALUE + UNIT IN → BASE VALUE → ANY UNIT OUT

Architecture:
    - table:    UnitTable, per-kind unit registry (scale to base)
    - quantity: Quantity, immutable value stored in the base unit
    - kinds:    Built-in kinds (ElectricPotential, Length, Pressure, ...)
    - registry: Name -> kind lookup
    - config/:  Kinds defined in kinds.yaml
    - frames:   numpy / polars vectorised conversion

Usage:
    from unitcore import ElectricPotential, ElectricPotentialUnit

    v = ElectricPotential.from_unit(5.0, ElectricPotentialUnit.VOLT)
    print(v + ElectricPotential.parse("2500 mV"))   # 7.5 V
"""

__version__ = "1.0.0"

from .errors import InvalidConfiguration, UnitError, UnsupportedUnit
from .table import UNDEFINED, UnitDef, UnitTable
from .quantity import ConversionResult, Quantity, format_magnitude
from .kinds import *  # noqa: F401,F403
from .kinds import __all__ as _kinds_all
from .registry import KindRegistry, default_registry

__all__ = [
    'UnitError', 'UnsupportedUnit', 'InvalidConfiguration',
    'UNDEFINED', 'UnitDef', 'UnitTable',
    'Quantity', 'ConversionResult', 'format_magnitude',
    'KindRegistry', 'default_registry',
    '__version__',
] + list(_kinds_all)
