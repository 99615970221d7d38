"""
unitcore Built-in Quantity Kinds

One unit enum and one Quantity subclass per physical dimension. This module
is data: every kind shares the behaviour of unitcore.quantity.Quantity and
only declares its units here.

Non-SI factors come from scipy.constants (CODATA / NIST exact values).

Usage:
    >>> from unitcore.kinds import ElectricPotential, ElectricPotentialUnit
    >>> v = ElectricPotential.from_volts(5.0) + ElectricPotential.from_millivolts(2500)
    >>> str(v)
    '7.5 V'
    >>> v.convert(ElectricPotentialUnit.KILOVOLT)
    0.0075
"""

from enum import Enum

from scipy import constants

from unitcore.quantity import Quantity
from unitcore.table import UnitDef, UnitTable


# =============================================================================
# ELECTRIC POTENTIAL
# =============================================================================

class ElectricPotentialUnit(Enum):
    UNDEFINED = "undefined"
    MICROVOLT = "microvolt"
    MILLIVOLT = "millivolt"
    VOLT = "volt"
    KILOVOLT = "kilovolt"
    MEGAVOLT = "megavolt"


class ElectricPotential(Quantity[ElectricPotentialUnit]):
    """
    Electric potential: the potential energy per unit charge at a point.
    Base unit: volt.
    """

    unit_table = UnitTable.build(ElectricPotentialUnit.VOLT, [
        UnitDef(ElectricPotentialUnit.MICROVOLT, "uV", constants.micro, aliases=("µV", "μV")),
        UnitDef(ElectricPotentialUnit.MILLIVOLT, "mV", constants.milli),
        UnitDef(ElectricPotentialUnit.VOLT, "V", 1.0, aliases=("volts",)),
        UnitDef(ElectricPotentialUnit.KILOVOLT, "kV", constants.kilo),
        UnitDef(ElectricPotentialUnit.MEGAVOLT, "MV", constants.mega),
    ], kind="electric_potential")

    @classmethod
    def from_volts(cls, volts: float) -> "ElectricPotential":
        return cls.from_unit(volts, ElectricPotentialUnit.VOLT)

    @classmethod
    def from_millivolts(cls, millivolts: float) -> "ElectricPotential":
        return cls.from_unit(millivolts, ElectricPotentialUnit.MILLIVOLT)

    @classmethod
    def from_kilovolts(cls, kilovolts: float) -> "ElectricPotential":
        return cls.from_unit(kilovolts, ElectricPotentialUnit.KILOVOLT)

    @property
    def volts(self) -> float:
        return self.base_value

    @property
    def millivolts(self) -> float:
        return self.convert(ElectricPotentialUnit.MILLIVOLT)

    @property
    def kilovolts(self) -> float:
        return self.convert(ElectricPotentialUnit.KILOVOLT)


# =============================================================================
# ELECTRIC CURRENT
# =============================================================================

class ElectricCurrentUnit(Enum):
    UNDEFINED = "undefined"
    MICROAMPERE = "microampere"
    MILLIAMPERE = "milliampere"
    AMPERE = "ampere"
    KILOAMPERE = "kiloampere"


class ElectricCurrent(Quantity[ElectricCurrentUnit]):
    """Electric current. Base unit: ampere."""

    unit_table = UnitTable.build(ElectricCurrentUnit.AMPERE, [
        UnitDef(ElectricCurrentUnit.MICROAMPERE, "uA", constants.micro, aliases=("µA",)),
        UnitDef(ElectricCurrentUnit.MILLIAMPERE, "mA", constants.milli, aliases=("milliamp",)),
        UnitDef(ElectricCurrentUnit.AMPERE, "A", 1.0, aliases=("amp", "amps", "amperes")),
        UnitDef(ElectricCurrentUnit.KILOAMPERE, "kA", constants.kilo, aliases=("kiloamp",)),
    ], kind="electric_current")


# =============================================================================
# LENGTH
# =============================================================================

class LengthUnit(Enum):
    UNDEFINED = "undefined"
    NANOMETER = "nanometer"
    MICROMETER = "micrometer"
    MILLIMETER = "millimeter"
    CENTIMETER = "centimeter"
    METER = "meter"
    KILOMETER = "kilometer"
    INCH = "inch"
    FOOT = "foot"
    YARD = "yard"
    MILE = "mile"
    NAUTICAL_MILE = "nautical mile"


class Length(Quantity[LengthUnit]):
    """Length. Base unit: meter."""

    unit_table = UnitTable.build(LengthUnit.METER, [
        UnitDef(LengthUnit.NANOMETER, "nm", constants.nano),
        UnitDef(LengthUnit.MICROMETER, "um", constants.micro, aliases=("µm", "micron")),
        UnitDef(LengthUnit.MILLIMETER, "mm", constants.milli),
        UnitDef(LengthUnit.CENTIMETER, "cm", constants.centi),
        UnitDef(LengthUnit.METER, "m", 1.0, aliases=("meters", "metre")),
        UnitDef(LengthUnit.KILOMETER, "km", constants.kilo),
        UnitDef(LengthUnit.INCH, "in", constants.inch, aliases=("inches",)),
        UnitDef(LengthUnit.FOOT, "ft", constants.foot, aliases=("feet",)),
        UnitDef(LengthUnit.YARD, "yd", constants.yard, aliases=("yards",)),
        UnitDef(LengthUnit.MILE, "mi", constants.mile, aliases=("miles",)),
        UnitDef(LengthUnit.NAUTICAL_MILE, "nmi", constants.nautical_mile),
    ], kind="length")


# =============================================================================
# MASS
# =============================================================================

class MassUnit(Enum):
    UNDEFINED = "undefined"
    MILLIGRAM = "milligram"
    GRAM = "gram"
    KILOGRAM = "kilogram"
    TONNE = "tonne"
    OUNCE = "ounce"
    POUND = "pound"
    SHORT_TON = "short ton"


class Mass(Quantity[MassUnit]):
    """Mass. Base unit: kilogram."""

    unit_table = UnitTable.build(MassUnit.KILOGRAM, [
        UnitDef(MassUnit.MILLIGRAM, "mg", constants.milli * constants.gram),
        UnitDef(MassUnit.GRAM, "g", constants.gram, aliases=("grams",)),
        UnitDef(MassUnit.KILOGRAM, "kg", 1.0, aliases=("kilograms",)),
        UnitDef(MassUnit.TONNE, "t", constants.metric_ton, aliases=("metric ton",)),
        UnitDef(MassUnit.OUNCE, "oz", constants.ounce, aliases=("ounces",)),
        UnitDef(MassUnit.POUND, "lb", constants.pound, aliases=("lbs", "pounds")),
        UnitDef(MassUnit.SHORT_TON, "ton", constants.short_ton),
    ], kind="mass")


# =============================================================================
# DURATION
# =============================================================================

class DurationUnit(Enum):
    UNDEFINED = "undefined"
    NANOSECOND = "nanosecond"
    MICROSECOND = "microsecond"
    MILLISECOND = "millisecond"
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"


class Duration(Quantity[DurationUnit]):
    """Time interval. Base unit: second."""

    unit_table = UnitTable.build(DurationUnit.SECOND, [
        UnitDef(DurationUnit.NANOSECOND, "ns", constants.nano),
        UnitDef(DurationUnit.MICROSECOND, "us", constants.micro, aliases=("µs",)),
        UnitDef(DurationUnit.MILLISECOND, "ms", constants.milli),
        UnitDef(DurationUnit.SECOND, "s", 1.0, aliases=("sec", "seconds")),
        UnitDef(DurationUnit.MINUTE, "min", constants.minute, aliases=("minutes",)),
        UnitDef(DurationUnit.HOUR, "h", constants.hour, aliases=("hr", "hours")),
        UnitDef(DurationUnit.DAY, "d", constants.day, aliases=("days",)),
        UnitDef(DurationUnit.WEEK, "wk", constants.week, aliases=("weeks",)),
    ], kind="duration")


# =============================================================================
# PRESSURE
# =============================================================================

class PressureUnit(Enum):
    UNDEFINED = "undefined"
    PASCAL = "pascal"
    HECTOPASCAL = "hectopascal"
    KILOPASCAL = "kilopascal"
    MEGAPASCAL = "megapascal"
    MILLIBAR = "millibar"
    BAR = "bar"
    ATMOSPHERE = "atmosphere"
    TORR = "torr"
    MILLIMETER_OF_MERCURY = "millimeter of mercury"
    PSI = "pound per square inch"


class Pressure(Quantity[PressureUnit]):
    """Pressure / stress. Base unit: pascal."""

    unit_table = UnitTable.build(PressureUnit.PASCAL, [
        UnitDef(PressureUnit.PASCAL, "Pa", 1.0, aliases=("N/m2",)),
        UnitDef(PressureUnit.HECTOPASCAL, "hPa", constants.hecto),
        UnitDef(PressureUnit.KILOPASCAL, "kPa", constants.kilo),
        UnitDef(PressureUnit.MEGAPASCAL, "MPa", constants.mega),
        UnitDef(PressureUnit.MILLIBAR, "mbar", constants.milli * constants.bar),
        UnitDef(PressureUnit.BAR, "bar", constants.bar),
        UnitDef(PressureUnit.ATMOSPHERE, "atm", constants.atm),
        UnitDef(PressureUnit.TORR, "Torr", constants.torr),
        # conventional mercury column: 13595.1 kg/m3 under standard gravity, 1 mm high
        UnitDef(PressureUnit.MILLIMETER_OF_MERCURY, "mmHg", 13595.1 * constants.g * constants.milli),
        UnitDef(PressureUnit.PSI, "psi", constants.psi, aliases=("lbf/in2",)),
    ], kind="pressure")


# =============================================================================
# ENERGY
# =============================================================================

class EnergyUnit(Enum):
    UNDEFINED = "undefined"
    ELECTRONVOLT = "electronvolt"
    JOULE = "joule"
    KILOJOULE = "kilojoule"
    MEGAJOULE = "megajoule"
    CALORIE = "calorie"
    KILOCALORIE = "kilocalorie"
    WATT_HOUR = "watt hour"
    KILOWATT_HOUR = "kilowatt hour"
    BTU = "british thermal unit"


class Energy(Quantity[EnergyUnit]):
    """Energy / work / heat. Base unit: joule."""

    unit_table = UnitTable.build(EnergyUnit.JOULE, [
        UnitDef(EnergyUnit.ELECTRONVOLT, "eV", constants.eV),
        UnitDef(EnergyUnit.JOULE, "J", 1.0, aliases=("joules",)),
        UnitDef(EnergyUnit.KILOJOULE, "kJ", constants.kilo),
        UnitDef(EnergyUnit.MEGAJOULE, "MJ", constants.mega),
        UnitDef(EnergyUnit.CALORIE, "cal", constants.calorie),
        UnitDef(EnergyUnit.KILOCALORIE, "kcal", constants.kilo * constants.calorie),
        UnitDef(EnergyUnit.WATT_HOUR, "Wh", constants.hour),
        UnitDef(EnergyUnit.KILOWATT_HOUR, "kWh", constants.kilo * constants.hour),
        UnitDef(EnergyUnit.BTU, "BTU", constants.Btu, aliases=("Btu",)),
    ], kind="energy")


# =============================================================================
# POWER
# =============================================================================

class PowerUnit(Enum):
    UNDEFINED = "undefined"
    MILLIWATT = "milliwatt"
    WATT = "watt"
    KILOWATT = "kilowatt"
    MEGAWATT = "megawatt"
    HORSEPOWER = "horsepower"


class Power(Quantity[PowerUnit]):
    """Power. Base unit: watt."""

    unit_table = UnitTable.build(PowerUnit.WATT, [
        UnitDef(PowerUnit.MILLIWATT, "mW", constants.milli),
        UnitDef(PowerUnit.WATT, "W", 1.0, aliases=("watts",)),
        UnitDef(PowerUnit.KILOWATT, "kW", constants.kilo),
        UnitDef(PowerUnit.MEGAWATT, "MW", constants.mega),
        UnitDef(PowerUnit.HORSEPOWER, "hp", constants.hp),
    ], kind="power")


BUILTIN_KINDS = (
    ElectricPotential,
    ElectricCurrent,
    Length,
    Mass,
    Duration,
    Pressure,
    Energy,
    Power,
)

__all__ = [
    'ElectricPotential', 'ElectricPotentialUnit',
    'ElectricCurrent', 'ElectricCurrentUnit',
    'Length', 'LengthUnit',
    'Mass', 'MassUnit',
    'Duration', 'DurationUnit',
    'Pressure', 'PressureUnit',
    'Energy', 'EnergyUnit',
    'Power', 'PowerUnit',
    'BUILTIN_KINDS',
]
