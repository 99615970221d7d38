"""
unitcore/frames.py - Vectorised conversion

Pure functions, no I/O. Rescales whole arrays and observation frames with a
kind's unit table instead of boxing every value in a Quantity.

Observation frames follow the canonical long schema:

    entity_id | signal_id | I | y | unit

normalize_frame() rewrites y into the kind's base unit, row by row, using
each row's unit string.
"""

from typing import Any, Dict, List, Type

import numpy as np
import polars as pl

from unitcore.errors import UnsupportedUnit
from unitcore.quantity import Quantity


def to_base_array(values: Any, unit: Any, kind: Type[Quantity]) -> np.ndarray:
    """
    Express values given in unit in the kind's base unit.

    Args:
        values: Array-like of numbers
        unit: A unit registered for kind
        kind: Quantity subclass (e.g., ElectricPotential)

    Returns:
        float64 array of base values

    Raises:
        UnsupportedUnit: If unit is not registered for kind
    """
    scale = kind.table().scale_to_base(unit)
    return np.asarray(values, dtype=np.float64) * scale


def from_base_array(values: Any, unit: Any, kind: Type[Quantity]) -> np.ndarray:
    """Express base-unit values in unit. Inverse of to_base_array()."""
    scale = kind.table().scale_to_base(unit)
    return np.asarray(values, dtype=np.float64) / scale


def convert_array(values: Any, from_unit: Any, to_unit: Any, kind: Type[Quantity]) -> np.ndarray:
    """Convert values between two units of the same kind, via the base unit."""
    return from_base_array(to_base_array(values, from_unit, kind), to_unit, kind)


def _unit_scales(texts: List[Any], kind: Type[Quantity]) -> Dict[str, float]:
    table = kind.table()
    scales: Dict[str, float] = {}
    unknown = []
    for text in texts:
        try:
            scales[text] = table.scale_to_base(table.parse_unit(text))
        except UnsupportedUnit:
            unknown.append(text)
    if unknown:
        raise UnsupportedUnit(
            ", ".join(repr(t) for t in sorted(unknown, key=str)),
            table.kind,
            f"{len(unknown)} unit string(s) in the frame",
        )
    return scales


def normalize_frame(
    df: pl.DataFrame,
    kind: Type[Quantity],
    value_col: str = "y",
    unit_col: str = "unit",
) -> pl.DataFrame:
    """
    Rescale an observation frame into the kind's base unit.

    Args:
        df: Frame with a numeric value column and a string unit column
        kind: Quantity subclass the values belong to
        value_col: Value column (default 'y')
        unit_col: Unit column (default 'unit')

    Returns:
        Frame with value_col as Float64 in the base unit and unit_col set to
        the base unit's abbreviation. Other columns are untouched.

    Raises:
        ValueError: If value_col or unit_col is missing
        UnsupportedUnit: If any unit string (or a null unit) is not
            recognised for kind; the message lists every offending string
    """
    missing = [c for c in (value_col, unit_col) if c not in df.columns]
    if missing:
        raise ValueError(f"Frame is missing required columns: {missing}. Got: {df.columns}")

    table = kind.table()
    base_symbol = table.default_abbreviation(table.base_unit)

    if df.height == 0:
        return df.with_columns(
            pl.col(value_col).cast(pl.Float64),
            pl.col(unit_col).cast(pl.Utf8),
        )

    scales = _unit_scales(df[unit_col].unique().to_list(), kind)

    return df.with_columns(
        (
            pl.col(value_col).cast(pl.Float64)
            * pl.col(unit_col).replace_strict(scales, return_dtype=pl.Float64)
        ).alias(value_col),
        pl.lit(base_symbol).alias(unit_col),
    )
