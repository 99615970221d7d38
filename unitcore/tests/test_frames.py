"""
Test Vectorised Conversion
==========================
"""

import numpy as np
import polars as pl
import pytest


def test_array_conversion():
    from unitcore.frames import convert_array, from_base_array, to_base_array
    from unitcore.kinds import ElectricPotential, ElectricPotentialUnit as EP

    base = to_base_array([1, 2, 2500], EP.MILLIVOLT, ElectricPotential)

    assert base.dtype == np.float64
    np.testing.assert_allclose(base, [0.001, 0.002, 2.5])
    np.testing.assert_allclose(from_base_array(base, EP.MILLIVOLT, ElectricPotential), [1, 2, 2500])
    np.testing.assert_allclose(
        convert_array(np.array([1.5, -2.0]), EP.KILOVOLT, EP.VOLT, ElectricPotential),
        [1500.0, -2000.0],
    )


def test_array_conversion_matches_scalar_path():
    from unitcore.frames import convert_array
    from unitcore.kinds import Length, LengthUnit

    values = np.linspace(-10, 10, 21)
    expected = [Length.from_unit(v, LengthUnit.MILE).convert(LengthUnit.FOOT) for v in values]

    np.testing.assert_allclose(convert_array(values, LengthUnit.MILE, LengthUnit.FOOT, Length), expected)


def test_array_unsupported_unit():
    from unitcore.errors import UnsupportedUnit
    from unitcore.frames import to_base_array
    from unitcore.kinds import ElectricPotential, ElectricPotentialUnit as EP, LengthUnit

    with pytest.raises(UnsupportedUnit):
        to_base_array([1.0], EP.UNDEFINED, ElectricPotential)
    with pytest.raises(UnsupportedUnit):
        to_base_array([1.0], LengthUnit.METER, ElectricPotential)


def test_normalize_frame():
    """Each row is rescaled by its own unit; other columns pass through."""
    from unitcore.frames import normalize_frame
    from unitcore.kinds import ElectricPotential

    df = pl.DataFrame({
        'entity_id': ['unit_1', 'unit_1', 'unit_2', 'unit_2'],
        'signal_id': ['bus', 'bus', 'bus', 'bus'],
        'I': [0, 1, 0, 1],
        'y': [2500, 3, 1.5, 12],
        'unit': ['mV', 'V', 'kV', 'volts'],
    })

    out = normalize_frame(df, ElectricPotential)

    assert out.columns == df.columns
    assert out['unit'].to_list() == ['V'] * 4
    assert out['y'].dtype == pl.Float64
    np.testing.assert_allclose(out['y'].to_numpy(), [2.5, 3.0, 1500.0, 12.0])
    assert out['entity_id'].to_list() == df['entity_id'].to_list()
    assert out['I'].to_list() == [0, 1, 0, 1]


def test_normalize_frame_custom_columns():
    from unitcore.frames import normalize_frame
    from unitcore.kinds import Pressure

    df = pl.DataFrame({'value': [1.0, 2.0], 'units': ['bar', 'psi']})

    out = normalize_frame(df, Pressure, value_col='value', unit_col='units')

    np.testing.assert_allclose(out['value'].to_numpy(), [100000.0, 13789.514586336721])
    assert out['units'].to_list() == ['Pa', 'Pa']


def test_normalize_frame_unknown_units():
    """Every unrecognised unit string is named in the error."""
    from unitcore.errors import UnsupportedUnit
    from unitcore.frames import normalize_frame
    from unitcore.kinds import ElectricPotential

    df = pl.DataFrame({'y': [1.0, 2.0, 3.0], 'unit': ['V', 'psi', 'parsec']})

    with pytest.raises(UnsupportedUnit) as excinfo:
        normalize_frame(df, ElectricPotential)

    message = str(excinfo.value)
    assert "psi" in message and "parsec" in message
    assert excinfo.value.kind == "electric_potential"


def test_normalize_frame_null_unit():
    from unitcore.errors import UnsupportedUnit
    from unitcore.frames import normalize_frame
    from unitcore.kinds import ElectricPotential

    df = pl.DataFrame({'y': [1.0, 2.0], 'unit': ['V', None]})

    with pytest.raises(UnsupportedUnit, match="None"):
        normalize_frame(df, ElectricPotential)


def test_normalize_frame_missing_columns():
    from unitcore.frames import normalize_frame
    from unitcore.kinds import ElectricPotential

    with pytest.raises(ValueError, match="missing"):
        normalize_frame(pl.DataFrame({'y': [1.0]}), ElectricPotential)


def test_normalize_empty_frame():
    from unitcore.frames import normalize_frame
    from unitcore.kinds import ElectricPotential

    df = pl.DataFrame(schema={'y': pl.Int64, 'unit': pl.Utf8})

    out = normalize_frame(df, ElectricPotential)

    assert out.height == 0
    assert out['y'].dtype == pl.Float64


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
