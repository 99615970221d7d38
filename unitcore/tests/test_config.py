"""
Test Kind Configuration
=======================
"""

import pytest

KINDS_YAML = """
kinds:
  magnetic_flux_density:
    base_unit: tesla
    units:
      - {name: tesla, abbreviation: T, scale: 1.0}
      - {name: millitesla, abbreviation: mT, scale: 1.0e-3}
      - {name: gauss, abbreviation: G, scale: 1e-4, aliases: [Gs]}
  angle:
    class_name: PlaneAngle
    base_unit: radian
    units:
      - name: radian
        abbreviation: rad
        scale: 1
      - name: degree
        abbreviation: deg
        scale: 0.017453292519943295
"""


def _flux(**overrides):
    config = {
        'base_unit': 'tesla',
        'units': [
            {'name': 'tesla', 'abbreviation': 'T', 'scale': 1.0},
            {'name': 'gauss', 'abbreviation': 'G', 'scale': 1e-4},
        ],
    }
    config.update(overrides)
    return config


def test_load_from_yaml(tmp_path):
    """Kinds from a file parse, convert and print like built-in ones."""
    from unitcore.config import load_kinds
    from unitcore.quantity import Quantity

    path = tmp_path / "kinds.yaml"
    path.write_text(KINDS_YAML)

    registry = load_kinds(path)
    B = registry.get("magnetic_flux_density")

    assert registry.names() == ["angle", "magnetic_flux_density"]
    assert B.__name__ == "MagneticFluxDensity"
    assert issubclass(B, Quantity)
    assert str(B.parse("2500 G")) == "0.25 T"
    assert B.parse("3 Gs") == B.from_unit(3, B.Unit.GAUSS)
    assert B.parse("10 mT").convert(B.Unit.GAUSS) == pytest.approx(100.0)
    assert not B.table().supports(B.Unit.UNDEFINED)


def test_class_name_override(tmp_path):
    from unitcore.config import load_kinds

    path = tmp_path / "kinds.yaml"
    path.write_text(KINDS_YAML)

    angle = load_kinds(str(path)).get("angle")

    assert angle.__name__ == "PlaneAngle"
    assert str(angle.parse("180 deg")) == "3.14 rad"


def test_loaded_kinds_are_distinct():
    """Two configured kinds cannot be mixed, nor mixed with a built-in."""
    from unitcore.config import load_kinds
    from unitcore.kinds import Length

    registry = load_kinds({'kinds': {'flux': _flux(), 'other_flux': _flux()}})
    a = registry.get("flux")(1.0)
    b = registry.get("other_flux")(1.0)

    with pytest.raises(TypeError):
        a + b
    with pytest.raises(TypeError):
        a + Length(1.0)
    assert a != b


def test_load_into_existing_registry():
    from unitcore.config import load_kinds
    from unitcore.errors import InvalidConfiguration
    from unitcore.registry import KindRegistry

    registry = KindRegistry.with_builtins()
    load_kinds({'kinds': {'flux': _flux()}}, registry)

    assert "flux" in registry and "length" in registry

    with pytest.raises(InvalidConfiguration, match="already registered"):
        load_kinds({'kinds': {'length': _flux()}}, registry)


def test_failed_load_registers_nothing():
    """A fatal error in any kind leaves the target registry untouched."""
    from unitcore.config import load_kinds
    from unitcore.errors import InvalidConfiguration
    from unitcore.registry import KindRegistry

    broken = _flux(units=[{'name': 'tesla', 'abbreviation': 'T', 'scale': 2.0}])

    registry = KindRegistry()
    with pytest.raises(InvalidConfiguration):
        load_kinds({'kinds': {'flux': _flux(), 'broken': broken}}, registry)
    assert registry.names() == []

    registry = KindRegistry.with_builtins()
    before = registry.names()
    with pytest.raises(InvalidConfiguration, match="already registered"):
        load_kinds({'kinds': {'flux': _flux(), 'length': _flux()}}, registry)
    assert registry.names() == before


def test_register_many_is_all_or_nothing():
    from unitcore.config import define_kind
    from unitcore.errors import InvalidConfiguration
    from unitcore.kinds import Length
    from unitcore.registry import KindRegistry

    flux = define_kind("flux", _flux())
    registry = KindRegistry()
    registry.register(Length)

    with pytest.raises(InvalidConfiguration):
        registry.register_many({'flux': flux, 'length': flux})
    with pytest.raises(InvalidConfiguration):
        registry.register_many({'flux': flux, 'junk': float})
    assert registry.names() == ["length"]

    registry.register_many({'flux': flux, 'length': Length})
    assert registry.names() == ["flux", "length"]


def test_define_kind_enum():
    from unitcore.config import define_kind

    kind = define_kind("flux", _flux())

    assert [u.name for u in kind.Unit] == ["UNDEFINED", "TESLA", "GAUSS"]
    assert kind.table().base_unit is kind.Unit.TESLA
    assert kind.table().kind == "flux"


# =============================================================================
# INVALID CONFIGURATION
# =============================================================================

@pytest.mark.parametrize("config,message", [
    (_flux(base_unit=None), "base_unit"),
    (_flux(units=[]), "non-empty"),
    (_flux(units="tesla"), "non-empty"),
    (_flux(base_unit="weber"), "not among"),
    (_flux(units=[{'name': 'tesla', 'scale': 1.0}]), "abbreviation"),
    (_flux(units=[{'name': 'tesla', 'abbreviation': 'T'}]), "scale"),
    (_flux(units=[{'name': 'tesla', 'abbreviation': 'T', 'scale': 1.0},
                  {'name': 'gauss', 'abbreviation': 'G', 'scale': 0}]), "positive"),
    (_flux(units=[{'name': 'tesla', 'abbreviation': 'T', 'scale': 1.0},
                  {'name': 'gauss', 'abbreviation': 'G', 'scale': True}]), "number"),
    (_flux(units=[{'name': 'tesla', 'abbreviation': 'T', 'scale': 1.0},
                  {'name': 'gauss', 'abbreviation': 'G', 'scale': 'lots'}]), "number"),
    (_flux(units=[{'name': 'tesla', 'abbreviation': 'T', 'scale': 2.0}]), "scale 1"),
    (_flux(units=[{'name': 'tesla', 'abbreviation': 'T', 'scale': 1.0},
                  {'name': 'Tesla', 'abbreviation': 'T2', 'scale': 1.0}]), "clashes"),
    (_flux(units=[{'name': 'tesla', 'abbreviation': 'T', 'scale': 1.0},
                  {'name': 'undefined', 'abbreviation': '?', 'scale': 1.0}]), "clashes"),
    (_flux(units=[{'name': 'tesla', 'abbreviation': 'T', 'scale': 1.0},
                  {'name': 'gauss', 'abbreviation': 'T', 'scale': 1e-4}]), "names both"),
    (_flux(units=[{'name': 'tesla', 'abbreviation': 'T', 'scale': 1.0},
                  {'name': 'gauss', 'abbreviation': 'G', 'scale': 1e-4, 'offset': 5}]), "offset"),
    (_flux(units=[{'name': 'tesla', 'abbreviation': 'T', 'scale': 1.0},
                  {'name': '2nd', 'abbreviation': 'G', 'scale': 1e-4}]), "identifier"),
    (_flux(units=["tesla"]), "mapping"),
    (_flux(class_name="not valid"), "identifier"),
])
def test_invalid_kind(config, message):
    from unitcore.config import define_kind
    from unitcore.errors import InvalidConfiguration

    with pytest.raises(InvalidConfiguration, match=message):
        define_kind("flux", config)


def test_document_shape():
    from unitcore.config import load_kinds
    from unitcore.errors import InvalidConfiguration

    with pytest.raises(InvalidConfiguration, match="kinds"):
        load_kinds({'units': {}})
    with pytest.raises(InvalidConfiguration, match="non-empty"):
        load_kinds({'kinds': {}})
    with pytest.raises(InvalidConfiguration, match="mapping"):
        load_kinds([1, 2, 3])


def test_empty_file(tmp_path):
    from unitcore.config import load_kinds
    from unitcore.errors import InvalidConfiguration

    path = tmp_path / "kinds.yaml"
    path.write_text("")

    with pytest.raises(InvalidConfiguration):
        load_kinds(path)


def test_missing_file(tmp_path):
    from unitcore.config import load_kinds

    with pytest.raises(FileNotFoundError):
        load_kinds(tmp_path / "missing.yaml")


def test_require_key():
    from unitcore.config import require_key
    from unitcore.errors import InvalidConfiguration

    assert require_key({'scale': 2.0}, 'scale') == 2.0
    with pytest.raises(InvalidConfiguration, match="REQUIRED"):
        require_key({'scale': None}, 'scale', 'flux.gauss')


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
