"""
unitcore Kind Loader

Builds quantity kinds from configuration instead of code. Each configured
kind gets its own unit enum and its own Quantity subclass, so kinds loaded
from a file are as distinct from each other as the built-in ones.

kinds.yaml:

    kinds:
      magnetic_flux_density:
        class_name: MagneticFluxDensity     # optional, default CamelCase of the key
        base_unit: tesla
        units:
          - {name: tesla, abbreviation: T, scale: 1.0}
          - {name: millitesla, abbreviation: mT, scale: 1.0e-3}
          - {name: gauss, abbreviation: G, scale: 1.0e-4, aliases: [Gs]}

Usage:
    >>> registry = load_kinds("kinds.yaml")
    >>> B = registry.get("magnetic_flux_density")
    >>> str(B.parse("2500 G"))
    '0.25 T'
"""

import logging
import math
import re
import types
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, Union

import yaml

from unitcore.config.validator import require_key, validate_kind
from unitcore.errors import InvalidConfiguration
from unitcore.quantity import Quantity
from unitcore.registry import KindRegistry
from unitcore.table import UNDEFINED, UnitDef, UnitTable

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _member_name(unit_name: str) -> str:
    """'watt hour' -> 'WATT_HOUR'"""
    return re.sub(r"[^0-9A-Za-z]+", "_", unit_name.strip()).strip("_").upper()


def _class_name(kind: str) -> str:
    """'electric_potential' -> 'ElectricPotential'"""
    return "".join(part.capitalize() for part in re.split(r"[^0-9A-Za-z]+", kind) if part)


def _number(value: Any, where: str, field: str) -> float:
    # YAML 1.1 reads 1e-3 (no dot) as a string, so numeric strings are accepted
    if isinstance(value, bool):
        raise InvalidConfiguration(f"{where}: {field} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidConfiguration(f"{where}: {field} must be a number, got {value!r}") from None
    if math.isnan(number):
        raise InvalidConfiguration(f"{where}: {field} must be a number, got {value!r}")
    return number


def _aliases(value: Any, where: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list) or not all(isinstance(a, str) for a in value):
        raise InvalidConfiguration(f"{where}: aliases must be a list of strings, got {value!r}")
    return tuple(value)


# =============================================================================
# KIND DEFINITION
# =============================================================================

def define_kind(
    kind: str,
    config: Dict[str, Any],
    config_path: Optional[Path] = None,
) -> Type[Quantity]:
    """
    Create a quantity kind from its configuration.

    Args:
        kind: Kind name (e.g., 'magnetic_flux_density')
        config: Mapping with base_unit, units and optional class_name
        config_path: Source file, for error messages

    Returns:
        A new Quantity subclass whose unit enum has one member per
        configured unit plus UNDEFINED

    Raises:
        InvalidConfiguration: If the configuration is incomplete or the
            resulting unit table breaks a table invariant
    """
    validate_kind(config, kind, config_path)

    class_name = str(config.get('class_name') or _class_name(kind))
    if not _IDENTIFIER_RE.match(class_name):
        raise InvalidConfiguration(f"{kind}: class_name '{class_name}' is not a valid identifier")

    base_name = str(require_key(config, 'base_unit', kind))

    members: List[Tuple[str, str]] = [(UNDEFINED, UNDEFINED.lower())]
    entries = []
    for unit_config in config['units']:
        unit_name = str(unit_config['name'])
        where = f"{kind}.{unit_name}"
        member = _member_name(unit_name)
        if not member or not _IDENTIFIER_RE.match(member):
            raise InvalidConfiguration(f"{where}: cannot derive an identifier from '{unit_name}'")
        if any(member == existing for existing, _ in members):
            raise InvalidConfiguration(
                f"{where}: name clashes with another unit (or the reserved {UNDEFINED})"
            )
        members.append((member, unit_name))
        entries.append((member, unit_config, where))

    if _member_name(base_name) not in {member for member, _, _ in entries}:
        raise InvalidConfiguration(
            f"{kind}: base unit '{base_name}' is not among the configured units "
            f"{[str(u['name']) for u in config['units']]}"
        )

    unit_enum = Enum(f"{class_name}Unit", members, module=__name__)

    defs = []
    for member, unit_config, where in entries:
        defs.append(UnitDef(
            unit=unit_enum[member],
            abbreviation=str(unit_config['abbreviation']),
            scale=_number(unit_config['scale'], where, 'scale'),
            name=str(unit_config['name']),
            aliases=_aliases(unit_config.get('aliases'), where),
            offset=_number(unit_config.get('offset', 0.0), where, 'offset'),
        ))

    table = UnitTable.build(unit_enum[_member_name(base_name)], defs, kind=kind)

    namespace = {
        'unit_table': table,
        'Unit': unit_enum,
        '__module__': __name__,
        '__doc__': f"{class_name} quantity loaded from configuration. Base unit: {base_name}.",
    }
    kind_cls = types.new_class(
        class_name, (Quantity[unit_enum],), exec_body=lambda ns: ns.update(namespace),
    )

    logger.debug("Defined kind %s (%s) with %d units", kind, class_name, len(defs))
    return kind_cls


# =============================================================================
# LOADING
# =============================================================================

def load_kinds(
    source: Union[str, Path, Mapping[str, Any]],
    registry: Optional[KindRegistry] = None,
) -> KindRegistry:
    """
    Load every kind of a kinds.yaml file (or an equivalent mapping).

    Args:
        source: Path to a YAML file, or an already parsed mapping
        registry: Registry to add the kinds to (default: a new, empty one)

    Returns:
        The registry holding the loaded kinds

    Raises:
        InvalidConfiguration: If the document or any kind is invalid, or a
            kind name is already registered. Nothing is added to registry
            unless every kind is valid.
        FileNotFoundError: If source is a path that does not exist
    """
    config_path = None
    if isinstance(source, (str, Path)):
        config_path = Path(source)
        with open(config_path) as f:
            document = yaml.safe_load(f) or {}
    else:
        document = source

    if not isinstance(document, Mapping):
        raise InvalidConfiguration(f"Kind configuration must be a mapping, got {type(document).__name__}")

    kinds = require_key(dict(document), 'kinds', str(config_path or '<mapping>'))
    if not isinstance(kinds, Mapping) or not kinds:
        raise InvalidConfiguration("'kinds' must be a non-empty mapping of kind name -> config")

    # Define every kind before touching the registry
    defined: Dict[str, Type[Quantity]] = {}
    for kind, kind_config in kinds.items():
        name = str(kind)
        if name in defined:
            raise InvalidConfiguration(f"Kind '{name}' is defined twice")
        defined[name] = define_kind(name, kind_config, config_path)

    registry = registry if registry is not None else KindRegistry()
    registry.register_many(defined)

    logger.info("Loaded %d kinds from %s: %s", len(kinds), config_path or '<mapping>', list(kinds))
    return registry
