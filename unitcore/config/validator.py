"""
unitcore Configuration Validator

Every unit of a configured kind must spell out its name, abbreviation and
scale. Nothing is defaulted: a kind that cannot be validated is rejected at
load time, never patched up at conversion time.

Usage:
    from unitcore.config.validator import validate_required, require_key

    validate_required(kind_config, ['base_unit', 'units'], 'electric_potential', path)
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from unitcore.errors import InvalidConfiguration


# Required fields per configuration level
REQUIRED_FIELDS = {
    'kind': [
        'base_unit',
        'units',
    ],
    'unit': [
        'name',
        'abbreviation',
        'scale',
    ],
}


def validate_required(
    config: Dict[str, Any],
    required_keys: List[str],
    where: str,
    config_path: Optional[Path] = None,
) -> None:
    """
    Validate that all required configuration keys are present.

    Args:
        config: Configuration mapping for one kind or one unit
        required_keys: Keys that must be present and not None
        where: Kind (and unit) being validated, for the error message
        config_path: Path to the config file, for the error message

    Raises:
        InvalidConfiguration: If config is not a mapping, or any required
            key is missing or None
    """
    location = f"File: {config_path}\n" if config_path else ""

    if not isinstance(config, dict):
        raise InvalidConfiguration(
            f"\n{'='*60}\n"
            f"CONFIGURATION ERROR: expected a mapping\n"
            f"{'='*60}\n"
            f"{location}"
            f"Entry: {where}\n"
            f"Got {type(config).__name__}: {config!r}\n"
            f"{'='*60}"
        )

    missing = [key for key in required_keys if key not in config or config[key] is None]

    if missing:
        raise InvalidConfiguration(
            f"\n{'='*60}\n"
            f"CONFIGURATION ERROR: Missing required fields\n"
            f"{'='*60}\n"
            f"{location}"
            f"Entry: {where}\n\n"
            f"Missing fields:\n"
            f"{''.join(f'  - {k}' + chr(10) for k in missing)}\n"
            f"Unit tables have no defaults.\n"
            f"Add to your kinds.yaml:\n"
            f"{''.join(f'  {k}: <value>' + chr(10) for k in missing)}"
            f"{'='*60}"
        )


def validate_kind(config: Dict[str, Any], kind: str, config_path: Optional[Path] = None) -> None:
    """
    Validate one kind's configuration and each of its unit entries.

    Raises:
        InvalidConfiguration: If the kind or any unit entry is incomplete,
            or units is not a non-empty list
    """
    validate_required(config, REQUIRED_FIELDS['kind'], kind, config_path)

    units = config['units']
    if not isinstance(units, list) or not units:
        raise InvalidConfiguration(
            f"{kind}: 'units' must be a non-empty list of unit entries, got {units!r}"
        )

    for index, unit in enumerate(units):
        name = unit.get('name', f'#{index}') if isinstance(unit, dict) else f'#{index}'
        validate_required(unit, REQUIRED_FIELDS['unit'], f"{kind}.{name}", config_path)


def require_key(config: Dict[str, Any], key: str, where: str = "") -> Any:
    """
    Get a required configuration value.

    Unlike dict.get(), this NEVER returns a default value.

    Raises:
        InvalidConfiguration: If key is missing or None
    """
    if key not in config or config[key] is None:
        raise InvalidConfiguration(
            f"\n{'='*60}\n"
            f"CONFIGURATION ERROR: {key} not set\n"
            f"{'='*60}\n"
            f"Entry: {where}\n\n"
            f"{key} is REQUIRED.\n"
            f"Set it in your kinds.yaml:\n\n"
            f"  {key}: <value>\n\n"
            f"{'='*60}"
        )

    return config[key]
