"""
unitcore CLI

Inspect the registered kinds and convert quantities from the shell.

Usage:
    python -m unitcore.run --list
    python -m unitcore.run --kind pressure --units
    python -m unitcore.run --kind electric_potential --convert "5 kV" --to mV
    python -m unitcore.run --config kinds.yaml --list
"""

import argparse
import logging
import sys

import yaml

from unitcore.config.loader import load_kinds
from unitcore.errors import InvalidConfiguration, UnsupportedUnit
from unitcore.registry import KindRegistry

logger = logging.getLogger(__name__)


def print_kinds(registry: KindRegistry) -> None:
    print("\nRegistered kinds")
    print("=" * 60)
    for name in registry:
        table = registry.get(name).table()
        base = table.default_abbreviation(table.base_unit)
        print(f"  {name:24} base={base:6} {len(table)} units")
    print("=" * 60)


def print_units(registry: KindRegistry, name: str) -> None:
    table = registry.get(name).table()
    print(f"\n{name}")
    print("=" * 60)
    for unit in table:
        definition = table.definition(unit)
        marker = "*" if unit is table.base_unit else " "
        print(f" {marker} {definition.abbreviation:8} {definition.long_name:24} x {definition.scale!r}")
    print("=" * 60)


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format='%(message)s')

    parser = argparse.ArgumentParser(description="unitcore unit converter")
    parser.add_argument("--config", help="kinds.yaml with extra kinds to register")
    parser.add_argument("--list", action="store_true", help="List kinds")
    parser.add_argument("--kind", help="Kind name (e.g., electric_potential)")
    parser.add_argument("--units", action="store_true", help="List the units of --kind")
    parser.add_argument("--convert", metavar="QUANTITY", help="Quantity to convert, e.g. '5 kV'")
    parser.add_argument("--to", metavar="UNIT", help="Target unit (default: base unit)")

    args = parser.parse_args(argv)

    if not (args.list or args.units or args.convert):
        parser.error("one of --list, --units or --convert is required")
    if (args.units or args.convert) and not args.kind:
        parser.error("--kind is required with --units and --convert")

    try:
        registry = KindRegistry.with_builtins()
        if args.config:
            load_kinds(args.config, registry)

        if args.list:
            print_kinds(registry)
        if args.units:
            print_units(registry, args.kind)
        if args.convert:
            kind_cls = registry.get(args.kind)
            quantity = kind_cls.parse(args.convert)
            target = kind_cls.table().parse_unit(args.to) if args.to else None
            print(f"{args.convert.strip()} = {quantity.to_string(target)}")
    except (InvalidConfiguration, UnsupportedUnit, KeyError, ValueError, OSError, yaml.YAMLError) as e:
        logger.error("Error: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
