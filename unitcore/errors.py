"""
unitcore Errors

Two failure kinds cover the whole library:

    UnsupportedUnit        a unit outside a kind's registered set was used
    InvalidConfiguration   a kind's unit table could not be built

Cross-kind arithmetic and comparison are not errors of this module: they
raise the built-in TypeError, exactly like mixing str and int.
"""

from typing import Any, Optional


class UnitError(Exception):
    """Base class for every error raised by unitcore."""
    pass


class UnsupportedUnit(UnitError, ValueError):
    """
    Raised when a unit is not registered for a quantity kind.

    Subclasses ValueError so callers that already guard unit lookups
    with ``except ValueError`` keep working.

    Attributes:
        unit: The offending unit (enum member or raw string)
        kind: Name of the quantity kind that rejected it, if known
    """

    def __init__(self, unit: Any, kind: Optional[str] = None, detail: str = ""):
        self.unit = unit
        self.kind = kind
        where = f" for {kind}" if kind else ""
        message = f"Unsupported unit{where}: {unit!s}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class InvalidConfiguration(UnitError):
    """
    Raised when a quantity kind's configuration is broken.

    Detected while a UnitTable is being built, never at call time:
    missing base unit, missing abbreviation, bad scale, or an affine
    (offset) transform where only linear ones are supported.
    """
    pass
