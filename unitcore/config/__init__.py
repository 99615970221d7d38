"""Kind configuration: validation and loading of YAML unit tables."""
from .validator import REQUIRED_FIELDS, require_key, validate_kind, validate_required
from .loader import define_kind, load_kinds

__all__ = [
    'REQUIRED_FIELDS', 'require_key', 'validate_kind', 'validate_required',
    'define_kind', 'load_kinds',
]
