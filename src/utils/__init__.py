"""
Utility functions for the reveal section core
"""

from .colors import (
    parse_hex,
    parse_functional,
    hsl_to_rgb,
    coerce_rgb_triple,
)

__all__ = [
    'parse_hex',
    'parse_functional',
    'hsl_to_rgb',
    'coerce_rgb_triple',
]
