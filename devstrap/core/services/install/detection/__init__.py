"""
L3 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ system state but never WRITE.
"""

from devstrap.core.services.install.detection.presence import (  # noqa: F401
    _is_formula_installed,
    find_binary,
)
