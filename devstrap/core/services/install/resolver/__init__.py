"""
L2 Resolver — ``__init__.py`` re-exports command-building functions.
"""

from devstrap.core.services.install.resolver.method_selection import (  # noqa: F401
    _build_pkg_install_cmd,
    _build_refresh_cmd,
    _needs_sudo,
)
