"""
L0 Data — re-exports the install catalog and constants.
"""

from devstrap.core.services.install.data.catalog import (  # noqa: F401
    CORE_PACKAGES,
    FALLBACK_TOOLS,
)
from devstrap.core.services.install.data.constants import (  # noqa: F401
    HOMEBREW_INSTALL_URL,
    HOMEBREW_PREFIXES,
    LOCAL_BIN,
)
