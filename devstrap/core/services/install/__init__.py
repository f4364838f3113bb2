"""
Install service — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate onion layer (data → resolver → detection → execution →
orchestration)::

    from devstrap.core.services.install import ensure_installed
"""

# ── L0: Data ──
from devstrap.core.services.install.data.catalog import (  # noqa: F401
    CORE_PACKAGES,
    FALLBACK_TOOLS,
)

# ── L3: Detection ──
from devstrap.core.services.install.detection.presence import (  # noqa: F401
    find_binary,
)

# ── L4: Execution ──
from devstrap.core.services.install.execution.download import (  # noqa: F401
    download_file,
    run_remote_script,
)

# ── L5: Orchestration ──
from devstrap.core.services.install.orchestration.orchestrator import (  # noqa: F401
    bootstrap_homebrew,
    ensure_installed,
    install_fallback_tools,
    install_packages,
    run_fallback_chain,
)
