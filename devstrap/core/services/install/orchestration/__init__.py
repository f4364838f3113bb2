"""
L5 Orchestration — re-exports the top-level install coordinators.
"""

from devstrap.core.services.install.orchestration.orchestrator import (  # noqa: F401
    bootstrap_homebrew,
    ensure_installed,
    install_fallback_tools,
    install_packages,
    run_fallback_chain,
)
