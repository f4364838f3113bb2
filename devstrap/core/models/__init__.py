"""
Domain models — Pydantic types for the provisioner.

All models are re-exported here for convenient access:

    from devstrap.core.models import Platform, PackageSpec, EnvState
"""

from devstrap.core.models.config import DEFAULT_MODEL, BootstrapConfig
from devstrap.core.models.package import (
    EnvState,
    FallbackTool,
    InstallOutcome,
    InstallResult,
    PackageSpec,
)
from devstrap.core.models.platform import PackageManager, Platform

__all__ = [
    # config.py
    "BootstrapConfig",
    "DEFAULT_MODEL",
    # package.py
    "EnvState",
    "FallbackTool",
    "InstallOutcome",
    "InstallResult",
    "PackageSpec",
    # platform.py
    "PackageManager",
    "Platform",
]
