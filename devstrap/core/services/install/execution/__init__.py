"""
L4 Execution — ``__init__.py`` re-exports all execution functions.

These functions WRITE: they run subprocesses, download files
and move files aside.
"""

from devstrap.core.services.install.execution.backup import (  # noqa: F401
    backup_file,
    backup_path_for,
)
from devstrap.core.services.install.execution.download import (  # noqa: F401
    cleanup_script,
    download_file,
    download_script,
    run_remote_script,
)
from devstrap.core.services.install.execution.subprocess_runner import (  # noqa: F401
    _run_subprocess,
)
