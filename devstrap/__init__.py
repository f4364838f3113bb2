"""devstrap — provision a developer workstation."""

__version__ = "0.1.0"
