"""
BootstrapConfig — optional user overrides loaded from devstrap.yml.

Every field has a default, so a missing file means "provision the
standard workstation". ``None`` for a list means "use the built-in
catalog"; an empty list means "install nothing from this group".
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator

from devstrap.core.models.package import FallbackTool, PackageSpec

DEFAULT_MODEL = "qwen3:8b"


class BootstrapConfig(BaseModel):
    """User configuration for a provisioning run."""

    packages: list[PackageSpec] | None = None
    fallback_tools: list[FallbackTool] | None = None
    dotfiles_dir: str | None = None
    ai_tools: bool = True
    default_model: str = DEFAULT_MODEL

    @field_validator("packages", mode="before")
    @classmethod
    def _names_as_specs(cls, value: Any) -> Any:
        """Allow plain names: ``packages: [zsh, fzf]``."""
        if isinstance(value, list):
            return [{"name": v} if isinstance(v, str) else v for v in value]
        return value

    @field_validator("default_model")
    @classmethod
    def _model_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("default_model must not be empty")
        return value
