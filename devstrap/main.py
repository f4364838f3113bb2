"""
devstrap — CLI entrypoint.

Usage:
    devstrap                 # full setup (same as `devstrap init`)
    devstrap detect
    devstrap bootstrap
    python -m devstrap.main --help
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from devstrap import __version__
from devstrap.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    resolve_level,
    setup_logging,
)

_OUTCOME_STYLE = {
    "already-present": ("✓", "white"),
    "installed": ("⬇", "green"),
    "failed-non-fatal": ("⚠", "yellow"),
}

_DOTFILE_STYLE = {
    "installed": ("✓", "green"),
    "replaced": ("✓", "green"),
    "skipped": ("⊘", "yellow"),
    "failed": ("⚠", "yellow"),
}


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="devstrap")
@click.option("--verbose", "-v", is_flag=True, help="Show every step as it runs.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to devstrap.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """devstrap — provision a developer workstation."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(verbose=verbose, quiet=quiet, debug=debug),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(init)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def detect(as_json: bool) -> None:
    """Show the detected platform and package manager."""
    from devstrap.core.services.platform_resolver import UnsupportedPlatform, resolve_platform

    try:
        platform = resolve_platform()
    except UnsupportedPlatform as e:
        if as_json:
            click.echo(json.dumps({"ok": False, "error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"ok": True, "platform": platform.to_dict()}, indent=2))
        return

    click.secho(f"🖥  {platform.label()}", fg="cyan", bold=True)
    click.echo(f"   Package manager: {platform.manager.binary}")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def bootstrap(ctx: click.Context, as_json: bool) -> None:
    """Install core CLI tools and copy dotfiles."""
    from devstrap.core.use_cases.bootstrap import run_bootstrap

    result = run_bootstrap(
        ctx.obj.get("config_path"),
        prompts=_click_prompts(err=as_json),
    )
    _finish(ctx, result, as_json, title="Bootstrap")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def init(ctx: click.Context, as_json: bool) -> None:
    """Bootstrap, then install AIChat and Ollama."""
    from devstrap.core.use_cases.bootstrap import run_init

    result = run_init(
        ctx.obj.get("config_path"),
        prompts=_click_prompts(err=as_json),
    )
    _finish(ctx, result, as_json, title="Initialisation")


# ── Helpers ─────────────────────────────────────────────────────


def _click_prompts(*, err: bool):
    from devstrap.core.use_cases.bootstrap import Prompts

    return Prompts(
        confirm=lambda question, default: click.confirm(question, default=default, err=err),
        ask=lambda question, default: click.prompt(
            question, default=default, show_default=True, err=err,
        ),
    )


def _finish(ctx: click.Context, result, as_json: bool, *, title: str) -> None:
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.ok:
            sys.exit(1)
        return

    if not result.ok:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    quiet = ctx.obj.get("quiet", False)
    if not quiet:
        _render(result)

    if result.warnings:
        click.echo()
        click.secho(f"⚠️  {len(result.warnings)} step(s) need attention:", fg="yellow", bold=True)
        for warning in result.warnings:
            click.echo(f"   • {warning}")

    click.echo()
    click.secho(
        f"[✔] {title} complete. Restart your terminal or run 'exec zsh' to reload.",
        fg="green",
        bold=True,
    )
    if not quiet:
        click.echo(
            "    A Nerd Font is recommended for proper icon rendering "
            "(e.g. https://www.nerdfonts.com)."
        )


def _render(result) -> None:
    click.secho(f"\n🖥  {result.platform.label()}", fg="cyan", bold=True)

    sections = [
        ("Package manager", [result.manager] if result.manager else []),
        ("Core packages", result.packages),
        ("Tools", result.fallback_tools),
        ("AI tools", result.ai_tools),
    ]
    for label, items in sections:
        if not items:
            continue
        click.echo()
        click.secho(f"   {label}:", fg="white", bold=True)
        for r in items:
            icon, color = _OUTCOME_STYLE[r.outcome.value]
            via = f" via {r.method}" if r.method and r.outcome.value == "installed" else ""
            click.secho(f"     {icon} {r.name}", fg=color, nl=False)
            click.echo(f"  ({r.outcome.value}{via})")

    if result.dotfiles:
        click.echo()
        click.secho("   Dotfiles:", fg="white", bold=True)
        for d in result.dotfiles:
            icon, color = _DOTFILE_STYLE.get(d.action, ("?", "white"))
            click.secho(f"     {icon} {d.target}", fg=color, nl=False)
            backup = f", backup: {d.backup}" if d.backup else ""
            click.echo(f"  ({d.action}{backup})")


if __name__ == "__main__":
    cli()
