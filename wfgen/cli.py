"""CLI entry point for wfgen, built on cli-core-yo.

Provides ``generate``, ``check``, and ``services`` commands for rendering
GitHub Actions workflows from Terraform bootstrap outputs.

Usage::

    wfgen --help
    wfgen generate
    wfgen generate --bootstrap-dir infra/bootstrap --dry-run
    wfgen check --workflows-dir .github/workflows
    wfgen services --backend-dir backend
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Optional

import typer
from cli_core_yo import output
from cli_core_yo.app import create_app
from cli_core_yo.runtime import _reset, initialize
from cli_core_yo.spec import CliSpec, XdgSpec

if TYPE_CHECKING:
    from wfgen.config.models import GeneratorSettings

# ── App specification ────────────────────────────────────────────────────────

spec = CliSpec(
    prog_name="wfgen",
    app_display_name="Workflow Generator",
    dist_name="wfgen",
    root_help=(
        "Generate GitHub Actions workflows from Terraform bootstrap outputs."
    ),
    xdg=XdgSpec(app_dir_name="wfgen"),
)

app = create_app(spec)


# ── Root callback (global options) ───────────────────────────────────────────


@app.callback()
def _root_callback(
    json_flag: bool = typer.Option(
        False, "--json", "-j", help="Output as JSON."
    ),
) -> None:
    """Workflow generator."""
    _reset()
    debug = os.environ.get("CLI_CORE_YO_DEBUG") == "1"
    xdg_paths = app._cli_core_yo_xdg_paths  # type: ignore[attr-defined]
    initialize(spec, xdg_paths, json_mode=json_flag, debug=debug)


# ── Shared option definitions ────────────────────────────────────────────────

_BOOTSTRAP_DIR = typer.Option(
    None,
    "--bootstrap-dir",
    help="Terraform bootstrap directory. Default: bootstrap",
)
_WORKFLOWS_DIR = typer.Option(
    None,
    "--workflows-dir",
    help="Output directory for workflows. Default: .github/workflows",
)
_BACKEND_DIR = typer.Option(
    None,
    "--backend-dir",
    help="Directory holding one subdirectory per service. Default: backend",
)
_CONFIG = typer.Option(
    None,
    "--config",
    help="Path to a settings YAML. Default: wfgen.yaml if present.",
)
_DEBUG = typer.Option(
    False,
    "--debug",
    help="Enable debug output.",
)


def _settings_or_exit(
    config: Optional[str], **overrides: Optional[str]
) -> GeneratorSettings:
    """Load settings, turning a bad settings file into a CLI error."""
    from wfgen.config.settings import load_settings

    try:
        return load_settings(config, **overrides)
    except (FileNotFoundError, ValueError) as exc:
        output.error(f"Invalid settings: {exc}")
        raise typer.Exit(2) from exc


def _enable_debug(debug: bool) -> None:
    if debug:
        logging.basicConfig(level=logging.DEBUG)
        logging.getLogger("wfgen").setLevel(logging.DEBUG)


# ── generate command ─────────────────────────────────────────────────────────


@app.command()
def generate(
    bootstrap_dir: Optional[str] = _BOOTSTRAP_DIR,
    workflows_dir: Optional[str] = _WORKFLOWS_DIR,
    backend_dir: Optional[str] = _BACKEND_DIR,
    config: Optional[str] = _CONFIG,
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Render in memory and list the files without writing them.",
    ),
    debug: bool = _DEBUG,
) -> None:
    """Generate workflows for the enabled compute targets.

    Always writes terraform-plan.yml; writes a dev/prod pair for each of
    Lambda, App Runner and EKS when enabled in the bootstrap summary.

    Exit codes: 0 = success, 1 = bootstrap not applied, 2 = missing
    required output, 4 = terraform not found, 5 = write failure.
    """
    from wfgen.workflow.generate import run_generate

    _enable_debug(debug)
    settings = _settings_or_exit(
        config,
        bootstrap_dir=bootstrap_dir,
        workflows_dir=workflows_dir,
        backend_dir=backend_dir,
    )

    output.action("Generating GitHub Actions workflows ...")
    rc = run_generate(settings, dry_run=dry_run)
    raise typer.Exit(rc)


# ── check command ────────────────────────────────────────────────────────────


@app.command()
def check(
    bootstrap_dir: Optional[str] = _BOOTSTRAP_DIR,
    workflows_dir: Optional[str] = _WORKFLOWS_DIR,
    backend_dir: Optional[str] = _BACKEND_DIR,
    config: Optional[str] = _CONFIG,
    debug: bool = _DEBUG,
) -> None:
    """Verify committed workflows match what generate would write.

    Exit codes: 0 = up to date, 3 = drift detected, other = error.
    """
    from wfgen.workflow.generate import EXIT_DRIFT, report_json, run_check

    _enable_debug(debug)
    settings = _settings_or_exit(
        config,
        bootstrap_dir=bootstrap_dir,
        workflows_dir=workflows_dir,
        backend_dir=backend_dir,
    )

    output.action(f"Checking workflows in {settings.workflows_dir} ...")
    rc, report = run_check(settings)
    if report is not None:
        output.detail(report_json(report))
    if rc == EXIT_DRIFT:
        output.warn("Drift detected.")
    elif report is not None:
        output.success("No drift detected.")
    raise typer.Exit(rc)


# ── services command ─────────────────────────────────────────────────────────


@app.command()
def services(
    backend_dir: Optional[str] = _BACKEND_DIR,
    config: Optional[str] = _CONFIG,
    debug: bool = _DEBUG,
) -> None:
    """List the backend services the workflows will deploy."""
    from wfgen.discovery.services import services_json
    from wfgen.workflow.generate import run_list_services

    _enable_debug(debug)
    settings = _settings_or_exit(config, backend_dir=backend_dir)
    found = run_list_services(settings)
    output.detail(services_json(found))
    raise typer.Exit(0)


# ── Entry point ──────────────────────────────────────────────────────────────


def main() -> int:
    """Run the CLI and return an exit code."""
    try:
        app()
        return 0
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0


if __name__ == "__main__":
    sys.exit(main())
