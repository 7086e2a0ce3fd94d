"""Orchestrator for workflow generation.

Implements the linear run model:

1. **Config**: verify the bootstrap stack is applied and read its outputs.
2. **Discover**: list backend services.
3. **Render**: build every applicable workflow in memory.
4. **Write**: overwrite the files in the workflows directory.

Steps 1–3 never touch the output directory, so a failed precondition or a
missing required output aborts before any file is written.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from wfgen import ui
from wfgen.config.loader import (
    BootstrapPreconditionError,
    MissingOutputError,
    load_bootstrap_config,
)
from wfgen.config.models import BootstrapConfig, GeneratorSettings
from wfgen.discovery.services import discover_services
from wfgen.render.drift import DriftReport, compare_artifacts
from wfgen.render.renderer import RenderedArtifact, render_artifacts, write_artifacts
from wfgen.terraform.runner import TerraformNotFoundError

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_PRECONDITION = 1
EXIT_MISSING_CONFIG = 2
EXIT_DRIFT = 3
EXIT_TOOLCHAIN = 4
EXIT_WRITE_FAILURE = 5

NEXT_STEPS = (
    "1. Review generated workflows in {workflows_dir}/\n"
    "2. Commit and push workflows to GitHub\n"
    "3. Configure GitHub environments (dev, production).\n"
    "   No secrets needed: authentication uses OIDC\n"
    "4. Push code to main branch or create a PR to trigger workflows"
)


class GenerationError(Exception):
    """A run could not be prepared; carries the exit code to return."""

    def __init__(self, message: str, exit_code: int, remediation: str = "") -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.remediation = remediation


@dataclass
class GenerationPlan:
    """Everything a run needs, computed before any write."""

    settings: GeneratorSettings
    config: BootstrapConfig
    services: List[str]
    services_defaulted: bool = False
    artifacts: List[RenderedArtifact] = field(default_factory=list)

    @property
    def filenames(self) -> List[str]:
        return [a.filename for a in self.artifacts]


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


def prepare_run(settings: GeneratorSettings) -> GenerationPlan:
    """Load config, discover services and render in memory.

    Raises :class:`GenerationError` with the matching ``EXIT_*`` code.
    """
    try:
        config = load_bootstrap_config(
            settings.bootstrap_dir,
            terraform_bin=settings.terraform_bin,
            default_region=settings.default_region,
        )
    except BootstrapPreconditionError as exc:
        raise GenerationError(str(exc), EXIT_PRECONDITION, exc.remediation) from exc
    except TerraformNotFoundError as exc:
        raise GenerationError(str(exc), EXIT_TOOLCHAIN) from exc
    except MissingOutputError as exc:
        raise GenerationError(str(exc), EXIT_MISSING_CONFIG, exc.remediation) from exc

    discovery = discover_services(
        settings.backend_dir,
        default=settings.default_service,
        excluded_prefix=settings.excluded_prefix,
    )

    try:
        artifacts = render_artifacts(config, discovery.services, settings)
    except (FileNotFoundError, ValueError) as exc:
        raise GenerationError(f"Rendering failed: {exc}", EXIT_MISSING_CONFIG) from exc

    return GenerationPlan(
        settings=settings,
        config=config,
        services=discovery.services,
        services_defaulted=discovery.defaulted,
        artifacts=artifacts,
    )


def _report_config(plan: GenerationPlan) -> None:
    cfg = plan.config
    flags = cfg.features
    ui.ok("Configuration loaded")
    ui.detail("Project", cfg.project_name)
    ui.detail("AWS Account", cfg.aws_account_id)
    ui.detail("AWS Region", cfg.aws_region)
    ui.detail("Dev role", cfg.role_dev)
    ui.detail("Test role", cfg.role_test or "(not set)")
    ui.detail("Prod role", cfg.role_prod or "(not set)")
    ui.detail("Lambda enabled", str(flags.lambda_).lower())
    ui.detail("App Runner enabled", str(flags.apprunner).lower())
    ui.detail("EKS enabled", str(flags.eks).lower())
    ui.detail("Test environment", str(flags.test_env).lower())
    ui.detail("ECR Repository", cfg.ecr_repository)
    if not cfg.role_prod and any(a.filename.endswith("-prod.yml") for a in plan.artifacts):
        ui.warn("Production role ARN is empty; prod workflows cannot assume a role")


def _report_services(plan: GenerationPlan) -> None:
    if plan.services_defaulted:
        ui.warn(f"No backend services found, using default: {plan.services[0]}")
    else:
        ui.ok(f"Found services: {' '.join(plan.services)}")


def _prepare_or_report(settings: GeneratorSettings) -> Union[GenerationPlan, int]:
    ui.phase("CONFIG")
    ui.step(f"Reading bootstrap configuration from {settings.bootstrap_dir}/ ...")
    try:
        plan = prepare_run(settings)
    except GenerationError as exc:
        logger.error("Generation aborted: %s", exc)
        body = str(exc)
        if exc.remediation:
            body += f"\n{exc.remediation}"
        ui.error_panel("Workflow generation failed", body)
        return exc.exit_code
    _report_config(plan)
    ui.phase("SERVICES")
    _report_services(plan)
    return plan


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def run_generate(settings: GeneratorSettings, *, dry_run: bool = False) -> int:
    """Generate the workflows.  Returns one of the ``EXIT_*`` constants."""
    result = _prepare_or_report(settings)
    if isinstance(result, int):
        return result
    plan = result

    ui.phase("RENDER")
    if dry_run:
        for name in plan.filenames:
            ui.info(f"Would write {settings.workflows_dir}/{name}")
        ui.ok(f"Dry run: {len(plan.artifacts)} workflow(s) rendered, nothing written")
        return EXIT_SUCCESS

    try:
        written = write_artifacts(plan.artifacts, settings.workflows_dir)
    except OSError as exc:
        logger.error("Writing workflows failed: %s", exc)
        ui.error_panel("Workflow generation failed", f"Could not write workflows: {exc}")
        return EXIT_WRITE_FAILURE

    for path in written:
        ui.ok(f"Created {path.name}")

    ui.success_panel(
        "GitHub Actions workflows generated",
        "Generated workflows:\n"
        + "\n".join(f"  - {name}" for name in plan.filenames)
        + "\n\nNext steps:\n"
        + NEXT_STEPS.format(workflows_dir=settings.workflows_dir),
    )
    return EXIT_SUCCESS


def run_check(settings: GeneratorSettings) -> Tuple[int, Optional[DriftReport]]:
    """Compare rendered workflows with disk.

    Returns ``(exit_code, report)``; *report* is ``None`` when the run
    could not be prepared.
    """
    result = _prepare_or_report(settings)
    if isinstance(result, int):
        return result, None
    plan = result

    ui.phase("CHECK")
    report = compare_artifacts(plan.artifacts, settings.workflows_dir)
    if report.has_drift:
        for chk in report.drifted:
            ui.fail(f"{chk.filename}: {chk.status.value}")
        ui.info("Run 'wfgen generate' to update the workflows")
        return EXIT_DRIFT, report

    ui.ok(f"{len(plan.artifacts)} workflow(s) up to date")
    return EXIT_SUCCESS, report


def run_list_services(settings: GeneratorSettings) -> List[str]:
    """Return the discovered services (no bootstrap access needed)."""
    discovery = discover_services(
        settings.backend_dir,
        default=settings.default_service,
        excluded_prefix=settings.excluded_prefix,
    )
    return discovery.services


def report_json(report: DriftReport) -> str:
    """Sorted-key JSON for a drift report."""
    return json.dumps(report.to_dict(), indent=2, sort_keys=True)
