"""Bootstrap output loading.

Reads the outputs of the applied Terraform bootstrap stack and builds a
:class:`BootstrapConfig`.  Missing optional values fall back to defaults;
missing required values raise :class:`MissingOutputError` so the run can
abort before anything is written.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from wfgen.config.models import (
    DEFAULT_REGION,
    REQUIRED_OUTPUTS,
    BootstrapConfig,
    EnabledFeatures,
)
from wfgen.terraform.runner import (
    DEFAULT_TERRAFORM_BIN,
    ensure_terraform,
    output_json,
    output_raw,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class BootstrapPreconditionError(RuntimeError):
    """The bootstrap stack is not in a readable state."""

    remediation: str = ""

    def __init__(self, message: str, remediation: str = "") -> None:
        super().__init__(message)
        self.remediation = remediation or self.remediation


class BootstrapNotFoundError(BootstrapPreconditionError):
    remediation = "Please run bootstrap first: make bootstrap-apply"


class BootstrapNotInitializedError(BootstrapPreconditionError):
    remediation = "Please run: make bootstrap-init && make bootstrap-apply"


class MissingOutputError(ValueError):
    """One or more required bootstrap outputs are absent or empty."""

    remediation = "Please ensure bootstrap is applied: make bootstrap-apply"

    def __init__(self, missing: List[str]) -> None:
        self.missing = sorted(missing)
        super().__init__(
            f"Could not read required bootstrap output(s): {', '.join(self.missing)}"
        )


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------


def check_bootstrap_ready(bootstrap_dir: Union[str, Path]) -> Path:
    """Verify *bootstrap_dir* exists and has been ``terraform init``-ed."""
    path = Path(bootstrap_dir)
    if not path.is_dir():
        raise BootstrapNotFoundError(f"Bootstrap directory not found: {path}")
    if not (path / ".terraform").is_dir():
        raise BootstrapNotInitializedError(
            f"Bootstrap Terraform not initialized: {path / '.terraform'} missing"
        )
    return path


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _first_repository(ecr_repositories: Any) -> str:
    """First key of the ``ecr_repositories`` map, in sorted order."""
    if not isinstance(ecr_repositories, dict) or not ecr_repositories:
        return ""
    return sorted(ecr_repositories)[0]


def _enabled_features(summary: Any) -> EnabledFeatures:
    if not isinstance(summary, dict):
        return EnabledFeatures()
    flags = summary.get("enabled_features") or {}
    if not isinstance(flags, dict):
        logger.warning("summary.enabled_features is not an object; ignoring")
        return EnabledFeatures()
    return EnabledFeatures.model_validate(flags)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_bootstrap_config(
    bootstrap_dir: Union[str, Path],
    *,
    terraform_bin: str = DEFAULT_TERRAFORM_BIN,
    default_region: str = DEFAULT_REGION,
) -> BootstrapConfig:
    """Read the bootstrap outputs and return a :class:`BootstrapConfig`.

    Raises:
        BootstrapNotFoundError: *bootstrap_dir* does not exist.
        BootstrapNotInitializedError: ``.terraform`` is missing.
        TerraformNotFoundError: the terraform binary is not on PATH.
        MissingOutputError: a value in ``REQUIRED_OUTPUTS`` is empty.
    """
    path = check_bootstrap_ready(bootstrap_dir)
    ensure_terraform(terraform_bin)

    def _raw(name: str) -> str:
        return output_raw(name, cwd=path, binary=terraform_bin)

    def _json(name: str) -> Any:
        return output_json(name, cwd=path, binary=terraform_bin)

    values: Dict[str, str] = {
        "project_name": _raw("project_name"),
        "aws_account_id": _raw("aws_account_id"),
        "aws_region": _raw("aws_region") or default_region,
        "role_dev": _raw("github_actions_role_dev_arn"),
        "role_test": _raw("github_actions_role_test_arn"),
        "role_prod": _raw("github_actions_role_prod_arn"),
    }

    missing = [k for k in REQUIRED_OUTPUTS if not values.get(k)]
    if missing:
        raise MissingOutputError(missing)

    features = _enabled_features(_json("summary"))
    ecr_repository = _first_repository(_json("ecr_repositories"))
    if not ecr_repository:
        logger.info(
            "No ECR repositories in bootstrap outputs; using project name %s",
            values["project_name"],
        )
        ecr_repository = values["project_name"]

    if not values["role_prod"]:
        logger.warning("github_actions_role_prod_arn is empty")

    return BootstrapConfig(
        ecr_repository=ecr_repository,
        features=features,
        **values,
    )
