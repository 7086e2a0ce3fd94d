"""Pydantic models for the generator's inputs.

Defines the data structures for:
- Feature flags read from the bootstrap ``summary`` output
- The bootstrap configuration bundle (immutable for a run)
- Generator run settings (paths, defaults, toolchain)
"""

from __future__ import annotations

import logging
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_REGION = "us-east-1"

#: Compute targets in catalogue order.  Each one governs a dev/prod pair.
COMPUTE_TARGETS: tuple[str, ...] = ("lambda", "apprunner", "eks")

#: Bootstrap outputs that must be present and non-empty.
REQUIRED_OUTPUTS: tuple[str, ...] = (
    "project_name",
    "aws_account_id",
    "role_dev",
)


class EnabledFeatures(BaseModel):
    """``summary.enabled_features`` from the bootstrap stack.

    Only JSON ``true`` or the string ``"true"`` enables a flag, as with
    ``jq -r ... // false`` compared against ``"true"``.  Anything else,
    including ``null``, is ``False``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    lambda_: bool = Field(default=False, alias="lambda")
    apprunner: bool = False
    eks: bool = False
    test_env: bool = False

    @field_validator("*", mode="before")
    @classmethod
    def _jq_truthy(cls, value: Any, info: ValidationInfo) -> bool:
        if value is True or value == "true":
            return True
        if value not in (None, False, "false"):
            logger.warning(
                "enabled_features.%s has non-boolean value %r; treating as false",
                info.field_name,
                value,
            )
        return False

    def is_enabled(self, feature: str) -> bool:
        """Look up a flag by its bootstrap name (``lambda``, ``eks``, ...)."""
        attr = "lambda_" if feature == "lambda" else feature
        return bool(getattr(self, attr, False))


class BootstrapConfig(BaseModel):
    """Values read once from the bootstrap outputs."""

    model_config = ConfigDict(frozen=True)

    project_name: str
    aws_account_id: str
    aws_region: str = DEFAULT_REGION
    role_dev: str
    role_test: str = ""
    role_prod: str = ""
    ecr_repository: str
    features: EnabledFeatures = Field(default_factory=EnabledFeatures)

    def enabled_targets(self) -> List[str]:
        """Enabled compute targets, in :data:`COMPUTE_TARGETS` order."""
        return [t for t in COMPUTE_TARGETS if self.features.is_enabled(t)]


class GeneratorSettings(BaseModel):
    """Run settings.

    Structure of the optional YAML file::

        workflow_generator:
          bootstrap_dir: bootstrap
          workflows_dir: .github/workflows
          backend_dir: backend
          default_service: api
          ...
    """

    model_config = ConfigDict(extra="forbid")

    bootstrap_dir: str = "bootstrap"
    workflows_dir: str = ".github/workflows"
    backend_dir: str = "backend"
    default_service: str = "api"
    default_region: str = DEFAULT_REGION
    excluded_prefix: str = "Dockerfile"
    terraform_bin: str = "terraform"
    terraform_version: str = "1.13.0"
