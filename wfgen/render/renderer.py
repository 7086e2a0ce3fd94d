"""Workflow template renderer: replaces ``${WFSUB_*}`` tokens.

Templates live beside this module in ``templates/`` and are plain text.
Substitution is **text-level** so comments and layout are preserved
byte-for-byte across runs; GitHub expressions (``${{ ... }}``) and shell
variables (``${IMAGE_URI}``) are left untouched.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Sequence, Union

from wfgen.config.models import BootstrapConfig, GeneratorSettings
from wfgen.discovery.services import services_filter_block, services_json

logger = logging.getLogger(__name__)

# ── constants ────────────────────────────────────────────────────────

TEMPLATES_DIR: Path = Path(__file__).parent / "templates"

#: Every token referenced by the bundled templates.
ALL_SUBSTITUTION_KEYS: FrozenSet[str] = frozenset(
    {
        "WFSUB_PROJECT_NAME",
        "WFSUB_AWS_ACCOUNT_ID",
        "WFSUB_AWS_REGION",
        "WFSUB_ROLE_DEV",
        "WFSUB_ROLE_PROD",
        "WFSUB_ECR_REPOSITORY",
        "WFSUB_SERVICES_FILTER",
        "WFSUB_SERVICES_JSON",
        "WFSUB_BACKEND_DIR",
        "WFSUB_WORKFLOWS_DIR",
        "WFSUB_TERRAFORM_VERSION",
    },
)

#: Minimum required keys; the renderer will raise if any are absent.
REQUIRED_KEYS: FrozenSet[str] = frozenset(
    {
        "WFSUB_PROJECT_NAME",
        "WFSUB_AWS_ACCOUNT_ID",
        "WFSUB_AWS_REGION",
        "WFSUB_ROLE_DEV",
    },
)

_UNRESOLVED_TOKEN = re.compile(r"\$\{(WFSUB_[A-Z0-9_]+)\}")


# ── artifact catalogue ───────────────────────────────────────────────


@dataclass(frozen=True)
class ArtifactSpec:
    """One workflow file the generator owns.

    ``feature`` names the bootstrap flag that governs it; ``None`` means
    the artifact is always generated.
    """

    filename: str
    template: str
    feature: Optional[str] = None


ARTIFACTS: tuple[ArtifactSpec, ...] = (
    ArtifactSpec("deploy-lambda-dev.yml", "deploy-lambda-dev.yml.tmpl", "lambda"),
    ArtifactSpec("deploy-lambda-prod.yml", "deploy-lambda-prod.yml.tmpl", "lambda"),
    ArtifactSpec("deploy-apprunner-dev.yml", "deploy-apprunner-dev.yml.tmpl", "apprunner"),
    ArtifactSpec("deploy-apprunner-prod.yml", "deploy-apprunner-prod.yml.tmpl", "apprunner"),
    ArtifactSpec("deploy-eks-dev.yml", "deploy-eks-dev.yml.tmpl", "eks"),
    ArtifactSpec("deploy-eks-prod.yml", "deploy-eks-prod.yml.tmpl", "eks"),
    ArtifactSpec("terraform-plan.yml", "terraform-plan.yml.tmpl", None),
)


@dataclass(frozen=True)
class RenderedArtifact:
    """A workflow file's name and its full rendered text."""

    filename: str
    content: str
    feature: Optional[str] = None


# ── public API ───────────────────────────────────────────────────────


def render_template(
    template_text: str,
    substitutions: Dict[str, str],
    *,
    required_keys: Optional[FrozenSet[str]] = None,
) -> str:
    """Replace all ``${WFSUB_*}`` tokens in *template_text*.

    Parameters
    ----------
    template_text:
        Raw template content.
    substitutions:
        Mapping of key → value.  Keys include the ``WFSUB_`` prefix
        (e.g. ``{"WFSUB_AWS_REGION": "us-west-2", ...}``).
    required_keys:
        Keys that **must** be present with a non-empty value.  Defaults
        to :data:`REQUIRED_KEYS`.

    Raises
    ------
    ValueError
        If a required key is missing or empty, or if the template
        references a ``WFSUB_`` token with no substitution.
    """
    if required_keys is None:
        required_keys = REQUIRED_KEYS

    missing: List[str] = sorted(
        k for k in required_keys if not substitutions.get(k)
    )
    if missing:
        raise ValueError(
            f"Missing required substitution key(s): {', '.join(missing)}"
        )

    # Deterministic replacement order (sorted keys)
    result = template_text
    for key in sorted(substitutions):
        token = "${" + key + "}"
        result = result.replace(token, substitutions[key])

    unresolved = sorted(set(_UNRESOLVED_TOKEN.findall(result)))
    if unresolved:
        raise ValueError(
            f"Unresolved substitution token(s): {', '.join(unresolved)}"
        )
    return result


def load_template(name: str, *, templates_dir: Optional[Path] = None) -> str:
    """Read a bundled template by file name."""
    path = (templates_dir or TEMPLATES_DIR) / name
    if not path.is_file():
        raise FileNotFoundError(f"Template not found: {path}")
    return path.read_text(encoding="utf-8")


def artifacts_for(config: BootstrapConfig) -> List[ArtifactSpec]:
    """Catalogue entries whose governing flag is on (plus unconditional ones)."""
    return [
        spec
        for spec in ARTIFACTS
        if spec.feature is None or config.features.is_enabled(spec.feature)
    ]


def build_substitutions(
    config: BootstrapConfig,
    services: Sequence[str],
    settings: GeneratorSettings,
) -> Dict[str, str]:
    """Map every ``WFSUB_*`` key to its value for this run."""
    backend = settings.backend_dir.rstrip("/")
    return {
        "WFSUB_PROJECT_NAME": config.project_name,
        "WFSUB_AWS_ACCOUNT_ID": config.aws_account_id,
        "WFSUB_AWS_REGION": config.aws_region,
        "WFSUB_ROLE_DEV": config.role_dev,
        "WFSUB_ROLE_PROD": config.role_prod,
        "WFSUB_ECR_REPOSITORY": config.ecr_repository,
        "WFSUB_SERVICES_FILTER": services_filter_block(services, backend_dir=backend),
        "WFSUB_SERVICES_JSON": services_json(services),
        "WFSUB_BACKEND_DIR": backend,
        "WFSUB_WORKFLOWS_DIR": settings.workflows_dir.rstrip("/"),
        "WFSUB_TERRAFORM_VERSION": settings.terraform_version,
    }


def render_artifacts(
    config: BootstrapConfig,
    services: Sequence[str],
    settings: GeneratorSettings,
    *,
    templates_dir: Optional[Path] = None,
) -> List[RenderedArtifact]:
    """Render every applicable artifact in memory (nothing is written)."""
    subs = build_substitutions(config, services, settings)
    rendered: List[RenderedArtifact] = []
    for spec in artifacts_for(config):
        text = load_template(spec.template, templates_dir=templates_dir)
        rendered.append(
            RenderedArtifact(
                filename=spec.filename,
                content=render_template(text, subs),
                feature=spec.feature,
            )
        )
        logger.debug("Rendered %s", spec.filename)
    return rendered


def write_artifacts(
    artifacts: Sequence[RenderedArtifact],
    workflows_dir: Union[str, Path],
) -> List[Path]:
    """Write each artifact to *workflows_dir*, overwriting existing files.

    Returns the written paths in catalogue order.  ``OSError`` propagates;
    files written before the failure stay on disk.
    """
    out_dir = Path(workflows_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    written: List[Path] = []
    for artifact in artifacts:
        dest = out_dir / artifact.filename
        dest.write_text(artifact.content, encoding="utf-8")
        logger.info("Wrote %s", dest)
        written.append(dest)
    return written
