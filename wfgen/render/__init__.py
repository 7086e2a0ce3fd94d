"""Workflow template rendering and drift detection."""

from wfgen.render.drift import (
    DriftCheck,
    DriftReport,
    DriftStatus,
    compare_artifacts,
)
from wfgen.render.renderer import (
    ALL_SUBSTITUTION_KEYS,
    ARTIFACTS,
    REQUIRED_KEYS,
    TEMPLATES_DIR,
    ArtifactSpec,
    RenderedArtifact,
    artifacts_for,
    build_substitutions,
    render_artifacts,
    render_template,
    write_artifacts,
)

__all__ = [
    "ALL_SUBSTITUTION_KEYS",
    "ARTIFACTS",
    "ArtifactSpec",
    "DriftCheck",
    "DriftReport",
    "DriftStatus",
    "REQUIRED_KEYS",
    "RenderedArtifact",
    "TEMPLATES_DIR",
    "artifacts_for",
    "build_substitutions",
    "compare_artifacts",
    "render_artifacts",
    "render_template",
    "write_artifacts",
]
