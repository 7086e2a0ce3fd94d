"""Drift detection between rendered workflows and files on disk.

Compares what a run *would* write against what is committed, without
writing anything.  Used by ``wfgen check`` (exit code ``3`` on drift).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from wfgen.render.renderer import ARTIFACTS, RenderedArtifact

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# DriftStatus
# ---------------------------------------------------------------------------


class DriftStatus(str, Enum):
    """Outcome of a single file comparison."""

    OK = "OK"
    MISSING = "MISSING"
    STALE = "STALE"
    ORPHANED = "ORPHANED"


# ---------------------------------------------------------------------------
# DriftCheck / DriftReport
# ---------------------------------------------------------------------------


@dataclass
class DriftCheck:
    """Comparison result for one workflow file."""

    filename: str
    status: DriftStatus
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DriftReport:
    """Aggregate result over every catalogue file."""

    workflows_dir: str
    checks: List[DriftCheck] = field(default_factory=list)

    @property
    def has_drift(self) -> bool:
        return any(c.status != DriftStatus.OK for c in self.checks)

    @property
    def drifted(self) -> List[DriftCheck]:
        return [c for c in self.checks if c.status != DriftStatus.OK]

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to a plain dict."""
        return {
            "workflows_dir": self.workflows_dir,
            "has_drift": self.has_drift,
            "checks": [
                {
                    "details": c.details,
                    "filename": c.filename,
                    "status": c.status.value,
                }
                for c in self.checks
            ],
        }


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------


def compare_artifacts(
    artifacts: Sequence[RenderedArtifact],
    workflows_dir: Union[str, Path],
) -> DriftReport:
    """Compare *artifacts* with the files in *workflows_dir*.

    - expected file absent → ``MISSING``
    - expected file differs → ``STALE``
    - catalogue file present but not expected (its flag is off) → ``ORPHANED``

    Files in *workflows_dir* that are not in the catalogue are ignored.
    """
    out_dir = Path(workflows_dir)
    report = DriftReport(workflows_dir=str(out_dir))
    expected = {a.filename: a for a in artifacts}

    for spec in ARTIFACTS:
        path = out_dir / spec.filename
        artifact = expected.get(spec.filename)

        if artifact is None:
            if path.is_file():
                report.checks.append(
                    DriftCheck(
                        filename=spec.filename,
                        status=DriftStatus.ORPHANED,
                        details={"feature": spec.feature},
                    )
                )
            continue

        if not path.is_file():
            report.checks.append(DriftCheck(spec.filename, DriftStatus.MISSING))
            continue

        on_disk = path.read_text(encoding="utf-8")
        if on_disk != artifact.content:
            report.checks.append(
                DriftCheck(
                    filename=spec.filename,
                    status=DriftStatus.STALE,
                    details={
                        "expected_bytes": len(artifact.content.encode("utf-8")),
                        "actual_bytes": len(on_disk.encode("utf-8")),
                    },
                )
            )
        else:
            report.checks.append(DriftCheck(spec.filename, DriftStatus.OK))

    for chk in report.drifted:
        logger.info("Drift: %s %s", chk.status.value, chk.filename)
    return report
