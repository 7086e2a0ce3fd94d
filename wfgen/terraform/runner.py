"""Terraform CLI wrapper: read-only access to bootstrap outputs.

Wraps ``terraform output`` as a subprocess so the generator never parses
Terraform state files directly.  Failed lookups degrade to empty values,
matching ``terraform output ... 2>/dev/null`` in a shell script;
the caller decides which values are required.
"""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_TERRAFORM_BIN: str = "terraform"

#: Return code used when the binary itself cannot be executed.
RC_NOT_FOUND: int = 4


class TerraformNotFoundError(RuntimeError):
    """Raised when the terraform binary is not on PATH."""


# ---------------------------------------------------------------------------
# Result dataclass
# ---------------------------------------------------------------------------


@dataclass
class TerraformResult:
    """Parsed outcome of a ``terraform`` CLI invocation."""

    command: str
    returncode: int
    stdout: str = ""
    stderr: str = ""
    json_body: Any = None
    success: bool = False


# ---------------------------------------------------------------------------
# Internal helper
# ---------------------------------------------------------------------------


def _run_terraform(
    args: list[str],
    *,
    cwd: Union[str, Path],
    binary: str = DEFAULT_TERRAFORM_BIN,
) -> TerraformResult:
    """Run ``terraform`` with *args* inside *cwd*."""
    cmd = [binary, *args]
    logger.info("Running: %s (cwd=%s)", " ".join(cmd), cwd)

    try:
        proc = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            cwd=str(cwd),
        )
    except FileNotFoundError:
        return TerraformResult(
            command=" ".join(cmd),
            returncode=RC_NOT_FOUND,
            stderr=f"{binary} CLI not found on PATH",
        )

    result = TerraformResult(
        command=" ".join(cmd),
        returncode=proc.returncode,
        stdout=proc.stdout.strip(),
        stderr=proc.stderr.strip(),
    )
    result.success = result.returncode == 0
    if not result.success:
        logger.debug(
            "terraform exited %d: %s", result.returncode, result.stderr or "(no stderr)"
        )
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def ensure_terraform(binary: str = DEFAULT_TERRAFORM_BIN) -> str:
    """Return the resolved path of *binary* or raise :class:`TerraformNotFoundError`."""
    resolved = shutil.which(binary)
    if not resolved:
        raise TerraformNotFoundError(
            f"'{binary}' not found on PATH. Install Terraform or set terraform_bin."
        )
    return resolved


def output_raw(
    name: str,
    *,
    cwd: Union[str, Path],
    binary: str = DEFAULT_TERRAFORM_BIN,
) -> str:
    """Return ``terraform output -raw <name>``, or ``""`` if unavailable."""
    result = _run_terraform(["output", "-raw", name], cwd=cwd, binary=binary)
    if not result.success:
        return ""
    return result.stdout


def output_json(
    name: str,
    *,
    cwd: Union[str, Path],
    binary: str = DEFAULT_TERRAFORM_BIN,
) -> Optional[Any]:
    """Return the decoded ``terraform output -json <name>``.

    ``None`` when the command fails or its stdout is not valid JSON.
    """
    result = _run_terraform(["output", "-json", name], cwd=cwd, binary=binary)
    if not result.success or not result.stdout:
        return None
    try:
        result.json_body = json.loads(result.stdout)
    except json.JSONDecodeError:
        logger.warning("terraform output %s is not valid JSON", name)
        return None
    return result.json_body
