"""Shared fixtures: a fake ``terraform`` CLI and an initialised bootstrap dir."""

from __future__ import annotations

import json
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest

ACCOUNT_ID = "123456789012"
ROLE_DEV = f"arn:aws:iam::{ACCOUNT_ID}:role/acme-github-actions-dev"
ROLE_PROD = f"arn:aws:iam::{ACCOUNT_ID}:role/acme-github-actions-prod"
ROLE_TEST = f"arn:aws:iam::{ACCOUNT_ID}:role/acme-github-actions-test"


def bootstrap_outputs(**features: bool) -> Dict[str, Any]:
    """Terraform outputs of an applied bootstrap stack."""
    flags = {"lambda": False, "apprunner": False, "eks": False, "test_env": False}
    flags.update(features)
    return {
        "project_name": "acme",
        "aws_account_id": ACCOUNT_ID,
        "aws_region": "eu-west-1",
        "github_actions_role_dev_arn": ROLE_DEV,
        "github_actions_role_prod_arn": ROLE_PROD,
        "summary": {
            "github_actions_roles": {"dev": ROLE_DEV, "prod": ROLE_PROD},
            "enabled_features": flags,
        },
        "ecr_repositories": {"acme": {"url": f"{ACCOUNT_ID}.dkr.ecr.eu-west-1.amazonaws.com/acme"}},
    }


def completed(stdout: str = "", stderr: str = "", rc: int = 0):
    """Return a mock subprocess.CompletedProcess."""
    cp = MagicMock()
    cp.returncode = rc
    cp.stdout = stdout
    cp.stderr = stderr
    return cp


def terraform_side_effect(outputs: Dict[str, Any]):
    """Emulate ``terraform output -raw|-json <name>`` for *outputs*."""

    def _run(cmd, **kwargs):
        mode, name = cmd[-2], cmd[-1]
        if name not in outputs:
            return completed(stderr=f'Error: Output "{name}" not found', rc=1)
        value = outputs[name]
        if mode == "-json":
            return completed(stdout=json.dumps(value) + "\n")
        if not isinstance(value, str):
            return completed(stderr="Error: Unsupported value for raw output", rc=1)
        return completed(stdout=value)

    return _run


@pytest.fixture
def fake_terraform(monkeypatch):
    """Install a fake terraform CLI; call with the outputs to serve."""

    def _install(outputs: Dict[str, Any]) -> MagicMock:
        monkeypatch.setattr(
            "wfgen.terraform.runner.shutil.which", lambda b: f"/usr/bin/{b}"
        )
        mock_run = MagicMock(side_effect=terraform_side_effect(outputs))
        monkeypatch.setattr("wfgen.terraform.runner.subprocess.run", mock_run)
        return mock_run

    return _install


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """A repo root with an initialised ``bootstrap/`` and the cwd set to it."""
    (tmp_path / "bootstrap" / ".terraform").mkdir(parents=True)
    monkeypatch.chdir(tmp_path)
    return tmp_path
