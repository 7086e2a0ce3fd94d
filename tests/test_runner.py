"""Tests for wfgen.terraform.runner."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from conftest import completed
from wfgen.terraform.runner import (
    RC_NOT_FOUND,
    TerraformNotFoundError,
    TerraformResult,
    _run_terraform,
    ensure_terraform,
    output_json,
    output_raw,
)


# ── TestTerraformResult ──────────────────────────────────────────────────


class TestTerraformResult:
    def test_defaults(self):
        r = TerraformResult(command="terraform output", returncode=0)
        assert r.success is False
        assert r.json_body is None
        assert r.stdout == ""


# ── TestRunTerraform ─────────────────────────────────────────────────────


class TestRunTerraform:
    @patch("wfgen.terraform.runner.subprocess.run")
    def test_command_and_cwd(self, mock_run, tmp_path):
        mock_run.return_value = completed(stdout="acme\n")
        r = _run_terraform(["output", "-raw", "project_name"], cwd=tmp_path)
        assert mock_run.call_args.args[0] == [
            "terraform", "output", "-raw", "project_name",
        ]
        assert mock_run.call_args.kwargs["cwd"] == str(tmp_path)
        assert r.success is True
        assert r.stdout == "acme"

    @patch("wfgen.terraform.runner.subprocess.run")
    def test_custom_binary(self, mock_run, tmp_path):
        mock_run.return_value = completed()
        _run_terraform(["output"], cwd=tmp_path, binary="tofu")
        assert mock_run.call_args.args[0][0] == "tofu"

    @patch("wfgen.terraform.runner.subprocess.run")
    def test_not_found(self, mock_run, tmp_path):
        mock_run.side_effect = FileNotFoundError("terraform")
        r = _run_terraform(["output"], cwd=tmp_path)
        assert r.returncode == RC_NOT_FOUND
        assert "not found" in r.stderr
        assert r.success is False

    @patch("wfgen.terraform.runner.subprocess.run")
    def test_nonzero_exit(self, mock_run, tmp_path):
        mock_run.return_value = completed(stderr="boom", rc=1)
        r = _run_terraform(["output"], cwd=tmp_path)
        assert r.success is False
        assert r.stderr == "boom"


# ── TestOutputRaw ────────────────────────────────────────────────────────


class TestOutputRaw:
    @patch("wfgen.terraform.runner.subprocess.run")
    def test_value(self, mock_run, tmp_path):
        mock_run.return_value = completed(stdout="123456789012")
        assert output_raw("aws_account_id", cwd=tmp_path) == "123456789012"

    @patch("wfgen.terraform.runner.subprocess.run")
    def test_missing_output_is_empty(self, mock_run, tmp_path):
        mock_run.return_value = completed(stderr="Output not found", rc=1)
        assert output_raw("aws_region", cwd=tmp_path) == ""


# ── TestOutputJson ───────────────────────────────────────────────────────


class TestOutputJson:
    @patch("wfgen.terraform.runner.subprocess.run")
    def test_decoded(self, mock_run, tmp_path):
        body = {"enabled_features": {"lambda": True}}
        mock_run.return_value = completed(stdout=json.dumps(body))
        assert output_json("summary", cwd=tmp_path) == body

    @patch("wfgen.terraform.runner.subprocess.run")
    def test_invalid_json(self, mock_run, tmp_path):
        mock_run.return_value = completed(stdout="not json")
        assert output_json("summary", cwd=tmp_path) is None

    @patch("wfgen.terraform.runner.subprocess.run")
    def test_failure(self, mock_run, tmp_path):
        mock_run.return_value = completed(rc=1)
        assert output_json("ecr_repositories", cwd=tmp_path) is None


# ── TestEnsureTerraform ──────────────────────────────────────────────────


class TestEnsureTerraform:
    @patch("wfgen.terraform.runner.shutil.which", return_value="/usr/bin/terraform")
    def test_found(self, _which):
        assert ensure_terraform() == "/usr/bin/terraform"

    @patch("wfgen.terraform.runner.shutil.which", return_value=None)
    def test_missing(self, _which):
        with pytest.raises(TerraformNotFoundError, match="not found on PATH"):
            ensure_terraform()
