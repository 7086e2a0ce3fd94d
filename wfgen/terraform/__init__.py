"""Terraform CLI access (bootstrap outputs)."""

from wfgen.terraform.runner import (
    DEFAULT_TERRAFORM_BIN,
    TerraformNotFoundError,
    TerraformResult,
    ensure_terraform,
    output_json,
    output_raw,
)

__all__ = [
    "DEFAULT_TERRAFORM_BIN",
    "TerraformNotFoundError",
    "TerraformResult",
    "ensure_terraform",
    "output_json",
    "output_raw",
]
