"""wfgen - GitHub Actions workflow generator.

Replaces the Bash generator (scripts/generate-workflows.sh) with a
structured Python package that reads Terraform bootstrap outputs and
renders the CI/CD workflows for the enabled compute targets.
"""

try:
    from importlib.metadata import version

    __version__ = version("wfgen")
except Exception:
    __version__ = "0.0.0.dev0"

__all__ = ["__version__"]
