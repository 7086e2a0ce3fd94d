"""Backend service discovery.

A service is an immediate subdirectory of the backend root.  Hidden
directories and names starting with the excluded prefix (``Dockerfile``
by default) are skipped.  Services are returned sorted, matching the
order of the shell glob ``backend/*/``.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SERVICE = "api"
EXCLUDED_PREFIX = "Dockerfile"

#: Indentation of the filter block inside ``filters: |`` in the Lambda dev workflow.
_FILTER_KEY_INDENT = " " * 12
_FILTER_PATH_INDENT = " " * 14

_PLAIN_KEY = re.compile(r"[A-Za-z_][A-Za-z0-9_.-]*")


@dataclass
class DiscoveryResult:
    """Discovered services and whether the default was substituted."""

    services: List[str] = field(default_factory=list)
    defaulted: bool = False


def discover_services(
    backend_dir: Union[str, Path],
    *,
    default: str = DEFAULT_SERVICE,
    excluded_prefix: str = EXCLUDED_PREFIX,
) -> DiscoveryResult:
    """List service directories under *backend_dir*.

    Falls back to ``[default]`` when the directory is missing or holds
    no service directories.
    """
    root = Path(backend_dir)
    names: List[str] = []
    if root.is_dir():
        for entry in sorted(root.iterdir(), key=lambda p: p.name):
            if not entry.is_dir():
                continue
            if entry.name.startswith("."):
                continue
            if excluded_prefix and entry.name.startswith(excluded_prefix):
                logger.debug("Skipping non-service directory %s", entry.name)
                continue
            names.append(entry.name)
    else:
        logger.debug("Backend directory %s does not exist", root)

    if not names:
        logger.warning("No backend services found, using default: %s", default)
        return DiscoveryResult(services=[default], defaulted=True)

    logger.info("Found services: %s", " ".join(names))
    return DiscoveryResult(services=names)


def _single_quoted(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _filter_key(name: str) -> str:
    """Plain YAML key when it reads back as the same string, else quoted."""
    if _PLAIN_KEY.fullmatch(name) and yaml.safe_load(name) == name:
        return name
    return _single_quoted(name)


def services_filter_block(
    services: Sequence[str],
    *,
    backend_dir: str = "backend",
    dockerfile: str = "Dockerfile.lambda",
) -> str:
    """Render the ``dorny/paths-filter`` filters, one entry per service.

    Each entry maps the service name to its source tree and the shared
    Dockerfile::

                    api:
                      - 'backend/api/**'
                      - 'backend/Dockerfile.lambda'
    """
    prefix = backend_dir.rstrip("/")
    lines: List[str] = []
    for name in services:
        lines.append(f"{_FILTER_KEY_INDENT}{_filter_key(name)}:")
        lines.append(f"{_FILTER_PATH_INDENT}- {_single_quoted(f'{prefix}/{name}/**')}")
        lines.append(f"{_FILTER_PATH_INDENT}- {_single_quoted(f'{prefix}/{dockerfile}')}")
    return "\n".join(lines)


def services_json(services: Sequence[str]) -> str:
    """Matrix literal, e.g. ``["api", "worker"]``."""
    return json.dumps(list(services))
