"""Generator settings: defaults → YAML file → explicit overrides."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from wfgen.config.models import GeneratorSettings

logger = logging.getLogger(__name__)

#: Settings file picked up from the working directory when ``--config`` is omitted.
DEFAULT_SETTINGS_FILE = "wfgen.yaml"

#: Top-level key holding the settings mapping.
SETTINGS_SECTION = "workflow_generator"


def _read_section(path: Path) -> Dict[str, Any]:
    with open(path, encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"{path}: invalid YAML: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    section = raw.get(SETTINGS_SECTION) or {}
    if not isinstance(section, dict):
        raise ValueError(f"{path}: '{SETTINGS_SECTION}' must be a mapping")
    return section


def load_settings(
    path: Optional[Union[str, Path]] = None,
    **overrides: Any,
) -> GeneratorSettings:
    """Build :class:`GeneratorSettings`.

    *path* defaults to :data:`DEFAULT_SETTINGS_FILE` when that file exists;
    an explicit *path* that does not exist is an error.  Keyword
    *overrides* with a ``None`` value are ignored so CLI options can be
    passed through unconditionally.
    """
    data: Dict[str, Any] = {}
    if path is not None:
        p = Path(path)
        if not p.is_file():
            raise FileNotFoundError(f"Settings file not found: {p}")
        data.update(_read_section(p))
    elif Path(DEFAULT_SETTINGS_FILE).is_file():
        logger.debug("Using settings from %s", DEFAULT_SETTINGS_FILE)
        data.update(_read_section(Path(DEFAULT_SETTINGS_FILE)))

    data.update({k: v for k, v in overrides.items() if v is not None})
    return GeneratorSettings.model_validate(data)
