"""Bootstrap output loading and generator settings."""

from wfgen.config.loader import (
    BootstrapNotFoundError,
    BootstrapNotInitializedError,
    BootstrapPreconditionError,
    MissingOutputError,
    check_bootstrap_ready,
    load_bootstrap_config,
)
from wfgen.config.models import (
    COMPUTE_TARGETS,
    DEFAULT_REGION,
    REQUIRED_OUTPUTS,
    BootstrapConfig,
    EnabledFeatures,
    GeneratorSettings,
)
from wfgen.config.settings import DEFAULT_SETTINGS_FILE, load_settings

__all__ = [
    "BootstrapConfig",
    "BootstrapNotFoundError",
    "BootstrapNotInitializedError",
    "BootstrapPreconditionError",
    "COMPUTE_TARGETS",
    "DEFAULT_REGION",
    "DEFAULT_SETTINGS_FILE",
    "EnabledFeatures",
    "GeneratorSettings",
    "MissingOutputError",
    "REQUIRED_OUTPUTS",
    "check_bootstrap_ready",
    "load_bootstrap_config",
    "load_settings",
]
