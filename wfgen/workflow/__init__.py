"""Generation workflows (generate, check, list services)."""

from wfgen.workflow.generate import (
    EXIT_DRIFT,
    EXIT_MISSING_CONFIG,
    EXIT_PRECONDITION,
    EXIT_SUCCESS,
    EXIT_TOOLCHAIN,
    EXIT_WRITE_FAILURE,
    GenerationError,
    GenerationPlan,
    prepare_run,
    run_check,
    run_generate,
    run_list_services,
)

__all__ = [
    "EXIT_DRIFT",
    "EXIT_MISSING_CONFIG",
    "EXIT_PRECONDITION",
    "EXIT_SUCCESS",
    "EXIT_TOOLCHAIN",
    "EXIT_WRITE_FAILURE",
    "GenerationError",
    "GenerationPlan",
    "prepare_run",
    "run_check",
    "run_generate",
    "run_list_services",
]
