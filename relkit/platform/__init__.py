"""Platform abstraction layer."""

from .process import (
    ProcessError,
    merged_env,
    run,
    run_silent,
)

__all__ = [
    "ProcessError",
    "merged_env",
    "run",
    "run_silent",
]
