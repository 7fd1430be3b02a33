"""Resolution of release variables from environment, defaults or prompts.

A variable is looked up in the environment first. When it is missing the
user is asked for it, unless `SCRIPTS_NO_INTERACTIVE` is set, in which case
the default is taken silently. The resolved value is written back into the
environment so that subprocesses launched later (go build, git) see it.
"""

from __future__ import annotations

import os
from collections.abc import MutableMapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from relkit.output.console import ConsoleProtocol

__all__ = ["NO_INTERACTIVE_ENV", "REDACTED", "is_interactive", "resolve_variable"]

NO_INTERACTIVE_ENV = "SCRIPTS_NO_INTERACTIVE"
REDACTED = "***"


def is_interactive(env: MutableMapping[str, str] | None = None) -> bool:
    env = os.environ if env is None else env
    return not env.get(NO_INTERACTIVE_ENV)


def resolve_variable(
    name: str,
    default: str = "",
    *,
    console: ConsoleProtocol,
    secret: bool = False,
    env: MutableMapping[str, str] | None = None,
) -> str:
    """Resolve `name` and export it.

    Args:
        name: Environment variable name (e.g. "GIT_TAG")
        default: Value used when nothing else is provided
        console: Where the prompt and the acknowledgment go
        secret: Redact the echoed value and hide prompt input
        env: Environment mapping (defaults to os.environ)

    Returns:
        The resolved value. Empty is allowed when there is no default and
        no answer.
    """
    env = os.environ if env is None else env

    value = env.get(name, "")
    if not value:
        if is_interactive(env):
            label = name if (secret or not default) else f"{name} [{default}]"
            value = console.prompt(label, secret=secret) or default
        else:
            value = default

    env[name] = value
    console.print(f"{name}={REDACTED if secret else value}")
    return value
