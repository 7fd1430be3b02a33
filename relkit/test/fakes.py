"""Fakes for the subprocess seams used across the test suite."""

from __future__ import annotations

from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.process import ProcessError


def process_err(cmd: list[str], returncode: int = 1, stderr: str = "") -> Err[ProcessError]:
    return Err(ProcessError(command=tuple(cmd), returncode=returncode, stdout="", stderr=stderr))


class FakeGit:
    """Stands in for `run` inside relkit.git.repository.

    Answers the handful of git subcommands relkit issues and records every
    invocation (without the `git -C <path>` prefix) in `calls`.
    """

    def __init__(
        self,
        *,
        tags: tuple[str, ...] = (),
        log: str = "",
        latest: str | None = None,
        push_url: str | None = None,
        toplevel: str | None = None,
        failing: frozenset[str] = frozenset(),
    ) -> None:
        self.tags = tags
        self.log = log
        self.latest = latest
        self.push_url = push_url
        self.toplevel = toplevel
        self.failing = failing
        self.calls: list[list[str]] = []

    def __call__(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        del cwd, env, timeout
        args = cmd[3:] if cmd[:2] == ["git", "-C"] else cmd[1:]
        self.calls.append(args)

        sub = args[0]
        if sub in self.failing:
            return process_err(cmd, 128, f"fatal: {sub} failed")

        match sub:
            case "describe":
                if self.latest is None:
                    return process_err(cmd, 128, "fatal: No names found")
                return Ok(self.latest + "\n")
            case "tag":
                return Ok("".join(f"{t}\n" for t in self.tags))
            case "log":
                return Ok(self.log)
            case "remote":
                if self.push_url is None:
                    return process_err(cmd, 2, "error: No such remote 'origin'")
                return Ok(self.push_url + "\n")
            case "rev-parse":
                if self.toplevel is None:
                    return process_err(cmd, 128, "fatal: not a git repository")
                return Ok(self.toplevel + "\n")
        return process_err(cmd, 1, f"unexpected git call: {args}")

    def log_ranges(self) -> list[str]:
        return [call[-1] for call in self.calls if call[0] == "log"]
