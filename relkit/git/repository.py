"""Git repository abstraction.

Read-only queries needed to cut a release: the repository root, tags in
creation order, the commit log between two tags and the push remote.
Operations that can fail return Result types.

Usage:
    repo = Repository(root)
    match repo.log_range("v1.1.0..v1.2.0"):
        case Ok(commits):
            for commit in commits:
                print(commit.short_hash, commit.subject)
        case Err(e):
            print(f"git log failed: {e.message}")
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.process import ProcessError
from relkit.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = [
    "CommitLine",
    "GitError",
    "RemoteLocation",
    "Repository",
    "find_repo_root",
    "parse_remote_url",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class CommitLine:
    """One `git log --pretty='%h %s'` line."""

    short_hash: str
    subject: str


@dataclass(frozen=True, slots=True)
class RemoteLocation:
    """Hosting location parsed from a remote URL.

    Attributes:
        host: e.g. "github.com"
        owner: Account or organization
        name: Repository name without ".git"
    """

    host: str
    owner: str
    name: str

    @property
    def slug(self) -> str:
        """`owner/name`, as used by the GitHub API."""
        return f"{self.owner}/{self.name}"


# git@github.com:owner/name.git, ssh://git@github.com:22/owner/name.git,
# https://user@github.com/owner/name
_REMOTE_PATTERNS = (
    re.compile(r"^[\w.-]+@(?P<host>[\w.-]+):(?P<owner>[\w.-]+)/(?P<name>[\w.-]+?)(?:\.git)?/?$"),
    re.compile(
        r"^(?:ssh|https?|git)://(?:[^@/]+@)?(?P<host>[\w.-]+)(?::\d+)?/"
        r"(?P<owner>[\w.-]+)/(?P<name>[\w.-]+?)(?:\.git)?/?$"
    ),
)


def parse_remote_url(url: str) -> RemoteLocation | None:
    """Parse an scp-like or URL-style remote. Returns None if unrecognized."""
    candidate = url.strip()
    for pattern in _REMOTE_PATTERNS:
        match = pattern.match(candidate)
        if match:
            return RemoteLocation(
                host=match.group("host"),
                owner=match.group("owner"),
                name=match.group("name"),
            )
    return None


def find_repo_root(cwd: Path) -> Path:
    """Top-level directory of the enclosing repository, or `cwd` outside git."""
    result = run_process(
        ["git", "rev-parse", "--show-toplevel"], cwd=cwd, timeout=_GIT_TIMEOUT_SECONDS
    )
    if isinstance(result, Ok):
        top = result.value.strip()
        if top:
            return Path(top)
    return cwd


class Repository:
    """Git repository abstraction.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def latest_tag(self) -> str | None:
        """Most recent tag reachable from HEAD.

        Returns None when the repository has no tags.
        """
        result = self._run(["describe", "--tag", "--abbrev=0"])
        match result:
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    def tags_by_creation(self) -> Result[list[str], GitError]:
        """All tags, newest first by creator date."""
        result = self._run(["tag", "--sort=-creatordate"])
        return result.map_err(lambda e: self._error("tag", e)).map(
            lambda stdout: [line.strip() for line in stdout.splitlines() if line.strip()]
        )

    def log_range(self, rev_range: str) -> Result[list[CommitLine], GitError]:
        """Non-merge commits in `rev_range`, newest first."""
        result = self._run(["log", "--no-merges", "--pretty=format:%h %s", rev_range])
        return result.map_err(lambda e: self._error("log", e)).map(self._parse_log)

    def push_url(self, remote: str = "origin") -> str | None:
        """Push URL of `remote`, or None if the remote does not exist."""
        result = self._run(["remote", "get-url", "--push", remote])
        match result:
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(
            ["git", "-C", str(self.path), *args], cwd=self.path, timeout=_GIT_TIMEOUT_SECONDS
        )

    def _error(self, command: str, e: ProcessError) -> GitError:
        return GitError(
            command=command,
            message=e.stderr.strip() or f"git {command} failed",
            returncode=e.returncode,
        )

    def _parse_log(self, output: str) -> list[CommitLine]:
        commits: list[CommitLine] = []
        for line in output.splitlines():
            line = line.strip()
            if not line:
                continue
            short_hash, _, subject = line.partition(" ")
            commits.append(CommitLine(short_hash=short_hash, subject=subject.strip()))
        return commits
