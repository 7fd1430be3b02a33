"""Git operations module.

Usage:
    from relkit.git import Repository, find_repo_root

    repo = Repository(find_repo_root(Path.cwd()))
    tag = repo.latest_tag()
"""

from relkit.git.repository import (
    CommitLine,
    GitError,
    RemoteLocation,
    Repository,
    find_repo_root,
    parse_remote_url,
)

__all__ = [
    "CommitLine",
    "GitError",
    "RemoteLocation",
    "Repository",
    "find_repo_root",
    "parse_remote_url",
]
