"""Changelog generation from git history.

The changelog of a tag lists the non-merge commits since the previous tag,
newest first, one bullet per distinct subject:

    * 3f2a9c1 Add --json flag
    * 8d01b7e Fix crash on empty config
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from relkit.core.result import Err, Ok, Result
from relkit.git.repository import CommitLine, GitError

if TYPE_CHECKING:
    from relkit.git.repository import Repository

__all__ = [
    "build_changelog",
    "collect_entries",
    "dedupe_entries",
    "previous_tag",
    "render_changelog",
    "revision_range",
]


def previous_tag(repo: Repository, tag: str) -> Result[str | None, GitError]:
    """Newest tag by creation date other than `tag`, or None."""
    tags = repo.tags_by_creation()
    if isinstance(tags, Err):
        return tags
    for candidate in tags.value:
        if candidate != tag:
            return Ok(candidate)
    return Ok(None)


def revision_range(tag: str, previous: str | None) -> str:
    """`previous..tag`, or just `tag` (whole history) when there is no previous."""
    if previous is None:
        return tag
    return f"{previous}..{tag}"


def collect_entries(repo: Repository, tag: str) -> Result[list[CommitLine], GitError]:
    prev = previous_tag(repo, tag)
    if isinstance(prev, Err):
        return prev
    return repo.log_range(revision_range(tag, prev.value))


def dedupe_entries(entries: Iterable[CommitLine]) -> list[CommitLine]:
    """Drop commits whose subject was already seen; order is preserved."""
    seen: set[str] = set()
    out: list[CommitLine] = []
    for entry in entries:
        if entry.subject in seen:
            continue
        seen.add(entry.subject)
        out.append(entry)
    return out


def render_changelog(entries: Iterable[CommitLine]) -> str:
    return "\n".join(f"* {e.short_hash} {e.subject}" for e in entries)


def build_changelog(repo: Repository, tag: str) -> Result[str, GitError]:
    """Rendered, deduplicated changelog for `tag`."""
    entries = collect_entries(repo, tag)
    if isinstance(entries, Err):
        return entries
    return Ok(render_changelog(dedupe_entries(entries.value)))
