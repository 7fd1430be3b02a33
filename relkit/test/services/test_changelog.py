"""Tests for relkit.services.changelog."""

from __future__ import annotations

from pathlib import Path

import pytest

from relkit.core.result import Err, Ok
from relkit.git import repository as repo_mod
from relkit.git.repository import CommitLine, Repository
from relkit.services.changelog import (
    build_changelog,
    dedupe_entries,
    previous_tag,
    render_changelog,
    revision_range,
)
from relkit.test.fakes import FakeGit


def test_dedupe_keeps_first_occurrence_in_order() -> None:
    entries = [CommitLine("h1", "fix x"), CommitLine("h2", "fix x"), CommitLine("h3", "add y")]

    deduped = dedupe_entries(entries)

    assert render_changelog(deduped).split("\n") == ["* h1 fix x", "* h3 add y"]


def test_render_empty() -> None:
    assert render_changelog([]) == ""


@pytest.mark.parametrize(
    ("previous", "expected"),
    [("v1.1.0", "v1.1.0..v1.2.0"), (None, "v1.2.0")],
)
def test_revision_range(previous: str | None, expected: str) -> None:
    assert revision_range("v1.2.0", previous) == expected


class TestPreviousTag:
    def test_skips_current_tag(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(repo_mod, "run_process", FakeGit(tags=("v1.2.0", "v1.1.0", "v1.0.0")))

        assert previous_tag(Repository(tmp_path), "v1.2.0") == Ok("v1.1.0")

    def test_current_tag_not_yet_created(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(repo_mod, "run_process", FakeGit(tags=("v1.1.0", "v1.0.0")))

        assert previous_tag(Repository(tmp_path), "v1.2.0") == Ok("v1.1.0")

    def test_none_when_only_tag(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(repo_mod, "run_process", FakeGit(tags=("v1.0.0",)))

        assert previous_tag(Repository(tmp_path), "v1.0.0") == Ok(None)


class TestBuildChangelog:
    def test_between_tags(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        fake = FakeGit(
            tags=("v1.2.0", "v1.1.0"),
            log="c3 add y\nb2 fix x\na1 fix x\n",
        )
        monkeypatch.setattr(repo_mod, "run_process", fake)

        result = build_changelog(Repository(tmp_path), "v1.2.0")

        assert result == Ok("* c3 add y\n* b2 fix x")
        assert fake.log_ranges() == ["v1.1.0..v1.2.0"]

    def test_first_release_uses_whole_history(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fake = FakeGit(tags=("v0.1.0",), log="a1 initial commit")
        monkeypatch.setattr(repo_mod, "run_process", fake)

        result = build_changelog(Repository(tmp_path), "v0.1.0")

        assert result == Ok("* a1 initial commit")
        assert fake.log_ranges() == ["v0.1.0"]

    def test_git_failure(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        fake = FakeGit(tags=("v1.2.0", "v1.1.0"), failing=frozenset({"log"}))
        monkeypatch.setattr(repo_mod, "run_process", fake)

        result = build_changelog(Repository(tmp_path), "v1.2.0")

        assert isinstance(result, Err)
        assert result.error.command == "log"
