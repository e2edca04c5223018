# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for ModelProcessMatcher.

The matcher is the only thing standing between the reaper and unrelated
engines on the host, so the directory rules are covered in detail.
"""

from pathlib import Path

import pytest

from mongohat.models import ModelProcessMatcher

WORKDIR = Path("/tmp/.mongohat_users")


@pytest.fixture
def matcher() -> ModelProcessMatcher:
    return ModelProcessMatcher(executable_name="mongod", directory=WORKDIR)


class TestEngineIdentification:
    """Tests for recognising the engine executable."""

    def test_matches_by_process_name(self, matcher: ModelProcessMatcher) -> None:
        assert matcher.matches("mongod", ["mongod", "--dbpath", str(WORKDIR)])

    def test_matches_by_executable_path(self, matcher: ModelProcessMatcher) -> None:
        """A full path in argv[0] is reduced to its basename."""
        assert matcher.matches(
            None, ["/usr/local/bin/mongod", "--dbpath", str(WORKDIR)]
        )

    def test_matches_windows_executable(self, matcher: ModelProcessMatcher) -> None:
        assert matcher.matches("mongod.exe", ["mongod.exe", "--dbpath", str(WORKDIR)])

    @pytest.mark.parametrize("name", ["mongos", "mongodump", "python", "mongod-helper"])
    def test_rejects_other_executables(
        self, matcher: ModelProcessMatcher, name: str
    ) -> None:
        """Other programs mentioning the directory are never matched."""
        assert not matcher.matches(name, [name, "--dbpath", str(WORKDIR)])

    def test_rejects_empty_cmdline(self, matcher: ModelProcessMatcher) -> None:
        """Processes whose arguments cannot be read are skipped."""
        assert not matcher.matches("mongod", [])


class TestDirectoryReference:
    """Tests for the working-directory argument filter."""

    def test_matches_directory_argument(self, matcher: ModelProcessMatcher) -> None:
        assert matcher.matches("mongod", ["mongod", "--port", "27777", "--dbpath", str(WORKDIR)])

    def test_matches_path_inside_directory(self, matcher: ModelProcessMatcher) -> None:
        """Replica set members and log files live below the working directory."""
        assert matcher.matches(
            "mongod", ["mongod", "--logpath", f"{WORKDIR}/mongod-27777.log"]
        )

    def test_matches_equals_style_option(self, matcher: ModelProcessMatcher) -> None:
        assert matcher.matches("mongod", ["mongod", f"--dbpath={WORKDIR}/member-0"])

    def test_matches_trailing_separator(self, matcher: ModelProcessMatcher) -> None:
        assert matcher.matches("mongod", ["mongod", "--dbpath", f"{WORKDIR}/"])

    def test_rejects_sibling_with_common_prefix(
        self, matcher: ModelProcessMatcher
    ) -> None:
        """``.mongohat_users2`` belongs to a different context."""
        assert not matcher.matches(
            "mongod", ["mongod", "--dbpath", "/tmp/.mongohat_users2"]
        )

    def test_rejects_parent_directory(self, matcher: ModelProcessMatcher) -> None:
        assert not matcher.matches("mongod", ["mongod", "--dbpath", "/tmp"])

    def test_directory_in_executable_path_is_ignored(
        self, matcher: ModelProcessMatcher
    ) -> None:
        """Only arguments count, not argv[0]."""
        assert not matcher.matches(
            "mongod", [f"{WORKDIR}/mongod", "--dbpath", "/data/db"]
        )
