# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Tests for the Git VCS backend.

Mocks ``_git`` to avoid real git calls.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import call, patch

import pytest
from commitlog.backends._run import CommandResult, TimeoutExpired
from commitlog.backends.vcs import VCS
from commitlog.backends.vcs.git import GitCLIBackend
from commitlog.logging import configure_logging

from tests._fakes import FakeVCS

configure_logging(quiet=True)


def _ok(stdout: str = '', **kw: Any) -> CommandResult:  # noqa: ANN401
    return CommandResult(command=['git'], return_code=0, stdout=stdout, **kw)


def _fail(stderr: str = '', **kw: Any) -> CommandResult:  # noqa: ANN401
    return CommandResult(command=['git'], return_code=128, stderr=stderr, **kw)


@pytest.fixture()
def git() -> GitCLIBackend:
    """Git."""
    return GitCLIBackend(repo_root=Path('/fake/repo'))


class TestProtocol:
    """Both the real backend and the fake satisfy the VCS protocol."""

    def test_git_backend(self, git: GitCLIBackend) -> None:
        """Test git backend."""
        assert isinstance(git, VCS)

    def test_fake(self) -> None:
        """Test fake."""
        assert isinstance(FakeVCS(), VCS)


class TestGitInvocation:
    """Tests for the synchronous _git helper."""

    def test_runs_in_repo_root_without_prompts(self, git: GitCLIBackend) -> None:
        """Test runs in repo root without prompts."""
        with patch('commitlog.backends.vcs.git.run_command', return_value=_ok()) as m:
            git._git('status')
        (argv,), kwargs = m.call_args
        assert argv == ['git', 'status']
        assert kwargs['cwd'] == Path('/fake/repo')
        assert kwargs['env']['GIT_TERMINAL_PROMPT'] == '0'
        assert kwargs['env']['GIT_OPTIONAL_LOCKS'] == '0'
        assert kwargs['check'] is False


class TestCommandErrors:
    """Missing git or a hung command reads as an empty answer."""

    @pytest.mark.asyncio()
    async def test_git_not_installed(self, git: GitCLIBackend) -> None:
        """Test git not installed."""
        with patch.object(git, '_git', side_effect=FileNotFoundError(2, 'No such file or directory', 'git')):
            assert await git.is_work_tree() is False
            assert await git.latest_tag() == ''
            assert await git.log_raw() == ''

    @pytest.mark.asyncio()
    async def test_timeout(self, git: GitCLIBackend) -> None:
        """Test timeout."""
        with patch.object(git, '_git', side_effect=TimeoutExpired(['git', 'log'], 120)):
            assert await git.log_raw(from_ref='v1.0.0') == ''
            assert await git.previous_tag('v1.0.0') == ''


class TestIsWorkTree:
    """Tests for is_work_tree()."""

    @pytest.mark.asyncio()
    async def test_inside(self, git: GitCLIBackend) -> None:
        """Test inside."""
        with patch.object(git, '_git', return_value=_ok('true\n')) as m:
            assert await git.is_work_tree() is True
            m.assert_called_once_with('rev-parse', '--is-inside-work-tree')

    @pytest.mark.asyncio()
    async def test_outside(self, git: GitCLIBackend) -> None:
        """Test outside."""
        with patch.object(git, '_git', return_value=_fail('fatal: not a git repository')):
            assert await git.is_work_tree() is False

    @pytest.mark.asyncio()
    async def test_bare_repo(self, git: GitCLIBackend) -> None:
        """Test bare repo."""
        with patch.object(git, '_git', return_value=_ok('false\n')):
            assert await git.is_work_tree() is False


class TestLogRaw:
    """Tests for log_raw()."""

    @pytest.mark.asyncio()
    async def test_symmetric_range(self, git: GitCLIBackend) -> None:
        """Test symmetric range."""
        with patch.object(git, '_git', return_value=_ok('x')) as m:
            await git.log_raw(from_ref='v1.1.0', to_ref='HEAD', format='%H')
            m.assert_called_once_with('log', '--pretty=format:%H', '--no-merges', 'v1.1.0...HEAD')

    @pytest.mark.asyncio()
    async def test_no_from_ref(self, git: GitCLIBackend) -> None:
        """Without a lower bound only the upper ref is passed."""
        with patch.object(git, '_git', return_value=_ok('x')) as m:
            await git.log_raw(to_ref='main', format='%H')
            m.assert_called_once_with('log', '--pretty=format:%H', '--no-merges', 'main')

    @pytest.mark.asyncio()
    async def test_blank_refs(self, git: GitCLIBackend) -> None:
        """Test blank refs."""
        with patch.object(git, '_git', return_value=_ok('x')) as m:
            await git.log_raw(from_ref='  ', to_ref='', format='%H')
            m.assert_called_once_with('log', '--pretty=format:%H', '--no-merges', 'HEAD')

    @pytest.mark.asyncio()
    async def test_with_merges(self, git: GitCLIBackend) -> None:
        """Test with merges."""
        with patch.object(git, '_git', return_value=_ok('x')) as m:
            await git.log_raw(format='%s', no_merges=False)
            m.assert_called_once_with('log', '--pretty=format:%s', 'HEAD')

    @pytest.mark.asyncio()
    async def test_output_not_trimmed(self, git: GitCLIBackend) -> None:
        """Test output not trimmed."""
        with patch.object(git, '_git', return_value=_ok('\nabc\n==END==\n')):
            assert await git.log_raw() == '\nabc\n==END==\n'

    @pytest.mark.asyncio()
    async def test_failure(self, git: GitCLIBackend) -> None:
        """A failed log reads as empty."""
        with patch.object(git, '_git', return_value=_fail('fatal: bad revision')):
            assert await git.log_raw(from_ref='nope') == ''


class TestLatestTag:
    """Tests for latest_tag()."""

    @pytest.mark.asyncio()
    async def test_found(self, git: GitCLIBackend) -> None:
        """Test found."""
        with patch.object(git, '_git', return_value=_ok('v1.2.0\n')) as m:
            assert await git.latest_tag() == 'v1.2.0'
            m.assert_called_once_with('describe', '--tags', '--abbrev=0', '--match=*', '--exclude=*-beta.*')

    @pytest.mark.asyncio()
    async def test_no_exclude(self, git: GitCLIBackend) -> None:
        """Test no exclude."""
        with patch.object(git, '_git', return_value=_ok('v1\n')) as m:
            await git.latest_tag(match='v*', exclude='')
            m.assert_called_once_with('describe', '--tags', '--abbrev=0', '--match=v*')

    @pytest.mark.asyncio()
    async def test_no_tags(self, git: GitCLIBackend) -> None:
        """Test no tags."""
        with patch.object(git, '_git', return_value=_fail('fatal: No names found')):
            assert await git.latest_tag() == ''


class TestLatestTagFromAllRefs:
    """Tests for latest_tag_from_all_refs()."""

    @pytest.mark.asyncio()
    async def test_found(self, git: GitCLIBackend) -> None:
        """Test found."""
        with patch.object(git, '_git', return_value=_ok('v2.0.0\n')) as m:
            assert await git.latest_tag_from_all_refs(match='v*') == 'v2.0.0'
            m.assert_called_once_with(
                '-c',
                'versionsort.suffix=-',
                'for-each-ref',
                '--count=1',
                '--sort=-v:refname',
                '--format=%(refname:short)',
                'refs/tags/v*',
            )

    @pytest.mark.asyncio()
    async def test_no_tags(self, git: GitCLIBackend) -> None:
        """for-each-ref prints nothing when no tag matches."""
        with patch.object(git, '_git', return_value=_ok('')):
            assert await git.latest_tag_from_all_refs() == ''


class TestPreviousTag:
    """Tests for previous_tag()."""

    @pytest.mark.asyncio()
    async def test_from_current(self, git: GitCLIBackend) -> None:
        """Test from current."""
        with patch.object(git, '_git', side_effect=[_ok('sha1\n'), _ok('v1.1.0\n')]) as m:
            assert await git.previous_tag('v1.2.0') == 'v1.1.0'
            assert m.call_args_list == [
                call('rev-list', '-1', 'v1.2.0'),
                call('describe', '--tags', '--abbrev=0', 'sha1^'),
            ]

    @pytest.mark.asyncio()
    async def test_without_current(self, git: GitCLIBackend) -> None:
        """Test without current."""
        with patch.object(git, '_git', side_effect=[_ok('sha2\n'), _ok('v0.9.0\n')]) as m:
            assert await git.previous_tag() == 'v0.9.0'
            assert m.call_args_list[0] == call('rev-list', '--tags', '--skip=1', '--max-count=1')

    @pytest.mark.asyncio()
    async def test_unknown_current(self, git: GitCLIBackend) -> None:
        """No commit for the tag means no describe call."""
        with patch.object(git, '_git', return_value=_fail()) as m:
            assert await git.previous_tag('v9.9.9') == ''
            m.assert_called_once()

    @pytest.mark.asyncio()
    async def test_first_tag(self, git: GitCLIBackend) -> None:
        """The oldest tag has no predecessor."""
        with patch.object(git, '_git', side_effect=[_ok('sha1\n'), _fail('fatal: No names found')]):
            assert await git.previous_tag('v0.1.0') == ''


class TestFullHash:
    """Tests for full_hash()."""

    @pytest.mark.asyncio()
    async def test_resolves(self, git: GitCLIBackend) -> None:
        """Test resolves."""
        with patch.object(git, '_git', return_value=_ok('a' * 40 + '\n')) as m:
            assert await git.full_hash(' v1.0.0 ') == 'a' * 40
            m.assert_called_once_with('rev-parse', '--verify', '--quiet', 'v1.0.0^{commit}')

    @pytest.mark.asyncio()
    async def test_unknown(self, git: GitCLIBackend) -> None:
        """Test unknown."""
        with patch.object(git, '_git', return_value=_fail()):
            assert await git.full_hash('nope') == ''

    @pytest.mark.asyncio()
    async def test_blank(self, git: GitCLIBackend) -> None:
        """Blank input never reaches git."""
        with patch.object(git, '_git') as m:
            assert await git.full_hash('  ') == ''
            m.assert_not_called()
