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

"""Git VCS backend for commitlog.

The :class:`GitCLIBackend` implements the
:class:`~commitlog.backends.vcs.VCS` protocol by delegating to ``git``
via :func:`run_command`.

All methods are async; blocking subprocess calls are dispatched to
``asyncio.to_thread()`` and awaited one at a time.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from commitlog.backends._run import CommandResult, TimeoutExpired, run_command
from commitlog.logging import get_logger

log = get_logger('commitlog.backends.git')

# Read-only queries: never prompt for credentials, never take optional locks.
_GIT_ENV = {'GIT_TERMINAL_PROMPT': '0', 'GIT_OPTIONAL_LOCKS': '0'}


class GitCLIBackend:
    """Default :class:`~commitlog.backends.vcs.VCS` implementation using ``git``.

    Args:
        repo_root: Path to the git repository (or any directory inside it).
    """

    def __init__(self, repo_root: Path) -> None:
        """Initialize with the git repository root path."""
        self._root = repo_root

    def _git(self, *args: str, check: bool = False) -> CommandResult:
        """Run a git command synchronously (called via to_thread)."""
        return run_command(['git', *args], cwd=self._root, env=_GIT_ENV, check=check)

    async def _query(self, *args: str, trim: bool = True) -> str:
        """Run a git query, returning stdout or ``''`` on failure."""
        try:
            result = await asyncio.to_thread(self._git, *args)
        except FileNotFoundError:
            log.warning('git_not_found', hint='git must be installed and on PATH')
            return ''
        except TimeoutExpired:
            log.warning('git_timeout', args=list(args))
            return ''
        if not result.ok:
            return ''
        return result.stdout.strip() if trim else result.stdout

    async def is_work_tree(self) -> bool:
        """Return ``True`` if the root is inside a git work tree."""
        return await self._query('rev-parse', '--is-inside-work-tree') == 'true'

    async def log_raw(
        self,
        *,
        from_ref: str = '',
        to_ref: str = 'HEAD',
        format: str = '%H %s',
        no_merges: bool = True,
    ) -> str:
        """Return raw ``git log`` output, whitespace preserved.

        The symmetric range ``from...to`` is used when ``from_ref`` is set;
        otherwise the whole history reachable from ``to_ref`` is listed.
        """
        cmd_parts = ['log', f'--pretty=format:{format}']
        if no_merges:
            cmd_parts.append('--no-merges')
        start = from_ref.strip()
        end = to_ref.strip() or 'HEAD'
        cmd_parts.append(f'{start}...{end}' if start else end)
        return await self._query(*cmd_parts, trim=False)

    async def latest_tag(self, *, match: str = '*', exclude: str = '*-beta.*') -> str:
        """Return the nearest tag reachable from HEAD."""
        cmd_parts = ['describe', '--tags', '--abbrev=0', f'--match={match}']
        if exclude:
            cmd_parts.append(f'--exclude={exclude}')
        return await self._query(*cmd_parts)

    async def latest_tag_from_all_refs(self, *, match: str = '*') -> str:
        """Return the highest tag by version sort, whether reachable or not.

        ``versionsort.suffix=-`` orders ``1.0.0-rc.1`` before ``1.0.0``.
        """
        return await self._query(
            '-c',
            'versionsort.suffix=-',
            'for-each-ref',
            '--count=1',
            '--sort=-v:refname',
            '--format=%(refname:short)',
            f'refs/tags/{match}',
        )

    async def previous_tag(self, current: str = '') -> str:
        """Return the tag reachable from the parent of ``current``'s commit."""
        if current:
            sha = await self._query('rev-list', '-1', current)
        else:
            sha = await self._query('rev-list', '--tags', '--skip=1', '--max-count=1')
        if not sha:
            return ''
        return await self._query('describe', '--tags', '--abbrev=0', f'{sha}^')

    async def full_hash(self, rev: str) -> str:
        """Return the full commit hash ``rev`` points to."""
        if not rev.strip():
            return ''
        return await self._query('rev-parse', '--verify', '--quiet', f'{rev.strip()}^{{commit}}')


__all__ = [
    'GitCLIBackend',
]
