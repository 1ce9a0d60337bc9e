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

"""VCS protocol for commitlog.

The :class:`VCS` protocol is the only door between commitlog and the
repository. Query methods return plain strings; a failed query returns
``''`` instead of raising, which the range resolver and the log pipeline
read as "no tag" and "no commits".

The default implementation is :class:`GitCLIBackend`. Tests substitute
a fake that returns canned output.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from commitlog.backends.vcs.git import GitCLIBackend


@runtime_checkable
class VCS(Protocol):
    """Protocol for the version control queries commitlog needs."""

    async def is_work_tree(self) -> bool:
        """Return ``True`` if the root is inside a work tree."""
        ...

    async def log_raw(
        self,
        *,
        from_ref: str = '',
        to_ref: str = 'HEAD',
        format: str = '%H %s',
        no_merges: bool = True,
    ) -> str:
        """Return raw log output with whitespace preserved.

        Args:
            from_ref: Lower boundary. Empty means the start of history.
            to_ref: Upper boundary.
            format: Pretty-print format string.
            no_merges: Exclude merge commits.
        """
        ...

    async def latest_tag(self, *, match: str = '*', exclude: str = '*-beta.*') -> str:
        """Return the nearest tag reachable from HEAD, or ``''``.

        Args:
            match: Glob a tag must match.
            exclude: Glob of tags to skip.
        """
        ...

    async def latest_tag_from_all_refs(self, *, match: str = '*') -> str:
        """Return the highest version-sorted tag in the repository, or ``''``."""
        ...

    async def previous_tag(self, current: str = '') -> str:
        """Return the tag preceding ``current``, or ``''``.

        Args:
            current: The tag to step back from. Empty means the second
                newest tagged commit.
        """
        ...

    async def full_hash(self, rev: str) -> str:
        """Return the full commit hash for ``rev``, or ``''`` if unknown."""
        ...


__all__ = [
    'VCS',
    'GitCLIBackend',
]
