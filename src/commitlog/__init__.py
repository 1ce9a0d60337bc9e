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

"""Structured commit records from git history.

commitlog turns a range of git history into typed Conventional Commit
records (type, scope, breaking flag, gitmoji, linked issues, PR number)
that changelog and release-note generators can group and render.

Usage::

    from pathlib import Path

    from commitlog import GitCLIBackend, build_commit_log, resolve_changelog_range

    vcs = GitCLIBackend(repo_root=Path('.'))
    rng = await resolve_changelog_range(vcs, is_increment=True)
    records = await build_commit_log(vcs, rng.from_ref, rng.to_ref)
"""

__version__ = '0.1.0'

from commitlog.backends.vcs import VCS, GitCLIBackend
from commitlog.commit_log import build_commit_log, parse_chunk, parse_raw_log, split_raw_log
from commitlog.commit_parsing import CommitRecord, IssueLinkType, parse_commit
from commitlog.revision_range import RevisionRange, resolve_changelog_range, resolve_range

__all__ = [
    'VCS',
    'CommitRecord',
    'GitCLIBackend',
    'IssueLinkType',
    'RevisionRange',
    '__version__',
    'build_commit_log',
    'parse_chunk',
    'parse_commit',
    'parse_raw_log',
    'resolve_changelog_range',
    'resolve_range',
    'split_raw_log',
]
