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

"""Commit record assembly.

Pure implementation: no I/O, no logging, no side effects. Combines the
subject grammar with the footer extractors into one :class:`CommitRecord`.
"""

from __future__ import annotations

from commitlog.commit_parsing._issues import extract_breaking, extract_issues
from commitlog.commit_parsing._subject import parse_subject
from commitlog.commit_parsing._types import CommitRecord


def parse_commit(
    header: str,
    body: str,
    footer: str,
    short_hash: str,
    full_hash: str,
) -> CommitRecord:
    """Build a :class:`CommitRecord` from the segments of one commit.

    Never raises. A subject outside the grammar yields a record with
    empty ``type`` and ``description``, ``breaking=False`` and no issues;
    the raw segments and hashes are kept either way.

    Args:
        header: The subject line.
        body: The free-form body.
        footer: The trailer block.
        short_hash: Abbreviated commit hash.
        full_hash: Full commit hash.
    """
    subject = parse_subject(header)
    if subject is None:
        return CommitRecord(
            header=header,
            body=body,
            footer=footer,
            short_hash=short_hash,
            full_hash=full_hash,
        )

    declared, breaks = extract_breaking(footer)
    return CommitRecord(
        type=subject.type,
        scope=subject.scope,
        breaking=subject.breaking or declared,
        description=subject.description,
        gitmoji=subject.gitmoji,
        pr=subject.pr,
        breaks=breaks,
        issues=extract_issues(footer),
        header=header,
        body=body,
        footer=footer,
        short_hash=short_hash,
        full_hash=full_hash,
    )
