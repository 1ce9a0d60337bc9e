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

"""Commit message parsing.

Everything in this subpackage is pure: no I/O, no logging, and no
exceptions on malformed input.

Pieces, leaf first:

- :func:`is_footer_line`: is this line a trailer?
- :func:`split_body_and_footer`: separate body from the trailer block.
- :func:`parse_subject`: ``[gitmoji] type(scope)!: [gitmoji] description (#pr)``.
- :func:`extract_issues` / :func:`extract_breaking`: footer metadata.
- :func:`parse_commit`: all of the above into a :class:`CommitRecord`.

Usage::

    from commitlog.commit_parsing import parse_commit, split_body_and_footer

    parts = split_body_and_footer('Explain the change.\\n\\nCloses #7')
    record = parse_commit('feat(core): add x (#7)', parts.body, parts.footer, 'abc', 'abc123')
    assert record.scope == 'core'
    assert record.issues[IssueLinkType.CLOSES] == (7,)
"""

from commitlog.commit_parsing._conventional import parse_commit
from commitlog.commit_parsing._footer import is_footer_line, split_body_and_footer
from commitlog.commit_parsing._issues import extract_breaking, extract_issues
from commitlog.commit_parsing._subject import SUBJECT_PATTERN, parse_subject
from commitlog.commit_parsing._types import (
    BodyFooter,
    CommitRecord,
    IssueLinkType,
    SubjectFields,
    empty_issues,
)

__all__ = [
    'SUBJECT_PATTERN',
    'BodyFooter',
    'CommitRecord',
    'IssueLinkType',
    'SubjectFields',
    'empty_issues',
    'extract_breaking',
    'extract_issues',
    'is_footer_line',
    'parse_commit',
    'parse_subject',
    'split_body_and_footer',
]
