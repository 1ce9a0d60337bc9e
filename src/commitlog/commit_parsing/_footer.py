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

"""Body / footer segmentation for commit message tails.

A footer is the trailing block of one-line metadata after the body::

    Rework the retry loop so backoff is capped.
                                                  <- separator
    Reviewed-by: Jane Doe                         <- footer start
    Refs #42
    BREAKING CHANGE: retry() no longer accepts a float

The tail is scanned from the last line upward. Each footer-shaped line
moves the footer start up to it; a blank line above a footer line ends
the scan. Non-footer text lines are stepped over without ending the scan.

This is a heuristic. A body that contains footer-shaped lines with no
blank line between them and the real footer is folded into the footer.
"""

from __future__ import annotations

import re

from commitlog.commit_parsing._types import BodyFooter

BREAKING_FOOTER_PATTERN: re.Pattern[str] = re.compile(r'^BREAKING CHANGE:')

# Reviewed-by: Z, Refs: #123, Co-authored-by: A <a@b.c>
TOKEN_VALUE_PATTERN: re.Pattern[str] = re.compile(r'^[A-Za-z-]+(-[A-Za-z]+)*:\s+.+')

# Fixes #123, Closes #456
TOKEN_ISSUE_PATTERN: re.Pattern[str] = re.compile(r'^[A-Za-z-]+\s+#\d+')


def is_footer_line(line: str) -> bool:
    """Return ``True`` if ``line`` looks like a commit footer trailer.

    >>> is_footer_line('Refs #12')
    True
    >>> is_footer_line('Co-authored-by: Ada <ada@example.com>')
    True
    >>> is_footer_line('plain prose')
    False
    """
    if not line:
        return False
    return bool(
        BREAKING_FOOTER_PATTERN.match(line) or TOKEN_VALUE_PATTERN.match(line) or TOKEN_ISSUE_PATTERN.match(line)
    )


def _normalize(text: str) -> str:
    return text.replace('\r\n', '\n').strip()


def split_body_and_footer(raw: str) -> BodyFooter:
    """Split a commit message tail into body and footer.

    Args:
        raw: Everything after the subject line.

    Returns:
        A :class:`BodyFooter`. ``footer`` is empty when no trailer line
        was found.
    """
    lines = _normalize(raw).split('\n')

    footer_start: int | None = None
    for index in range(len(lines) - 1, -1, -1):
        line = lines[index].strip()
        if is_footer_line(line):
            footer_start = index
        elif footer_start is not None and not line:
            break

    if footer_start is None:
        return BodyFooter(body='\n'.join(lines).strip(), footer='')

    return BodyFooter(
        body='\n'.join(lines[:footer_start]).strip(),
        footer='\n'.join(lines[footer_start:]).strip(),
    )
