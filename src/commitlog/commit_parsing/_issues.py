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

"""Issue links and breaking-change notes from commit footers."""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType

from commitlog.commit_parsing._types import IssueLinkType

# Line prefixes per link kind. Kinds are not exclusive: "Refs" and
# "References" both count as refs, and a line may feed several kinds.
ISSUE_LINK_PATTERNS: Mapping[IssueLinkType, re.Pattern[str]] = MappingProxyType({
    IssueLinkType.FIXES: re.compile(r'^Fixes', re.IGNORECASE),
    IssueLinkType.CLOSES: re.compile(r'^Closes', re.IGNORECASE),
    IssueLinkType.RESOLVES: re.compile(r'^Resolves', re.IGNORECASE),
    IssueLinkType.RELATED: re.compile(r'^(Related to|Related)', re.IGNORECASE),
    IssueLinkType.REFS: re.compile(r'^Refs?', re.IGNORECASE),
})

ISSUE_NUMBER_PATTERN: re.Pattern[str] = re.compile(r'#(\d+)')

BREAKING_MARKER_PATTERN: re.Pattern[str] = re.compile(r'BREAKING[ -]CHANGE:', re.IGNORECASE)
BREAKING_TEXT_PATTERN: re.Pattern[str] = re.compile(r'BREAKING[ -]CHANGE:\s*(.+)', re.IGNORECASE)


def extract_issues(footer: str) -> Mapping[IssueLinkType, tuple[int, ...]]:
    """Collect ``#123`` issue numbers per link kind from a footer.

    >>> issues = extract_issues('Closes #12\\nRefs #34, #56')
    >>> issues[IssueLinkType.CLOSES], issues[IssueLinkType.REFS]
    ((12,), (34, 56))

    Args:
        footer: The footer block of a commit message.

    Returns:
        A read-only mapping holding every :class:`IssueLinkType`, with
        numbers in the order they appear.
    """
    found: dict[IssueLinkType, list[int]] = {kind: [] for kind in IssueLinkType}

    lines = [line.strip() for line in footer.split('\n')]
    for line in filter(None, lines):
        numbers = [int(n) for n in ISSUE_NUMBER_PATTERN.findall(line)]
        for kind, pattern in ISSUE_LINK_PATTERNS.items():
            if pattern.match(line):
                found[kind].extend(numbers)

    return MappingProxyType({kind: tuple(numbers) for kind, numbers in found.items()})


def extract_breaking(footer: str) -> tuple[bool, str | None]:
    """Detect a ``BREAKING CHANGE:`` declaration in a footer.

    ``BREAKING-CHANGE:`` is accepted as a synonym.

    Returns:
        ``(declared, text)``. ``text`` is the first explanation found, or
        ``None`` when the marker carries no text.
    """
    if not BREAKING_MARKER_PATTERN.search(footer):
        return False, None
    match = BREAKING_TEXT_PATTERN.search(footer)
    return True, (match.group(1).strip() if match else None)
