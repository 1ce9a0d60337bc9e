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

"""Pure types for commit message parsing.

This module has **zero** runtime dependencies beyond the standard library.
Everything here is a frozen dataclass or enum: no I/O, no logging, no
side effects.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class IssueLinkType(str, Enum):
    """Footer keywords that link a commit to issues.

    The set is closed: every :class:`CommitRecord` carries all five kinds,
    with an empty tuple for kinds the footer does not mention.
    """

    FIXES = 'fixes'
    CLOSES = 'closes'
    RESOLVES = 'resolves'
    RELATED = 'related'
    REFS = 'refs'


def empty_issues() -> Mapping[IssueLinkType, tuple[int, ...]]:
    """Return a read-only issue mapping with every link kind empty."""
    return MappingProxyType({kind: () for kind in IssueLinkType})


@dataclass(frozen=True)
class BodyFooter:
    """A commit message tail split into free-form body and trailer block.

    Attributes:
        body: Everything above the footer block, trimmed.
        footer: The trailing block of ``Token: value`` / ``Token #n``
            lines, trimmed. Empty when no footer was found.
    """

    body: str = ''
    footer: str = ''


@dataclass(frozen=True)
class SubjectFields:
    """Fields captured from a Conventional Commit subject line.

    Optional groups that did not participate in the match are ``None``,
    so ``feat: x`` (``scope=None``) differs from ``feat(): x`` (``scope=''``).
    """

    type: str
    description: str
    scope: str | None = None
    breaking: bool = False
    gitmoji: tuple[str, ...] = ()
    pr: str | None = None


@dataclass(frozen=True)
class CommitRecord:
    """One parsed commit, ready for grouping and rendering.

    A subject that does not follow the convention still produces a record
    with empty ``type`` and ``description``; use :attr:`parsed` to filter
    those out.

    Attributes:
        type: The commit type (e.g. ``"feat"``), or ``''`` if unparsed.
        description: The trimmed summary, or ``''`` if unparsed.
        scope: The parenthesized scope, ``None`` when absent.
        breaking: ``!`` marker or a ``BREAKING CHANGE:`` footer.
        gitmoji: Emoji or ``:code:`` tokens before the type and/or the
            description, in subject order.
        pr: Pull request number from a trailing ``(#123)``.
        breaks: Text following the breaking-change footer marker.
        issues: Issue numbers per link kind, in footer order.
        header: The raw subject line.
        body: The raw body segment.
        footer: The raw footer segment.
        short_hash: Abbreviated commit hash.
        full_hash: Full commit hash (unique per commit).
    """

    type: str = ''
    description: str = ''
    scope: str | None = None
    breaking: bool = False
    gitmoji: tuple[str, ...] = ()
    pr: str | None = None
    breaks: str | None = None
    issues: Mapping[IssueLinkType, tuple[int, ...]] = field(default_factory=empty_issues)
    header: str = ''
    body: str = ''
    footer: str = ''
    short_hash: str = ''
    full_hash: str = ''

    @property
    def parsed(self) -> bool:
        """Whether the subject matched the Conventional Commit grammar."""
        return bool(self.type)

    def to_dict(self) -> dict[str, Any]:  # noqa: ANN401 - JSON-ready values
        """Return a plain dict suitable for ``json.dumps``."""
        return {
            'type': self.type,
            'scope': self.scope,
            'breaking': self.breaking,
            'description': self.description,
            'gitmoji': list(self.gitmoji),
            'pr': self.pr,
            'breaks': self.breaks,
            'issues': {kind.value: list(self.issues.get(kind, ())) for kind in IssueLinkType},
            'header': self.header,
            'body': self.body,
            'footer': self.footer,
            'short_hash': self.short_hash,
            'full_hash': self.full_hash,
        }
