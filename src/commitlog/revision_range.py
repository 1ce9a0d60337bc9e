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

"""Revision range resolution: which commits belong to this release.

Decision table::

    latest tag   is_increment   previous tag   range
    ──────────   ────────────   ────────────   ─────────────────────────────
    none         any            any            ''          .. HEAD
    v1.2.0       False          v1.1.0         v1.1.0      .. v1.2.0^1
    v1.2.0       True           any            v1.2.0      .. HEAD
    v1.2.0       False          none           v1.2.0      .. HEAD

The second row covers re-running changelog generation without a version
bump: commits already attributed to ``v1.2.0`` must not be listed again,
so the window is shifted back one tag and ends at the tagged commit's
first parent.

An empty ``from_ref`` means "from the beginning of history".
"""

from __future__ import annotations

from dataclasses import dataclass

from commitlog.backends.vcs import VCS
from commitlog.logging import get_logger

logger = get_logger(__name__)

# Tag lookup strategies: nearest reachable tag, or highest version tag.
TAG_SOURCES: frozenset[str] = frozenset({'describe', 'refs'})


@dataclass(frozen=True)
class RevisionRange:
    """Bounds of the commits considered new.

    Attributes:
        from_ref: Lower boundary (exclusive); ``''`` for all history.
        to_ref: Upper boundary (inclusive).
    """

    from_ref: str = ''
    to_ref: str = 'HEAD'


def resolve_range(latest_tag: str, previous_tag: str, *, is_increment: bool) -> RevisionRange:
    """Apply the range decision table to already-queried tags.

    Args:
        latest_tag: The latest release tag, or ``''``.
        previous_tag: The tag before ``latest_tag``, or ``''``.
        is_increment: Whether the version is being bumped in this run.
    """
    if not latest_tag:
        return RevisionRange(from_ref='', to_ref='HEAD')
    if not is_increment and previous_tag:
        return RevisionRange(from_ref=previous_tag, to_ref=f'{latest_tag}^1')
    return RevisionRange(from_ref=latest_tag, to_ref='HEAD')


async def resolve_changelog_range(
    vcs: VCS,
    *,
    is_increment: bool = True,
    match: str = '*',
    exclude: str = '*-beta.*',
    source: str = 'describe',
) -> RevisionRange:
    """Query the release tags and resolve the changelog range.

    The previous tag is only looked up once a latest tag is known.

    Args:
        vcs: VCS backend used for the tag queries.
        is_increment: Whether the version is being bumped in this run.
        match: Glob a release tag must match.
        exclude: Glob of tags to ignore (``describe`` source only).
        source: ``"describe"`` for the nearest reachable tag, ``"refs"``
            for the highest version-sorted tag.
    """
    if source == 'refs':
        latest = await vcs.latest_tag_from_all_refs(match=match)
    else:
        latest = await vcs.latest_tag(match=match, exclude=exclude)

    previous = await vcs.previous_tag(latest) if latest else ''

    rng = resolve_range(latest, previous, is_increment=is_increment)
    logger.debug(
        'changelog_range',
        latest_tag=latest or None,
        previous_tag=previous or None,
        is_increment=is_increment,
        from_ref=rng.from_ref,
        to_ref=rng.to_ref,
    )
    return rng


__all__ = [
    'TAG_SOURCES',
    'RevisionRange',
    'resolve_changelog_range',
    'resolve_range',
]
