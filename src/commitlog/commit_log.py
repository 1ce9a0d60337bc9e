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

r"""Commit log retrieval and record building.

Each commit is printed by git as a fixed block closed by a sentinel::

    <full hash>
    <short hash>
    <subject>
    <body and footer lines...>
    ==END==

Pipeline::

    vcs.log_raw(from_ref, to_ref, format=log_format(sentinel))
         │
         ▼
    split_raw_log(raw, sentinel)       → one chunk per commit
         │
         ▼
    parse_chunk(chunk)                 → hashes, subject, tail
         │                               split_body_and_footer(tail)
         ▼
    parse_commit(...)                  → CommitRecord

Records come back in ``git log`` order, newest first. Nothing is cached;
each call queries git again.

Usage::

    from commitlog.commit_log import build_commit_log

    records = await build_commit_log(vcs, 'v1.1.0', 'HEAD')
"""

from __future__ import annotations

from commitlog.backends.vcs import VCS
from commitlog.commit_parsing import CommitRecord, parse_commit, split_body_and_footer
from commitlog.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SENTINEL = '==END=='

# One-line summary format, for humans rather than the parser.
ONELINE_FORMAT = '* %s (%h)'


def log_format(sentinel: str = DEFAULT_SENTINEL) -> str:
    """Return the ``--pretty=format:`` string that closes each commit with ``sentinel``."""
    return f'%H%n%h%n%s%n%b%n{sentinel}'


LOG_FORMAT = log_format()


def split_raw_log(raw: str, sentinel: str = DEFAULT_SENTINEL) -> list[str]:
    """Split raw log output into one chunk per commit, dropping blank chunks."""
    if not raw:
        return []
    return [chunk for chunk in raw.split(sentinel) if chunk.strip()]


def parse_chunk(chunk: str) -> CommitRecord:
    """Parse one sentinel-delimited commit block into a record.

    Blank lines are dropped before the tail is handed to the splitter.
    Missing leading fields become ``''``.
    """
    lines = [line for line in chunk.replace('\r\n', '\n').strip().split('\n') if line.strip()]
    full_hash, short_hash, subject = (lines + ['', '', ''])[:3]
    parts = split_body_and_footer('\n'.join(lines[3:]))
    return parse_commit(subject, parts.body, parts.footer, short_hash, full_hash)


def parse_raw_log(raw: str, sentinel: str = DEFAULT_SENTINEL) -> tuple[CommitRecord, ...]:
    """Parse a whole raw log dump into records, keeping log order."""
    return tuple(parse_chunk(chunk) for chunk in split_raw_log(raw, sentinel))


async def build_commit_log(
    vcs: VCS,
    from_ref: str = '',
    to_ref: str = 'HEAD',
    *,
    sentinel: str = DEFAULT_SENTINEL,
    no_merges: bool = True,
) -> tuple[CommitRecord, ...]:
    """Read the commits in ``from_ref...to_ref`` and parse them.

    Args:
        vcs: VCS backend used for the log query.
        from_ref: Lower boundary; ``''`` for all history.
        to_ref: Upper boundary.
        sentinel: Delimiter appended after each commit.
        no_merges: Exclude merge commits.

    Returns:
        Records newest first. A failed or empty log gives an empty tuple.
    """
    raw = await vcs.log_raw(
        from_ref=from_ref,
        to_ref=to_ref,
        format=log_format(sentinel),
        no_merges=no_merges,
    )
    records = parse_raw_log(raw, sentinel)
    logger.debug(
        'commit_log_built',
        from_ref=from_ref,
        to_ref=to_ref,
        count=len(records),
        unparsed=sum(1 for record in records if not record.parsed),
    )
    return records


__all__ = [
    'DEFAULT_SENTINEL',
    'LOG_FORMAT',
    'ONELINE_FORMAT',
    'build_commit_log',
    'log_format',
    'parse_chunk',
    'parse_raw_log',
    'split_raw_log',
]
