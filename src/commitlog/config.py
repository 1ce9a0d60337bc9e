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

"""Configuration reader for commitlog.

Reads ``commitlog.toml`` from the repository root and returns a validated
:class:`CommitLogConfig`. Keys are flat; a missing file means defaults.

Validation pipeline::

    commitlog.toml
         │
         ▼
    1. Unknown key      → CL-CONFIG-INVALID-KEY ("Did you mean 'tag_match'?")
         │
         ▼
    2. Type check       → CL-CONFIG-INVALID-VALUE ("'no_merges' must be bool")
         │
         ▼
    3. Value check      → CL-CONFIG-INVALID-VALUE (tag_source, sentinel)
         │
         ▼
    CommitLogConfig()   ← frozen dataclass

Supported keys::

    sentinel         = "==END=="      # per-commit delimiter in git log output
    tag_match        = "v*"           # release tag glob
    tag_exclude      = "*-beta.*"     # tags never treated as releases
    tag_source       = "describe"     # "describe" (nearest) or "refs" (highest)
    no_merges        = true           # skip merge commits
    increment        = true           # default for the range resolver
    include_unparsed = true           # keep non-conventional commits in output
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomlkit
import tomlkit.exceptions

from commitlog.errors import E, CommitLogError
from commitlog.logging import get_logger
from commitlog.revision_range import TAG_SOURCES

logger = get_logger(__name__)

CONFIG_FILENAME = 'commitlog.toml'

_TYPE_MAP: dict[str, type] = {
    'sentinel': str,
    'tag_match': str,
    'tag_exclude': str,
    'tag_source': str,
    'no_merges': bool,
    'increment': bool,
    'include_unparsed': bool,
}

VALID_KEYS: frozenset[str] = frozenset(_TYPE_MAP)


@dataclass(frozen=True)
class CommitLogConfig:
    """Validated configuration for a commitlog run.

    Attributes:
        sentinel: Delimiter git prints after each commit.
        tag_match: Glob a release tag must match.
        tag_exclude: Glob of tags to skip when finding the latest release.
        tag_source: ``"describe"`` or ``"refs"``.
        no_merges: Exclude merge commits from the log.
        increment: Default ``is_increment`` for range resolution.
        include_unparsed: Keep records whose subject did not parse.
        config_path: The file that was loaded, if any.
    """

    sentinel: str = '==END=='
    tag_match: str = '*'
    tag_exclude: str = '*-beta.*'
    tag_source: str = 'describe'
    no_merges: bool = True
    increment: bool = True
    include_unparsed: bool = True
    config_path: Path | None = None


def _suggest_key(unknown: str) -> str | None:
    """Return the closest valid key for a typo, or None."""
    matches = difflib.get_close_matches(unknown, VALID_KEYS, n=1, cutoff=0.6)
    return matches[0] if matches else None


def _validate_value_type(key: str, value: Any) -> None:  # noqa: ANN401 - dynamic config values
    """Raise if a config value has the wrong type."""
    expected = _TYPE_MAP[key]
    # bool is an int subclass; neither may stand in for the other here.
    if not isinstance(value, expected) or (expected is not bool and isinstance(value, bool)):
        raise CommitLogError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"'{key}' must be {expected.__name__}, got {type(value).__name__}",
            hint=f'Check the value of {key} in {CONFIG_FILENAME}.',
        )


def _validate_tag_source(value: str) -> None:
    if value not in TAG_SOURCES:
        raise CommitLogError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"tag_source must be one of {sorted(TAG_SOURCES)}, got '{value}'",
            hint="Use 'describe' for the nearest reachable tag, 'refs' for the highest version tag.",
        )


def _validate_sentinel(value: str) -> None:
    if not value.strip():
        raise CommitLogError(
            code=E.CONFIG_INVALID_VALUE,
            message='sentinel must be a non-empty string',
            hint='Pick a token that never appears in commit messages, e.g. "==END==".',
        )


def load_config(root: Path) -> CommitLogConfig:
    """Load and validate ``commitlog.toml``.

    Args:
        root: Directory containing ``commitlog.toml``.

    Returns:
        A validated :class:`CommitLogConfig`; defaults if the file is absent.

    Raises:
        CommitLogError: If the file cannot be parsed or holds invalid config.
    """
    config_path = root / CONFIG_FILENAME

    if not config_path.is_file():
        logger.debug('no_commitlog_config', path=str(config_path))
        return CommitLogConfig()

    try:
        text = config_path.read_text(encoding='utf-8')
    except OSError as exc:
        raise CommitLogError(
            code=E.CONFIG_PARSE_ERROR,
            message=f'Failed to read {config_path}: {exc}',
        ) from exc

    try:
        doc = tomlkit.parse(text)
    except tomlkit.exceptions.TOMLKitError as exc:
        raise CommitLogError(
            code=E.CONFIG_PARSE_ERROR,
            message=f'Failed to parse {config_path}: {exc}',
        ) from exc

    raw: dict[str, Any] = doc.unwrap()  # noqa: ANN401

    for key in raw:
        if key not in VALID_KEYS:
            suggestion = _suggest_key(key)
            raise CommitLogError(
                code=E.CONFIG_INVALID_KEY,
                message=f"Unknown key '{key}' in {CONFIG_FILENAME}",
                hint=f"Did you mean '{suggestion}'?" if suggestion else f'Valid keys: {", ".join(sorted(VALID_KEYS))}.',
            )

    for key, value in raw.items():
        _validate_value_type(key, value)

    if 'tag_source' in raw:
        _validate_tag_source(raw['tag_source'])
    if 'sentinel' in raw:
        _validate_sentinel(raw['sentinel'])

    logger.debug('commitlog_config_loaded', path=str(config_path), keys=sorted(raw))
    return CommitLogConfig(**raw, config_path=config_path)


__all__ = [
    'CONFIG_FILENAME',
    'VALID_KEYS',
    'CommitLogConfig',
    'load_config',
]
