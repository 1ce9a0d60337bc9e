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

"""Conventional Commit subject grammar with gitmoji support.

Pure implementation: depends only on ``re`` and :mod:`._types`.

Grammar::

    [gitmoji] type ["(" scope ")"] ["!"] ":" [gitmoji] description ["(#" pr ")"]

Examples that match::

    feat(auth): add OAuth2
    fix!: drop python 3.9 (#88)
    🐛 fix(parser): handle CRLF
    feat: :sparkles: streaming responses
"""

from __future__ import annotations

import re

from commitlog.commit_parsing._types import SubjectFields

# A single emoji (optionally with the emoji presentation selector) or a
# gitmoji shortcode such as ``:sparkles:``. Emoji span the pictograph
# planes plus the arrow, technical, symbol and dingbat blocks.
_EMOJI_CHARS = r'\U0001F300-\U0001FAFF\u2190-\u21FF\u2300-\u23FF\u2600-\u27BF\u2B00-\u2BFF'
GITMOJI_PATTERN = rf'(?:[{_EMOJI_CHARS}]\uFE0F?|:[a-z0-9_+-]+:)'

SUBJECT_PATTERN: re.Pattern[str] = re.compile(
    r'^\s*'
    rf'(?:(?P<lead_gitmoji>{GITMOJI_PATTERN})\s*)?'  # gitmoji before the type
    r'(?P<type>[A-Za-z0-9_]+)'  # ASCII type (e.g. feat, fix, chore)
    r'(?:\((?P<scope>[^)]*)\))?'  # optional scope in parens
    r'(?P<breaking>!)?'  # optional breaking change indicator
    r':\s*'  # colon + space
    rf'(?:(?P<gitmoji>{GITMOJI_PATTERN}))?\s*'  # gitmoji before the description
    r'(?P<description>.+?)\s*'  # shortest description
    r'(?:\(#(?P<pr>\d+)\))?\s*$',  # trailing PR reference
)


def parse_subject(header: str) -> SubjectFields | None:
    """Parse a commit subject line.

    Args:
        header: The commit subject line.

    Returns:
        The captured :class:`SubjectFields`, or ``None`` if the subject
        does not follow the grammar.
    """
    match = SUBJECT_PATTERN.match(header)
    if not match:
        return None

    gitmoji = tuple(token for token in (match.group('lead_gitmoji'), match.group('gitmoji')) if token)
    return SubjectFields(
        type=match.group('type'),
        scope=match.group('scope'),
        breaking=bool(match.group('breaking')),
        gitmoji=gitmoji,
        description=match.group('description').strip(),
        pr=match.group('pr'),
    )
