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

"""Error codes and the exception raised by commitlog's outer layers.

Each code is a stable ``CL-NAMED-KEY`` string. ``commitlog explain CODE``
prints its catalog entry.

Only configuration loading and the CLI raise. Commit parsing, range
resolution and log building never raise on malformed input; they fall
back to empty, well-typed values.

Code families::

    CL-CONFIG-*       commitlog.toml problems
    CL-GIT-*          the target directory is not usable as a repository
    CL-REVISION-*     a revision given on the command line does not resolve

Usage::

    from commitlog.errors import CommitLogError, E

    raise CommitLogError(
        code=E.REVISION_NOT_FOUND,
        message="Unknown revision 'abc123'",
        hint='Pass a tag, branch or commit hash that exists locally.',
    )
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from rich.console import Console
from rich.text import Text


class ErrorCode(str, Enum):
    """Every diagnostic commitlog can emit."""

    # commitlog.toml
    CONFIG_INVALID_KEY = 'CL-CONFIG-INVALID-KEY'
    CONFIG_INVALID_VALUE = 'CL-CONFIG-INVALID-VALUE'
    CONFIG_PARSE_ERROR = 'CL-CONFIG-PARSE-ERROR'

    # Repository
    GIT_NOT_A_REPOSITORY = 'CL-GIT-NOT-A-REPOSITORY'

    # Command-line revisions
    REVISION_NOT_FOUND = 'CL-REVISION-NOT-FOUND'


E = ErrorCode


@dataclass(frozen=True)
class ErrorInfo:
    """One catalog entry, or the details of one raised error.

    Attributes:
        code: The ``CL-NAMED-KEY`` code.
        message: What went wrong.
        hint: How to fix it, if there is a known fix.
    """

    code: ErrorCode
    message: str
    hint: str = ''


class CommitLogError(Exception):
    """Raised by config loading and the CLI; rendered by :func:`render_error`.

    Args:
        code: Which :class:`ErrorCode` this is.
        message: What went wrong, with the offending value.
        hint: How to fix it.
    """

    def __init__(self, code: ErrorCode, message: str, hint: str = '') -> None:
        """Store the details and build ``str(exc)`` as ``[CODE] message``."""
        self.info = ErrorInfo(code=code, message=message, hint=hint)
        super().__init__(f'[{code.value}] {message}')

    @property
    def code(self) -> ErrorCode:
        """Shortcut for ``info.code``."""
        return self.info.code

    @property
    def hint(self) -> str:
        """Shortcut for ``info.hint``; empty when there is none."""
        return self.info.hint


ERRORS: dict[ErrorCode, ErrorInfo] = {
    E.CONFIG_INVALID_KEY: ErrorInfo(
        code=E.CONFIG_INVALID_KEY,
        message='commitlog.toml contains a key commitlog does not recognize.',
        hint='Valid keys: sentinel, tag_match, tag_exclude, tag_source, no_merges, increment, include_unparsed.',
    ),
    E.CONFIG_INVALID_VALUE: ErrorInfo(
        code=E.CONFIG_INVALID_VALUE,
        message='A value in commitlog.toml has the wrong type or an unsupported value.',
        hint="tag_source must be 'describe' or 'refs'; sentinel must be a non-empty string.",
    ),
    E.CONFIG_PARSE_ERROR: ErrorInfo(
        code=E.CONFIG_PARSE_ERROR,
        message='commitlog.toml is not valid TOML.',
        hint='Fix the syntax error reported at the given line and column.',
    ),
    E.GIT_NOT_A_REPOSITORY: ErrorInfo(
        code=E.GIT_NOT_A_REPOSITORY,
        message='The working directory is not inside a git work tree.',
        hint="Run commitlog from a git checkout, or pass '-C <path>'.",
    ),
    E.REVISION_NOT_FOUND: ErrorInfo(
        code=E.REVISION_NOT_FOUND,
        message='A revision passed on the command line does not exist.',
        hint="Check the value of '--from'; shallow clones may need 'git fetch --unshallow'.",
    ),
}


def explain(code: str) -> str | None:
    """Return the catalog entry for ``code`` as printable text.

    >>> print(explain('CL-GIT-NOT-A-REPOSITORY'))
    CL-GIT-NOT-A-REPOSITORY: The working directory is not inside a git work tree.
      Hint: Run commitlog from a git checkout, or pass '-C <path>'.

    Returns:
        The message and hint, or ``None`` for an unknown code.
    """
    try:
        info = ERRORS[ErrorCode(code)]
    except ValueError:
        return None

    text = f'{code}: {info.message}'
    return f'{text}\n  Hint: {info.hint}' if info.hint else text


def format_error(exc: CommitLogError) -> Text:
    """Build the styled two-line diagnostic for ``exc``::

        error[CL-REVISION-NOT-FOUND]: Unknown revision 'abc123'
          = hint: Pass a tag, branch or commit hash that exists locally.
    """
    text = Text()
    text.append(f'error[{exc.code.value}]', style='bold red')
    text.append(f': {exc.info.message}', style='bold')
    if exc.hint:
        text.append('\n  = ', style='dim')
        text.append('hint', style='cyan')
        text.append(f': {exc.hint}')
    return text


def render_error(exc: CommitLogError, *, file: TextIO | None = None) -> None:
    """Write :func:`format_error` output, with color only on a TTY.

    Args:
        exc: The error to render.
        file: Output stream, ``sys.stderr`` by default.
    """
    out = file or sys.stderr
    text = format_error(exc)
    if out.isatty():
        Console(file=out, highlight=False, soft_wrap=True).print(text)
    else:
        print(text.plain, file=out)  # noqa: T201 - CLI output


__all__ = [
    'E',
    'ERRORS',
    'CommitLogError',
    'ErrorCode',
    'ErrorInfo',
    'explain',
    'format_error',
    'render_error',
]
