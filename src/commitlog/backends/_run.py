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

"""Subprocess runner for commitlog's git queries.

commitlog only reads from the repository, so the runner stays small:
both streams are captured and decoded as UTF-8, and each call is timed
and logged. A non-zero exit is returned, not raised, unless
``check=True``; the git backend reads a failed query as "no result".
"""

from __future__ import annotations

import os
import subprocess  # noqa: S404 - running git is the point of this module
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from commitlog.logging import get_logger

log = get_logger('commitlog.backends.run')

DEFAULT_TIMEOUT_SECONDS = 120

# Longest stderr excerpt attached to a command_failed event.
_STDERR_EXCERPT = 500


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one finished process.

    Attributes:
        command: The argv that was executed.
        return_code: Exit status; 0 means success.
        stdout: Decoded standard output, untouched.
        stderr: Decoded standard error.
        duration_ms: Wall-clock time spent waiting for the process.
    """

    command: list[str]
    return_code: int
    stdout: str = ''
    stderr: str = ''
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        """``True`` for a zero exit status."""
        return self.return_code == 0

    @property
    def command_str(self) -> str:
        """The argv joined with spaces, for log lines and messages."""
        return ' '.join(self.command)


def _merged_env(extra: Mapping[str, str] | None) -> dict[str, str] | None:
    if not extra:
        return None
    return {**os.environ, **extra}


def _elapsed_ms(started: float) -> float:
    return (time.monotonic() - started) * 1000


def run_command(
    cmd: Sequence[str],
    *,
    cwd: Path | str | None = None,
    env: Mapping[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    check: bool = False,
) -> CommandResult:
    """Run ``cmd`` to completion and capture its output.

    Args:
        cmd: Program and arguments.
        cwd: Directory to run in.
        env: Variables layered over the current environment.
        timeout: Seconds before the process is killed.
        check: Raise on a non-zero exit instead of returning the result.

    Raises:
        subprocess.CalledProcessError: If ``check=True`` and the exit
            status is non-zero.
        subprocess.TimeoutExpired: If the process outlives ``timeout``.
    """
    argv = list(cmd)
    bound = log.bind(cmd=' '.join(argv))
    bound.debug('run_command', cwd=str(cwd or '.'))

    started = time.monotonic()
    try:
        proc = subprocess.run(  # noqa: S603 - argv is built by the git backend
            argv,
            cwd=cwd,
            env=_merged_env(env),
            capture_output=True,
            text=True,
            encoding='utf-8',
            errors='replace',
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        bound.error('command_timeout', timeout=timeout, duration_ms=_elapsed_ms(started))
        raise

    result = CommandResult(
        command=argv,
        return_code=proc.returncode,
        stdout=proc.stdout,
        stderr=proc.stderr,
        duration_ms=_elapsed_ms(started),
    )
    if result.ok:
        bound.debug('command_ok', duration_ms=result.duration_ms)
        return result

    bound.warning(
        'command_failed',
        return_code=result.return_code,
        stderr=result.stderr[:_STDERR_EXCERPT],
        duration_ms=result.duration_ms,
    )
    if check:
        raise subprocess.CalledProcessError(result.return_code, argv, output=result.stdout, stderr=result.stderr)
    return result


# Re-exported so callers don't import subprocess directly.
CalledProcessError = subprocess.CalledProcessError
TimeoutExpired = subprocess.TimeoutExpired

__all__ = [
    'DEFAULT_TIMEOUT_SECONDS',
    'CalledProcessError',
    'CommandResult',
    'TimeoutExpired',
    'run_command',
]
