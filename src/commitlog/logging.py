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

"""Structured logging for commitlog.

`structlog <https://www.structlog.org/>`_ events are routed through the
standard library root logger to stderr, so stdout only ever carries the
commit records (``commitlog log | jq``).

Usage::

    from commitlog.logging import configure_logging, get_logger

    configure_logging(verbose=True)
    log = get_logger('commitlog.cli')
    log.info('commits', count=12)
"""

from __future__ import annotations

import logging
import sys

import structlog

# Applied to structlog events and to plain stdlib records alike.
_PRE_CHAIN: tuple[structlog.types.Processor, ...] = (
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt='iso', utc=True),
)


def _level(*, verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.WARNING
    return logging.DEBUG if verbose else logging.INFO


def _final_processors(json_log: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if json_log:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    return processors


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
) -> None:
    """Send log events to stderr at the requested verbosity.

    Safe to call more than once; each call replaces the root handler.

    Args:
        verbose: Enable debug-level output.
        quiet: Only warnings and errors. Wins over ``verbose``.
        json_log: One JSON object per line instead of console output.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=list(_PRE_CHAIN),
            processors=_final_processors(json_log),
        ),
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(_level(verbose=verbose, quiet=quiet))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_PRE_CHAIN,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = 'commitlog') -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to the stdlib logger ``name``."""
    return structlog.get_logger(name)


__all__ = [
    'configure_logging',
    'get_logger',
]
