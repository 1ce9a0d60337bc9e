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

"""CLI entry point for commitlog.

Constructs the git backend, loads ``commitlog.toml`` and prints what the
library computes. All printing happens here.

Subcommands::

    commitlog log       Print the commits of the current release range
    commitlog range     Print the resolved from/to revisions
    commitlog explain   Explain an error code

Usage::

    # Records since the latest tag, as JSON:
    commitlog log

    # Same commits as a table, skipping non-conventional subjects:
    commitlog log --format table --exclude-unparsed

    # Explicit range:
    commitlog log --from v1.1.0 --to v1.2.0

    # Explain an error:
    commitlog explain CL-REVISION-NOT-FOUND
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich_argparse import RichHelpFormatter

from commitlog import __version__
from commitlog.backends.vcs import VCS, GitCLIBackend
from commitlog.commit_log import ONELINE_FORMAT, build_commit_log
from commitlog.commit_parsing import CommitRecord, IssueLinkType
from commitlog.config import CommitLogConfig, load_config
from commitlog.errors import E, CommitLogError, explain, render_error
from commitlog.logging import configure_logging, get_logger
from commitlog.revision_range import RevisionRange, resolve_changelog_range

logger = get_logger(__name__)

OUTPUT_FORMATS: tuple[str, ...] = ('json', 'table', 'oneline')


def _create_backend(root: Path) -> VCS:
    """Return the VCS backend for ``root``."""
    return GitCLIBackend(repo_root=root)


async def _open_repo(args: argparse.Namespace) -> tuple[CommitLogConfig, VCS]:
    """Load config and check that the target directory is a git work tree."""
    root = Path(args.repo).resolve()
    config = load_config(root)
    vcs = _create_backend(root)
    if not await vcs.is_work_tree():
        raise CommitLogError(
            code=E.GIT_NOT_A_REPOSITORY,
            message=f'{root} is not inside a git work tree',
            hint="Run commitlog from a git checkout, or pass '-C <path>'.",
        )
    return config, vcs


async def _resolve(args: argparse.Namespace, config: CommitLogConfig, vcs: VCS) -> RevisionRange:
    """Return the explicit ``--from``/``--to`` range or the resolved release range."""
    from_ref = getattr(args, 'from_ref', None)
    if from_ref:
        if not await vcs.full_hash(from_ref):
            raise CommitLogError(
                code=E.REVISION_NOT_FOUND,
                message=f"Unknown revision '{from_ref}'",
                hint='Pass a tag, branch or commit hash that exists locally.',
            )
        return RevisionRange(from_ref=from_ref, to_ref=args.to_ref or 'HEAD')

    return await resolve_changelog_range(
        vcs,
        is_increment=config.increment and not args.no_increment,
        match=config.tag_match,
        exclude=config.tag_exclude,
        source=config.tag_source,
    )


def _issues_cell(record: CommitRecord) -> str:
    parts = [
        f'{kind.value} ' + ', '.join(f'#{n}' for n in record.issues[kind])
        for kind in IssueLinkType
        if record.issues[kind]
    ]
    return '; '.join(parts)


def _render_table(records: tuple[CommitRecord, ...], console: Console) -> None:
    table = Table(show_header=True, header_style='bold', show_edge=False, pad_edge=False)
    table.add_column('Hash', no_wrap=True)
    table.add_column('Type')
    table.add_column('Scope')
    table.add_column('!', justify='center')
    table.add_column('Description', ratio=3)
    table.add_column('PR', justify='right')
    table.add_column('Issues')
    for record in records:
        table.add_row(
            record.short_hash,
            Text(' '.join((*record.gitmoji, record.type))) if record.parsed else Text('-', style='dim'),
            Text(record.scope or ''),
            '[bold red]![/bold red]' if record.breaking else '',
            Text(record.description) if record.parsed else Text(record.header, style='dim'),
            f'#{record.pr}' if record.pr else '',
            Text(_issues_cell(record)),
        )
    console.print(table)


async def _cmd_log(args: argparse.Namespace) -> int:
    """Handle the ``log`` subcommand."""
    config, vcs = await _open_repo(args)
    rng = await _resolve(args, config, vcs)

    if args.format == 'oneline':
        raw = await vcs.log_raw(
            from_ref=rng.from_ref,
            to_ref=rng.to_ref,
            format=ONELINE_FORMAT,
            no_merges=config.no_merges,
        )
        if raw.strip():
            print(raw.rstrip())  # noqa: T201 - CLI output
        return 0

    records = await build_commit_log(
        vcs,
        rng.from_ref,
        rng.to_ref,
        sentinel=config.sentinel,
        no_merges=config.no_merges,
    )
    if args.exclude_unparsed or not config.include_unparsed:
        records = tuple(record for record in records if record.parsed)

    logger.info('commits', count=len(records), from_ref=rng.from_ref or None, to_ref=rng.to_ref)

    if args.format == 'table':
        _render_table(records, Console())
    else:
        print(json.dumps([record.to_dict() for record in records], indent=2, ensure_ascii=False))  # noqa: T201 - CLI output
    return 0


async def _cmd_range(args: argparse.Namespace) -> int:
    """Handle the ``range`` subcommand."""
    config, vcs = await _open_repo(args)
    rng = await _resolve(args, config, vcs)
    if args.json:
        print(json.dumps({'from': rng.from_ref, 'to': rng.to_ref}))  # noqa: T201 - CLI output
    else:
        print(f'from: {rng.from_ref or "(beginning of history)"}')  # noqa: T201 - CLI output
        print(f'to:   {rng.to_ref}')  # noqa: T201 - CLI output
    return 0


def _cmd_explain(args: argparse.Namespace) -> int:
    """Handle the ``explain`` subcommand."""
    result = explain(args.code)
    if result is None:
        print(f'Unknown error code: {args.code}')  # noqa: T201 - CLI output
        return 1
    print(result)  # noqa: T201 - CLI output
    return 0


def _add_range_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--from',
        dest='from_ref',
        metavar='REV',
        default=None,
        help='Lower boundary (tag, branch or hash). Skips tag-based range resolution.',
    )
    parser.add_argument(
        '--to',
        dest='to_ref',
        metavar='REV',
        default=None,
        help="Upper boundary, only with '--from' (default: HEAD).",
    )
    parser.add_argument(
        '--no-increment',
        action='store_true',
        help='The version is not being bumped: list the commits of the latest tag instead of those after it.',
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Returns:
        Configured :class:`argparse.ArgumentParser`.
    """
    RichHelpFormatter.styles['argparse.groups'] = 'bold yellow'
    parser = argparse.ArgumentParser(
        prog='commitlog',
        description='Structured Conventional Commit records from git history.',
        formatter_class=RichHelpFormatter,
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}',
    )
    parser.add_argument(
        '-C',
        dest='repo',
        metavar='PATH',
        default='.',
        help='Run as if started in PATH.',
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('--verbose', '-v', action='store_true', help='Debug logging.')
    verbosity.add_argument('--quiet', '-q', action='store_true', help='Only log warnings and errors.')
    parser.add_argument('--json-log', action='store_true', help='Log JSON lines to stderr.')

    subparsers = parser.add_subparsers(dest='command')

    log_parser = subparsers.add_parser(
        'log',
        help='Print the commits of the current release range.',
        formatter_class=RichHelpFormatter,
    )
    _add_range_arguments(log_parser)
    log_parser.add_argument(
        '--format',
        choices=OUTPUT_FORMATS,
        default='json',
        help='Output format (default: json).',
    )
    log_parser.add_argument(
        '--exclude-unparsed',
        action='store_true',
        help='Drop commits whose subject is not a Conventional Commit.',
    )

    range_parser = subparsers.add_parser(
        'range',
        help='Print the resolved from/to revisions.',
        formatter_class=RichHelpFormatter,
    )
    _add_range_arguments(range_parser)
    range_parser.add_argument('--json', action='store_true', help='Print the range as JSON.')

    explain_parser = subparsers.add_parser(
        'explain',
        help='Explain an error code.',
        formatter_class=RichHelpFormatter,
    )
    explain_parser.add_argument('code', help='Error code, e.g. CL-REVISION-NOT-FOUND.')

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, 'to_ref', None) and not args.from_ref:
        parser.error("'--to' requires '--from'")
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)

    try:
        command = args.command
        if command == 'log':
            return asyncio.run(_cmd_log(args))
        if command == 'range':
            return asyncio.run(_cmd_range(args))
        if command == 'explain':
            return _cmd_explain(args)

        parser.print_help()
        print(  # noqa: T201 - CLI output
            f'\n{parser.prog}: error: please provide a command',
            file=sys.stderr,
        )
        return 2

    except CommitLogError as exc:
        render_error(exc)
        return 1
    except KeyboardInterrupt:
        logger.info('interrupted')
        return 130


def _main() -> None:
    """Wrapper for pyproject.toml [project.scripts] entry point."""
    sys.exit(main())


__all__ = [
    'build_parser',
    'main',
]
