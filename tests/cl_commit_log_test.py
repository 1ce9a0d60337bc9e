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

"""Tests for commit log splitting and record building."""

from __future__ import annotations

import pytest
from commitlog.commit_log import (
    DEFAULT_SENTINEL,
    LOG_FORMAT,
    build_commit_log,
    log_format,
    parse_chunk,
    parse_raw_log,
    split_raw_log,
)
from commitlog.commit_parsing import IssueLinkType
from commitlog.logging import configure_logging

from tests._fakes import FakeVCS

configure_logging(quiet=True)

_DUMP = 'abc123\nabc\nfeat(core): add x (#7)\nCloses #7\n==END==def456\ndef\nfix: y\n==END=='


class TestLogFormat:
    """Tests for the git pretty format."""

    def test_default(self) -> None:
        """Test default."""
        assert LOG_FORMAT == '%H%n%h%n%s%n%b%n==END=='
        assert DEFAULT_SENTINEL == '==END=='

    def test_custom_sentinel(self) -> None:
        """Test custom sentinel."""
        assert log_format('@@') == '%H%n%h%n%s%n%b%n@@'


class TestSplitRawLog:
    """Tests for split_raw_log()."""

    def test_empty(self) -> None:
        """Test empty."""
        assert split_raw_log('') == []

    def test_whitespace_only(self) -> None:
        """Test whitespace only."""
        assert split_raw_log('\n  \n') == []

    def test_drops_trailing_empty_chunk(self) -> None:
        """Test drops trailing empty chunk."""
        chunks = split_raw_log(_DUMP)
        assert len(chunks) == 2
        assert chunks[1].startswith('def456')

    def test_blank_chunks_between_sentinels(self) -> None:
        """Test blank chunks between sentinels."""
        assert split_raw_log('a\nb\nfix: x\n==END==\n\n==END==') == ['a\nb\nfix: x\n']

    def test_custom_sentinel(self) -> None:
        """Test custom sentinel."""
        assert len(split_raw_log('a\nb\nfix: x\n@@c\nd\nfeat: y\n@@', '@@')) == 2


class TestParseChunk:
    """Tests for parse_chunk()."""

    def test_subject_only(self) -> None:
        """Test subject only."""
        record = parse_chunk('def456\ndef\nfix: y\n')
        assert record.full_hash == 'def456'
        assert record.short_hash == 'def'
        assert record.type == 'fix'
        assert record.description == 'y'
        assert record.body == ''
        assert record.footer == ''

    def test_body_and_footer(self) -> None:
        """Test body and footer."""
        record = parse_chunk('h1\nh\nfeat: x\nExplain it.\n\nCloses #4\nReviewed-by: Z\n')
        assert record.body == 'Explain it.'
        assert record.footer == 'Closes #4\nReviewed-by: Z'
        assert record.issues[IssueLinkType.CLOSES] == (4,)

    def test_blank_lines_dropped_before_split(self) -> None:
        """Blank lines vanish, so the footer scan runs to the first trailer."""
        record = parse_chunk('h\ns\nfix: y\nNote: first\n\nmore prose\n\nRefs #2')
        assert record.body == ''
        assert record.footer == 'Note: first\nmore prose\nRefs #2'
        assert record.issues[IssueLinkType.REFS] == (2,)

    def test_leading_newline_from_previous_sentinel(self) -> None:
        """Git puts a newline after each sentinel; it is ignored."""
        record = parse_chunk('\nabc123\nabc\nchore: tidy\n')
        assert record.full_hash == 'abc123'
        assert record.type == 'chore'

    def test_crlf(self) -> None:
        """Test crlf."""
        record = parse_chunk('h1\r\nh\r\nfix: y\r\nCloses #1\r\n')
        assert record.full_hash == 'h1'
        assert record.description == 'y'
        assert record.footer == 'Closes #1'

    def test_missing_fields(self) -> None:
        """A truncated chunk gives empty fields, not an error."""
        record = parse_chunk('onlyhash')
        assert record.full_hash == 'onlyhash'
        assert record.short_hash == ''
        assert record.header == ''
        assert record.parsed is False

    def test_unparsed_subject(self) -> None:
        """Test unparsed subject."""
        record = parse_chunk('h1\nh\nUpdate README\n')
        assert record.parsed is False
        assert record.header == 'Update README'
        assert record.full_hash == 'h1'


class TestParseRawLog:
    """Tests for parse_raw_log()."""

    def test_end_to_end(self) -> None:
        """Two commits come back in log order."""
        first, second = parse_raw_log(_DUMP, '==END==')
        assert first.type == 'feat'
        assert first.scope == 'core'
        assert first.pr == '7'
        assert first.issues[IssueLinkType.CLOSES] == (7,)
        assert second.type == 'fix'
        assert second.description == 'y'

    def test_git_style_newlines(self) -> None:
        """Test git style newlines."""
        raw = 'a1\na\nfeat: one\n\n==END==\nb1\nb\nfix: two\n\n==END=='
        records = parse_raw_log(raw)
        assert [r.full_hash for r in records] == ['a1', 'b1']
        assert [r.description for r in records] == ['one', 'two']

    def test_empty(self) -> None:
        """Test empty."""
        assert parse_raw_log('') == ()

    def test_custom_sentinel(self) -> None:
        """Test custom sentinel."""
        records = parse_raw_log('a1\na\nfeat: one\n--8<--b1\nb\nfix: two\n--8<--', '--8<--')
        assert [r.type for r in records] == ['feat', 'fix']

    def test_mixed_parsed_and_unparsed(self) -> None:
        """Test mixed parsed and unparsed."""
        raw = 'a1\na\nMerge things\n==END==b1\nb\nfix: two\n==END=='
        records = parse_raw_log(raw)
        assert [r.parsed for r in records] == [False, True]


class TestBuildCommitLog:
    """Tests for build_commit_log()."""

    @pytest.mark.asyncio()
    async def test_builds_records(self) -> None:
        """Test builds records."""
        vcs = FakeVCS(raw_log=_DUMP)
        records = await build_commit_log(vcs, 'v1.1.0', 'HEAD')
        assert [r.type for r in records] == ['feat', 'fix']
        assert vcs.calls == [
            (
                'log_raw',
                {'from_ref': 'v1.1.0', 'to_ref': 'HEAD', 'format': LOG_FORMAT, 'no_merges': True},
            ),
        ]

    @pytest.mark.asyncio()
    async def test_custom_sentinel_and_merges(self) -> None:
        """Test custom sentinel and merges."""
        vcs = FakeVCS(raw_log='a1\na\nfeat: one\n@@')
        records = await build_commit_log(vcs, sentinel='@@', no_merges=False)
        assert len(records) == 1
        _, kwargs = vcs.calls[0]
        assert kwargs['format'] == log_format('@@')
        assert kwargs['no_merges'] is False
        assert kwargs['from_ref'] == ''

    @pytest.mark.asyncio()
    async def test_empty_log(self) -> None:
        """A failed or empty log gives no records."""
        records = await build_commit_log(FakeVCS(raw_log=''))
        assert records == ()
