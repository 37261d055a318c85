"""Tests for captionsmith.parsers module."""

import pytest

from captionsmith.exceptions import InputError, UnsupportedFormatError
from captionsmith.models import CaptionEntry, CaptionFormat
from captionsmith.parsers import (
    PARSERS, parse_caption_file, parse_captions, parse_srt, parse_txt, parse_vtt,
)

SAMPLE_SRT = (
    "1\n"
    "00:00:01,000 --> 00:00:03,500\n"
    "Hello\n"
    "\n"
    "2\n"
    "00:00:04,000 --> 00:00:06,000\n"
    "World\n"
)


class TestParseSrt:
    def test_scenario(self):
        entries = parse_srt(SAMPLE_SRT)
        assert entries == [
            CaptionEntry('00:00:01,000', '00:00:03,500', 'Hello'),
            CaptionEntry('00:00:04,000', '00:00:06,000', 'World'),
        ]

    def test_multiline_text(self):
        entries = parse_srt("1\n00:00:00,000 --> 00:00:01,000\nline one\nline two\n")
        assert entries[0].text == 'line one\nline two'

    def test_crlf(self):
        entries = parse_srt(SAMPLE_SRT.replace('\n', '\r\n'))
        assert len(entries) == 2
        assert entries[1].end_time == '00:00:06,000'

    def test_skips_short_block(self):
        content = "1\n00:00:00,000 --> 00:00:01,000\n\n2\n00:00:01,000 --> 00:00:02,000\nKept\n"
        entries = parse_srt(content)
        assert [e.text for e in entries] == ['Kept']

    def test_skips_block_without_timing(self):
        content = "1\nnot a timing line\nText\n\n2\n00:00:01,000 --> 00:00:02,000\nKept\n"
        entries = parse_srt(content)
        assert len(entries) == 1
        assert entries[0].text == 'Kept'

    def test_index_line_ignored(self):
        entries = parse_srt("whatever\n00:00:00,000 --> 00:00:01,000\nText\n")
        assert len(entries) == 1

    def test_extra_blank_lines(self):
        content = SAMPLE_SRT.replace('\n\n', '\n\n\n\n')
        assert len(parse_srt(content)) == 2

    def test_empty(self):
        assert parse_srt('') == []
        assert parse_srt('   \n\n') == []


class TestParseVtt:
    def test_header_skipped(self):
        content = "WEBVTT\n\n00:00:01.000 --> 00:00:02.000\nHi\n"
        entries = parse_vtt(content)
        assert entries == [CaptionEntry('00:00:01.000', '00:00:02.000', 'Hi')]

    def test_without_header(self):
        entries = parse_vtt("00:00:01.000 --> 00:00:02.000\nHi\n")
        assert len(entries) == 1

    def test_multiline_and_identifiers(self, sample_vtt_file):
        entries = parse_vtt(sample_vtt_file.read_text())
        assert len(entries) == 2
        assert entries[0].text == 'Hello'
        assert entries[1].text == 'World\nsecond line'
        assert entries[1].start_time == '00:00:04.000'

    def test_timing_without_blank_separator_keeps_previous(self):
        content = (
            "WEBVTT\n\n"
            "00:00:01.000 --> 00:00:02.000\nFirst\n"
            "00:00:02.000 --> 00:00:03.000\nSecond\n"
        )
        entries = parse_vtt(content)
        assert [e.text for e in entries] == ['First', 'Second']

    def test_each_entry_flushed_once(self):
        content = "WEBVTT\n\n00:00:01.000 --> 00:00:02.000\nA\nB\n\n\n"
        entries = parse_vtt(content)
        assert len(entries) == 1
        assert entries[0].text == 'A\nB'

    def test_cue_settings_dropped(self):
        entries = parse_vtt("WEBVTT\n\n00:00:01.000 --> 00:00:02.000 align:start position:10%\nHi\n")
        assert entries[0].end_time == '00:00:02.000'

    def test_note_block_ignored(self):
        content = "WEBVTT\n\nNOTE a comment\n\n00:00:01.000 --> 00:00:02.000\nHi\n"
        entries = parse_vtt(content)
        assert [e.text for e in entries] == ['Hi']

    def test_empty(self):
        assert parse_vtt('') == []
        assert parse_vtt('WEBVTT\n') == []


class TestParseTxt:
    def test_cadence(self):
        entries = parse_txt("first\n  second  \nthird")
        assert [e.text for e in entries] == ['first', 'second', 'third']
        assert entries[0].start_time == '00:00:00.000'
        assert entries[0].end_time == '00:00:03.000'
        assert entries[2].start_time == '00:00:06.000'
        assert entries[2].end_time == '00:00:09.000'

    def test_no_gaps_or_overlaps(self):
        entries = parse_txt('\n'.join(f'line {i}' for i in range(30)))
        for prev, cur in zip(entries, entries[1:]):
            assert prev.end_time == cur.start_time

    def test_custom_cadence(self):
        entries = parse_txt("a\nb", cadence=1.5)
        assert entries[1].start_time == '00:00:01.500'

    def test_empty(self):
        assert parse_txt('') == []


class TestDispatch:
    def test_by_enum(self):
        assert len(parse_captions(SAMPLE_SRT, CaptionFormat.SRT)) == 2

    def test_by_string(self):
        assert len(parse_captions("a\nb", 'TXT')) == 2

    def test_txt_cadence_passed_through(self):
        entries = parse_captions("a\nb", CaptionFormat.TXT, txt_cadence=1.5)
        assert entries[1].start_time == '00:00:01.500'
        assert entries[1].end_time == '00:00:03.000'

    def test_table_covers_every_format(self):
        assert set(PARSERS) == set(CaptionFormat)

    def test_unsupported(self):
        with pytest.raises(UnsupportedFormatError):
            parse_captions(SAMPLE_SRT, 'ass')


class TestParseCaptionFile:
    def test_detects_format(self, sample_vtt_file):
        entries = parse_caption_file(sample_vtt_file)
        assert entries[0].start_time == '00:00:01.000'

    def test_strips_bom(self, tmp_path):
        path = tmp_path / 'bom.srt'
        path.write_text('\ufeff' + SAMPLE_SRT, encoding='utf-8')
        assert len(parse_caption_file(path)) == 2

    def test_explicit_format_overrides_extension(self, tmp_path):
        path = tmp_path / 'captions.data'
        path.write_text(SAMPLE_SRT, encoding='utf-8')
        assert len(parse_caption_file(path, fmt='srt')) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputError):
            parse_caption_file(tmp_path / 'missing.srt')

    def test_unknown_extension(self, tmp_path):
        path = tmp_path / 'captions.ass'
        path.write_text('x')
        with pytest.raises(UnsupportedFormatError):
            parse_caption_file(path)
