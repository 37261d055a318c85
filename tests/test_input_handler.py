"""Tests for captionsmith.input_handler module."""

import pytest
from pathlib import Path
from captionsmith.input_handler import InputHandler
from captionsmith.exceptions import InputError, UnsupportedFormatError, ValidationError
from captionsmith.models import CaptionFormat


class TestInputHandler:
    @pytest.fixture
    def handler(self):
        return InputHandler()

    @pytest.mark.parametrize('name,fmt', [
        ('a.srt', CaptionFormat.SRT), ('a.vtt', CaptionFormat.VTT), ('a.txt', CaptionFormat.TXT),
    ])
    def test_detect_caption_format(self, handler, name, fmt):
        assert handler.detect_caption_format(Path(name)) is fmt

    def test_detect_rejects_unknown(self, handler):
        with pytest.raises(UnsupportedFormatError):
            handler.detect_caption_format(Path('a.ass'))

    def test_validate_caption_file(self, handler, sample_srt_file):
        assert handler.validate_caption_file(sample_srt_file) is CaptionFormat.SRT

    def test_validate_caption_file_not_found(self, handler):
        with pytest.raises(InputError):
            handler.validate_caption_file(Path('/nonexistent.srt'))

    def test_validate_caption_file_directory(self, handler, tmp_path):
        d = tmp_path / 'dir.srt'
        d.mkdir()
        with pytest.raises(InputError):
            handler.validate_caption_file(d)

    def test_validate_audio_file_exists(self, handler, tmp_path):
        f = tmp_path / 'test.wav'
        f.touch()
        assert handler.validate_audio_file(f) is True

    def test_validate_audio_file_not_found(self, handler):
        with pytest.raises(InputError):
            handler.validate_audio_file(Path('/nonexistent.wav'))

    def test_validate_audio_format_supported(self, handler):
        assert handler.validate_audio_format(Path('take.WEBM')) is True

    def test_validate_audio_format_unsupported(self, handler):
        with pytest.raises(ValidationError):
            handler.validate_audio_format(Path('file.xyz'))

    def test_validate_output_dir(self, handler, tmp_path):
        assert handler.validate_output_dir(tmp_path) is True

    def test_validate_output_dir_not_found(self, handler):
        with pytest.raises(InputError):
            handler.validate_output_dir(Path('/nonexistent_dir'))

    def test_prepare_output_dir_creates(self, handler, tmp_path):
        target = tmp_path / 'clips' / 'nested'
        assert handler.prepare_output_dir(target) == target
        assert target.is_dir()

    def test_prepare_output_dir_over_file(self, handler, tmp_path):
        f = tmp_path / 'taken'
        f.write_text('x')
        with pytest.raises(InputError):
            handler.prepare_output_dir(f)
