"""Tests for captionsmith.ffmpeg module."""

import subprocess
from pathlib import Path
from unittest.mock import patch, MagicMock

import pytest

from captionsmith.exceptions import ConversionError
from captionsmith.ffmpeg import ffmpeg_available, transcode_to_wav


class TestTranscodeToWav:
    @patch('captionsmith.ffmpeg.subprocess.run')
    def test_success(self, mock_run, tmp_path):
        out = tmp_path / 'audio.wav'
        out.write_bytes(b'\x00' * 100)
        mock_run.return_value = MagicMock(returncode=0)
        assert transcode_to_wav(Path('voice.webm'), out) == out
        cmd = mock_run.call_args[0][0]
        assert cmd[0] == 'ffmpeg'
        assert 'pcm_s16le' in cmd
        assert '-ar' not in cmd

    @patch('captionsmith.ffmpeg.subprocess.run')
    def test_resample_options(self, mock_run, tmp_path):
        out = tmp_path / 'audio.wav'
        out.write_bytes(b'\x00')
        transcode_to_wav(Path('voice.mp3'), out, sample_rate=16000, channels=1)
        cmd = mock_run.call_args[0][0]
        assert cmd[cmd.index('-ar') + 1] == '16000'
        assert cmd[cmd.index('-ac') + 1] == '1'

    @patch('captionsmith.ffmpeg.subprocess.run')
    def test_failure_raises(self, mock_run, tmp_path):
        mock_run.side_effect = subprocess.CalledProcessError(1, 'ffmpeg', stderr=b'error')
        with pytest.raises(ConversionError):
            transcode_to_wav(Path('voice.mp3'), tmp_path / 'out.wav')


@patch('captionsmith.ffmpeg.shutil.which')
def test_ffmpeg_available(mock_which):
    mock_which.return_value = '/usr/bin/ffmpeg'
    assert ffmpeg_available() is True
    mock_which.return_value = None
    assert ffmpeg_available() is False
