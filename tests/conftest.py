"""Shared test fixtures for CaptionSmith."""

import logging

import numpy as np
import pytest

from captionsmith.models import AudioSampleBuffer

SAMPLE_SRT = (
    "1\n"
    "00:00:01,000 --> 00:00:03,500\n"
    "Hello\n"
    "\n"
    "2\n"
    "00:00:04,000 --> 00:00:06,000\n"
    "World\n"
)

SAMPLE_VTT = (
    "WEBVTT\n"
    "\n"
    "1\n"
    "00:00:01.000 --> 00:00:03.500\n"
    "Hello\n"
    "\n"
    "2\n"
    "00:00:04.000 --> 00:00:06.000\n"
    "World\n"
    "second line\n"
)


def pytest_collection_modifyitems(items):
    """Auto-mark tests without integration or slow markers as unit tests."""
    for item in items:
        markers = {marker.name for marker in item.iter_markers()}
        if 'integration' not in markers and 'slow' not in markers:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def sample_srt_file(tmp_path):
    """Create a sample SRT file for testing."""
    path = tmp_path / 'lecture.srt'
    path.write_text(SAMPLE_SRT, encoding='utf-8')
    return path


@pytest.fixture
def sample_vtt_file(tmp_path):
    path = tmp_path / 'lecture.vtt'
    path.write_text(SAMPLE_VTT, encoding='utf-8')
    return path


@pytest.fixture
def stereo_buffer():
    """Ten seconds of 1 kHz stereo audio; sample value encodes the frame index."""
    rate = 1000
    frames = np.arange(10 * rate, dtype=np.float32) / (10 * rate)
    return AudioSampleBuffer(sample_rate=rate, samples=np.stack([frames, -frames]))


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to streams of earlier CliRunner invocations."""
    yield
    logger = logging.getLogger('captionsmith')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
