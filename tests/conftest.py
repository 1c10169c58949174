"""
Pytest configuration for the codec service tests.
"""

import pytest
from fastapi.testclient import TestClient

from codecflow.configs import settings
from codecflow.main import app


@pytest.fixture
def client(monkeypatch):
    """Test client for the API with password protection disabled."""
    monkeypatch.setattr(settings, "api_password", None)
    return TestClient(app)


@pytest.fixture
def supported_types():
    """
    Factory fixture that returns a platform capability predicate.

    Usage:
        def test_something(supported_types):
            is_type_supported = supported_types('video/mp4;codecs="avc1.4d400d"')
    """

    def _predicate(*mimes: str):
        return lambda mime: mime in mimes

    return _predicate


@pytest.fixture
def master_playlist():
    return """#EXTM3U
#EXT-X-VERSION:4
#EXT-X-MEDIA:TYPE=AUDIO,GROUP-ID="aac",NAME="English",LANGUAGE="en",DEFAULT=YES,AUTOSELECT=YES,URI="audio/en.m3u8"
#EXT-X-MEDIA:TYPE=AUDIO,GROUP-ID="aac",NAME="Deutsch",LANGUAGE="de",DEFAULT=NO,AUTOSELECT=YES,URI="audio/de.m3u8"
#EXT-X-MEDIA:TYPE=SUBTITLES,GROUP-ID="subs",NAME="English",LANGUAGE="en",URI="subs/en.m3u8"
#EXT-X-STREAM-INF:BANDWIDTH=1280000,RESOLUTION=1280x720,CODECS="avc1.4d401f,mp4a.40.2",AUDIO="aac"
video/720p.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=640000,RESOLUTION=640x360,CODECS="avc1.66.30",AUDIO="aac"
video/360p.m3u8
"""
