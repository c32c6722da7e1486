"""Tests for LutLoader and resource reading."""

import asyncio
from urllib.error import HTTPError, URLError

import pytest

from acesmod import loader as loader_module
from acesmod.config import LutConfig
from acesmod.errors import ResourceError
from acesmod.loader import LutLoader, is_url, join_location, read_text
from acesmod.protocols import TextFetcher


@pytest.fixture
def lut_dir(tmp_path, ramp_spi3d_text, identity_spi1d_text):
    """Directory holding both LUT files under their default names."""
    (tmp_path / "InvRRT.sRGB.Log2_48_nits_Shaper.spi3d").write_text(ramp_spi3d_text)
    (tmp_path / "Log2_48_nits_Shaper_to_linear.spi1d").write_text(identity_spi1d_text)
    return tmp_path


class TestLocations:
    """Test location helpers."""

    @pytest.mark.parametrize(
        "location, expected",
        [
            ("https://example.com/luts", True),
            ("http://localhost:8000", True),
            ("file:///srv/luts", True),
            ("/srv/luts", False),
            ("luts", False),
        ],
    )
    def test_is_url(self, location, expected):
        """Test URL detection by scheme."""
        assert is_url(location) is expected

    def test_join_url(self):
        """Test that URL prefixes are joined with a single slash."""
        url = join_location("https://example.com/luts/", "a.spi3d")
        assert url == "https://example.com/luts/a.spi3d"

    def test_join_path(self, tmp_path):
        """Test that directories are joined as paths."""
        assert join_location(tmp_path, "a.spi1d") == str(tmp_path / "a.spi1d")


class TestReadText:
    """Test reading single resources."""

    def test_path(self, lut_dir, identity_spi1d_text):
        """Test reading a local file."""
        path = lut_dir / "Log2_48_nits_Shaper_to_linear.spi1d"

        assert read_text(str(path)) == identity_spi1d_text

    def test_file_url(self, lut_dir, identity_spi1d_text):
        """Test reading through a file:// URL."""
        path = lut_dir / "Log2_48_nits_Shaper_to_linear.spi1d"

        assert read_text(path.as_uri()) == identity_spi1d_text

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises ResourceError."""
        location = str(tmp_path / "missing.spi3d")

        with pytest.raises(ResourceError) as exc_info:
            read_text(location)
        assert exc_info.value.location == location
        assert exc_info.value.status is None

    def test_http_error_status(self, monkeypatch):
        """Test that HTTP errors carry their status code."""

        def fake_urlopen(url, timeout):
            raise HTTPError(url, 404, "Not Found", None, None)

        monkeypatch.setattr(loader_module, "urlopen", fake_urlopen)

        with pytest.raises(ResourceError) as exc_info:
            read_text("https://example.com/luts/a.spi3d")
        assert exc_info.value.status == 404
        assert "404" in str(exc_info.value)

    def test_network_error(self, monkeypatch):
        """Test that network failures raise ResourceError without status."""

        def fake_urlopen(url, timeout):
            raise URLError("connection refused")

        monkeypatch.setattr(loader_module, "urlopen", fake_urlopen)

        with pytest.raises(ResourceError) as exc_info:
            read_text("https://example.com/luts/a.spi3d")
        assert exc_info.value.status is None

    def test_resource_error_is_os_error(self, tmp_path):
        """Test that ResourceError can be caught as OSError."""
        with pytest.raises(OSError):
            read_text(str(tmp_path / "missing.spi1d"))


class TestLutLoader:
    """Test concurrent LUT fetching."""

    def test_fetch_from_directory(self, lut_dir, ramp_spi3d_text, identity_spi1d_text):
        """Test fetching both default files from a directory."""
        loader = LutLoader(lut_dir)

        spi3d_text, spi1d_text = asyncio.run(loader.fetch())
        assert spi3d_text == ramp_spi3d_text
        assert spi1d_text == identity_spi1d_text

    def test_missing_file_raises(self, tmp_path, ramp_spi3d_text):
        """Test that one missing file fails the whole fetch."""
        (tmp_path / "InvRRT.sRGB.Log2_48_nits_Shaper.spi3d").write_text(ramp_spi3d_text)
        loader = LutLoader(tmp_path)

        with pytest.raises(ResourceError) as exc_info:
            asyncio.run(loader.fetch())
        assert exc_info.value.location.endswith(".spi1d")

    def test_injected_fetcher(self):
        """Test that a custom fetcher receives both locations."""
        calls = []

        def fetch(location):
            calls.append(location)
            return location.upper()

        loader = LutLoader("https://example.com/luts", "a.spi3d", "b.spi1d", fetch_text=fetch)
        spi3d_text, spi1d_text = asyncio.run(loader.fetch())

        assert sorted(calls) == [
            "https://example.com/luts/a.spi3d",
            "https://example.com/luts/b.spi1d",
        ]
        assert spi3d_text == "HTTPS://EXAMPLE.COM/LUTS/A.SPI3D"
        assert spi1d_text == "HTTPS://EXAMPLE.COM/LUTS/B.SPI1D"

    def test_injected_fetcher_os_error(self):
        """Test that OSError from a custom fetcher becomes ResourceError."""

        def fetch(location):
            raise FileNotFoundError(location)

        loader = LutLoader("cache", fetch_text=fetch)

        with pytest.raises(ResourceError):
            asyncio.run(loader.fetch())

    def test_injected_fetcher_resource_error(self):
        """Test that ResourceError from a custom fetcher passes through unchanged."""
        error = ResourceError("gone", location="x", status=410)

        def fetch(location):
            raise error

        loader = LutLoader("cache", fetch_text=fetch)

        with pytest.raises(ResourceError) as exc_info:
            asyncio.run(loader.fetch())
        assert exc_info.value is error

    def test_from_config(self):
        """Test building a loader from LutConfig."""
        config = LutConfig(base="https://cdn.example.com/aces", spi3d_name="x.spi3d", timeout=3.0)
        loader = LutLoader.from_config(config)

        assert loader.spi3d_location == "https://cdn.example.com/aces/x.spi3d"
        assert loader.spi1d_location.endswith("Log2_48_nits_Shaper_to_linear.spi1d")
        assert loader.timeout == 3.0

    def test_fetcher_protocol(self):
        """Test that plain callables satisfy TextFetcher."""
        assert isinstance(read_text, TextFetcher)
        assert isinstance(lambda location: "", TextFetcher)
