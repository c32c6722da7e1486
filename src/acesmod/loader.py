"""Asynchronous acquisition of the two official transform LUTs.

The loader only fetches text; parsing happens in TransformPipeline. Both
resources are fetched concurrently and the call completes when both have
arrived or either has failed.

Example:
    >>> loader = LutLoader("https://example.com/luts")
    >>> spi3d_text, spi1d_text = asyncio.run(loader.fetch())
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import urlopen

from acesmod.config import LUT_CONFIG, LutConfig
from acesmod.errors import ResourceError
from acesmod.protocols import TextFetcher

logger = logging.getLogger(__name__)

URL_SCHEMES = ("http", "https", "file")


def is_url(location: str) -> bool:
    return urlparse(location).scheme in URL_SCHEMES


def read_text(location: str, timeout: float = LUT_CONFIG.timeout) -> str:
    """Read a LUT resource from a URL or a filesystem path.

    :param location: ``http(s)://`` or ``file://`` URL, or a path
    :param timeout: Socket timeout in seconds for URL fetches
    :returns: Decoded UTF-8 text
    :raises ResourceError: On HTTP errors (status set), network or file errors
    """
    if is_url(location):
        try:
            with urlopen(location, timeout=timeout) as response:
                return response.read().decode("utf-8")
        except HTTPError as e:
            raise ResourceError(
                f"HTTP {e.code} loading {location}", location=location, status=e.code
            ) from e
        except (URLError, OSError, UnicodeDecodeError) as e:
            raise ResourceError(f"Failed to load {location}: {e}", location=location) from e

    try:
        return Path(location).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceError(f"Failed to read {location}: {e}", location=location) from e


def join_location(base: str | Path, name: str) -> str:
    """Append a file name to a URL prefix or directory."""
    base = str(base)
    if is_url(base):
        return base.rstrip("/") + "/" + name
    return str(Path(base) / name)


class LutLoader:
    """Fetches the spi3d and spi1d texts for one pipeline load.

    :param base: Directory or URL prefix holding both files
    :param spi3d_name: 3D LUT file name
    :param spi1d_name: 1D LUT file name
    :param timeout: Seconds allowed per URL fetch
    :param fetch_text: Replacement fetcher (e.g. for tests or caches);
        defaults to ``read_text``
    """

    def __init__(
        self,
        base: str | Path = LUT_CONFIG.base,
        spi3d_name: str = LUT_CONFIG.spi3d_name,
        spi1d_name: str = LUT_CONFIG.spi1d_name,
        timeout: float = LUT_CONFIG.timeout,
        fetch_text: TextFetcher | None = None,
    ):
        self.spi3d_location = join_location(base, spi3d_name)
        self.spi1d_location = join_location(base, spi1d_name)
        self.timeout = timeout
        self._fetch_text = fetch_text

    @classmethod
    def from_config(cls, config: LutConfig, fetch_text: TextFetcher | None = None) -> LutLoader:
        return cls(
            base=config.base,
            spi3d_name=config.spi3d_name,
            spi1d_name=config.spi1d_name,
            timeout=config.timeout,
            fetch_text=fetch_text,
        )

    def _fetch_one(self, location: str) -> str:
        logger.debug("[LutLoader] Fetching %s", location)
        if self._fetch_text is not None:
            try:
                text = self._fetch_text(location)
            except ResourceError:
                raise
            except OSError as e:
                raise ResourceError(f"Failed to load {location}: {e}", location=location) from e
        else:
            text = read_text(location, timeout=self.timeout)
        logger.debug("[LutLoader] %s: %d bytes", location, len(text))
        return text

    async def fetch(self) -> tuple[str, str]:
        """Fetch both LUT texts concurrently.

        :returns: (spi3d_text, spi1d_text)
        :raises ResourceError: If either fetch fails
        """
        logger.info("[LutLoader] Loading %s and %s", self.spi3d_location, self.spi1d_location)
        spi3d_text, spi1d_text = await asyncio.gather(
            asyncio.to_thread(self._fetch_one, self.spi3d_location),
            asyncio.to_thread(self._fetch_one, self.spi1d_location),
        )
        return spi3d_text, spi1d_text

    def __repr__(self) -> str:
        return f"LutLoader(spi3d={self.spi3d_location!r}, spi1d={self.spi1d_location!r})"
