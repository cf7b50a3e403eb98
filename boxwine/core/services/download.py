"""
Downloader — stream the portable Wine archive into the bundle.

Uses ``urllib.request`` with a chunked read loop. ``Content-Length``
only tunes the chunk size and drives progress logging; a server that
omits it still produces a complete file.
"""

from __future__ import annotations

import http.client
import logging
import urllib.error
import urllib.request
from pathlib import Path
from urllib.parse import unquote, urlparse

from boxwine import __version__
from boxwine.core.errors import DownloadError

logger = logging.getLogger(__name__)

_USER_AGENT = f"boxwine/{__version__}"
_DEFAULT_CHUNK = 64 * 1024
_MAX_CHUNK = 4 * 1024 * 1024

# Seconds a single read may stall; not a limit on the whole transfer
STALL_TIMEOUT = 60


def archive_name(url: str) -> str:
    """File name for ``url``: its final path segment."""
    name = unquote(urlparse(url).path.rsplit("/", 1)[-1])
    if not name:
        raise DownloadError(f"Cannot derive a file name from URL: {url}")
    return name


def _chunk_size(total: int) -> int:
    """Read size for a body of ``total`` bytes (0 = unknown)."""
    if total <= 0:
        return _DEFAULT_CHUNK
    return min(max(total // 100, _DEFAULT_CHUNK), _MAX_CHUNK)


def _fmt_size(n: int) -> str:
    if n < 1024:
        return f"{n} B"
    if n < 1024 * 1024:
        return f"{n / 1024:.1f} KB"
    if n < 1024 ** 3:
        return f"{n / 1024 ** 2:.1f} MB"
    return f"{n / 1024 ** 3:.1f} GB"


def download(url: str, destination_dir: Path, timeout: float | None = STALL_TIMEOUT) -> Path:
    """Download ``url`` into ``destination_dir``.

    Args:
        url: Archive URL.
        destination_dir: Existing directory to write into.
        timeout: Seconds a connect or read may stall before the download
            fails. A slow but steady transfer never times out. ``None``
            waits forever.

    Returns:
        Path to the downloaded file.

    Raises:
        DownloadError: On transport failure, non-2xx status, or a body
            shorter/longer than the advertised ``Content-Length``.
    """
    dest = destination_dir / archive_name(url)
    logger.info("Downloading %s", dest.name)

    req = urllib.request.Request(url, headers={"User-Agent": _USER_AGENT})
    downloaded = 0
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            status = resp.getcode()
            if status is not None and not 200 <= status < 300:
                raise DownloadError(f"Download of {url} failed: HTTP {status}")

            length = resp.headers.get("Content-Length")
            total = int(length) if length and length.isdigit() else 0
            chunk_size = _chunk_size(total)

            with open(dest, "wb") as f:
                last_progress = -1
                while True:
                    chunk = resp.read(chunk_size)
                    if not chunk:
                        break
                    f.write(chunk)
                    downloaded += len(chunk)

                    # Progress tracking (log every 5%)
                    if total > 0:
                        pct = int(downloaded * 100 / total)
                        if pct >= last_progress + 5:
                            last_progress = pct
                            logger.info(
                                "Download progress: %d%% (%s / %s)",
                                pct, _fmt_size(downloaded), _fmt_size(total),
                            )
    except urllib.error.HTTPError as e:
        dest.unlink(missing_ok=True)
        raise DownloadError(f"Download of {url} failed: HTTP {e.code} {e.reason}") from e
    except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
        dest.unlink(missing_ok=True)
        raise DownloadError(f"Download of {url} failed: {e}") from e
    except DownloadError:
        dest.unlink(missing_ok=True)
        raise

    if total > 0 and downloaded != total:
        dest.unlink(missing_ok=True)
        raise DownloadError(
            f"Download of {url} incomplete: got {downloaded} of {total} bytes"
        )

    logger.info("Downloaded %s to %s", _fmt_size(downloaded), dest)
    return dest
