"""Download remote documents into scoped temporary files."""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

import requests

from printer.errors import FetchError, InvalidURL

LOGGER = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")
DEFAULT_TIMEOUT = 30
DEFAULT_CHUNK_SIZE = 8192


def validate_url(url: str) -> str:
    """Return ``url`` unchanged if it is an absolute http(s) URL, else raise InvalidURL."""
    if not isinstance(url, str) or not url.strip():
        raise InvalidURL("URL inválida: vacía")
    try:
        parts = urlsplit(url.strip())
    except ValueError as exc:
        raise InvalidURL(f"URL inválida: {exc}") from exc
    if parts.scheme and parts.scheme.lower() not in ALLOWED_SCHEMES:
        raise InvalidURL(f"esquema de URL no soportado: {parts.scheme}")
    if not parts.scheme or not parts.netloc:
        raise InvalidURL(f"URL inválida: {url} no es una URL absoluta")
    return url.strip()


class TemporaryDocument:
    """Owns a downloaded file and deletes it when the ``with`` block exits.

    Deletion failures are logged and never raised, so they cannot hide the
    error that ended the block.
    """

    def __init__(self, path: Path, logger: Optional[logging.Logger] = None) -> None:
        self.path = Path(path)
        self.logger = logger or LOGGER

    def __enter__(self) -> Path:
        return self.path

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.cleanup()
        return False

    def cleanup(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            self.logger.error("Failed to delete temporary file %s: %s", self.path, exc)
            return
        self.logger.debug("Deleted temporary file %s", self.path)


class RemoteFetcher:
    """Streams a URL to a new ``.pdf`` temp file; the caller owns the result."""

    def __init__(
            self,
            timeout: float = DEFAULT_TIMEOUT,
            chunk_size: int = DEFAULT_CHUNK_SIZE,
            temp_dir: Optional[str] = None,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.temp_dir = temp_dir
        self.logger = logger or LOGGER

    def fetch(self, url: str) -> Path:
        url = validate_url(url)
        self.logger.info("Downloading %s", url)
        try:
            with requests.get(url, stream=True, timeout=self.timeout) as response:
                if not 200 <= response.status_code < 300:
                    raise FetchError(
                        f"el servidor retornó estado no OK: {response.status_code} {response.reason or ''}".strip(),
                        status_code=response.status_code,
                    )
                return self._write_body(response)
        except requests.RequestException as exc:
            raise FetchError(f"error al descargar el archivo: {exc}") from exc
        except OSError as exc:
            raise FetchError(f"error al guardar el archivo: {exc}") from exc

    def _write_body(self, response: requests.Response) -> Path:
        handle = tempfile.NamedTemporaryFile(suffix=".pdf", dir=self.temp_dir, delete=False)
        path = Path(handle.name)
        try:
            with handle:
                for chunk in response.iter_content(chunk_size=self.chunk_size):
                    if chunk:
                        handle.write(chunk)
        except BaseException:
            # partial downloads never outlive a failed fetch
            TemporaryDocument(path, self.logger).cleanup()
            raise
        self.logger.info("Downloaded %s (%d bytes)", path, os.path.getsize(path))
        return path


__all__ = ["RemoteFetcher", "TemporaryDocument", "validate_url"]
