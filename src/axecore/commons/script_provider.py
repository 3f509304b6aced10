"""
Sources for the axe-core script.

Builders never ship axe-core themselves; they ask an ``AxeScriptProvider``
for the source and inject whatever it returns into every frame they scan.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

import httpx

from ..config import get_settings
from ..exceptions import AxeScriptProviderError

logger = logging.getLogger(__name__)


@runtime_checkable
class AxeScriptProvider(Protocol):
    def get_script(self) -> str:
        ...


class FileAxeScriptProvider:
    """Reads axe-core from a local file, e.g. ``node_modules/axe-core/axe.min.js``."""

    def __init__(self, file_path: str | Path) -> None:
        if file_path is None or str(file_path) == "":
            raise AxeScriptProviderError("file_path must not be empty")
        self.file_path = Path(file_path)

    def get_script(self) -> str:
        if not self.file_path.is_file():
            raise AxeScriptProviderError(f"axe-core script not found: {self.file_path}")
        return self.file_path.read_text(encoding="utf-8")


class CdnAxeScriptProvider:
    """
    Downloads a pinned axe-core release and keeps it in a cache directory.

    The cached copy is reused on later calls and across processes, so a
    network round trip only happens once per version.
    """

    def __init__(
        self,
        version: str | None = None,
        url_template: str | None = None,
        cache_dir: Path | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        settings = get_settings()
        self.version = version or settings.axe_version
        self.url_template = url_template or settings.axe_source_url
        self.cache_dir = cache_dir or settings.cache_path
        self.timeout = timeout or settings.download_timeout
        self._client = client

    @property
    def url(self) -> str:
        return self.url_template.format(version=self.version)

    @property
    def cache_file(self) -> Path:
        return self.cache_dir / f"axe-{self.version}.min.js"

    def get_script(self) -> str:
        if self.cache_file.is_file() and self.cache_file.stat().st_size > 0:
            return self.cache_file.read_text(encoding="utf-8")

        script = self._download()
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.cache_file.write_text(script, encoding="utf-8")
        logger.info(f"Cached axe-core {self.version} at {self.cache_file}")
        return script

    def _download(self) -> str:
        logger.info(f"Downloading axe-core {self.version} from {self.url}")
        try:
            if self._client is not None:
                response = self._client.get(self.url, timeout=self.timeout)
            else:
                with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
                    response = client.get(self.url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise AxeScriptProviderError(
                f"Failed to download axe-core {self.version} from {self.url}: {e}"
            ) from e

        script = response.text
        if not script.strip():
            raise AxeScriptProviderError(f"Downloaded axe-core script is empty: {self.url}")
        return script


class CachedAxeScriptProvider:
    """Wraps another provider and remembers the first script it returns."""

    def __init__(self, inner: AxeScriptProvider) -> None:
        self.inner = inner
        self._script: str | None = None

    def get_script(self) -> str:
        if self._script is None:
            self._script = self.inner.get_script()
        return self._script


def default_script_provider() -> AxeScriptProvider:
    """Provider used when a builder is created without options."""
    settings = get_settings()
    if settings.axe_script_path is not None:
        return CachedAxeScriptProvider(FileAxeScriptProvider(settings.axe_script_path))
    return CachedAxeScriptProvider(CdnAxeScriptProvider())


@dataclass
class AxeBuilderOptions:
    """Construction options shared by the Selenium and Playwright builders."""

    script_provider: AxeScriptProvider = field(default_factory=default_script_provider)
