"""Download the full CRE documentation bundle for offline reference."""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from cre_workflow_toolkit.results import Failure, ToolResult

logger = logging.getLogger(__name__)


class DocsFetchResult(ToolResult):
    """A successfully downloaded documentation file."""

    file: str
    size_bytes: int
    source: str


class DocsFetcher:
    """Fetch one documentation URL to one local file. No retries."""

    def __init__(
        self,
        *,
        url: str,
        output_path: Path,
        timeout_seconds: float = 60.0,
        session: requests.Session | None = None,
    ) -> None:
        if not url:
            raise ValueError("Documentation URL is required")

        self._url = url
        self._output_path = output_path
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    def close(self) -> None:
        self._session.close()

    def fetch(self) -> DocsFetchResult | Failure:
        try:
            response = self._session.get(self._url, timeout=self._timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning(
                "Documentation download failed", extra={"url": self._url, "error": str(e)}
            )
            return Failure(error=f"Failed to fetch docs from {self._url}")

        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            self._output_path.write_bytes(response.content)
        except OSError as e:
            logger.warning(
                "Could not write documentation file",
                extra={"path": str(self._output_path), "error": str(e)},
            )
            return Failure(error=f"Failed to fetch docs from {self._url}")

        size = self._output_path.stat().st_size
        logger.info(
            "Documentation downloaded",
            extra={"url": self._url, "path": str(self._output_path), "size_bytes": size},
        )
        return DocsFetchResult(file=str(self._output_path), size_bytes=size, source=self._url)
