"""Review data sources: the analysis backend over HTTP, or a local export."""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import httpx

from ..interfaces.source import IReviewSource, ReviewPayload
from ..parsers.exceptions import MalformedPayloadError, SourceUnavailableError


logger = logging.getLogger(__name__)

DEFAULT_REVIEW_DATA_PATH = "/api/review-data"


def interpret_payload(body: str, source: str) -> ReviewPayload:
    """
    Turn a fetched body into a ReviewPayload.

    A JSON object with a ``data`` member is treated as an envelope: a list
    of row objects becomes ``records``, a string becomes CSV text. Any
    other body is taken as CSV text.

    Raises:
        MalformedPayloadError: If a JSON envelope has an unusable ``data``.
    """
    stripped = body.lstrip()
    if not stripped.startswith("{"):
        return ReviewPayload(source=source, csv_text=body)

    try:
        envelope = json.loads(body)
    except json.JSONDecodeError:
        # Not JSON after all; CSV lines may start with a brace.
        return ReviewPayload(source=source, csv_text=body)

    if not isinstance(envelope, dict) or "data" not in envelope:
        raise MalformedPayloadError(
            message="JSON payload has no 'data' member",
            source=source,
            details={"keys": sorted(envelope) if isinstance(envelope, dict) else []},
        )

    data: Any = envelope["data"]
    if isinstance(data, str):
        return ReviewPayload(source=source, csv_text=data)
    if isinstance(data, list):
        return ReviewPayload(source=source, records=data)

    raise MalformedPayloadError(
        message=f"Unsupported 'data' type: {type(data).__name__}",
        source=source,
    )


class HttpReviewSource(IReviewSource):
    """
    Fetches the review CSV from the analysis backend.

    The body may be raw CSV text or a JSON envelope. A client can be
    injected; otherwise a short-lived ``httpx.Client`` is opened per fetch.
    """

    def __init__(
        self,
        base_url: str,
        path: str = DEFAULT_REVIEW_DATA_PATH,
        timeout: float = 15.0,
        client: Optional[httpx.Client] = None,
    ):
        if not base_url:
            raise ValueError("Backend base URL is required")
        self.base_url = base_url.rstrip("/")
        self.path = path
        self.timeout = timeout
        self._client = client

    def describe(self) -> str:
        return f"{self.base_url}{self.path}"

    def fetch(self) -> ReviewPayload:
        url = self.describe()
        try:
            if self._client is not None:
                response = self._client.get(url)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.get(url)
        except httpx.HTTPError as e:
            raise SourceUnavailableError(
                message=f"Request failed: {e}",
                source=url,
                details={"error_type": type(e).__name__},
            ) from e

        if response.status_code >= 400:
            raise SourceUnavailableError(
                message=f"HTTP {response.status_code}: {response.reason_phrase}",
                source=url,
                details={"status_code": response.status_code},
            )

        logger.info(f"Fetched {len(response.content)} bytes of review data from {url}")
        return interpret_payload(response.text, url)


class FileReviewSource(IReviewSource):
    """Reads a review CSV (or JSON envelope) export from disk."""

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding

    def describe(self) -> str:
        return str(self.path)

    def fetch(self) -> ReviewPayload:
        if not self.path.exists():
            raise SourceUnavailableError(
                message=f"Review data file not found: {self.path}",
                source=str(self.path),
            )
        try:
            body = self.path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceUnavailableError(
                message=f"Could not read review data: {e}",
                source=str(self.path),
            ) from e

        logger.info(f"Read {len(body)} characters of review data from {self.path}")
        return interpret_payload(body, str(self.path))


class TextReviewSource(IReviewSource):
    """In-memory source, used for posted CSV bodies."""

    def __init__(self, body: str, label: str = "<request body>"):
        self.body = body
        self.label = label

    def describe(self) -> str:
        return self.label

    def fetch(self) -> ReviewPayload:
        return interpret_payload(self.body, self.label)
