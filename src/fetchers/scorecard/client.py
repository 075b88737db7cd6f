"""College Scorecard API client."""

import logging
from typing import Any

import httpx
import orjson

from src.exceptions import FetchError, ParseError
from src.models.config import ScorecardConfig

from .request import build_query_url, redact_url


logger = logging.getLogger(__name__)


class ScorecardClient:
    """Client for the College Scorecard schools endpoint.

    One call to get_document() is exactly one HTTP GET. Failures are raised,
    never turned into an empty document.
    """

    def __init__(
        self,
        config: ScorecardConfig,
        transport: httpx.BaseTransport | None = None,
    ):
        self.config = config
        self._transport = transport
        self._client: httpx.Client | None = None
        self.request_count = 0

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.config.timeout,
                headers={"Accept": "application/json"},
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "ScorecardClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get_document(self, url: str) -> dict[str, Any]:
        """Fetch a URL and parse the JSON object it returns.

        Raises:
            FetchError: Connection failure, timeout or non-2xx status
            ParseError: Body is not JSON or not a JSON object
        """
        safe_url = redact_url(url, self.config.api_key)
        client = self._get_client()

        self.request_count += 1
        try:
            response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"HTTP {e.response.status_code} from {safe_url}",
                status_code=e.response.status_code,
                response_text=e.response.text[:500],
                context={"url": safe_url},
            ) from e
        except httpx.HTTPError as e:
            raise FetchError(
                f"Request to {safe_url} failed: {e.__class__.__name__}: {e}",
                context={"url": safe_url},
            ) from e

        try:
            data = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise ParseError(
                f"Failed to parse JSON from {safe_url}: {e}",
                response_text=response.text[:500],
                context={"url": safe_url},
            ) from e

        if not isinstance(data, dict):
            raise ParseError(
                f"Expected a JSON object from {safe_url}, got {type(data).__name__}",
                response_text=response.text[:500],
                context={"url": safe_url},
            )

        return data

    def get_page(self, year: int, page: int) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        """Get school records and metadata for one page of one year.

        Args:
            year: Data year used to qualify the metric fields
            page: Page index (0-indexed)

        Returns:
            Tuple of (results list, metadata dict)
        """
        url = build_query_url(self.config, year, page)
        context = {"year": year, "page": page}

        try:
            data = self.get_document(url)
        except (FetchError, ParseError) as e:
            e.context.update(context)
            e.message = f"Year {year} page {page}: {e.message}"
            e.args = (e.message,)
            raise

        metadata = data.get("metadata")
        if not isinstance(metadata, dict):
            raise ParseError(
                f"Year {year} page {page}: response missing 'metadata' object",
                response_text=str(data)[:500],
                context=context,
            )

        if "results" not in data:
            raise ParseError(
                f"Year {year} page {page}: response missing 'results' array",
                response_text=str(data)[:500],
                context=context,
            )

        results = data["results"]
        if results is None:
            results = []
        if not isinstance(results, list):
            raise ParseError(
                f"Year {year} page {page}: 'results' is not an array",
                response_text=str(data)[:500],
                context=context,
            )

        logger.debug(f"Year {year} page {page}: {len(results)} records")
        return results, metadata

    @staticmethod
    def total_records(metadata: dict[str, Any]) -> int:
        """Read metadata.total (a number or numeric string)."""
        total = metadata.get("total")
        if isinstance(total, bool):
            total = None
        try:
            count = int(total)  # type: ignore[arg-type]
        except (TypeError, ValueError) as e:
            raise ParseError(
                f"metadata.total is not a count: {total!r}",
                context={"metadata": metadata},
            ) from e
        if count < 0:
            raise ParseError(f"metadata.total is negative: {count}", context={"metadata": metadata})
        return count
