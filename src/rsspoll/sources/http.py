"""HTTP feed reader implementation."""

import httpx

from rsspoll.exceptions import SourceFetchError
from rsspoll.utils.http_client import create_http_client


class HttpFeedReader:
    """Fetches feed documents over HTTP(S)."""

    def __init__(
        self,
        timeout: float = 30,
        user_agent: str = "rsspoll/1.0 (RSS Poller)",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize HTTP feed reader.

        Args:
            timeout: Request timeout in seconds.
            user_agent: User-Agent header for requests.
            transport: Optional httpx transport, mostly for tests.
        """
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport

    async def fetch_raw(self, url: str) -> str:
        """Fetch raw feed content.

        Args:
            url: Feed URL.

        Returns:
            Raw XML string.

        Raises:
            SourceFetchError: When request fails or returns a non-2xx status.
        """
        try:
            async with create_http_client(
                timeout=self._timeout,
                user_agent=self._user_agent,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.text
        except httpx.TimeoutException as e:
            raise SourceFetchError(url, f"Request timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            raise SourceFetchError(
                url, f"HTTP {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.RequestError as e:
            raise SourceFetchError(url, f"Request failed: {e}") from e
        except httpx.InvalidURL as e:
            raise SourceFetchError(url, f"Invalid URL: {e}") from e
