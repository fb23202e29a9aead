"""Shared async client for Google REST APIs with rate limiting and page-token pagination"""

import asyncio
import time
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx

from clone_agent.errors import retry_after_seconds
from clone_agent.logging_config import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """Rate limiter honouring Retry-After responses"""

    def __init__(self, max_requests_per_minute: int = 600):
        self.max_requests_per_minute = max_requests_per_minute
        self.min_interval = 60.0 / max_requests_per_minute
        self.last_request_time = 0
        self.retry_after = 0

    async def wait_if_needed(self):
        """Wait if necessary to respect rate limits"""
        now = time.time()

        if self.retry_after > now:
            wait_time = self.retry_after - now
            logger.warning(f"Rate limited, waiting {wait_time:.2f} seconds")
            await asyncio.sleep(wait_time)
            self.retry_after = 0
            now = time.time()

        time_since_last = now - self.last_request_time
        if time_since_last < self.min_interval:
            await asyncio.sleep(self.min_interval - time_since_last)

        self.last_request_time = time.time()

    def set_retry_after(self, seconds: int):
        """Set retry-after delay from HTTP header"""
        self.retry_after = time.time() + seconds


class GoogleApiClient:
    """
    Base client for one Google REST API host.

    Features:
    - Bearer token authentication
    - Explicit request timeout on every call
    - Optional retries on 429 / 5xx / transport errors (off by default)
    - nextPageToken pagination with an explicit page cap
    """

    base_url: str = ""

    def __init__(
        self,
        token: str,
        timeout: int = 30,
        max_retries: int = 0,
        max_requests_per_minute: int = 600,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            token: OAuth2 access token
            timeout: Request timeout in seconds
            max_retries: Retry attempts after the first failure (0 = fail immediately)
            max_requests_per_minute: Client-side rate limit
            base_url: Override the API host (tests, emulators)
            transport: Optional httpx transport (tests)
        """
        if base_url:
            self.base_url = base_url
        self.base_url = self.base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.max_retries = max_retries
        self.rate_limiter = RateLimiter(max_requests_per_minute)
        self.logger = get_logger(f"{__name__}.{type(self).__name__}")

        self.client = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """
        Make HTTP request with rate limiting and optional retries.

        Args:
            method: HTTP method
            endpoint: Path relative to the API host
            params: Query parameters
            data: JSON request body

        Returns:
            HTTP response

        Raises:
            httpx.HTTPError: On request failure once retries are exhausted
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        retry_count = 0

        while True:
            await self.rate_limiter.wait_if_needed()
            try:
                response = await self.client.request(
                    method=method,
                    url=url,
                    params=params,
                    json=data,
                )
                if response.status_code == 429:
                    self.rate_limiter.set_retry_after(retry_after_seconds(response.headers))
                response.raise_for_status()
                return response

            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                if (status == 429 or status >= 500) and retry_count < self.max_retries:
                    retry_count += 1
                    wait_time = min(2 ** retry_count, 60)
                    self.logger.warning(
                        f"HTTP {status} from {method} {endpoint}, "
                        f"retry {retry_count}/{self.max_retries} after {wait_time}s"
                    )
                    if status != 429:
                        await asyncio.sleep(wait_time)
                    continue
                raise

            except httpx.RequestError as e:
                if retry_count < self.max_retries:
                    retry_count += 1
                    wait_time = min(2 ** retry_count, 60)
                    self.logger.warning(
                        f"Request error: {e}, retry {retry_count}/{self.max_retries}"
                    )
                    await asyncio.sleep(wait_time)
                    continue
                raise

    async def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET an endpoint and return its JSON body"""
        response = await self._request("GET", endpoint, params=params)
        return response.json()

    async def paginate(
        self,
        method: str,
        endpoint: str,
        items_key: str,
        max_pages: int = 0,
        params: Optional[Dict[str, Any]] = None,
        page_size: Optional[int] = None,
    ) -> AsyncIterator[Any]:
        """
        Yield items from a Google list endpoint, following nextPageToken.

        Google list APIs take ``pageToken`` as a query parameter for GET and as a
        body field for POST (e.g. Firestore ``listCollectionIds``).

        Args:
            method: "GET" or "POST"
            endpoint: API endpoint
            items_key: Response field holding the page's items
            max_pages: Maximum pages to fetch (0 = all)
            params: Extra query parameters (GET) or body fields (POST)
            page_size: Optional pageSize

        Yields:
            Individual items from every fetched page
        """
        fields: Dict[str, Any] = dict(params or {})
        if page_size:
            fields["pageSize"] = page_size
        page = 0

        while True:
            page += 1
            if method == "GET":
                response = await self._request("GET", endpoint, params=fields)
            else:
                response = await self._request(method, endpoint, data=fields)
            body = response.json() or {}

            for item in body.get(items_key, []):
                yield item

            next_token = body.get("nextPageToken")
            if not next_token:
                return
            if max_pages and page >= max_pages:
                self.logger.warning(
                    f"Listing {endpoint} truncated after {page} page(s); "
                    f"more results are available (raise max_list_pages to include them)"
                )
                return
            fields["pageToken"] = next_token

    async def list_all(
        self,
        method: str,
        endpoint: str,
        items_key: str,
        max_pages: int = 0,
        params: Optional[Dict[str, Any]] = None,
    ) -> List[Any]:
        """Collect every item yielded by paginate() into a list"""
        return [
            item
            async for item in self.paginate(
                method, endpoint, items_key, max_pages=max_pages, params=params
            )
        ]
