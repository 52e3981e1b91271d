import logging

import httpx
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential, retry_if_exception_type

from animeflow_proxy.configs import settings

logger = logging.getLogger(__name__)


class DownloadError(Exception):
    def __init__(self, status_code, message):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


def create_httpx_client(follow_redirects: bool = True, **kwargs) -> httpx.AsyncClient:
    """
    Create an HTTPX AsyncClient wired to the configured transports.

    Args:
        follow_redirects (bool): Whether to follow 3xx redirects automatically.
        **kwargs: Additional AsyncClient keyword arguments.

    Returns:
        httpx.AsyncClient: Configured client.
    """
    mounts = settings.transport_config.get_mounts()
    kwargs.setdefault("timeout", settings.transport_config.timeout)
    return httpx.AsyncClient(mounts=mounts, follow_redirects=follow_redirects, **kwargs)


async def fetch_with_retry(client: httpx.AsyncClient, method: str, url: str, headers: dict, **kwargs) -> httpx.Response:
    """
    Fetch a URL, retrying transient network errors up to the configured attempt count.

    Args:
        client (httpx.AsyncClient): HTTP client to use for the request.
        method (str): HTTP method (e.g., GET, POST).
        url (str): Target URL.
        headers (dict): Request headers.
        **kwargs: Additional request arguments.

    Returns:
        httpx.Response: HTTP response with a 2xx status.

    Raises:
        DownloadError: On a non-2xx status, a timeout, or when every attempt failed.
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(settings.transport_config.attempts),
        wait=wait_exponential(multiplier=0.5, max=4),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    try:
        async for attempt in retrying:
            with attempt:
                response = await client.request(method, url, headers=headers, **kwargs)
        response.raise_for_status()
        return response
    except httpx.TimeoutException:
        logger.warning(f"Timeout while requesting {url}")
        raise DownloadError(504, f"Timeout while requesting {url}")
    except httpx.HTTPStatusError as e:
        logger.error(f"HTTP error {e.response.status_code} while requesting {url}")
        raise DownloadError(e.response.status_code, f"HTTP error {e.response.status_code} while requesting {url}")
    except httpx.TransportError as e:
        logger.error(f"Network error while requesting {url}: {e}")
        raise DownloadError(502, f"Network error while requesting {url}: {e}")


async def request_with_retry(method: str, url: str, headers: dict, **kwargs) -> httpx.Response:
    """
    Send an HTTP request with retry logic.

    Args:
        method (str): HTTP method.
        url (str): Target URL.
        headers (dict): Request headers.
        **kwargs: Additional request arguments.

    Returns:
        httpx.Response: HTTP response.

    Raises:
        DownloadError: If the request fails after retries.
    """
    async with create_httpx_client() as client:
        try:
            return await fetch_with_retry(client, method, url, headers, **kwargs)
        except DownloadError as e:
            logger.debug(f"Failed to perform request: {e}")
            raise
