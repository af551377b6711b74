import asyncio
import httpx
import logging
from brand_analyzer.config import settings
from brand_analyzer.exceptions import FetchError, FetchTimeoutError

logger = logging.getLogger(__name__)

class Fetcher:
    def __init__(self, timeout: float | None = None, user_agent: str | None = None,
                 transport: httpx.AsyncBaseTransport | None = None):
        self.timeout = timeout if timeout is not None else settings.FETCH_TIMEOUT_SECS
        self.client = httpx.AsyncClient(
            headers={"User-Agent": user_agent or settings.USER_AGENT},
            timeout=self.timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def close(self):
        await self.client.aclose()

    async def fetch_html(self, url: str) -> str:
        """Single GET, no retries.

        ``timeout`` bounds the whole exchange (redirects and body included),
        not just each connect/read like httpx's own timeout.
        """
        try:
            r = await asyncio.wait_for(self.client.get(url), timeout=self.timeout)
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise FetchTimeoutError(detail=f"timed out fetching {url}: {e!r}")
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise FetchError(detail=f"request to {url} failed: {e!r}")
        if not r.is_success:
            raise FetchError(detail=f"{url} returned status {r.status_code}")
        logger.debug("Fetched %s (%d bytes)", url, len(r.content))
        return r.text
