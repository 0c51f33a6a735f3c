"""Rate page HTTP client with cookie preflight and exponential backoff retry logic"""

import asyncio
import logging
from typing import List, Sequence

import httpx

from interest_gateway.config import settings
from interest_gateway.domain.exceptions import AcquisitionError
from interest_gateway.domain.models import RawRateRow
from interest_gateway.infrastructure.observability.metrics import fetch_failure_counter, fetch_latency_histogram
from interest_gateway.infrastructure.sources.base import RateSource, usable_rows

logger = logging.getLogger(__name__)


class DirectFetchSource(RateSource):
    """Downloads the rate page straight from the publisher's site"""

    name = "direct"

    def __init__(
        self,
        urls: Sequence[str] | None = None,
        site_root: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_base: float | None = None,
    ):
        self.urls = list(urls or settings.rate_urls)
        self.site_root = site_root or settings.site_root
        self.timeout = timeout or settings.http_timeout_seconds
        self.max_retries = max_retries or settings.fetch_max_retries
        self.backoff_base = settings.fetch_backoff_base if backoff_base is None else backoff_base

    def _headers(self) -> dict:
        return {
            "User-Agent": settings.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": settings.accept_language,
        }

    async def fetch_raw_rows(self) -> List[RawRateRow]:
        """
        Try each configured URL in order and return the first usable table.

        Raises:
            AcquisitionError: No URL produced at least one rate period
        """
        failures = []
        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=self._headers(),
            follow_redirects=True,
        ) as client:
            await self._preflight(client)

            for url in self.urls:
                try:
                    document = await self._get_document(client, url)
                    rows = usable_rows(document)
                except AcquisitionError as e:
                    logger.warning(f"Rate page unusable: {e}", extra={"url": url})
                    failures.append(f"{url}: {e}")
                    continue

                logger.info(f"Fetched {len(rows)} rate rows", extra={"url": url})
                return rows

        raise AcquisitionError("Unable to fetch or parse the rate table. " + "; ".join(failures))

    async def _preflight(self, client: httpx.AsyncClient) -> None:
        """Visit the site root first so the session picks up its cookies"""
        try:
            await client.get(self.site_root)
        except httpx.HTTPError as e:
            logger.debug(f"Preflight request failed: {e}")

    async def _get_document(self, client: httpx.AsyncClient, url: str) -> bytes:
        """
        GET a rate page with retry logic.

        Retry strategy:
        - Exponential backoff: base * 2^(attempt-1)
        - Retries on 5xx errors and network failures
        - Other error statuses fail the URL immediately

        Raises:
            AcquisitionError: On timeout, HTTP errors, or exhausted retries
        """
        attempt = 0
        while True:
            try:
                with fetch_latency_histogram.time():
                    response = await client.get(url, headers={"Referer": self.site_root})
                    response.raise_for_status()
                    return response.content

            except httpx.HTTPStatusError as e:
                fetch_failure_counter.inc()
                if e.response.status_code < 500:
                    raise AcquisitionError(f"Rate page error: {e.response.status_code}") from e
                error = e
            except httpx.RequestError as e:  # includes timeouts
                fetch_failure_counter.inc()
                error = e

            attempt += 1
            if attempt >= self.max_retries:
                raise AcquisitionError(f"Rate page unavailable after {attempt} attempts: {error}") from error

            backoff = self.backoff_base * (2 ** (attempt - 1))
            await asyncio.sleep(backoff)
