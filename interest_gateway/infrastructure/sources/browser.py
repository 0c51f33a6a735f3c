"""Rate source driving a headless browser, for when plain HTTP is blocked"""

import logging
from typing import Awaitable, Callable, List, Sequence

from interest_gateway.config import settings
from interest_gateway.domain.exceptions import AcquisitionError
from interest_gateway.domain.models import RawRateRow
from interest_gateway.infrastructure.sources.base import RateSource, usable_rows

logger = logging.getLogger(__name__)

Renderer = Callable[[str], Awaitable[str]]


class BrowserFetchSource(RateSource):
    """
    Renders the rate page in headless Chromium and reads the resulting DOM.

    Needs the optional ``browser`` extra (Playwright plus an installed
    Chromium). A custom ``render`` coroutine can replace Playwright.
    """

    name = "browser"

    def __init__(
        self,
        urls: Sequence[str] | None = None,
        timeout: float | None = None,
        render: Renderer | None = None,
    ):
        self.urls = list(urls or settings.rate_urls)
        self.timeout = timeout or settings.browser_timeout_seconds
        self.render = render or self._render_with_playwright

    async def fetch_raw_rows(self) -> List[RawRateRow]:
        failures = []
        for url in self.urls:
            try:
                rows = usable_rows(await self.render(url))
            except AcquisitionError as e:
                logger.warning(f"Rendered rate page unusable: {e}", extra={"url": url})
                failures.append(f"{url}: {e}")
                continue

            logger.info(f"Rendered {len(rows)} rate rows", extra={"url": url})
            return rows

        raise AcquisitionError("Browser fetch produced no rate table. " + "; ".join(failures))

    async def _render_with_playwright(self, url: str) -> str:
        try:
            from playwright.async_api import Error as PlaywrightError
            from playwright.async_api import async_playwright
        except ImportError as e:
            raise AcquisitionError("Browser fetch requires the 'browser' extra (playwright)") from e

        timeout_ms = self.timeout * 1000
        try:
            async with async_playwright() as playwright:
                browser = await playwright.chromium.launch(headless=True)
                try:
                    page = await browser.new_page(
                        user_agent=settings.user_agent,
                        extra_http_headers={"Accept-Language": settings.accept_language},
                    )
                    await page.goto(url, timeout=timeout_ms, wait_until="domcontentloaded")
                    await page.wait_for_selector("table td", timeout=timeout_ms)
                    return await page.content()
                finally:
                    await browser.close()
        except PlaywrightError as e:
            raise AcquisitionError(f"Browser fetch failed: {e}") from e
