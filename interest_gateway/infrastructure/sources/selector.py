"""Ordered fallback across rate sources"""

import logging
from typing import List, Sequence, Tuple

from interest_gateway.config import Settings, settings
from interest_gateway.domain.exceptions import AcquisitionError
from interest_gateway.domain.models import RatePeriod, RawRateRow
from interest_gateway.domain.normalizer import normalize
from interest_gateway.infrastructure.observability.metrics import record_acquisition
from interest_gateway.infrastructure.sources.base import RateSource
from interest_gateway.infrastructure.sources.browser import BrowserFetchSource
from interest_gateway.infrastructure.sources.direct import DirectFetchSource
from interest_gateway.infrastructure.sources.saved import SavedDocumentSource

logger = logging.getLogger(__name__)


class RateSourceSelector:
    """Tries each source in order and keeps the first usable table"""

    def __init__(self, sources: Sequence[RateSource]):
        self.sources = list(sources)

    async def fetch_raw_rows(self) -> List[RawRateRow]:
        """
        Return the rows of the first source yielding at least one rate period.

        Raises:
            AcquisitionError: Every source failed or produced no periods
        """
        rows, _ = await self.acquire()
        return rows

    async def fetch_periods(self) -> List[RatePeriod]:
        """Normalized timeline of the first usable source"""
        _, periods = await self.acquire()
        return periods

    async def acquire(self) -> Tuple[List[RawRateRow], List[RatePeriod]]:
        """
        Run the source chain once, returning the winning rows together with
        the periods they normalize to.

        Raises:
            AcquisitionError: Every source failed or produced no periods
        """
        failures = []
        for source in self.sources:
            try:
                rows = await source.fetch_raw_rows()
            except AcquisitionError as e:
                record_acquisition(source.name, "failure")
                logger.warning(f"Rate source failed: {e}", extra={"source": source.name})
                failures.append(f"{source.name}: {e}")
                continue

            periods = normalize(rows)
            if periods:
                record_acquisition(source.name, "success")
                logger.info("Rate table acquired", extra={"source": source.name, "rows": len(rows)})
                return rows, periods

            record_acquisition(source.name, "empty")
            failures.append(f"{source.name}: no rate periods parsed")

        if not failures:
            raise AcquisitionError("No rate sources configured")
        raise AcquisitionError("Could not acquire any rate data (" + "; ".join(failures) + ")")


class RateService:
    """Acquires the raw table and hands back the normalized timeline"""

    def __init__(self, selector: RateSourceSelector):
        self.selector = selector

    async def get_periods(self) -> List[RatePeriod]:
        return await self.selector.fetch_periods()


def build_selector(config: Settings = settings) -> RateSourceSelector:
    """
    Build the source chain named by ``rate_sources``.

    The saved-document source is left out when no path is configured.

    Raises:
        ValueError: Unknown source name
    """
    sources: List[RateSource] = []
    for name in config.source_names:
        if name == "saved":
            if config.saved_html_path:
                sources.append(SavedDocumentSource(config.saved_html_path))
            else:
                logger.debug("No saved_html_path configured, skipping saved source")
        elif name == "direct":
            sources.append(
                DirectFetchSource(
                    urls=config.rate_urls,
                    site_root=config.site_root,
                    timeout=config.http_timeout_seconds,
                    max_retries=config.fetch_max_retries,
                    backoff_base=config.fetch_backoff_base,
                )
            )
        elif name == "browser":
            sources.append(BrowserFetchSource(urls=config.rate_urls, timeout=config.browser_timeout_seconds))
        else:
            raise ValueError(f"Unknown rate source: {name}. Available: saved, direct, browser")
    return RateSourceSelector(sources)
