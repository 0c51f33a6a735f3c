"""Common interface for rate table acquisition strategies"""

from abc import ABC, abstractmethod
from typing import List

from interest_gateway.domain.exceptions import AcquisitionError
from interest_gateway.domain.models import RawRateRow
from interest_gateway.domain.normalizer import normalize
from interest_gateway.infrastructure.sources.html_table import extract_raw_rows


class RateSource(ABC):
    """One way of obtaining the raw rate table"""

    name: str = "source"

    @abstractmethod
    async def fetch_raw_rows(self) -> List[RawRateRow]:
        """
        Return the raw rows of the rate table.

        Raises:
            AcquisitionError: The table could not be obtained
        """


def usable_rows(document: str | bytes) -> List[RawRateRow]:
    """
    Extract rows from a document, requiring at least one valid rate period.

    Raises:
        AcquisitionError: No data rows, or none of them parse
    """
    rows = extract_raw_rows(document)
    if not normalize(rows):
        raise AcquisitionError("No rate periods parsed (the page structure may have changed)")
    return rows
