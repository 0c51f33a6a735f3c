"""Rate source reading a previously saved copy of the rate page"""

import asyncio
import logging
from pathlib import Path
from typing import List

from interest_gateway.domain.exceptions import AcquisitionError
from interest_gateway.domain.models import RawRateRow
from interest_gateway.infrastructure.sources.base import RateSource
from interest_gateway.infrastructure.sources.html_table import extract_raw_rows

logger = logging.getLogger(__name__)


class SavedDocumentSource(RateSource):
    """Reads the rate table from an HTML file saved from the browser"""

    name = "saved"

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def fetch_raw_rows(self) -> List[RawRateRow]:
        try:
            document = await asyncio.to_thread(self.path.read_bytes)
        except OSError as e:
            raise AcquisitionError(f"Saved rate document not readable: {self.path}") from e

        rows = extract_raw_rows(document)
        logger.info(f"Read {len(rows)} rows from saved document", extra={"path": str(self.path)})
        return rows
