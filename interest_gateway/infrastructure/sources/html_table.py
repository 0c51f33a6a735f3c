"""Rate table extraction from Bank of Greece HTML pages (English or Greek)"""

from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from interest_gateway.domain.exceptions import AcquisitionError
from interest_gateway.domain.models import RawRateRow

# Header keywords identifying the rate table, most specific first
HEADER_KEYWORDS = (
    ("Valid From", "Αρχική"),
    ("Contractual", "Δικαιοπρακτικός"),
)


def find_rate_table(soup: BeautifulSoup) -> Optional[Tag]:
    """First table whose header cells mention a known column name"""
    tables = soup.find_all("table")
    for keywords in HEADER_KEYWORDS:
        for table in tables:
            for th in table.find_all("th"):
                text = th.get_text(" ", strip=True)
                if any(keyword in text for keyword in keywords):
                    return table
    return None


def _cell_text(td: Tag) -> str:
    """Cell text with inline markup joined as rendered, whitespace collapsed"""
    return " ".join(td.get_text().split())


def extract_raw_rows(document: str | bytes) -> List[RawRateRow]:
    """
    Read every data row of the rate table as raw text cells.

    Falls back to all data rows of the document when no table carries a
    recognisable header. Cell content is left unvalidated.

    Raises:
        AcquisitionError: The document has no data rows at all
    """
    soup = BeautifulSoup(document, "html.parser")
    scope = find_rate_table(soup) or soup

    rows = []
    for tr in scope.find_all("tr"):
        cells = tr.find_all("td", recursive=False)
        if not cells:
            continue
        rows.append(RawRateRow(cells=tuple(_cell_text(td) for td in cells)))

    if not rows:
        raise AcquisitionError("Could not locate any data rows in the page")
    return rows
