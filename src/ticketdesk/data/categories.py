import logging
from typing import Iterable, List, Sequence

from ticketdesk.data.schema_reader import unpack_rows
from ticketdesk.domain.models import CategoryResult
from ticketdesk.sync.provider import SheetsTransport

logger = logging.getLogger(__name__)


def extract_categories(rows: Iterable[Sequence[str]]) -> List[str]:
    """
    Column A below the first row, blanks dropped, first occurrence wins.
    Order follows the sheet; no sorting.
    """
    seen = set()
    categories: List[str] = []
    for idx, row in enumerate(rows):
        if idx == 0 or not row:
            continue
        value = row[0]
        if not value or not value.strip():
            continue
        if value in seen:
            continue
        seen.add(value)
        categories.append(value)
    return categories


class CategorySource:
    def __init__(self, transport: SheetsTransport, sheet: str = "Master"):
        self.transport = transport
        self.sheet = sheet

    def load(self) -> CategoryResult:
        # A failed read must not block the form; report and carry on with no options.
        try:
            rows = unpack_rows(self.transport.fetch_rows(self.sheet), self.sheet)
        except Exception as exc:
            logger.exception(f"Error fetching categories from {self.sheet}: {exc}")
            return CategoryResult(categories=[], error=str(exc))
        return CategoryResult(categories=extract_categories(rows))
