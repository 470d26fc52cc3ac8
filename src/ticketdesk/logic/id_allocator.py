import logging
import re
from typing import Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)


class IdAllocator:
    """
    Computes the next sequential ticket id from ids already present in the sheet.

    Allocation is read-then-compute with no reservation: two clients reading the
    same rows before either appends will both get the same id. The backend has no
    uniqueness check, so both rows land.
    """

    def __init__(self, prefix: str = "TN-", width: int = 3):
        self.prefix = prefix
        self.width = width
        # ASCII digits only, matched at the very start of the raw cell.
        self._pattern = re.compile(re.escape(prefix) + r"([0-9]+)")

    def parse(self, cell: Optional[str]) -> Optional[int]:
        if not cell or not isinstance(cell, str):
            return None
        m = self._pattern.match(cell)
        if not m:
            return None
        return int(m.group(1))

    def existing_numbers(self, rows: Iterable[Sequence[str]], column_index: Optional[int]) -> List[int]:
        if column_index is None:
            return []
        numbers = []
        for row in rows:
            if column_index >= len(row):
                continue
            num = self.parse(row[column_index])
            if num is not None:
                numbers.append(num)
        return numbers

    def next_number(self, rows: Iterable[Sequence[str]], column_index: Optional[int]) -> int:
        numbers = self.existing_numbers(rows, column_index)
        if not numbers:
            return 1
        return max(numbers) + 1

    def format(self, number: int) -> str:
        # zfill pads to the width but never truncates past it (TN-1000).
        return f"{self.prefix}{str(number).zfill(self.width)}"

    def next_id(self, rows: Iterable[Sequence[str]], column_index: Optional[int]) -> str:
        ticket_id = self.format(self.next_number(rows, column_index))
        logger.debug(f"Allocated ticket id {ticket_id}")
        return ticket_id
