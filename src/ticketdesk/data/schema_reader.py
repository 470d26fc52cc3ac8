import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from ticketdesk.exceptions import MalformedResponseError, SchemaNotFoundError
from ticketdesk.sync.provider import SheetsTransport

logger = logging.getLogger(__name__)

ColumnSchema = Tuple[str, ...]


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def coerce_rows(data: Any) -> List[List[str]]:
    """Backend rows as a list of string lists; anything else is a contract violation."""
    if not isinstance(data, list):
        raise MalformedResponseError("Response 'data' is not a list of rows")
    rows: List[List[str]] = []
    for idx, row in enumerate(data):
        if not isinstance(row, list):
            raise MalformedResponseError(f"Row {idx} is not a list")
        rows.append([_cell(v) for v in row])
    return rows


def find_header_row(rows: Iterable[Sequence[str]], sentinel: str = "Timestamp") -> Optional[int]:
    for idx, row in enumerate(rows):
        if row and row[0] == sentinel:
            return idx
    return None


def unpack_rows(payload: dict, sheet: str) -> List[List[str]]:
    if not payload.get("success") or payload.get("data") is None:
        raise MalformedResponseError(f"Could not fetch rows for sheet '{sheet}'")
    return coerce_rows(payload["data"])


@dataclass(frozen=True)
class SheetSnapshot:
    sheet: str
    header_index: int
    header: ColumnSchema
    rows: List[List[str]]  # data rows beneath the header

    def column_index(self, name: str) -> Optional[int]:
        try:
            return self.header.index(name)
        except ValueError:
            return None


class SchemaReader:
    """
    Reads a sheet and splits it at the header row.
    Never caches: every call reflects the backend's current header.
    """

    def __init__(self, transport: SheetsTransport, sentinel: str = "Timestamp"):
        self.transport = transport
        self.sentinel = sentinel

    def fetch_rows(self, sheet: str) -> List[List[str]]:
        return unpack_rows(self.transport.fetch_rows(sheet), sheet)

    def read(self, sheet: str) -> SheetSnapshot:
        rows = self.fetch_rows(sheet)
        header_index = find_header_row(rows, self.sentinel)
        if header_index is None:
            raise SchemaNotFoundError(sheet, self.sentinel)
        header = tuple(rows[header_index])
        logger.debug(f"Header for {sheet} at row {header_index}: {list(header)}")
        return SheetSnapshot(
            sheet=sheet,
            header_index=header_index,
            header=header,
            rows=rows[header_index + 1:],
        )
