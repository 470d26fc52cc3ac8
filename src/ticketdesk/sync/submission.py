import logging
from typing import Sequence

from ticketdesk.data.row_mapper import RowMapper
from ticketdesk.exceptions import MalformedResponseError, SubmissionError
from ticketdesk.sync.provider import SheetsTransport

logger = logging.getLogger(__name__)

INSERT_ACTION = "insert"


class SubmissionClient:
    """
    Appends one positional row to a sheet.
    Single attempt per call; a rejected insert is never retried here.
    """

    def __init__(self, transport: SheetsTransport):
        self.transport = transport

    def append(self, sheet: str, row: Sequence[str]) -> None:
        fields = {
            "sheetName": sheet,
            "action": INSERT_ACTION,
            "rowData": RowMapper.encode(row),
        }
        try:
            payload = self.transport.post_form(fields)
        except MalformedResponseError as exc:
            raise SubmissionError(f"Failed to save ticket: {exc}") from exc

        if payload.get("success") is True:
            logger.info(f"Appended row to {sheet} ({len(row)} cells)")
            return

        backend_message = payload.get("error")
        if backend_message is not None:
            backend_message = str(backend_message)
        raise SubmissionError(backend_message or "Failed to save ticket", backend_message=backend_message)
