import json
from datetime import datetime

from ticketdesk.domain.models import TicketDraft
from ticketdesk.exceptions import FetchError

TICKET_HEADER = [
    "Timestamp",
    "Ticket ID",
    "Client Name",
    "Phone Number",
    "Email Address",
    "Category",
    "Priority",
    "Title",
    "Description",
]

FIXED_NOW = datetime(2024, 3, 7, 9, 5, 1)


class FakeSheetsTransport:
    """
    In-memory stand-in for the web-app endpoint.
    Inserts are appended to the named sheet so later reads observe them.
    """

    def __init__(self, sheets=None):
        self.sheets = {name: [list(r) for r in rows] for name, rows in (sheets or {}).items()}
        self.posts = []
        self.fetches = []
        self.fail_fetch = set()
        self.insert_response = None

    def fetch_rows(self, sheet):
        self.fetches.append(sheet)
        if sheet in self.fail_fetch:
            raise FetchError(f"Failed to fetch sheet {sheet}: network down")
        if sheet not in self.sheets:
            return {"success": False, "error": f"Sheet {sheet} not found"}
        return {"success": True, "data": [list(r) for r in self.sheets[sheet]]}

    def post_form(self, fields):
        self.posts.append(dict(fields))
        if self.insert_response is not None:
            return self.insert_response
        self.sheets.setdefault(fields["sheetName"], []).append(json.loads(fields["rowData"]))
        return {"success": True}


def valid_draft(**overrides):
    values = {
        "clientName": "Ada Lovelace",
        "phoneNumber": "+44 20 7946 0000",
        "emailAddress": "ada@example.com",
        "category": "Billing",
        "priority": "high",
        "title": "Invoice total is wrong",
        "description": "The March invoice double-counts the support plan.",
    }
    values.update(overrides)
    return TicketDraft(**values)


