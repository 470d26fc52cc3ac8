from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"

# Logical draft field -> column header used in the ticket sheet.
FIELD_HEADERS: dict[str, str] = {
    "clientName": "Client Name",
    "phoneNumber": "Phone Number",
    "emailAddress": "Email Address",
    "category": "Category",
    "priority": "Priority",
    "title": "Title",
    "description": "Description",
}

DRAFT_FIELDS: tuple[str, ...] = tuple(FIELD_HEADERS)


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TicketDraft(BaseModel):
    """
    In-progress operator input for one ticket.
    Frozen: edits go through apply_change, which returns a new draft.
    """
    model_config = ConfigDict(frozen=True)

    clientName: str = ""
    phoneNumber: str = ""
    emailAddress: str = ""
    category: str = ""
    priority: str = ""
    title: str = ""
    description: str = ""

    def as_dict(self) -> dict[str, str]:
        return self.model_dump()


def apply_change(draft: TicketDraft, field: str, value: Any) -> TicketDraft:
    if field not in DRAFT_FIELDS:
        raise KeyError(f"Unknown draft field: {field}")
    return draft.model_copy(update={field: "" if value is None else str(value)})


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIMESTAMP_FORMAT)


class TicketRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    ticket_id: str
    timestamp: str
    draft: TicketDraft

    @classmethod
    def build(cls, draft: TicketDraft, ticket_id: str, moment: Optional[datetime] = None) -> "TicketRecord":
        return cls(ticket_id=ticket_id, timestamp=format_timestamp(moment or datetime.now()), draft=draft)

    def to_columns(self, timestamp_header: str = "Timestamp", ticket_id_header: str = "Ticket ID") -> dict[str, str]:
        """Header-keyed view of the record, as the ticket sheet names its columns."""
        columns = {
            timestamp_header: self.timestamp,
            ticket_id_header: self.ticket_id,
        }
        for field, header in FIELD_HEADERS.items():
            columns[header] = getattr(self.draft, field)
        # Legacy sheets carry a second timestamp column under this name.
        columns["ColumnAData"] = self.timestamp
        return columns


class CategoryResult(BaseModel):
    categories: list[str] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SubmitOutcome(BaseModel):
    status: Literal["success", "invalid", "busy", "failed"]
    ticket_id: Optional[str] = None
    row: list[str] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)
    error_kind: Optional[str] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"
