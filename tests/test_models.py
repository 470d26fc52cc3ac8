from datetime import datetime

import pytest
from pydantic import ValidationError as PydanticValidationError

from ticketdesk.domain.models import TicketDraft, TicketRecord, apply_change, format_timestamp
from factories import valid_draft


def test_apply_change_returns_new_draft():
    draft = TicketDraft()
    updated = apply_change(draft, "title", "Printer on fire")
    assert updated.title == "Printer on fire"
    assert draft.title == ""


def test_apply_change_stringifies_and_clears_none():
    draft = apply_change(TicketDraft(), "phoneNumber", 5551234)
    assert draft.phoneNumber == "5551234"
    assert apply_change(draft, "phoneNumber", None).phoneNumber == ""


def test_draft_is_frozen():
    with pytest.raises(PydanticValidationError):
        TicketDraft().title = "x"


def test_timestamp_is_day_first_24h_zero_padded():
    assert format_timestamp(datetime(2024, 1, 2, 3, 4, 5)) == "02/01/2024 03:04:05"
    assert format_timestamp(datetime(2024, 12, 31, 23, 59, 59)) == "31/12/2024 23:59:59"


def test_record_columns_use_sheet_headers():
    record = TicketRecord.build(valid_draft(), "TN-012", datetime(2024, 5, 6, 14, 0, 0))
    columns = record.to_columns()
    assert columns["Timestamp"] == "06/05/2024 14:00:00"
    assert columns["Ticket ID"] == "TN-012"
    assert columns["Client Name"] == "Ada Lovelace"
    assert columns["Email Address"] == "ada@example.com"
    assert columns["ColumnAData"] == columns["Timestamp"]
