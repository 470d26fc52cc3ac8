import logging

from ticketdesk.data.categories import CategorySource, extract_categories
from factories import FakeSheetsTransport


def test_dedup_preserves_first_seen_order_and_drops_blanks():
    rows = [["header"], ["A"], ["B"], [""], ["A"]]
    assert extract_categories(rows) == ["A", "B"]


def test_whitespace_only_and_empty_rows_are_dropped():
    rows = [["Category"], ["  "], [], ["Zeta"], ["Alpha", "ignored"], ["\t"]]
    assert extract_categories(rows) == ["Zeta", "Alpha"]


def test_header_only_sheet_has_no_categories():
    assert extract_categories([["Category"]]) == []
    assert extract_categories([]) == []


def test_load_reads_master_sheet(transport):
    result = CategorySource(transport).load()
    assert result.ok
    assert result.categories == ["Billing", "Technical", "Account"]
    assert transport.fetches == ["Master"]


def test_fetch_failure_yields_empty_list_and_logs(transport, caplog):
    transport.fail_fetch.add("Master")
    with caplog.at_level(logging.ERROR, logger="ticketdesk.data.categories"):
        result = CategorySource(transport).load()
    assert result.categories == []
    assert not result.ok
    assert "network down" in result.error
    assert "Error fetching categories" in caplog.text


def test_unsuccessful_response_yields_empty_list():
    result = CategorySource(FakeSheetsTransport({}), sheet="Master").load()
    assert result.categories == []
    assert result.error


def test_unexpected_transport_exception_is_contained():
    class BrokenTransport:
        def fetch_rows(self, sheet):
            raise RuntimeError("boom")

    result = CategorySource(BrokenTransport()).load()
    assert result.categories == []
    assert result.error == "boom"
