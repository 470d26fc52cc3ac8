import json

import pytest

from ticketdesk.exceptions import FetchError, MalformedResponseError, SubmissionError
from ticketdesk.sync.submission import SubmissionClient


class StubTransport:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.posts = []

    def post_form(self, fields):
        self.posts.append(fields)
        if self.exc:
            raise self.exc
        return self.response


def test_append_posts_insert_action_with_json_row():
    transport = StubTransport({"success": True})
    assert SubmissionClient(transport).append("Ticket_Enquiry", ["a", "", "TN-002"]) is None
    assert transport.posts == [{
        "sheetName": "Ticket_Enquiry",
        "action": "insert",
        "rowData": json.dumps(["a", "", "TN-002"]),
    }]


def test_backend_rejection_carries_message():
    transport = StubTransport({"success": False, "error": "Sheet is protected"})
    with pytest.raises(SubmissionError) as exc:
        SubmissionClient(transport).append("Ticket_Enquiry", ["a"])
    assert exc.value.backend_message == "Sheet is protected"
    assert str(exc.value) == "Sheet is protected"


def test_rejection_without_message_uses_default():
    with pytest.raises(SubmissionError) as exc:
        SubmissionClient(StubTransport({"success": False})).append("Ticket_Enquiry", [])
    assert exc.value.backend_message is None
    assert str(exc.value) == "Failed to save ticket"


@pytest.mark.parametrize("payload", [{}, {"success": "true"}, {"success": 1}])
def test_missing_or_non_boolean_flag_is_rejection(payload):
    with pytest.raises(SubmissionError):
        SubmissionClient(StubTransport(payload)).append("Ticket_Enquiry", [])


def test_malformed_response_becomes_submission_error():
    transport = StubTransport(exc=MalformedResponseError("non-JSON body"))
    with pytest.raises(SubmissionError):
        SubmissionClient(transport).append("Ticket_Enquiry", [])


def test_network_failure_is_not_retried():
    transport = StubTransport(exc=FetchError("refused"))
    with pytest.raises(FetchError):
        SubmissionClient(transport).append("Ticket_Enquiry", ["x"])
    assert len(transport.posts) == 1
