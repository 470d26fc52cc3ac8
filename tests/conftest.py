import pytest

from factories import FIXED_NOW, TICKET_HEADER, FakeSheetsTransport
from ticketdesk.config import BackendSettings, Settings
from ticketdesk.services.form_session import FormSession, TicketService


@pytest.fixture
def config():
    return Settings(backend=BackendSettings(endpoint_url="https://backend.invalid/exec"))


@pytest.fixture
def transport():
    return FakeSheetsTransport(
        {
            "Master": [["Category"], ["Billing"], ["Technical"], [""], ["Billing"], ["Account"]],
            "Ticket_Enquiry": [
                ["Support Tickets"],
                TICKET_HEADER,
                ["01/03/2024 10:00:00", "TN-001", "Bob"],
                ["02/03/2024 11:00:00", "TN-005", "Carol"],
                ["03/03/2024 12:00:00", "TN-003", "Dan"],
            ],
        }
    )


@pytest.fixture
def service(transport, config):
    return TicketService(transport, config=config, clock=lambda: FIXED_NOW)


@pytest.fixture
def session(service):
    return FormSession(service)
