from typing import Optional


class TicketDeskError(Exception):
    """Base exception for ticketdesk errors."""
    pass


class ConfigError(TicketDeskError):
    """Configuration loading specific errors."""
    pass


class FetchError(TicketDeskError):
    """The backend could not be reached or answered with a non-2xx status."""
    pass


class MalformedResponseError(TicketDeskError):
    """The backend answered, but not with the expected JSON envelope."""
    pass


class SchemaNotFoundError(TicketDeskError):
    """No header row carrying the sentinel label was found in the sheet."""

    def __init__(self, sheet: str, sentinel: str):
        super().__init__(f"Could not find header row in sheet '{sheet}' (looked for '{sentinel}')")
        self.sheet = sheet
        self.sentinel = sentinel


class SubmissionError(TicketDeskError):
    """The backend rejected the insert or returned an unusable response."""

    def __init__(self, message: str, *, backend_message: Optional[str] = None):
        super().__init__(message)
        self.backend_message = backend_message


class SubmissionInProgress(TicketDeskError):
    """A submit was attempted while another one is still in flight."""
    pass


class ValidationError(TicketDeskError):
    """
    Draft failed one or more field rules.
    Carries the full field -> message mapping so callers can render errors inline.
    """

    def __init__(self, errors: dict[str, str]):
        fields = ", ".join(sorted(errors))
        super().__init__(f"Invalid fields: {fields}")
        self.errors = dict(errors)
