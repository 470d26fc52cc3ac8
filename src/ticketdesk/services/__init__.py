from ticketdesk.services.form_session import FormSession, SubmittedTicket, TicketService

__all__ = [
    "FormSession",
    "SubmittedTicket",
    "TicketService",
]
