from __future__ import annotations

from typing import Optional

from ticketdesk.config import settings
from ticketdesk.services.form_session import FormSession, TicketService

# Global/Cached instance: one session per process, so its submitting flag
# serializes submits coming through this API.
_session_instance: Optional[FormSession] = None


def get_session() -> FormSession:
    global _session_instance
    if _session_instance is None:
        _session_instance = FormSession(TicketService.from_settings(settings))
    return _session_instance


def set_session(session: Optional[FormSession]) -> None:
    global _session_instance
    _session_instance = session
