import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ticketdesk.api.deps import get_session
from ticketdesk.domain.models import TicketDraft
from ticketdesk.services.form_session import FormSession

logger = logging.getLogger("ticketdesk.api.tickets")
router = APIRouter()

_STATUS_CODES = {
    "success": 201,
    "invalid": 422,
    "busy": 409,
    "failed": 502,
}


@router.get("/categories")
def list_categories(session: FormSession = Depends(get_session)):
    """Category options for the form; an unreadable reference sheet yields an empty list."""
    result = session.load_categories()
    return {"categories": result.categories, "error": result.error}


@router.get("/priorities")
def list_priorities(session: FormSession = Depends(get_session)):
    return {"priorities": session.service.config.form.priorities}


@router.post("/tickets/validate")
def validate_ticket(draft: TicketDraft, session: FormSession = Depends(get_session)):
    errors = session.service.validate(draft)
    return {"valid": not errors, "errors": errors}


@router.post("/tickets")
def submit_ticket(draft: TicketDraft, session: FormSession = Depends(get_session)):
    outcome = session.submit(draft)
    if outcome.status == "failed":
        logger.warning(f"Ticket submission failed: {outcome.error_kind}: {outcome.message}")
    return JSONResponse(status_code=_STATUS_CODES[outcome.status], content=outcome.model_dump())
