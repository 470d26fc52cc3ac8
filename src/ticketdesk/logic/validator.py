import re
from typing import Dict, Iterable, Optional

from ticketdesk.domain.models import Priority, TicketDraft

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PRIORITIES = tuple(p.value for p in Priority)

_REQUIRED_TEXT = {
    "clientName": "Client name is required",
    "phoneNumber": "Phone number is required",
    "title": "Title is required",
    "description": "Description is required",
}


def validate(draft: TicketDraft, priorities: Optional[Iterable[str]] = None) -> Dict[str, str]:
    """
    Every rule runs; the result holds one message per failing field.
    An empty mapping means the draft can be submitted.
    """
    allowed = tuple(priorities) if priorities is not None else PRIORITIES
    errors: Dict[str, str] = {}

    for field, message in _REQUIRED_TEXT.items():
        if not getattr(draft, field).strip():
            errors[field] = message

    email = draft.emailAddress
    if not email.strip():
        errors["emailAddress"] = "Email address is required"
    elif not EMAIL_PATTERN.fullmatch(email):
        errors["emailAddress"] = "Please enter a valid email address"

    if not draft.category:
        errors["category"] = "Category is required"

    if not draft.priority:
        errors["priority"] = "Priority is required"
    elif draft.priority not in allowed:
        errors["priority"] = f"Priority must be one of: {', '.join(allowed)}"

    # Keep field order stable for display.
    order = list(TicketDraft.model_fields)
    return {f: errors[f] for f in order if f in errors}


def is_valid(draft: TicketDraft, priorities: Optional[Iterable[str]] = None) -> bool:
    return not validate(draft, priorities=priorities)
