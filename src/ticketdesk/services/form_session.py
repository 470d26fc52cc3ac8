from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from ticketdesk.config import Settings, settings as default_settings
from ticketdesk.data.categories import CategorySource
from ticketdesk.data.row_mapper import RowMapper
from ticketdesk.data.schema_reader import SchemaReader
from ticketdesk.domain.models import CategoryResult, SubmitOutcome, TicketDraft, TicketRecord, apply_change
from ticketdesk.exceptions import SubmissionInProgress, TicketDeskError, ValidationError
from ticketdesk.logic.id_allocator import IdAllocator
from ticketdesk.logic.validator import validate
from ticketdesk.sync.provider import SheetsTransport, WebAppTransport
from ticketdesk.sync.submission import SubmissionClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmittedTicket:
    ticket_id: str
    row: list[str]


class TicketService:
    """
    Validate -> read ticket sheet -> allocate id -> project onto header -> append.
    Raises on every failure; FormSession turns failures into outcomes.
    """

    def __init__(
        self,
        transport: SheetsTransport,
        config: Settings = default_settings,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.config = config
        self.clock = clock
        self.reader = SchemaReader(transport, sentinel=config.layout.header_sentinel)
        self.allocator = IdAllocator(prefix=config.layout.id_prefix, width=config.layout.id_width)
        self.submitter = SubmissionClient(transport)
        self.categories = CategorySource(transport, sheet=config.backend.master_sheet)

    @classmethod
    def from_settings(cls, config: Settings = default_settings) -> "TicketService":
        transport = WebAppTransport(config.backend.endpoint_url, timeout_seconds=config.backend.timeout_seconds)
        return cls(transport, config=config)

    def validate(self, draft: TicketDraft) -> dict[str, str]:
        return validate(draft, priorities=self.config.form.priorities)

    def submit(self, draft: TicketDraft) -> SubmittedTicket:
        errors = self.validate(draft)
        if errors:
            raise ValidationError(errors)

        sheet = self.config.backend.ticket_sheet
        snapshot = self.reader.read(sheet)
        id_column = snapshot.column_index(self.config.layout.ticket_id_header)
        ticket_id = self.allocator.next_id(snapshot.rows, id_column)

        record = TicketRecord.build(draft, ticket_id, self.clock())
        columns = record.to_columns(
            timestamp_header=self.config.layout.header_sentinel,
            ticket_id_header=self.config.layout.ticket_id_header,
        )
        row = RowMapper.map_row(snapshot.header, columns)
        self.submitter.append(sheet, row)
        logger.info(f"Submitted ticket {ticket_id} to {sheet}")
        return SubmittedTicket(ticket_id=ticket_id, row=row)


class FormSession:
    """
    State for one operator's form: draft, inline errors, category options,
    the submitting flag, and the success notice.
    """

    def __init__(self, service: TicketService):
        self.service = service
        self.draft = TicketDraft()
        self.errors: dict[str, str] = {}
        self.categories: list[str] = []
        self._notice_shown_at: Optional[datetime] = None
        self._submitting = threading.Lock()

    @property
    def is_submitting(self) -> bool:
        return self._submitting.locked()

    def load_categories(self) -> CategoryResult:
        result = self.service.categories.load()
        self.categories = result.categories
        return result

    def change(self, field: str, value: Any) -> TicketDraft:
        self.draft = apply_change(self.draft, field, value)
        # Editing a field clears its pending error until the next validation pass.
        if field in self.errors:
            self.errors = {k: v for k, v in self.errors.items() if k != field}
        return self.draft

    def validate(self) -> dict[str, str]:
        self.errors = self.service.validate(self.draft)
        return self.errors

    def reset(self) -> None:
        self.draft = TicketDraft()
        self.errors = {}

    def submit(self, draft: Optional[TicketDraft] = None) -> SubmitOutcome:
        if not self._submitting.acquire(blocking=False):
            return SubmitOutcome(
                status="busy",
                error_kind=SubmissionInProgress.__name__,
                message="A submission is already in progress",
            )
        try:
            if draft is not None:
                self.draft = draft
            outcome = self._submit_locked()
        finally:
            self._submitting.release()
        return outcome

    def _submit_locked(self) -> SubmitOutcome:
        try:
            submitted = self.service.submit(self.draft)
        except ValidationError as exc:
            self.errors = exc.errors
            return SubmitOutcome(status="invalid", errors=exc.errors, error_kind=type(exc).__name__, message=str(exc))
        except TicketDeskError as exc:
            logger.error(f"Error submitting ticket: {exc}")
            return SubmitOutcome(status="failed", error_kind=type(exc).__name__, message=str(exc))
        except Exception as exc:
            logger.exception("Unexpected error submitting ticket")
            return SubmitOutcome(status="failed", error_kind=type(exc).__name__, message="Unexpected error")

        self.reset()
        self._notice_shown_at = self.service.clock()
        return SubmitOutcome(status="success", ticket_id=submitted.ticket_id, row=submitted.row)

    def notice_visible(self, now: Optional[datetime] = None) -> bool:
        if self._notice_shown_at is None:
            return False
        now = now or self.service.clock()
        window = timedelta(seconds=self.service.config.form.success_notice_seconds)
        return now - self._notice_shown_at < window

    def dismiss_notice(self) -> None:
        self._notice_shown_at = None
