from __future__ import annotations

import logging

import typer
import uvicorn

from ticketdesk.config import settings
from ticketdesk.domain.models import TicketDraft
from ticketdesk.exceptions import ConfigError
from ticketdesk.services.form_session import FormSession, TicketService

cli = typer.Typer(help="TicketDesk CLI (support-ticket intake against a spreadsheet backend)")


def _session() -> FormSession:
    logging.basicConfig(level=getattr(logging, settings.logging.level.upper(), logging.INFO))
    try:
        return FormSession(TicketService.from_settings(settings))
    except ConfigError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)


@cli.command()
def version() -> None:
    """Print runtime version."""
    typer.echo(f"{settings.app.name} {settings.app.version}")


@cli.command()
def categories() -> None:
    """List category options from the reference sheet."""
    result = _session().load_categories()
    if not result.ok:
        typer.echo(f"Could not load categories: {result.error}", err=True)
        raise typer.Exit(code=1)
    for name in result.categories:
        typer.echo(name)


@cli.command()
def submit(
    client_name: str = typer.Option(..., "--client-name", help="Client full name"),
    phone_number: str = typer.Option(..., "--phone", help="Contact phone number"),
    email_address: str = typer.Option(..., "--email", help="Contact email address"),
    category: str = typer.Option(..., help="Category from the reference sheet"),
    priority: str = typer.Option(..., help="high, medium or low"),
    title: str = typer.Option(..., help="Short summary"),
    description: str = typer.Option(..., help="Full description"),
) -> None:
    """Validate and append one ticket."""
    draft = TicketDraft(
        clientName=client_name,
        phoneNumber=phone_number,
        emailAddress=email_address,
        category=category,
        priority=priority,
        title=title,
        description=description,
    )
    outcome = _session().submit(draft)
    if outcome.status == "invalid":
        for field, message in outcome.errors.items():
            typer.echo(f"{field}: {message}", err=True)
        raise typer.Exit(code=2)
    if not outcome.ok:
        typer.echo(f"Submission failed ({outcome.error_kind}): {outcome.message}", err=True)
        raise typer.Exit(code=1)
    typer.echo(outcome.ticket_id)


@cli.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host to bind"),
    port: int = typer.Option(8000, help="Port to bind"),
    reload: bool = typer.Option(False, help="Enable autoreload for local development"),
) -> None:
    """Run the TicketDesk API server."""
    uvicorn.run(
        "ticketdesk.api.main:app",
        host=host,
        port=port,
        reload=reload,
        app_dir="src",
    )


if __name__ == "__main__":
    cli()
