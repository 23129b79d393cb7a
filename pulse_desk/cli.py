"""Pulse Desk CLI - Main entry point."""

import asyncio
import json
from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import settings
from .deps import get_auth_backend, get_store
from .errors import AuthError, ContractValidationError, StorageError
from .schemas.contract import PLANS, ContractData
from .services.client_list import filter_clients
from .services.client_repo import ClientRepository
from .services.contract_pdf import render_contract_pdf
from .services.contract_svc import apply_plan, export_filename

app = typer.Typer(
    name="pulse-desk",
    help="Pulse Desk - agency CRM, task board and contracts",
    no_args_is_help=True,
)
console = Console()


@app.command("serve")
def serve(
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
    host: str = typer.Option("127.0.0.1", "--host", help="Host to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Launch the dashboard web UI."""
    import uvicorn

    console.print(f"[bold cyan]Starting {settings.app_title} at http://{host}:{port}[/bold cyan]")
    uvicorn.run("pulse_desk.app:app", host=host, port=port, reload=reload)


@app.command("init-db")
def init_db():
    """Create the local database tables."""
    if settings.uses_rest_backend:
        console.print("[yellow]The REST backend manages its own schema; nothing to do.[/yellow]")
        raise typer.Exit(1)

    from .database import create_tables

    asyncio.run(create_tables())
    console.print(f"[green]Tables created in {settings.database_url}[/green]")


@app.command("create-account")
def create_account(
    email: str = typer.Argument(..., help="Account email"),
    password: str = typer.Option(
        ..., "--password", prompt=True, hide_input=True, confirmation_prompt=True,
    ),
):
    """Register a dashboard login."""

    async def _sign_up() -> str:
        auth = get_auth_backend()
        try:
            return await auth.sign_up(email, password)
        finally:
            await auth.close()

    try:
        created = asyncio.run(_sign_up())
    except AuthError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Account created:[/green] {created}")


@app.command("clients")
def list_clients(
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Filter by name, company or email"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List clients, newest first."""

    async def _load():
        store = get_store()
        try:
            return await ClientRepository(store).list()
        finally:
            await store.close()

    try:
        clients = filter_clients(asyncio.run(_load()), search)
    except StorageError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    if json_output:
        console.print_json(json.dumps([c.model_dump(mode="json") for c in clients], ensure_ascii=False))
        return

    if not clients:
        console.print("[yellow]No clients found[/yellow]")
        return

    table = Table(title=f"Clients ({len(clients)})")
    table.add_column("Name", style="cyan")
    table.add_column("Company")
    table.add_column("Email")
    table.add_column("Status", style="yellow")
    table.add_column("Value", justify="right")
    table.add_column("Last contact")
    for c in clients:
        table.add_row(
            c.name,
            c.company_display,
            c.email or "",
            c.status_label,
            f"{c.value:.2f}",
            c.last_contact.isoformat() if c.last_contact else "",
        )
    console.print(table)


@app.command("contract")
def contract(
    client_name: str = typer.Option("", "--client", "-c", help="Client name"),
    value: str = typer.Option("", "--value", "-v", help="Contract value in R$"),
    plan: str = typer.Option(
        "", "--plan", help=f"Plan ({', '.join(p.value for p in PLANS)}); fills an empty value",
    ),
    tax_id: str = typer.Option("", "--tax-id", help="Client CNPJ"),
    address: str = typer.Option("", "--address", help="Client address"),
    start_date: str = typer.Option("", "--start", help="Start date"),
    end_date: str = typer.Option("", "--end", help="End date"),
    terms: str = typer.Option("", "--terms", help="Additional terms"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file or directory"),
):
    """Export a filled contract as PDF."""
    data = apply_plan(ContractData(
        client_name=client_name,
        client_tax_id=tax_id,
        client_address=address,
        value=value,
        start_date=start_date,
        end_date=end_date,
        plan=plan,
        additional_terms=terms,
    ))
    issued_on = date.today()
    try:
        pdf = render_contract_pdf(data, issued_on)
    except ContractValidationError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    filename = export_filename(data.client_name, issued_on)
    if output is None:
        target = Path(filename)
    elif output.is_dir():
        target = output / filename
    else:
        target = output
    target.write_bytes(pdf)
    console.print(f"[green]Contract written to {target}[/green]")
