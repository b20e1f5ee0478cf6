"""Invoice commands."""

import click
from ledgerbook.cli.error_handling import handle_domain_error, parse_date_or_exit
from ledgerbook.domain.entities import InvoiceItem, InvoiceStatus
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.invoice import DEFAULT_NOTES, InvoiceService
from ledgerbook.utils.amount_parser import parse_amount

STATUS_CHOICE = click.Choice([status.value for status in InvoiceStatus])


def _service(ctx) -> InvoiceService:
    return InvoiceService(ctx.obj["db"], hst_rate=ctx.obj["settings"].hst_rate)


@click.group("invoice")
def invoice_group():
    """Issue invoices and track payment."""
    pass


@invoice_group.command("add")
@click.argument("client")
@click.option(
    "--item",
    "items",
    nargs=3,
    multiple=True,
    required=True,
    metavar="DESCRIPTION QUANTITY PRICE",
    help="Line item; repeat for more items",
)
@click.option("--date", "date_str", default="today", show_default=True, help="Invoice date")
@click.option("--due", "due_str", help="Due date (defaults to 30 days after the invoice date)")
@click.option("--number", help="Invoice number (defaults to the next in sequence)")
@click.option("--email", default="", help="Client email")
@click.option("--address", default="", help="Client address")
@click.option("--notes", help="Notes printed on the invoice")
@click.pass_context
def add_invoice(ctx, client, items, date_str, due_str, number, email, address, notes):
    """Create a draft invoice; HST is added on top of the subtotal.

    Examples:
        ledgerbook invoice add "Acme Realty" --item "Real estate commission" 1 5000
    """
    service = _service(ctx)
    invoice_date = parse_date_or_exit(ctx, date_str, "invoice date")
    due_date = parse_date_or_exit(ctx, due_str, "due date") if due_str else None
    try:
        line_items = [
            InvoiceItem(description=desc, quantity=parse_amount(qty), price=parse_amount(price))
            for desc, qty, price in items
        ]
        invoice_id = service.create_invoice(
            client_name=client,
            items=line_items,
            invoice_date=invoice_date,
            due_date=due_date,
            invoice_number=number,
            client_email=email,
            client_address=address,
            notes=DEFAULT_NOTES if notes is None else notes,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    invoice = service.get_invoice(invoice_id)
    click.echo(f"Created invoice #{invoice.invoice_number} for {invoice.client_name} (ID: {invoice_id})")
    click.echo(f"  Subtotal: ${invoice.subtotal:,.2f}")
    click.echo(f"  HST:      ${invoice.hst_amount:,.2f}")
    click.echo(f"  Total:    ${invoice.total_amount:,.2f}")
    click.echo(f"  Due:      {invoice.due_date}")


@invoice_group.command("list")
@click.option("--status", type=STATUS_CHOICE, help="Only invoices with this status")
@click.pass_context
def list_invoices(ctx, status: str | None):
    """List invoices."""
    invoices = _service(ctx).list_invoices(InvoiceStatus(status) if status else None)
    if not invoices:
        click.echo("No invoices found.")
        return

    click.echo("\nInvoices:")
    click.echo("-" * 80)
    for invoice in invoices:
        click.echo(
            f"#{invoice.invoice_number:6s} | {invoice.invoice_date} | {invoice.client_name[:25]:25s} | "
            f"{invoice.total_amount:>12,.2f} | due {invoice.due_date} | {invoice.status.value}"
        )


@invoice_group.command("mark")
@click.argument("invoice_id", type=int)
@click.argument("status", type=STATUS_CHOICE)
@click.pass_context
def mark_invoice(ctx, invoice_id: int, status: str):
    """Set an invoice's status to draft, sent or paid."""
    try:
        _service(ctx).set_status(invoice_id, InvoiceStatus(status))
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Invoice {invoice_id} marked {status}")


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group)
