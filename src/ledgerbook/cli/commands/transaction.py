"""Transaction commands."""

import click
from ledgerbook.cli.error_handling import handle_domain_error, parse_date_or_exit
from ledgerbook.domain.entities import LedgerType, PaymentMethod, TransactionStatus
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.transaction import TransactionService
from ledgerbook.utils.amount_parser import parse_amount

LEDGER_CHOICE = click.Choice([ledger.value for ledger in LedgerType])
PAYMENT_CHOICE = click.Choice([method.value for method in PaymentMethod])


def _service(ctx) -> TransactionService:
    return TransactionService(ctx.obj["db"], hst_rate=ctx.obj["settings"].hst_rate)


def _echo_journal(payload) -> None:
    click.echo(f"  Journal: {payload.entry.description} ({payload.entry.status.value})")
    for line in payload.lines:
        side = f"Dr {line.debit:>10,.2f}" if line.debit else f"Cr {line.credit:>10,.2f}"
        click.echo(f"    {line.account_code} {line.account_name:40s} {side}")


@click.command("add")
@click.option(
    "--date",
    "date_str",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--vendor", required=True, help="Vendor or payer")
@click.option(
    "--amount", required=True, help="Signed amount (e.g., -113.00 for an expense, 1000 for income)"
)
@click.option("--category", required=True, help="Category (e.g., 'Fuel/Auto', 'Commission')")
@click.option("--ledger", type=LEDGER_CHOICE, default=LedgerType.ACTIVE.value, show_default=True)
@click.option("--hst-included", is_flag=True, help="Amount includes HST")
@click.option(
    "--payment",
    type=PAYMENT_CHOICE,
    default=PaymentMethod.CREDIT_CARD.value,
    show_default=True,
    help="How an expense was paid",
)
@click.option("--property-id", type=int, help="Property ID (passive ledger only)")
@click.option("--pending", is_flag=True, help="Record for review without posting")
@click.pass_context
def add_transaction(
    ctx,
    date_str: str,
    vendor: str,
    amount: str,
    category: str,
    ledger: str,
    hst_included: bool,
    payment: str,
    property_id: int | None,
    pending: bool,
):
    """Add a transaction and post its journal entry.

    Examples:
        ledgerbook add --vendor "Shell" --amount -113.00 --category "Fuel/Auto" --hst-included
        ledgerbook add --vendor "Brokerage" --amount 1000 --category Commission --payment bank
    """
    service = _service(ctx)
    txn_date = parse_date_or_exit(ctx, date_str)

    try:
        txn_amount = parse_amount(amount)
        transaction_id = service.create_transaction(
            date=txn_date,
            vendor=vendor,
            amount=txn_amount,
            ledger_type=LedgerType(ledger),
            category=category,
            status=TransactionStatus.PENDING if pending else TransactionStatus.POSTED,
            hst_included=hst_included,
            property_id=property_id,
            payment_method=PaymentMethod(payment),
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    txn = service.get_transaction(transaction_id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: ${txn.amount:,.2f}")
    if txn.hst_amount:
        click.echo(f"  HST: ${txn.hst_amount:,.2f}")
    for payload in service.get_journal_entries(transaction_id):
        _echo_journal(payload)


@click.command("capture")
@click.option("--date", "date_str", default="today", show_default=True, help="Receipt date")
@click.option("--vendor", required=True, help="Vendor")
@click.option("--amount", required=True, help="Receipt total (positive)")
@click.option("--category", required=True, help="Category")
@click.option(
    "--active-percent",
    type=click.IntRange(0, 100),
    default=100,
    show_default=True,
    help="Share of the pre-tax amount belonging to the active ledger",
)
@click.option("--no-hst", is_flag=True, help="Receipt does not include HST")
@click.option("--payment", type=PAYMENT_CHOICE, default=PaymentMethod.CREDIT_CARD.value)
@click.option(
    "--property-id", type=int, help="Rental property, used when the passive share is larger"
)
@click.pass_context
def capture(ctx, date_str, vendor, amount, category, active_percent, no_hst, payment, property_id):
    """Quick-capture a receipt shared between business and rental ledgers.

    Examples:
        ledgerbook capture --vendor "Home Depot" --amount 226 --category Supplies --active-percent 50
    """
    service = _service(ctx)
    txn_date = parse_date_or_exit(ctx, date_str)
    try:
        transaction_id = service.capture(
            date=txn_date,
            vendor=vendor,
            gross_amount=parse_amount(amount),
            category=category,
            active_percent=active_percent,
            hst_included=not no_hst,
            payment_method=PaymentMethod(payment),
            property_id=property_id,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    txn = service.get_transaction(transaction_id)
    split_note = " (split)" if txn.is_split else ""
    click.echo(f"Captured transaction {transaction_id} in {txn.ledger_type.value} ledger{split_note}")


@click.command("list")
@click.option("--start-date", help="Only transactions on or after this date")
@click.option("--end-date", help="Only transactions on or before this date")
@click.option("--ledger", type=LEDGER_CHOICE, help="Only this ledger")
@click.option("--pending", is_flag=True, help="Only pending transactions")
@click.pass_context
def list_transactions(ctx, start_date, end_date, ledger, pending):
    """List transactions."""
    service = _service(ctx)
    start = parse_date_or_exit(ctx, start_date, "start date") if start_date else None
    end = parse_date_or_exit(ctx, end_date, "end date") if end_date else None

    transactions = service.list_transactions(
        start_date=start,
        end_date=end,
        ledger_type=LedgerType(ledger) if ledger else None,
        status=TransactionStatus.PENDING if pending else None,
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo("\nTransactions:")
    click.echo("-" * 90)
    for txn in transactions:
        flag = "*" if txn.is_pending else " "
        click.echo(
            f"{flag}ID: {txn.id:4d} | {txn.date} | {txn.vendor[:20]:20s} | "
            f"{txn.amount:>10,.2f} | {txn.ledger_type.value:8s} | {txn.category}"
        )


@click.command("approve")
@click.argument("transaction_id", type=int)
@click.option("--payment", type=PAYMENT_CHOICE, default=PaymentMethod.CREDIT_CARD.value)
@click.pass_context
def approve_transaction(ctx, transaction_id: int, payment: str):
    """Post a pending transaction."""
    service = _service(ctx)
    try:
        payload = service.approve_transaction(transaction_id, PaymentMethod(payment))
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Posted transaction {transaction_id}")
    _echo_journal(payload)


@click.command("journal")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_journal(ctx, transaction_id: int):
    """Show the journal entries posted for a transaction."""
    service = _service(ctx)
    try:
        entries = service.get_journal_entries(transaction_id)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return
    if not entries:
        click.echo(f"Transaction {transaction_id} has no journal entries.")
        return
    for payload in entries:
        _echo_journal(payload)


@click.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int):
    """Delete a transaction and its journal entries."""
    service = _service(ctx)
    try:
        service.delete_transaction(transaction_id)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(add_transaction)
    cli.add_command(capture)
    cli.add_command(list_transactions)
    cli.add_command(approve_transaction)
    cli.add_command(show_journal)
    cli.add_command(delete_transaction)
