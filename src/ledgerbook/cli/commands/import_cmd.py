"""Import command for document-parser drafts."""

import json

import click
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.entities import LedgerType
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.imports import draft_from_dict, resolve_draft_account
from ledgerbook.domain.transaction import TransactionService


@click.command("import-drafts")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--ledger",
    type=click.Choice([ledger.value for ledger in LedgerType]),
    default=LedgerType.ACTIVE.value,
    show_default=True,
)
@click.option("--property-id", type=int, help="Property for passive ledger imports")
@click.option("--preview", is_flag=True, help="Show resolved accounts without importing")
@click.pass_context
def import_drafts(ctx, file_path: str, ledger: str, property_id: int | None, preview: bool):
    """Import transaction drafts produced by the document parser.

    FILE_PATH is a JSON list of objects with date, vendor, amount,
    description and category_guess. Imported transactions are pending until
    approved.

    Examples:
        ledgerbook import-drafts statement.json --ledger active
        ledgerbook import-drafts rental.json --ledger passive --property-id 1
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            records = json.load(f)
    except json.JSONDecodeError as e:
        click.echo(f"Error: Invalid JSON in {file_path}: {e}", err=True)
        ctx.exit(1)

    if not isinstance(records, list):
        click.echo("Error: Expected a JSON list of drafts", err=True)
        ctx.exit(1)

    service = TransactionService(ctx.obj["db"], hst_rate=ctx.obj["settings"].hst_rate)
    try:
        drafts = [draft_from_dict(record) for record in records]
        if preview:
            for draft in drafts:
                resolution = resolve_draft_account(draft)
                note = " (fallback)" if resolution.unmatched else ""
                click.echo(
                    f"{draft.date} | {draft.vendor[:25]:25s} | {draft.amount:>10,.2f} | "
                    f"{resolution.code}{note}"
                )
            return
        ids = service.import_drafts(drafts, LedgerType(ledger), property_id=property_id)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Imported {len(ids)} pending transaction{'s' if len(ids) != 1 else ''}")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_drafts)
