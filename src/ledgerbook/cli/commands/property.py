"""Rental property commands."""

import click
from ledgerbook.cli.error_handling import handle_domain_error, parse_date_or_exit
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.property import PropertyService
from ledgerbook.domain.tax import CCA_CLASS_RATES
from ledgerbook.utils.amount_parser import parse_amount


@click.group("property")
def property_group():
    """Manage rental properties."""
    pass


@property_group.command("add")
@click.argument("address")
@click.option("--purchase-price", required=True, help="Purchase price")
@click.option("--current-value", help="Current market value (defaults to purchase price)")
@click.option(
    "--cca-class",
    type=click.Choice(list(CCA_CLASS_RATES)),
    default="1",
    show_default=True,
)
@click.option("--opening-ucc", help="UCC at the start of the year (defaults to purchase price)")
@click.option("--additions", default="0", show_default=True, help="Capital additions this year")
@click.option("--tenant", default="Vacant", show_default=True, help="Tenant name")
@click.option("--lease-end", help="Lease end date")
@click.option("--mortgage", help="Outstanding mortgage balance")
@click.pass_context
def add_property(
    ctx, address, purchase_price, current_value, cca_class, opening_ucc, additions, tenant, lease_end, mortgage
):
    """Add a rental property.

    Examples:
        ledgerbook property add "12 Elm St" --purchase-price 800000 --opening-ucc 780000 --additions 20000
    """
    service = PropertyService(ctx.obj["db"])
    lease_end_date = parse_date_or_exit(ctx, lease_end, "lease end") if lease_end else None
    try:
        property_id = service.create_property(
            address=address,
            purchase_price=parse_amount(purchase_price),
            current_value=parse_amount(current_value) if current_value else None,
            cca_class=cca_class,
            opening_ucc=parse_amount(opening_ucc) if opening_ucc else None,
            additions=parse_amount(additions),
            tenant_name=tenant,
            lease_end=lease_end_date,
            mortgage_balance=parse_amount(mortgage) if mortgage else None,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created property '{address}' (ID: {property_id})")


@property_group.command("list")
@click.pass_context
def list_properties(ctx):
    """List rental properties."""
    properties = PropertyService(ctx.obj["db"]).list_properties()
    if not properties:
        click.echo("No properties found.")
        return

    click.echo("\nProperties:")
    click.echo("-" * 80)
    for prop in properties:
        lease = prop.lease_end.isoformat() if prop.lease_end else "-"
        click.echo(
            f"ID: {prop.id:3d} | {prop.address[:30]:30s} | Class {prop.cca_class:4s} | "
            f"UCC {prop.opening_ucc:>12,.2f} | {prop.tenant_name} (lease {lease})"
        )


@property_group.command("cca")
@click.argument("property_id", type=int)
@click.option("--claim", help="Amount to claim (defaults to the maximum)")
@click.pass_context
def show_cca(ctx, property_id: int, claim: str | None):
    """Show the capital cost allowance schedule for a property."""
    service = PropertyService(ctx.obj["db"])
    try:
        schedule = service.get_cca_schedule(property_id, parse_amount(claim) if claim else None)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"CCA schedule for property {property_id} (class {schedule.cca_class}, rate {schedule.class_rate})")
    click.echo(f"  Opening UCC:  {schedule.opening_ucc:>14,.2f}")
    click.echo(f"  Additions:    {schedule.additions:>14,.2f}")
    click.echo(f"  Maximum CCA:  {schedule.max_claim:>14,.2f}")
    click.echo(f"  Claimed:      {schedule.claimed:>14,.2f}")
    click.echo(f"  Closing UCC:  {schedule.closing_ucc:>14,.2f}")


def register_commands(cli):
    """Register property commands with main CLI."""
    cli.add_command(property_group)
