"""Mileage log commands."""

import click
from datetime import date
from ledgerbook.cli.error_handling import handle_domain_error, parse_date_or_exit
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.mileage import MileageService
from ledgerbook.domain.tax import MILEAGE_RATE_PER_KM
from ledgerbook.utils.amount_parser import parse_amount


@click.group("mileage")
def mileage_group():
    """Log business trips for the vehicle deduction."""
    pass


@mileage_group.command("add")
@click.option("--date", "date_str", default="today", show_default=True, help="Trip date")
@click.option("--distance", required=True, help="Distance driven in km")
@click.option("--purpose", default="", help="Business purpose of the trip")
@click.option("--from", "start_location", default="", help="Start location")
@click.option("--to", "end_location", default="", help="End location")
@click.pass_context
def add_trip(ctx, date_str, distance, purpose, start_location, end_location):
    """Log a business trip.

    Examples:
        ledgerbook mileage add --distance 42.5 --purpose "Showing" --from Office --to "12 Elm St"
    """
    service = MileageService(ctx.obj["db"])
    trip_date = parse_date_or_exit(ctx, date_str)
    try:
        log_id = service.log_trip(
            date=trip_date,
            distance_km=parse_amount(distance),
            purpose=purpose,
            start_location=start_location,
            end_location=end_location,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Logged trip {log_id} on {trip_date}")


@mileage_group.command("list")
@click.option("--year", type=int, help="Only trips in this year")
@click.pass_context
def list_trips(ctx, year: int | None):
    """List logged trips."""
    logs = MileageService(ctx.obj["db"]).list_logs(year)
    if not logs:
        click.echo("No trips logged.")
        return

    click.echo("\nMileage log:")
    click.echo("-" * 80)
    for log in logs:
        route = ""
        if log.start_location or log.end_location:
            route = f"{log.start_location} -> {log.end_location}"
        click.echo(
            f"ID: {log.id:4d} | {log.date} | {log.distance_km:>8,.1f} km | "
            f"{log.purpose[:25]:25s} | {route}"
        )


@mileage_group.command("deduction")
@click.option("--year", type=int, help="Tax year (defaults to the current year)")
@click.option("--rate", help=f"Rate per km (default {MILEAGE_RATE_PER_KM})")
@click.pass_context
def show_deduction(ctx, year: int | None, rate: str | None):
    """Estimate the vehicle deduction for a year's trips."""
    service = MileageService(ctx.obj["db"])
    year = year or date.today().year
    try:
        deduction = service.estimate_deduction(year, parse_amount(rate) if rate else None)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Mileage for {year}: {service.total_distance(year):,.1f} km")
    click.echo(f"Estimated deduction: ${deduction:,.2f}")


def register_commands(cli):
    """Register mileage commands with main CLI."""
    cli.add_command(mileage_group)
