"""zakatkit hawl — when an acquisition completes its lunar year."""

from __future__ import annotations

import click


@click.command()
@click.argument("acquisition_date")
@click.option("--date", "on", help="Hijri date to measure from (default: today).")
@click.pass_obj
def hawl(config, acquisition_date: str, on: str | None) -> None:
    """Show the hawl completion date for ACQUISITION_DATE (e.g. 1445-03-15H)."""
    from zakatkit.core.cli.common import fail, parse_hijri
    from zakatkit.core.exceptions import ZakatKitError
    from zakatkit.financial.calculators.zakat import ZakatCalculationService
    from zakatkit.financial.hijri import HijriDate

    try:
        acquired = parse_hijri(acquisition_date)
        current = parse_hijri(on) if on else HijriDate.today()
    except ZakatKitError as e:
        fail(e)
        return

    completion = acquired.add_lunar_year(1)
    days = ZakatCalculationService.calculate_days_until_hawl(acquired, current)
    click.echo(f"Hawl completes on {completion} ({completion.month_name} {completion.year})")
    if days == 0:
        click.echo("Hawl is complete.")
    else:
        click.echo(f"About {days:g} day(s) remaining from {current}.")
