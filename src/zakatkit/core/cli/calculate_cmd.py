"""zakatkit calculate — zakat due for a portfolio file."""

from __future__ import annotations

import json

import click


@click.command()
@click.argument("portfolio_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--price", type=float, help="Metal price per gram for the user's nisab method.")
@click.option("--date", "on", help="Hijri date to calculate on, e.g. 1446-09-01H.")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_obj
def calculate(config, portfolio_file: str, price: float | None, on: str | None, as_json: bool) -> None:
    """Calculate zakat for a YAML portfolio file."""
    from zakatkit.core.cli.common import fail, load_portfolio_file, parse_hijri, resolve_price
    from zakatkit.core.exceptions import ZakatKitError
    from zakatkit.financial.calculators.zakat import ZakatCalculationService
    from zakatkit.financial.hijri import HijriDate
    from zakatkit.financial.money import Money
    from zakatkit.financial.settings import ZakatConfig

    try:
        settings = ZakatConfig.from_config(config)
        portfolio, doc = load_portfolio_file(portfolio_file, settings)
        method = portfolio.user.nisab_method
        metal_key = f"{method.value.lower()}_per_gram"

        price_per_gram = resolve_price(price, (doc.get("prices") or {}).get(metal_key), settings.price_per_gram(method))
        if price_per_gram is None:
            raise click.UsageError(f"No {method.value.lower()} price: pass --price or set prices.{metal_key}")

        date_value = on or doc.get("current_date")
        current_date = parse_hijri(date_value) if date_value else HijriDate.today()

        service = ZakatCalculationService(settings)
        nisab = service.nisab_threshold(method, Money(price_per_gram, portfolio.currency))
        result = service.calculate_total_zakat(portfolio.assets, portfolio.liabilities, nisab, current_date)
    except ZakatKitError as e:
        fail(e)
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return

    click.echo(f"Date:           {result.calculation_date}")
    click.echo(f"Zakatable:      {result.total_wealth}")
    click.echo(f"Nisab ({method.label}): {result.nisab_threshold}")
    click.echo(f"Above nisab:    {'yes' if result.is_above_nisab else 'no'}")
    click.echo(f"Zakat due:      {result.zakat_due}")
    for item in result.eligible_assets:
        click.echo(f"  + {item.asset.description or item.asset.id}: {item.zakat_amount}")
    for item in result.ineligible_assets:
        click.echo(f"  - {item.asset.description or item.asset.id}: {item.reason.value}")
