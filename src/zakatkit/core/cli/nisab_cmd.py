"""zakatkit nisab — nisab threshold for a metal price."""

from __future__ import annotations

import click


@click.command()
@click.option("--method", type=click.Choice(["GOLD", "SILVER"], case_sensitive=False), help="Nisab method.")
@click.option("--price", type=float, help="Metal price per gram.")
@click.option("--currency", help="Currency code of the price.")
@click.pass_obj
def nisab(config, method: str | None, price: float | None, currency: str | None) -> None:
    """Show the nisab threshold for a metal price."""
    from zakatkit.core.cli.common import fail, resolve_price
    from zakatkit.core.exceptions import ZakatKitError
    from zakatkit.financial.calculators.zakat import ZakatCalculationService
    from zakatkit.financial.money import Money
    from zakatkit.financial.settings import ZakatConfig
    from zakatkit.financial.vocabulary import NisabMethod

    try:
        settings = ZakatConfig.from_config(config)
        nisab_method = NisabMethod.from_string(method) if method else settings.nisab_method
        price_per_gram = resolve_price(price, None, settings.price_per_gram(nisab_method))
        if price_per_gram is None:
            raise click.UsageError(f"No {nisab_method.value.lower()} price: pass --price")
        money = Money(price_per_gram, currency or settings.currency.value)
        threshold = ZakatCalculationService(settings).nisab_threshold(nisab_method, money)
    except ZakatKitError as e:
        fail(e)
        return

    click.echo(f"{nisab_method.label} at {money}/g: nisab is {threshold}")
