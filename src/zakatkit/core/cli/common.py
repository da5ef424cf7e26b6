"""Shared helpers for CLI commands."""

from __future__ import annotations

from decimal import Decimal

import click
import yaml

from zakatkit.core.config import Config
from zakatkit.core.exceptions import ZakatKitError
from zakatkit.financial.hijri import HijriDate
from zakatkit.financial.liability import Liability
from zakatkit.financial.money import Money
from zakatkit.financial.portfolio import UserPortfolio
from zakatkit.financial.settings import ZakatConfig
from zakatkit.financial.user import User
from zakatkit.usecases.create_asset import build_asset


def load_config(config_file: str | None = None) -> Config:
    return Config(config_file=config_file)


def parse_hijri(value) -> HijriDate:
    """Accept ``"1446-03-15H"`` or a ``{year, month, day}`` mapping."""
    if isinstance(value, dict):
        return HijriDate.from_dict(value)
    return HijriDate.from_string(str(value))


def load_portfolio_file(path: str, settings: ZakatConfig) -> tuple[UserPortfolio, dict]:
    """Read a YAML portfolio file.

    Layout::

        user: {id, email, name, currency, nisab_method}
        current_date: 1446-09-01H        # optional
        prices: {gold_per_gram: 92.5}    # optional
        assets:
          - {type: CASH, currentValue: {amount: 5000, currency: USD},
             acquisitionDate: 1445-01-10H, description: Savings}
        liabilities:
          - {amount: {amount: 300, currency: USD}, description: Card, immediately_due: true}

    Returns the portfolio and the raw document.
    """
    with open(path) as f:
        doc = yaml.safe_load(f) or {}
    if not isinstance(doc, dict) or "user" not in doc:
        raise click.BadParameter(f"{path} must be a mapping with a 'user' section")

    user_data = doc["user"]
    user = User(
        id=str(user_data.get("id", "cli-user")),
        email=user_data.get("email", "cli@localhost"),
        name=user_data.get("name", ""),
        currency=user_data.get("currency", settings.currency.value),
        nisab_method=user_data.get("nisab_method", settings.nisab_method.value),
    )

    portfolio = UserPortfolio(user)
    for i, raw in enumerate(doc.get("assets") or []):
        request = dict(raw)
        request.setdefault("userId", user.id)
        request.setdefault("id", f"asset-{i + 1}")
        request["acquisitionDate"] = parse_hijri(_field(raw, "acquisitionDate", path)).to_dict()
        portfolio.add_asset(build_asset(request, settings))

    for i, raw in enumerate(doc.get("liabilities") or []):
        portfolio.add_liability(
            Liability(
                id=str(raw.get("id", f"liability-{i + 1}")),
                user_id=user.id,
                amount=Money.from_dict(_field(raw, "amount", path)),
                description=raw.get("description", ""),
                is_immediately_due=bool(raw.get("immediately_due", False)),
            )
        )
    return portfolio, doc


def resolve_price(flag_value: float | None, doc_value, config_value) -> Decimal | None:
    """First available price: command-line flag, portfolio file, then config."""
    for value in (flag_value, doc_value, config_value):
        if value is not None:
            return Decimal(str(value))
    return None


def fail(error: ZakatKitError) -> None:
    raise click.ClickException(str(error))


def _field(raw: dict, key: str, path: str):
    if key not in raw:
        raise click.BadParameter(f"{path}: entry {raw!r} is missing '{key}'")
    return raw[key]
