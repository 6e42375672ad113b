"""CLI commands that run against a freshly built machine."""

from __future__ import annotations

import json

import click

from vending.application.dto import MachineStatus, RefundOutcome
from vending.domain.exceptions import DomainException
from vending.domain.model.value_objects import Money
from vending.infrastructure.bootstrap import build_machine, machine_config
from vending.infrastructure.config_loader import config_to_dict


def _parse_coins(raw: str) -> list[int]:
    """Parse '100,50,50' into a list of coin values."""
    coins: list[int] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            coins.append(int(part))
        except ValueError:
            raise click.BadParameter(f"Invalid coin value '{part}'.")
    return coins


def display_status(status: MachineStatus) -> None:
    """Shared formatting for the machine status screen."""
    click.echo(f"  {'ID':<4} {'Product':<20} {'Price':>8} {'Stock':>6}")
    click.echo(f"  {'-'*41}")
    for line in status.products:
        marker = "*" if line.id == status.selected_product_id else " "
        click.echo(
            f"{marker} {line.id:<4} {line.name:<20} {line.price_display:>8} {line.stock:>6}"
        )
    click.echo(f"  {'-'*41}")
    click.echo(f"  Items remaining: {status.items_remaining}")
    click.echo()
    coins = ", ".join(str(Money(c.value)) for c in status.inserted_coins) or "none"
    click.echo(f"  Inserted: {Money(status.total_inserted)} ({coins})")
    click.echo()
    click.echo(f"  {'Coin':<8} {'Count':>6}")
    for denom, count in status.coin_inventory.items():
        click.echo(f"  {str(Money(denom.value)):<8} {count:>6}")
    click.echo(f"  Coins in machine: {status.coins_in_machine}")


@click.command("status")
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the catalog and coin inventory."""
    try:
        machine = build_machine(ctx.obj.get("config_path"))
    except DomainException as exc:
        raise click.ClickException(str(exc))
    display_status(machine.get_status())


@click.command("buy")
@click.option("--product", required=True, help="Product id, e.g. A2.")
@click.option("--coins", required=True, help="Coins as '100,50,50' (minor units).")
@click.pass_context
def buy(ctx: click.Context, product: str, coins: str) -> None:
    """Insert coins, select a product and purchase it in one go.

    A failed purchase refunds the inserted coins and exits non-zero.
    """
    values = _parse_coins(coins)

    try:
        machine = build_machine(ctx.obj.get("config_path"))
        for value in values:
            machine.insert_coin(value)
        machine.select_product(product)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    outcome = machine.purchase()
    if not outcome.success:
        refund: RefundOutcome = machine.cancel()
        click.echo(refund.message)
        raise click.ClickException(outcome.message)

    click.echo(outcome.message)


@click.command("config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Print the effective configuration as JSON."""
    try:
        config = machine_config(ctx.obj.get("config_path"))
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(json.dumps(config_to_dict(config), indent=2))
