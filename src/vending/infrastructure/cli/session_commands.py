"""Interactive session: drive one machine through many operations.

Each stdin line is one command.  Errors are reported and the session
continues; only ``quit`` (or end of input) stops it.
"""

from __future__ import annotations

import click

from vending.application.vending_machine import SCENARIOS, VendingMachine
from vending.domain.exceptions import DomainException
from vending.infrastructure.bootstrap import build_machine
from vending.infrastructure.cli.machine_commands import display_status

HELP = (
    "Commands: select ID | insert N | purchase | cancel | status | "
    "coins DENOM COUNT | restock ID N | scenario NAME | reset | quit"
)


def run_command(machine: VendingMachine, line: str) -> bool:
    """Execute one session line.  Returns False when the session should end."""
    parts = line.split()
    if not parts:
        return True
    command, args = parts[0].lower(), parts[1:]

    if command in ("quit", "exit"):
        return False
    if command == "help":
        click.echo(HELP)
    elif command == "select" and len(args) == 1:
        click.echo(machine.select_product(args[0]))
    elif command == "insert" and len(args) == 1:
        click.echo(machine.insert_coin(args[0]))
    elif command == "purchase" and not args:
        click.echo(machine.purchase().message)
    elif command == "cancel" and not args:
        click.echo(machine.cancel().message)
    elif command == "status" and not args:
        display_status(machine.get_status())
    elif command == "coins" and len(args) == 2:
        machine.set_coin_count(args[0], _int_arg(args[1]))
        click.echo(f"Coin {args[0]} count set to {args[1]}")
    elif command == "restock" and len(args) == 2:
        machine.restock(args[0], _int_arg(args[1]))
        click.echo(f"{args[0]} stock set to {args[1]}")
    elif command == "scenario" and len(args) == 1:
        click.echo(f"Scenario: {machine.apply_scenario(args[0])}")
    elif command == "reset" and not args:
        machine.reset_machine()
        click.echo("Machine reset. Welcome!")
    else:
        click.echo(f"Unrecognized command '{line.strip()}'. {HELP}")
    return True


def _int_arg(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise click.BadParameter(f"Expected an integer, got '{raw}'.")


@click.command("session")
@click.pass_context
def session(ctx: click.Context) -> None:
    """Run an interactive session on one machine."""
    try:
        machine = build_machine(ctx.obj.get("config_path"))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Welcome! Select a product or insert coins.")
    click.echo(f"Scenarios: {', '.join(SCENARIOS)}")
    stdin = click.get_text_stream("stdin")
    while True:
        line = stdin.readline()
        if not line:
            break
        try:
            if not run_command(machine, line):
                break
        except (DomainException, click.BadParameter) as exc:
            click.echo(f"Error: {exc}")
    click.echo("Goodbye.")
