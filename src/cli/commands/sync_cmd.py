"""Sync CLI command."""

import asyncio

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components
from shared_types import SignalSource

console = Console()

OUTCOME_STYLE = {
    "succeeded": "[green]succeeded[/]",
    "failed": "[red]failed[/]",
    "skipped": "[dim]skipped[/]",
}


@click.command()
@click.argument("user_id")
@click.option(
    "-s",
    "--source",
    default="journal",
    type=click.Choice([str(s) for s in SignalSource]),
    help="Kind of record that triggered the sync",
)
@click.option("--show-keys", is_flag=True, help="List cache keys after the sync")
@click.pass_context
def sync(ctx: click.Context, user_id: str, source: str, show_keys: bool):
    """Regenerate every derived artifact for a user."""
    c = get_components(ctx.obj["data"], ctx.obj["config"])

    with console.status("Synchronizing..."):
        result = asyncio.run(c["orchestrator"].sync(user_id, SignalSource(source)))

    table = Table(show_header=True, title=f"Sync for {user_id} ({source})")
    table.add_column("Artifact")
    table.add_column("Outcome")
    table.add_column("Error", style="dim")
    for artifact, outcome in result.outcomes.items():
        table.add_row(
            str(artifact),
            OUTCOME_STYLE.get(str(outcome), str(outcome)),
            result.errors.get(artifact, ""),
        )
    console.print(table)

    if not result.ok:
        console.print("[red]No artifact could be updated.[/]")
        raise SystemExit(1)

    tip = c["readers"]["daily_tip"](user_id)
    console.print(f"\n[bold]Tip of the day[/] ({tip.category}): {tip.title}\n{tip.content}")

    if show_keys:
        console.print("\n[bold]Cache keys:[/]")
        for key in sorted(c["cache"].keys()):
            console.print(f"  {key}")
