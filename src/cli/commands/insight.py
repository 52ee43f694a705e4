"""Insight CLI command."""

import asyncio

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components

console = Console()

TREND_STYLE = {
    "improving": "[green]improving[/]",
    "stable": "[dim]stable[/]",
    "declining": "[red]declining[/]",
}


def render_insight(insight) -> Table:
    table = Table(show_header=True, title="Insight")
    table.add_column("Pattern", style="bold")
    table.add_column("Values")

    ep = insight.emotional_patterns
    rows = [
        ("Dominant mood", ep.dominant_mood),
        ("Secondary moods", ", ".join(ep.secondary_moods)),
        ("Trend", TREND_STYLE.get(str(ep.trend), str(ep.trend))),
        ("Triggers", ", ".join(ep.common_triggers)),
        ("Recurrent thoughts", "; ".join(insight.cognitive_patterns.recurrent_thoughts)),
        ("Distortions", "; ".join(insight.cognitive_patterns.cognitive_distortions)),
        ("Coping", "; ".join(insight.behavioral_patterns.coping_strategies)),
        ("Positive activities", "; ".join(insight.behavioral_patterns.positive_activities)),
        ("Therapy goals", "; ".join(insight.treatment_context.therapy_goals)),
    ]
    for label, value in rows:
        table.add_row(label, value or "[dim]-[/]")
    return table


@click.command()
@click.argument("user_id")
@click.pass_context
def insight(ctx: click.Context, user_id: str):
    """Compute (or reuse) the user's insight."""
    c = get_components(ctx.obj["data"], ctx.obj["config"])

    with console.status("Analyzing..."):
        result = asyncio.run(c["fusion"].compute_insight(user_id))

    console.print(render_insight(result))
    meta = result.metadata
    console.print(
        f"\n[bold]Sources:[/] {', '.join(meta.data_sources_used)}  |  "
        f"[bold]Confidence:[/] {meta.confidence_score:.2f}"
    )
