"""Emotional state CLI command."""

import asyncio

import click
from rich.console import Console
from rich.panel import Panel

from cli.utils import get_components

console = Console()


def _intensity_bar(intensity: int) -> str:
    filled = intensity // 10
    color = "red" if intensity >= 75 else "yellow" if intensity >= 50 else "green"
    return f"[{color}]{'█' * filled}[/]{'░' * (10 - filled)} {intensity}"


def render_state(state) -> Panel:
    lines = [
        f"[bold]{state.current_state}[/]",
        f"Intensity: {_intensity_bar(state.intensity)}",
        f"Dominant: {state.dominant_emotion}   Trend: {state.trend}",
    ]
    if state.secondary_emotions:
        lines.append(f"Also: {', '.join(state.secondary_emotions)}")
    if state.recent_triggers:
        lines.append(f"Triggers: {', '.join(state.recent_triggers)}")
    lines.append("")
    lines.extend(f"• {action}" for action in state.suggested_actions)
    if state.message:
        lines.append(f"\n[dim]{state.message}[/]")
    return Panel("\n".join(lines), title="Emotional state", subtitle=f"confidence {state.data_confidence:.2f}")


@click.command()
@click.argument("user_id")
@click.option("--heuristic", is_flag=True, help="Skip the analyzer and use the heuristic estimate")
@click.pass_context
def state(ctx: click.Context, user_id: str, heuristic: bool):
    """Show the user's current emotional state."""
    from insights.heuristics import estimate_emotional_state

    c = get_components(ctx.obj["data"], ctx.obj["config"])

    if heuristic:
        records = asyncio.run(c["fusion"].load_sources(user_id))
        result = estimate_emotional_state(records)
    else:
        with console.status("Synchronizing..."):
            asyncio.run(c["orchestrator"].sync(user_id, "journal"))
        result = c["readers"]["emotional_state"](user_id)

    console.print(render_state(result))
