"""moodsync command line."""

from pathlib import Path

import click

from cli.commands import insight, state, sync
from cli.config import load_config_model
from cli.logging_config import setup_logging
from observability import log_run_summary


@click.group()
@click.version_option(version="0.1.0")
@click.option(
    "-d",
    "--data",
    "data_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="MOODSYNC_DATA",
    help="JSON file with users, journal, chat and sessions",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML config (default: ./moodsync.yaml or ~/.moodsync/config.yaml)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, data_file: Path, config_path: Path | None, verbose: bool):
    """moodsync - derived emotional state cache and sync engine."""
    config = load_config_model(config_path)
    level = "DEBUG" if verbose else config.logging.level
    setup_logging(json_mode=config.logging.json_output, level=level)
    ctx.obj = {"data": data_file, "config": config_path}
    if verbose:
        ctx.call_on_close(log_run_summary)


cli.add_command(insight)
cli.add_command(state)
cli.add_command(sync)


if __name__ == "__main__":
    cli()
