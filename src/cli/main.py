"""CLI entry point for Habit Coach."""

from pathlib import Path

import click

from cli.commands import add, coach, log, serve, state
from cli.config import load_config_model
from cli.logging_config import setup_logging


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.yaml",
)
@click.pass_context
def cli(ctx, verbose: bool, json_logs: bool, config_path):
    """Habit Coach - track habits and get 7-day feedback."""
    try:
        config = load_config_model(config_path)
    except ValueError as e:
        raise click.ClickException(str(e))

    setup_logging(
        json_mode=json_logs or config.logging.json_mode,
        level="DEBUG" if verbose else config.logging.level,
        log_file=config.paths.log_file,
    )
    ctx.obj = config


cli.add_command(state)
cli.add_command(add)
cli.add_command(log)
cli.add_command(coach)
cli.add_command(serve)


def main():
    cli()


if __name__ == "__main__":
    main()
