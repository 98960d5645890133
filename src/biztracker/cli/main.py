"""Main CLI entry point."""

import logging

import click

from biztracker.store.factories import create_json_store

# Import and register all commands at module level
from biztracker.cli.commands import (
    dashboard,
    export,
    inventory,
    records,
    report,
    tax,
)


@click.group()
@click.option(
    "--data-path",
    type=click.Path(dir_okay=False),
    help="Path to the JSON records file (overrides BIZTRACKER_DATA_PATH environment variable)",
    envvar="BIZTRACKER_DATA_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, data_path: str | None, verbose: bool):
    """BizTracker - Small-business financial tracker.

    Reports revenue, expenses, profit, GST and stock alerts from a snapshot
    of your records, and exports invoices and expense reports as PDF.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )

    # Open the record store only when actually running a command
    if ctx.invoked_subcommand is not None:
        ctx.obj["store"] = create_json_store(data_path=data_path)


# Register all commands
dashboard.register_commands(cli)
tax.register_commands(cli)
report.register_commands(cli)
inventory.register_commands(cli)
records.register_commands(cli)
export.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
