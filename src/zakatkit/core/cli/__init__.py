"""zakatkit CLI — entry point for calculate, nisab, and hawl commands."""

import click

from zakatkit import __version__


@click.group()
@click.version_option(version=__version__, package_name="zakatkit")
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False), help="YAML or JSON config file.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, verbose: bool) -> None:
    """zakatkit: zakat obligations for a lunar-calendar portfolio."""
    from zakatkit.core.cli.common import load_config
    from zakatkit.core.utils.logging import setup_logging_from_config

    config = load_config(config_file)
    setup_logging_from_config(config, verbose=verbose)
    ctx.obj = config


# Register subcommands
from .calculate_cmd import calculate
from .hawl_cmd import hawl
from .nisab_cmd import nisab

main.add_command(calculate)
main.add_command(nisab)
main.add_command(hawl)
