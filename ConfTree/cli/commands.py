"""
Command-line interface (CLI) commands for the ConfTree package.

This module wires the configuration commands into a click command group.
"""

import sys

import click

from ConfTree.cli.config_commands import (
    VALUE_TYPES,
    config_formats,
    config_get,
    config_section,
    config_set,
    config_show,
)
from ConfTree.utils.logging import get_logger, set_log_level

logger = get_logger(__name__)


# Apply the log level if specified in the command options
def apply_log_level(ctx, param, value):
    if value:
        set_log_level(value)
    return value


# Add an option for setting the log level to all commands
def log_level_option(f):
    return click.option('--log-level',
                        type=click.Choice(['debug', 'info', 'warning', 'error', 'critical'], case_sensitive=False),
                        callback=apply_log_level, expose_value=False, is_eager=True,
                        help='Set the logging level')(f)


def adapter_option(f):
    return click.option('--adapter', default='json', show_default=True,
                        help='Registered format used to parse the file')(f)


config_path_argument = click.argument('config_path', type=click.Path(exists=True, dir_okay=False))


@click.group()
def cli():
    """ConfTree CLI for inspecting hierarchical configuration files."""
    pass


@cli.command('show')
@config_path_argument
@click.option('--key', default='', help='Show only the sub-tree at this "::"-delimited key')
@click.option('--format', 'format_type', type=click.Choice(['yaml', 'json'], case_sensitive=False),
              default='yaml', help='Output format (yaml or json)')
@adapter_option
@log_level_option
@click.pass_context
def show_command(ctx, config_path, key, format_type, adapter):
    """Display a configuration document."""
    ctx.exit(config_show(config_path, key, format_type, adapter))


@cli.command('get')
@config_path_argument
@click.argument('key')
@click.option('--type', 'value_type', type=click.Choice(VALUE_TYPES), default='raw',
              help='Type to convert the value to')
@click.option('--default', help='Value to print when the key is missing or cannot be converted')
@adapter_option
@log_level_option
@click.pass_context
def get_command(ctx, config_path, key, value_type, default, adapter):
    """Print the value stored under KEY."""
    ctx.exit(config_get(config_path, key, value_type, default, adapter))


@cli.command('section')
@config_path_argument
@click.argument('name')
@adapter_option
@log_level_option
@click.pass_context
def section_command(ctx, config_path, name, adapter):
    """Print a flat string section."""
    ctx.exit(config_section(config_path, name, adapter))


@cli.command('set')
@config_path_argument
@click.argument('key')
@click.argument('value')
@click.option('--output', 'output_path', type=click.Path(dir_okay=False),
              help='Write the result here instead of overwriting CONFIG_PATH')
@adapter_option
@log_level_option
@click.pass_context
def set_command(ctx, config_path, key, value, output_path, adapter):
    """Set a top-level KEY to the string VALUE."""
    ctx.exit(config_set(config_path, key, value, output_path, adapter))


@cli.command('formats')
@log_level_option
@click.pass_context
def formats_command(ctx):
    """List the registered document formats."""
    ctx.exit(config_formats())


def main():
    """Main entry point for the ConfTree command-line interface."""
    try:
        return cli()
    except Exception as e:
        logger.exception(f"Error in CLI command: {e}")
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == '__main__':
    sys.exit(main())
