import copy
import logging
from collections import OrderedDict

import click

from cloudsweep.core._private import constants
from cloudsweep.core._private import logging_utils
from cloudsweep.core._private.cli_logger import (add_click_logging_options,
                                                 cli_logger)
from cloudsweep.core._private.teardown.teardown_operator import (
    teardown_nodes_with_tag, show_nodes_with_tag)

logger = logging.getLogger(__name__)


class NaturalOrderGroup(click.Group):
    def __init__(self, name=None, commands=None, **attrs):
        if commands is None:
            commands = OrderedDict()
        elif not isinstance(commands, OrderedDict):
            commands = OrderedDict(commands)
        click.Group.__init__(self, name=name,
                             commands=commands,
                             **attrs)

    def list_commands(self, ctx):
        return self.commands.keys()


@click.group(cls=NaturalOrderGroup)
@click.option(
    "--logging-level",
    required=False,
    default=constants.LOGGER_LEVEL_INFO,
    type=str,
    help=constants.LOGGER_LEVEL_HELP)
@click.option(
    "--logging-format",
    required=False,
    default=constants.LOGGER_FORMAT,
    type=str,
    help=constants.LOGGER_FORMAT_HELP)
@click.version_option()
def cli(logging_level, logging_format):
    level = logging.getLevelName(logging_level.upper())
    logging_utils.setup_logger(level, logging_format)
    cli_logger.set_format(format_tmpl=logging_format)


@cli.command()
@click.argument("tag", required=True, type=str)
@click.option(
    "--config",
    "config_file",
    required=False,
    type=str,
    help="The teardown configuration file.")
@click.option(
    "--region",
    "-r",
    required=False,
    type=str,
    help="Override the configured regions with this single region.")
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    default=False,
    help="Don't ask for confirmation.")
@add_click_logging_options
def destroy(tag, config_file, region, yes):
    """Destroy the nodes with a tag and their key pairs and security groups."""
    teardown_nodes_with_tag(config_file, tag, yes, override_region=region)


@cli.command()
@click.argument("tag", required=True, type=str)
@click.option(
    "--config",
    "config_file",
    required=False,
    type=str,
    help="The teardown configuration file.")
@click.option(
    "--region",
    "-r",
    required=False,
    type=str,
    help="Override the configured regions with this single region.")
@add_click_logging_options
def nodes(tag, config_file, region):
    """List the nodes with a tag and the regions they occupy."""
    show_nodes_with_tag(config_file, tag, override_region=region)


def _add_command_alias(command, name, hidden):
    new_command = copy.deepcopy(command)
    new_command.hidden = hidden
    cli.add_command(new_command, name=name)


_add_command_alias(destroy, name="down", hidden=True)


def main():
    return cli()


if __name__ == "__main__":
    main()
