"""Subcommand modules for abstract-bridge.

Provides register_commands() which uses deferred imports to keep
``abstract-bridge --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register one command group per operation group on the root CLI group."""
    from abstract_bridge.commands.changesets import changesets
    from abstract_bridge.commands.collections import collections
    from abstract_bridge.commands.commits import commits
    from abstract_bridge.commands.data import data
    from abstract_bridge.commands.files import files
    from abstract_bridge.commands.layers import layers
    from abstract_bridge.commands.pages import pages

    cli.add_command(commits)
    cli.add_command(changesets)
    cli.add_command(files)
    cli.add_command(pages)
    cli.add_command(layers)
    cli.add_command(data)
    cli.add_command(collections)
