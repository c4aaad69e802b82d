"""Allow ``python -m abstract_bridge``."""

from abstract_bridge.cli import cli

cli()
