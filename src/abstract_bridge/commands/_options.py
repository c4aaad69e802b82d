"""Reusable Click options shared by several command groups."""

from __future__ import annotations

import click

from abstract_bridge.domain.descriptors import LATEST

sha_option = click.option(
    "--sha",
    default=LATEST,
    show_default=True,
    help="Commit sha to read at; 'latest' resolves to the newest commit.",
)
