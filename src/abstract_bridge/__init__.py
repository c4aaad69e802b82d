"""abstract-bridge — async client for the abstract-cli version-control tool."""

from __future__ import annotations

__version__ = "0.1.0"
