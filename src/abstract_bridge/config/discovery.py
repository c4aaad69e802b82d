"""Config file and executable discovery.

Walk-up finder locates abstract-bridge.toml, similar to how git finds .git/.
Supports the ABSTRACT_BRIDGE_CONFIG env var and --config CLI flag overrides.

The abstract-cli executable is the first existing file on a search path.
Without an explicit path the defaults are tried in order: next to the
working directory, the npm package under ``node_modules``, and the copy
bundled inside the macOS app.
"""

from __future__ import annotations

import os
from pathlib import Path

from abstract_bridge.domain.errors import ExecutableNotFound

CONFIG_FILENAME = "abstract-bridge.toml"
CONFIG_ENV_VAR = "ABSTRACT_BRIDGE_CONFIG"

MACOS_APP_CLI = (
    "/Applications/Abstract.app/Contents/Resources/app.asar.unpacked/"
    "node_modules/@elasticprojects/abstract-cli"
)


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for abstract-bridge.toml.

    Returns the path to the config file, or None if not found.
    Checks ABSTRACT_BRIDGE_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def parse_search_path(value: str | None) -> list[str]:
    """Split an ``os.pathsep``-delimited search path, dropping empty entries."""
    if not value:
        return []
    return [part for part in value.split(os.pathsep) if part]


def default_search_path(cwd: Path) -> list[str]:
    return [
        str(cwd / "abstract-cli"),
        str(cwd / "node_modules/@elasticprojects/abstract-cli/bin/abstract-cli"),
        MACOS_APP_CLI,
    ]


def locate_executable(candidates: list[str], *, cwd: Path) -> Path:
    """Return the first candidate that exists as a file, resolved against *cwd*.

    Raises:
        ExecutableNotFound: No candidate exists.
    """
    for candidate in candidates:
        path = Path(candidate).expanduser()
        if not path.is_absolute():
            path = cwd / path
        if path.is_file():
            return path.resolve()
    raise ExecutableNotFound(candidates)
