"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``ABSTRACT_*`` prefix (``ABSTRACT_TOKEN``,
     ``ABSTRACT_API_URL``, ``ABSTRACT_CLI_PATH``)
  3. TOML file    — ``abstract-bridge.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`abstract_bridge.config.discovery`. This is the only layer that reads
the environment; :meth:`BridgeSettings.to_bridge_config` hands the bridge an
explicit :class:`BridgeConfig`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsError

from abstract_bridge.config.discovery import (
    default_search_path,
    find_config,
    locate_executable,
    parse_search_path,
)
from abstract_bridge.config.models import BridgeConfig, CliConfig, InvocationConfig
from abstract_bridge.domain.errors import ConfigurationError


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``abstract-bridge.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise ConfigurationError(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()

_CONFIG_HINT = "Check abstract-bridge.toml and the ABSTRACT_* environment variables."


class BridgeSettings(BaseSettings):
    """Unified settings for the abstract-bridge CLI and embedding callers.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.  Stored on the
    ``AppContext`` at the CLI root level.

    Attributes:
        cwd: Working directory for spawned processes (defaults to the config
            file's directory, or CWD if no config found).
        config_path: Explicit ``--config`` override, or None for discovery.
        token: Access token for ``--user-token``.
        api_url: Endpoint override; falls back to ``[cli] api_url``.
        cli_path: ``os.pathsep``-separated executable search path.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ABSTRACT_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved path (not in TOML, derived from config location) ---
    cwd: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- Credentials and endpoint ---
    token: str | None = None
    api_url: str | None = None
    cli_path: str | None = None

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    cli: CliConfig = Field(default_factory=CliConfig)
    invocation: InvocationConfig = Field(default_factory=InvocationConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        cwd: Path | None = None,
        **cli_flags: Any,
    ) -> BridgeSettings:
        """Construct settings from CLI invocation.

        Discovers ``abstract-bridge.toml`` via walk-up (or explicit
        *config_path*), resolves *cwd* from the config file's parent
        directory, and merges CLI flags as highest-priority overrides.
        Flags passed as None are treated as not given.

        Raises:
            ConfigurationError: The TOML file or an ``ABSTRACT_*`` variable
                holds a value that does not validate.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(cwd)

        resolved_cwd = cwd
        if resolved_cwd is None:
            resolved_cwd = toml_path.parent if toml_path else Path.cwd()

        overrides = {key: value for key, value in cli_flags.items() if value is not None}
        _tls.toml_path = toml_path
        try:
            return cls(
                cwd=resolved_cwd,
                config_path=toml_path,
                **overrides,
            )
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )
            msg = f"Invalid configuration: {problems}"
            raise ConfigurationError(msg, hint=_CONFIG_HINT) from exc
        except SettingsError as exc:
            msg = f"Invalid configuration: {exc}"
            raise ConfigurationError(msg, hint=_CONFIG_HINT) from exc
        finally:
            _tls.toml_path = None

    def search_path(self) -> list[str]:
        """Executable candidates: ``cli_path``, then ``[cli] path``, then defaults."""
        return (
            parse_search_path(self.cli_path)
            or list(self.cli.path)
            or default_search_path(self.cwd)
        )

    def to_bridge_config(self) -> BridgeConfig:
        """Locate the executable and freeze everything the bridge needs.

        Raises:
            ConfigurationError: No access token is configured.
            ExecutableNotFound: No abstract-cli on the search path.
        """
        if not self.token:
            raise ConfigurationError(
                "No abstract access token configured",
                hint="Set ABSTRACT_TOKEN or pass --token.",
            )
        return BridgeConfig(
            executable=locate_executable(self.search_path(), cwd=self.cwd),
            cwd=self.cwd,
            access_token=self.token,
            api_url=self.api_url or self.cli.api_url,
            timeout=self.invocation.timeout,
            empty_output=self.invocation.empty_output,
        )
