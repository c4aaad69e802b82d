"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import anyio
import pytest
import structlog

from abstract_bridge.config.logging import configure_logging, mask_tokens
from abstract_bridge.config.models import BridgeConfig
from abstract_bridge.domain.errors import ProcessError
from abstract_bridge.infrastructure.bridge import CommandBridge
from tests.conftest import TOKEN, FakeCli


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    bridge = logging.getLogger("abstract_bridge")
    bridge_level = bridge.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    bridge.setLevel(bridge_level)


def _json_lines(text: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in text.splitlines() if line.strip()]


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("abstract_bridge").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("abstract_bridge").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("abstract_bridge.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "abstract_bridge.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("abstract_bridge.services.resolver").debug("Resolved latest")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Resolved latest"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "abstract_bridge.services.resolver"

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("asyncio").debug("loop noise")
        logging.getLogger("somelib").debug("library noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1


class TestBridgeEvents:
    def test_spawn_and_close_logged_with_token_redacted(
        self,
        fake_cli: FakeCli,
        bridge_config: BridgeConfig,
        capfd: pytest.CaptureFixture[str],
    ) -> None:
        fake_cli.respond_json(payload={"files": []})
        configure_logging(verbose=True, log_json=True)

        async def main() -> object:
            return await CommandBridge(bridge_config).invoke(["files", "P", "abc"])

        anyio.run(main)
        events = {entry["event"]: entry for entry in _json_lines(capfd.readouterr().err)}
        assert events["bridge.spawn"]["argv"][1] == "--user-token=***"  # type: ignore[index]
        assert events["bridge.close"]["returncode"] == 0
        assert TOKEN not in json.dumps(events)

    def test_quiet_without_verbose(
        self,
        fake_cli: FakeCli,
        bridge_config: BridgeConfig,
        capfd: pytest.CaptureFixture[str],
    ) -> None:
        fake_cli.respond_json(payload={"files": []})
        configure_logging(verbose=False, log_json=True)

        async def main() -> object:
            return await CommandBridge(bridge_config).invoke(["files", "P", "abc"])

        anyio.run(main)
        assert capfd.readouterr().err == ""

    def test_token_echoed_on_stderr_is_masked(
        self,
        fake_cli: FakeCli,
        bridge_config: BridgeConfig,
        capfd: pytest.CaptureFixture[str],
    ) -> None:
        fake_cli.respond(stderr=[f"bad flag --user-token={TOKEN} rejected\n"], exit=1)
        configure_logging(verbose=True, log_json=True)

        async def main() -> object:
            return await CommandBridge(bridge_config).invoke(["files", "P", "abc"])

        with pytest.raises(ProcessError):
            anyio.run(main)
        events = {entry["event"]: entry for entry in _json_lines(capfd.readouterr().err)}
        assert events["bridge.error"]["stderr"] == "bad flag --user-token=*** rejected\n"
        assert TOKEN not in json.dumps(events)


class TestMaskTokens:
    def test_masks_strings_and_lists(self) -> None:
        event = {
            "event": "spawn --user-token=secret",
            "argv": ["abstract-cli", "--user-token=secret", "files"],
            "returncode": 1,
        }
        assert mask_tokens(None, "debug", event) == {
            "event": "spawn --user-token=***",
            "argv": ["abstract-cli", "--user-token=***", "files"],
            "returncode": 1,
        }

    def test_leaves_other_flags_alone(self) -> None:
        event = {"event": "x", "argv": ["--api-url=https://api.example.test"]}
        assert mask_tokens(None, "debug", dict(event)) == event

    def test_stdlib_record_is_masked(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("abstract_bridge.client").warning("retry with --user-token=abc")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "retry with --user-token=***"
