"""Shared pytest fixtures and test helpers for abstract-bridge tests."""

from __future__ import annotations

import json
import stat
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from abstract_bridge.config.models import BridgeConfig

TOKEN = "tok-123"
API_URL = "https://api.example.test"

# Replays plan.json next to it: per-command stdout chunks (hex), stderr
# chunks (hex), exit status, sleeps, SIGTERM handling, and an optional grandchild
# that keeps the pipes open. Every call is appended to calls.jsonl.
_FAKE_CLI_PY = """\
import json
import os
import signal
import subprocess
import sys
import time
from pathlib import Path

here = Path(__file__).resolve().parent
argv = sys.argv[1:]
with (here / "calls.jsonl").open("a", encoding="utf-8") as fh:
    fh.write(json.dumps({"argv": argv, "cwd": os.getcwd()}) + "\\n")

plans = json.loads((here / "plan.json").read_text(encoding="utf-8"))
positional = [arg for arg in argv if not arg.startswith("--")]
command = " ".join(positional[:2]) if positional[:1] == ["layer"] else positional[0]
plan = plans.get(command, plans.get("*", {}))

if plan.get("ignore_term"):
    signal.signal(signal.SIGTERM, signal.SIG_IGN)
if plan.get("orphan"):
    subprocess.Popen([sys.executable, "-c", f"import time; time.sleep({plan['orphan']})"])

for chunk in plan.get("stderr", []):
    sys.stderr.buffer.write(bytes.fromhex(chunk))
    sys.stderr.flush()
for chunk in plan.get("stdout", []):
    sys.stdout.buffer.write(bytes.fromhex(chunk))
    sys.stdout.flush()
    time.sleep(plan.get("pause", 0))
time.sleep(plan.get("linger", 0))
sys.exit(plan.get("exit", 0))
"""


def _hex(chunks: Sequence[str | bytes]) -> list[str]:
    return [(c.encode("utf-8") if isinstance(c, str) else c).hex() for c in chunks]


class FakeCli:
    """A real executable standing in for abstract-cli.

    ``respond()`` programs what the next invocations of a command print and
    how they exit; ``calls()`` returns the recorded invocations.
    """

    def __init__(self, root: Path) -> None:
        self.root = root
        self.path = root / "abstract-cli"
        self._plans: dict[str, dict[str, Any]] = {}
        script = root / "fake_abstract_cli.py"
        script.write_text(_FAKE_CLI_PY, encoding="utf-8")
        self.path.write_text(
            f'#!/bin/sh\nexec "{sys.executable}" "{script}" "$@"\n',
            encoding="utf-8",
        )
        self.path.chmod(self.path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        self._write()

    def respond(
        self,
        command: str = "*",
        *,
        stdout: Sequence[str | bytes] = (),
        stderr: Sequence[str | bytes] = (),
        exit: int = 0,
        pause: float = 0.0,
        linger: float = 0.0,
        ignore_term: bool = False,
        orphan: float = 0.0,
    ) -> None:
        """Program the output for *command* (``"*"`` matches any command).

        *ignore_term* makes the process ignore SIGTERM; *orphan* spawns a
        grandchild that inherits stdout and stderr and sleeps that long.
        """
        self._plans[command] = {
            "stdout": _hex(stdout),
            "stderr": _hex(stderr),
            "exit": exit,
            "pause": pause,
            "linger": linger,
            "ignore_term": ignore_term,
            "orphan": orphan,
        }
        self._write()

    def respond_json(self, command: str = "*", payload: Any = None, **kwargs: Any) -> None:
        self.respond(command, stdout=[json.dumps(payload)], **kwargs)

    def calls(self) -> list[dict[str, Any]]:
        log = self.root / "calls.jsonl"
        if not log.exists():
            return []
        return [json.loads(line) for line in log.read_text(encoding="utf-8").splitlines()]

    def argvs(self) -> list[list[str]]:
        return [call["argv"] for call in self.calls()]

    def _write(self) -> None:
        (self.root / "plan.json").write_text(json.dumps(self._plans), encoding="utf-8")


class RecordingBridge:
    """In-memory invoker: records argument vectors, replays payloads per command.

    Responses are keyed like abstract-cli commands (``"commits"``,
    ``"file"``, ``"layer meta"``). An exception instance is raised instead
    of returned.
    """

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses: dict[str, Any] = dict(responses or {})
        self.calls: list[list[str]] = []
        self.options: list[dict[str, Any]] = []

    async def invoke(
        self,
        arguments: Sequence[str],
        *,
        timeout: float | None = None,
        cancel: Any = None,
    ) -> Any:
        args = list(arguments)
        self.calls.append(args)
        self.options.append({"timeout": timeout, "cancel": cancel})
        key = " ".join(args[:2]) if args[0] == "layer" else args[0]
        response = self.responses[key]
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def fake_cli(tmp_path: Path) -> FakeCli:
    """A fake abstract-cli executable in a temp directory."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    return FakeCli(bin_dir)


@pytest.fixture
def bridge_config(fake_cli: FakeCli, tmp_path: Path) -> BridgeConfig:
    """BridgeConfig pointing at the fake executable, cwd = tmp_path."""
    return BridgeConfig(
        executable=fake_cli.path,
        cwd=tmp_path,
        access_token=TOKEN,
        api_url=API_URL,
    )


@pytest.fixture
def recording_bridge() -> RecordingBridge:
    return RecordingBridge()


@pytest.fixture
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove ABSTRACT_* variables so settings tests see only what they set."""
    for name in (
        "ABSTRACT_TOKEN",
        "ABSTRACT_API_URL",
        "ABSTRACT_CLI_PATH",
        "ABSTRACT_CWD",
        "ABSTRACT_BRIDGE_CONFIG",
        "ABSTRACT_INVOCATION__TIMEOUT",
        "ABSTRACT_INVOCATION__EMPTY_OUTPUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_args(fake_cli: FakeCli, tmp_path: Path, _clean_env: None) -> list[str]:
    """Root CLI flags wiring the fake executable, token and endpoint."""
    return [
        "--token",
        TOKEN,
        "--api-url",
        API_URL,
        "--cli-path",
        str(fake_cli.path),
        "--cwd",
        str(tmp_path),
    ]
