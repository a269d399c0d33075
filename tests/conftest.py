import os
from pathlib import Path
from typing import Callable, Dict

import pytest
from click.testing import CliRunner

from pubsubschema_gen.logging_config import configure_logging

TEST_EVENT_FILENAME = "coreapp.test.v1.TestEvent.pubsub.proto"
TEST_EVENT_PROTO = "message TestEvent {}\n"


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep PUBSUBSCHEMA_GEN_* settings from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("PUBSUBSCHEMA_GEN_"):
            monkeypatch.delenv(key, raising=False)
    configure_logging("WARNING")
    yield


@pytest.fixture
def cli_runner():
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def write_proto() -> Callable[[Path, str, str], Path]:
    """Return a helper that writes a proto file and returns its path."""

    def _write(directory: Path, filename: str, text: str) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def pubsub_dir(tmp_path, write_proto) -> Path:
    """A pubsub directory holding the single TestEvent proto."""
    directory = tmp_path / "pubsub"
    write_proto(directory, TEST_EVENT_FILENAME, TEST_EVENT_PROTO)
    return directory


@pytest.fixture
def output_dir(tmp_path) -> Path:
    return tmp_path / "out"


@pytest.fixture
def snapshot() -> Callable[[Path], Dict[str, bytes]]:
    """Return a helper mapping each file name in a directory to its bytes."""

    def _snapshot(directory: Path) -> Dict[str, bytes]:
        return {
            p.name: p.read_bytes() for p in sorted(directory.iterdir()) if p.is_file()
        }

    return _snapshot
