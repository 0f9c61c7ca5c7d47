"""
Pytest configuration and fixtures for script-tester tests

This module provides shared fixtures for unit, integration, and E2E tests.
"""
import io
import sys
import textwrap
from pathlib import Path
from typing import Callable

import pytest

from script_tester.core.models import RunConfiguration
from script_tester.observability.logger import configure_logging
from script_tester.observability.metrics import REGISTRY


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that exercise one component"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that run the pipeline against a real filesystem"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests through the command-line entry point"
    )


@pytest.fixture(autouse=True)
def _rebind_log_handlers():
    """Point every script_tester logger at this test's stderr"""
    configure_logging()
    yield


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture
def input_dir(tmp_path) -> Path:
    """
    Directory holding x.txt ("hello") and y.txt ("world")

    Returns:
        Path to the input directory
    """
    directory = tmp_path / "in"
    directory.mkdir()
    (directory / "x.txt").write_bytes(b"hello")
    (directory / "y.txt").write_bytes(b"world")
    return directory


@pytest.fixture
def output_dir(tmp_path) -> Path:
    """Empty, existing output directory"""
    directory = tmp_path / "out"
    directory.mkdir()
    return directory


@pytest.fixture
def write_script(tmp_path) -> Callable[[str, str], Path]:
    """
    Factory writing a transform script into tmp_path

    Usage:
        script = write_script("route.py", '''
            record = session.get()
            ...
        ''')
    """
    def _write(name: str, body: str) -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def passthrough_script(write_script) -> Path:
    """Python script routing every record to success unchanged"""
    return write_script("passthrough.py", """
        record = session.get()
        if record is not None:
            session.transfer(record, REL_SUCCESS)
    """)


@pytest.fixture
def make_config() -> Callable[..., RunConfiguration]:
    """Factory for RunConfiguration with test-friendly defaults"""
    def _make(script_path: Path, **overrides) -> RunConfiguration:
        return RunConfiguration(script_path=script_path, **overrides)

    return _make


# =======================
# STREAM FIXTURES
# =======================

@pytest.fixture
def fake_stdin(monkeypatch) -> Callable[[bytes], None]:
    """Replace sys.stdin with a non-interactive stream holding the given bytes"""
    def _install(data: bytes) -> None:
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data), encoding="utf-8"))

    return _install


# =======================
# METRICS FIXTURES
# =======================

@pytest.fixture
def metric_value() -> Callable[..., float]:
    """Read a sample from the metrics registry, treating absent samples as 0"""
    def _read(name: str, **labels) -> float:
        return REGISTRY.get_sample_value(name, labels) or 0.0

    return _read
