"""Shared pytest fixtures and configuration for the thumby test suite.

Guidelines
----------
* No internet access in any test.
* The core is exercised through the in-memory transports in ``fakes.py``;
  ``requests`` is mocked at the infra boundary.
* Tests must not depend on the user's real config files or environment.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from fakes import FakeHttpClient


@pytest.fixture
def fake_http() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point config discovery at an empty temp dir and clear the env key."""
    root = tmp_path / "thumby-root"
    monkeypatch.setenv("THUMBY_ROOT", str(root))
    monkeypatch.delenv("THUMBY_YOUTUBE_API_KEY", raising=False)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return root


@pytest.fixture(autouse=True)
def reset_thumby_logger() -> Iterator[None]:
    """Undo ``configure_logging`` so caplog sees records between tests."""
    yield
    package_logger = logging.getLogger("thumby")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
