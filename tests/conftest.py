# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import os
from pathlib import Path

import pytest

CERTS_DIR = Path(__file__).parent / "fixtures" / "certs"


@pytest.fixture(autouse=True)
def _clean_consul_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("CONSUL_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def certs_dir() -> Path:
    return CERTS_DIR


class FakeClock:
    """Monotonic clock stand-in; `sleep` advances time instead of blocking."""

    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
