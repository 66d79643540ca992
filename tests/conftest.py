"""Shared fixtures: isolate tests from the caller's PALETTE_* environment and .env files."""

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for key in list(os.environ):
        if key.startswith('PALETTE_'):
            monkeypatch.delenv(key)
    work = tmp_path / 'work'
    work.mkdir()
    (work / '.git').mkdir()
    monkeypatch.chdir(work)
    return work
