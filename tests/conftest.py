"""Shared fixtures for the test suite."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from user_intake.models import DatabaseConfig


@pytest.fixture()
def alice_raw() -> dict[str, str]:
    """Messy but valid operator input."""
    return {
        "name": " Alice ",
        "age": "30",
        "email": "ALICE@X.COM ",
        "phone": "555-123-4567",
        "gender": "f",
        "country": " canada",
        "dob": "1994-05-01",
    }


@pytest.fixture()
def sqlite_config(tmp_path: Path) -> DatabaseConfig:
    """File-based SQLite database inside *tmp_path*."""
    return DatabaseConfig(driver="sqlite", database=str(tmp_path / "users.db"))


@pytest.fixture()
def tmp_record_file(tmp_path: Path, alice_raw: dict[str, str]) -> Path:
    """Write *alice_raw* to a JSON file and return its path."""
    path = tmp_path / "user.json"
    path.write_text(json.dumps(alice_raw))
    return path
