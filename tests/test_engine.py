"""Tests for IntakeEngine orchestration."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, text

from user_intake.engine import IntakeEngine
from user_intake.errors import MissingFieldError, PersistenceError, ValidationError
from user_intake.models import DatabaseConfig, IntakeConfig, IntakeSettings, SourceConfig
from user_intake.sources.mapping import MappingSource


def _config(database: DatabaseConfig, **source) -> IntakeConfig:
    return IntakeConfig(
        database=database,
        source=SourceConfig(**source) if source else SourceConfig(),
        settings=IntakeSettings(log_level="WARNING"),
    )


def _count_users(database: DatabaseConfig) -> int:
    engine = create_engine(database.url())
    with engine.connect() as conn:
        count = conn.execute(text("SELECT COUNT(*) FROM users")).scalar()
    engine.dispose()
    return count


class TestIntakeEngine:
    def test_end_to_end_inserts_exactly_one_row(self, sqlite_config, alice_raw):
        engine = IntakeEngine(
            _config(sqlite_config), source=MappingSource({"record": alice_raw})
        )
        user = engine.run()

        assert user.name == "Alice"
        assert user.gender == "Female"
        assert _count_users(sqlite_config) == 1

    def test_source_resolved_from_config(self, sqlite_config, tmp_record_file: Path):
        config = _config(
            sqlite_config,
            kind="json_file",
            inline_config={"file_path": str(tmp_record_file)},
        )
        user = IntakeEngine(config).run()
        assert user.email == "alice@x.com"
        assert _count_users(sqlite_config) == 1

    @pytest.mark.parametrize("age", ["abc", "200"])
    def test_bad_age_fails_before_any_connection(self, sqlite_config, alice_raw, age):
        store_factory = MagicMock()
        alice_raw["age"] = age
        engine = IntakeEngine(
            _config(sqlite_config),
            source=MappingSource({"record": alice_raw}),
            store_factory=store_factory,
        )
        with pytest.raises(ValidationError, match="Invalid age"):
            engine.run()
        store_factory.assert_not_called()
        assert not Path(sqlite_config.database).exists()

    def test_missing_field_propagates(self, sqlite_config, alice_raw):
        del alice_raw["dob"]
        engine = IntakeEngine(
            _config(sqlite_config), source=MappingSource({"record": alice_raw})
        )
        with pytest.raises(MissingFieldError, match="dob"):
            engine.run()

    def test_persistence_error_propagates(self, tmp_path: Path, alice_raw):
        database = DatabaseConfig(
            driver="sqlite", database=str(tmp_path / "nope" / "users.db")
        )
        engine = IntakeEngine(
            _config(database), source=MappingSource({"record": alice_raw})
        )
        with pytest.raises(PersistenceError):
            engine.run()

    def test_unknown_source_kind(self, sqlite_config):
        engine = IntakeEngine(_config(sqlite_config, kind="carrier_pigeon"))
        with pytest.raises(KeyError, match="Unknown source"):
            engine.run()
