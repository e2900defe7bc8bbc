"""Intake engine — the orchestrator.

Resolves the configured input source via the registry and runs
Read → Validate → Store for a single record.  Validation always finishes
before the store is built, so a rejected record never opens a connection.
"""

from __future__ import annotations

import logging
from typing import Callable

# Importing the subpackage triggers @register_source decorators in its __init__.py
import user_intake.sources  # noqa: F401

from user_intake.errors import ValidationError
from user_intake.models import IntakeConfig
from user_intake.registry import get_source
from user_intake.schemas.user import RawRecord, ValidatedUser
from user_intake.sources.base import BaseSource
from user_intake.store import UserStore
from user_intake.validation import validate

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class IntakeEngine:
    """Collect one user record, validate it, and persist it."""

    def __init__(
        self,
        config: IntakeConfig,
        *,
        source: BaseSource | None = None,
        store_factory: Callable[..., UserStore] = UserStore,
    ) -> None:
        self._config = config
        self._source = source
        self._store_factory = store_factory

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self) -> ValidatedUser:
        """Execute the whole intake and return the stored user.

        ``ValidationError`` and ``PersistenceError`` propagate unchanged.
        """
        logging.basicConfig(level=self._config.settings.log_level, format=LOG_FORMAT)

        raw = self._read()
        try:
            user = validate(raw)
        except ValidationError as exc:
            logger.warning("Record rejected (%s): %s", exc.field, exc.reason)
            raise
        logger.info("Record for %r passed validation", user.name)

        with self._store_factory(self._config.database) as store:
            store.insert(user)

        logger.info("Intake finished successfully")
        return user

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _build_source(self) -> BaseSource:
        src_cfg = self._config.source
        source_cls = get_source(src_cfg.kind)
        logger.debug("Registry resolved %r → %s", src_cfg.kind, source_cls.__name__)
        return source_cls(dict(src_cfg.inline_config))

    def _read(self) -> RawRecord:
        source = self._source if self._source is not None else self._build_source()
        with source:
            raw = source.read()
        logger.debug("Read %d fields from %s", len(raw), source.name)
        return raw
