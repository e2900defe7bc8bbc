"""JSON file source — reads one user object from a local JSON file.

Useful for scripted intake and for replaying a record that was rejected.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from user_intake.registry import register_source
from user_intake.sources.base import BaseSource

logger = logging.getLogger(__name__)


@register_source("json_file")
class JSONFileSource(BaseSource):
    """Serve fields from a JSON object stored at ``config["file_path"]``."""

    def __init__(self, config: dict[str, Any]) -> None:
        super().__init__(config)
        if "file_path" not in self._config:
            raise ValueError("json_file source needs a file_path (use --input)")
        self._path = Path(self._config["file_path"])
        self._record: dict[str, Any] | None = None

    def open(self) -> None:
        logger.info("Reading user record from %s", self._path)
        data = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(
                f"{self._path} must contain a JSON object, got {type(data).__name__}"
            )
        self._record = data

    def supplies(self, field: str) -> str | None:
        if self._record is None:
            self.open()
        assert self._record is not None
        value = self._record.get(field)
        return None if value is None else str(value)
