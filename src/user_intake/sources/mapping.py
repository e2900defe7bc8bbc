"""In-memory source — serves fields from a dict (tests, embedding)."""

from __future__ import annotations

from typing import Any

from user_intake.registry import register_source
from user_intake.sources.base import BaseSource


@register_source("mapping")
class MappingSource(BaseSource):
    """Look fields up in ``config["record"]``."""

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        super().__init__(config)
        self._record: dict[str, Any] = dict(self._config.get("record", {}))

    def supplies(self, field: str) -> str | None:
        value = self._record.get(field)
        return None if value is None else str(value)
